# Specialties router
from typing import List
from fastapi import APIRouter, Depends, status
from app.features.auth.dependencies import get_current_user, require_admin
from app.features.session.schemas import CurrentUser
from app.features.specialties.schemas import SpecialtyRequest, SpecialtyResponse
from app.features.specialties.service import SpecialtyService
from app.shared.schemas import MessageResponse

router = APIRouter(prefix="/specialties", tags=["Specialties"])


@router.get("", response_model=List[SpecialtyResponse])
async def list_specialties(current_user: CurrentUser = Depends(get_current_user)):
    """List specialties by name."""
    specialties = await SpecialtyService.list_specialties()
    return [SpecialtyService.to_response(s) for s in specialties]


@router.post("", response_model=SpecialtyResponse, status_code=status.HTTP_201_CREATED)
async def create_specialty(
    request: SpecialtyRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    specialty = await SpecialtyService.create_specialty(request)
    return SpecialtyService.to_response(specialty)


@router.put("/{specialty_id}", response_model=SpecialtyResponse)
async def update_specialty(
    specialty_id: str,
    request: SpecialtyRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    specialty = await SpecialtyService.update_specialty(specialty_id, request)
    return SpecialtyService.to_response(specialty)


@router.delete("/{specialty_id}", response_model=MessageResponse)
async def delete_specialty(
    specialty_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Delete a specialty. Admin only."""
    await SpecialtyService.delete_specialty(specialty_id)
    return MessageResponse(message="Specialty deleted")

# Doctors router
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from app.features.auth.dependencies import get_current_user, require_admin
from app.features.doctors.models import Doctor
from app.features.doctors.schemas import DoctorProfileRequest, DoctorRequest, DoctorResponse
from app.features.doctors.service import DoctorService
from app.features.session.schemas import CurrentUser, Role
from app.shared.exceptions import ForbiddenException

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def _require_doctor(current_user: CurrentUser):
    if current_user.role != Role.DOCTOR:
        raise ForbiddenException("Only doctors have a profile")


@router.get("", response_model=List[DoctorResponse])
async def list_doctors(
    aktif: Optional[bool] = Query(None, description="Filter by active flag"),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    List doctors. Doctors only see their own profile.

    Requires authentication.
    """
    if current_user.role == Role.DOCTOR:
        doctor = await Doctor.get(current_user.doctor_id) if current_user.doctor_id else None
        return [await DoctorService.to_response(doctor)] if doctor else []

    doctors = await DoctorService.list_doctors(aktif)
    return [await DoctorService.to_response(doctor) for doctor in doctors]


@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    request: DoctorRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """
    Add a doctor. Admin only.

    - **ad**, **soyad**: First and last name (required)
    - **uzmanlik_id**: Specialty (optional)
    """
    doctor = await DoctorService.create_doctor(request)
    return await DoctorService.to_response(doctor)


@router.get("/me", response_model=DoctorResponse)
async def get_my_profile(current_user: CurrentUser = Depends(get_current_user)):
    """Profile of the signed-in doctor."""
    _require_doctor(current_user)
    doctor = await DoctorService.get_doctor(current_user.doctor_id)
    return await DoctorService.to_response(doctor)


@router.put("/me", response_model=DoctorResponse)
async def update_my_profile(
    request: DoctorProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Update the signed-in doctor's own profile. The active flag is admin-only."""
    _require_doctor(current_user)
    doctor = await DoctorService.update_doctor(current_user.doctor_id, request)
    return await DoctorService.to_response(doctor)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: str,
    request: DoctorRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    doctor = await DoctorService.update_doctor(doctor_id, request)
    return await DoctorService.to_response(doctor)


@router.delete("/{doctor_id}", response_model=DoctorResponse)
async def deactivate_doctor(
    doctor_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Deactivate a doctor. The record and its appointments are kept."""
    doctor = await DoctorService.deactivate_doctor(doctor_id)
    return await DoctorService.to_response(doctor)

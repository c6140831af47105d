# Clinic Services router
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from app.features.auth.dependencies import get_current_user, require_admin
from app.features.clinic_services.schemas import ClinicServiceRequest, ClinicServiceResponse
from app.features.clinic_services.service import ClinicServiceService
from app.features.session.schemas import CurrentUser

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=List[ClinicServiceResponse])
async def list_services(
    aktif: Optional[bool] = Query(None, description="Filter by active flag"),
    current_user: CurrentUser = Depends(get_current_user),
):
    services = await ClinicServiceService.list_services(aktif)
    return [await ClinicServiceService.to_response(s) for s in services]


@router.post("", response_model=ClinicServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    request: ClinicServiceRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """
    Add a service. Admin only.

    - **hizmet_adi**: Service name
    - **uzmanlik_id**: Specialty the service belongs to (optional)
    - **fiyat**, **sure_dakika**: Price and duration in minutes (optional)
    """
    service = await ClinicServiceService.create_service(request)
    return await ClinicServiceService.to_response(service)


@router.put("/{service_id}", response_model=ClinicServiceResponse)
async def update_service(
    service_id: str,
    request: ClinicServiceRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    service = await ClinicServiceService.update_service(service_id, request)
    return await ClinicServiceService.to_response(service)


@router.delete("/{service_id}", response_model=ClinicServiceResponse)
async def delete_service(
    service_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Deactivate a service. It stays listed with ``aktif: false``."""
    service = await ClinicServiceService.deactivate_service(service_id)
    return await ClinicServiceService.to_response(service)

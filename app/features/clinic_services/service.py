# Clinic Services Feature - Service

from typing import List, Optional

from app.core.logging import logger
from app.features.clinic_services.models import ClinicService
from app.features.clinic_services.schemas import ClinicServiceRequest, ClinicServiceResponse
from app.features.specialties.models import Specialty
from app.shared.exceptions import NotFoundException


class ClinicServiceService:
    """Service catalogue (hizmetler) maintained by admins."""

    @staticmethod
    async def to_response(service: ClinicService) -> ClinicServiceResponse:
        specialty = await Specialty.get(service.uzmanlik_id) if service.uzmanlik_id else None
        return ClinicServiceResponse(
            id=service.id,
            hizmet_adi=service.hizmet_adi,
            uzmanlik_id=service.uzmanlik_id,
            uzmanlik=specialty.ad if specialty else None,
            fiyat=service.fiyat,
            sure_dakika=service.sure_dakika,
            aciklama=service.aciklama,
            aktif=service.aktif,
            olusturulma_tarihi=service.olusturulma_tarihi,
        )

    @staticmethod
    async def list_services(aktif: Optional[bool] = None) -> List[ClinicService]:
        """Services, newest first."""
        filters = [] if aktif is None else [ClinicService.aktif == aktif]
        return await ClinicService.find(*filters).sort([("olusturulma_tarihi", -1)]).to_list()

    @staticmethod
    async def get_service(service_id: str) -> ClinicService:
        service = await ClinicService.get(service_id)
        if not service:
            raise NotFoundException("Service not found")
        return service

    @staticmethod
    async def _check_specialty(uzmanlik_id: Optional[str]):
        if uzmanlik_id and not await Specialty.get(uzmanlik_id):
            raise NotFoundException("Specialty not found")

    @staticmethod
    async def create_service(request: ClinicServiceRequest) -> ClinicService:
        await ClinicServiceService._check_specialty(request.uzmanlik_id)

        service = ClinicService(**request.model_dump())
        await service.insert()

        logger.info(f"Created service {service.hizmet_adi}")
        return service

    @staticmethod
    async def update_service(service_id: str, request: ClinicServiceRequest) -> ClinicService:
        service = await ClinicServiceService.get_service(service_id)
        await ClinicServiceService._check_specialty(request.uzmanlik_id)

        for field, value in request.model_dump().items():
            setattr(service, field, value)
        await service.save()

        logger.info(f"Updated service {service_id}")
        return service

    @staticmethod
    async def deactivate_service(service_id: str) -> ClinicService:
        """Hide a service from booking. Past appointments keep pointing at it."""
        service = await ClinicServiceService.get_service(service_id)
        service.aktif = False
        await service.save()

        logger.info(f"Deactivated service {service.hizmet_adi}")
        return service

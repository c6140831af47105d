# Specialties Feature - Service

from typing import List

from app.core.logging import logger
from app.features.specialties.models import Specialty
from app.features.specialties.schemas import SpecialtyRequest, SpecialtyResponse
from app.shared.exceptions import NotFoundException


class SpecialtyService:
    """Specialty catalogue maintained by admins."""

    @staticmethod
    def to_response(specialty: Specialty) -> SpecialtyResponse:
        return SpecialtyResponse(id=specialty.id, ad=specialty.ad, aciklama=specialty.aciklama)

    @staticmethod
    async def list_specialties() -> List[Specialty]:
        return await Specialty.find_all().sort("ad").to_list()

    @staticmethod
    async def get_specialty(specialty_id: str) -> Specialty:
        specialty = await Specialty.get(specialty_id)
        if not specialty:
            raise NotFoundException("Specialty not found")
        return specialty

    @staticmethod
    async def create_specialty(request: SpecialtyRequest) -> Specialty:
        specialty = Specialty(ad=request.ad, aciklama=request.aciklama)
        await specialty.insert()

        logger.info(f"Created specialty {specialty.ad}")
        return specialty

    @staticmethod
    async def update_specialty(specialty_id: str, request: SpecialtyRequest) -> Specialty:
        specialty = await SpecialtyService.get_specialty(specialty_id)
        specialty.ad = request.ad
        specialty.aciklama = request.aciklama
        await specialty.save()
        return specialty

    @staticmethod
    async def delete_specialty(specialty_id: str):
        """Delete a specialty for good. Doctors keep their now dangling ``uzmanlik_id``."""
        specialty = await SpecialtyService.get_specialty(specialty_id)
        await specialty.delete()
        logger.info(f"Deleted specialty {specialty.ad}")

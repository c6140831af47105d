# Doctors Feature - Service

from typing import List, Optional

from app.core.logging import logger
from app.features.doctors.models import Doctor
from app.features.doctors.schemas import DoctorProfileRequest, DoctorRequest, DoctorResponse
from app.features.specialties.models import Specialty
from app.shared.exceptions import NotFoundException


class DoctorService:
    """Doctor directory. Doctors are deactivated, never deleted."""

    @staticmethod
    async def to_response(doctor: Doctor) -> DoctorResponse:
        specialty = await Specialty.get(doctor.uzmanlik_id) if doctor.uzmanlik_id else None
        return DoctorResponse(
            id=doctor.id,
            ad=doctor.ad,
            soyad=doctor.soyad,
            unvan=doctor.unvan,
            uzmanlik_id=doctor.uzmanlik_id,
            uzmanlik=specialty.ad if specialty else None,
            telefon=doctor.telefon,
            email=doctor.email,
            aktif=doctor.aktif,
            klinik_lokasyon=doctor.klinik_lokasyon,
        )

    @staticmethod
    async def list_doctors(aktif: Optional[bool] = None) -> List[Doctor]:
        filters = [] if aktif is None else [Doctor.aktif == aktif]
        return await Doctor.find(*filters).sort("ad").to_list()

    @staticmethod
    async def get_doctor(doctor_id: Optional[str]) -> Doctor:
        doctor = await Doctor.get(doctor_id) if doctor_id else None
        if not doctor:
            raise NotFoundException("Doctor not found")
        return doctor

    @staticmethod
    async def _check_specialty(uzmanlik_id: Optional[str]):
        if uzmanlik_id and not await Specialty.get(uzmanlik_id):
            raise NotFoundException("Specialty not found")

    @staticmethod
    async def create_doctor(request: DoctorRequest) -> Doctor:
        await DoctorService._check_specialty(request.uzmanlik_id)

        doctor = Doctor(**request.model_dump())
        await doctor.insert()

        logger.info(f"Created doctor {doctor.display_name}")
        return doctor

    @staticmethod
    async def update_doctor(doctor_id: str, request: DoctorProfileRequest) -> Doctor:
        """
        Replace a doctor's profile fields.

        A ``DoctorProfileRequest`` (a doctor editing themselves) leaves
        ``aktif`` untouched.
        """
        doctor = await DoctorService.get_doctor(doctor_id)
        await DoctorService._check_specialty(request.uzmanlik_id)

        for field, value in request.model_dump().items():
            setattr(doctor, field, value)
        doctor.update_timestamp()
        await doctor.save()

        logger.info(f"Updated doctor {doctor_id}")
        return doctor

    @staticmethod
    async def deactivate_doctor(doctor_id: str) -> Doctor:
        doctor = await DoctorService.get_doctor(doctor_id)
        doctor.aktif = False
        doctor.update_timestamp()
        await doctor.save()

        logger.info(f"Deactivated doctor {doctor.display_name}")
        return doctor

# Schedules Feature - Service

from typing import Any, Dict, List

from app.core.logging import logger
from app.features.doctors.models import Doctor
from app.features.schedules.models import DoctorScheduleEntry
from app.features.schedules.schemas import ScheduleEntryRequest, ScheduleEntryResponse
from app.features.session.schemas import CurrentUser, Role
from app.shared.exceptions import ForbiddenException, NotFoundException


def entry_fields(request: ScheduleEntryRequest) -> Dict[str, Any]:
    """Stored shape of a calendar block."""
    return {
        "tarih": request.tarih.isoformat(),
        "baslangic_saat": request.baslangic_saat.strftime("%H:%M"),
        "bitis_saat": request.bitis_saat.strftime("%H:%M"),
        "musait": request.musait,
        "not_bilgi": request.not_bilgi,
    }


class ScheduleService:
    """Doctor calendars. Admins manage every calendar, doctors only their own."""

    @staticmethod
    def check_access(current_user: CurrentUser, doctor_id: str):
        if current_user.role == Role.DOCTOR and current_user.doctor_id != doctor_id:
            raise ForbiddenException("You can only manage your own schedule")

    @staticmethod
    def to_response(entry: DoctorScheduleEntry) -> ScheduleEntryResponse:
        return ScheduleEntryResponse(
            id=entry.id,
            doktor_id=entry.doktor_id,
            tarih=entry.tarih,
            baslangic_saat=entry.baslangic_saat,
            bitis_saat=entry.bitis_saat,
            musait=entry.musait,
            not_bilgi=entry.not_bilgi,
        )

    @staticmethod
    async def list_entries(current_user: CurrentUser, doctor_id: str) -> List[DoctorScheduleEntry]:
        ScheduleService.check_access(current_user, doctor_id)
        return await DoctorScheduleEntry.find(
            DoctorScheduleEntry.doktor_id == doctor_id
        ).sort([("tarih", 1), ("baslangic_saat", 1)]).to_list()

    @staticmethod
    async def _get_entry(current_user: CurrentUser, doctor_id: str, entry_id: str) -> DoctorScheduleEntry:
        ScheduleService.check_access(current_user, doctor_id)
        entry = await DoctorScheduleEntry.get(entry_id)
        if not entry or entry.doktor_id != doctor_id:
            raise NotFoundException("Schedule entry not found")
        return entry

    @staticmethod
    async def create_entry(
        current_user: CurrentUser,
        doctor_id: str,
        request: ScheduleEntryRequest,
    ) -> DoctorScheduleEntry:
        ScheduleService.check_access(current_user, doctor_id)
        if not await Doctor.get(doctor_id):
            raise NotFoundException("Doctor not found")

        entry = DoctorScheduleEntry(doktor_id=doctor_id, **entry_fields(request))
        await entry.insert()

        logger.info(f"Added schedule entry {entry.tarih} {entry.baslangic_saat} for doctor {doctor_id}")
        return entry

    @staticmethod
    async def update_entry(
        current_user: CurrentUser,
        doctor_id: str,
        entry_id: str,
        request: ScheduleEntryRequest,
    ) -> DoctorScheduleEntry:
        entry = await ScheduleService._get_entry(current_user, doctor_id, entry_id)
        for field, value in entry_fields(request).items():
            setattr(entry, field, value)
        await entry.save()
        return entry

    @staticmethod
    async def delete_entry(current_user: CurrentUser, doctor_id: str, entry_id: str):
        entry = await ScheduleService._get_entry(current_user, doctor_id, entry_id)
        await entry.delete()
        logger.info(f"Deleted schedule entry {entry_id} of doctor {doctor_id}")

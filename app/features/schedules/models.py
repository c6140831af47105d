# Schedules Feature - Models

from typing import Optional
from beanie import Indexed
from app.shared.models import BaseDocument


class DoctorScheduleEntry(BaseDocument):
    """
    One block in a doctor's calendar (doktor_takvim).

    ``tarih`` is ``YYYY-MM-DD``; the times are ``HH:MM`` so entries sort
    as plain strings.
    """

    doktor_id: Indexed(str)
    tarih: str
    baslangic_saat: str
    bitis_saat: str
    musait: bool = True
    not_bilgi: Optional[str] = None

    class Settings:
        name = "doktor_takvim"
        use_state_management = True

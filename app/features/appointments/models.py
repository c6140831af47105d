# Appointments Feature - Models

from typing import Optional, Literal
from datetime import datetime
from beanie import Indexed
from pydantic import Field
from app.shared.models import BaseDocument


AppointmentStatus = Literal[
    "beklemede",    # pending
    "onaylandi",    # approved
    "reddedildi",   # rejected
    "tamamlandi",   # completed
    "iptal",        # cancelled
    "gelmedi",      # no-show
    "gecmis",       # past
]

SmsStatus = Literal["Gönderilmedi", "Gönderildi"]


class AppointmentContact(BaseDocument):
    """Person an appointment was booked for."""

    isim: str
    soyisim: str
    telefon: Optional[str] = None

    class Settings:
        name = "randevu_kisi"
        use_state_management = True

    @property
    def full_name(self) -> str:
        return f"{self.isim} {self.soyisim}".strip()


class Appointment(BaseDocument):
    """Appointment (randevu) booked by the voice assistant or staff."""

    randevu_kisi_id: Optional[str] = None
    doktor_id: Optional[Indexed(str)] = None
    hizmet_id: Optional[str] = None
    randevu_tarihi: datetime
    randevu_tipi: Optional[Literal["online", "klinik"]] = None
    online_link: Optional[str] = None
    randevu_notu: Optional[str] = None
    durum: AppointmentStatus = "beklemede"
    red_nedeni: Optional[str] = None
    sms: SmsStatus = "Gönderilmedi"
    olusturulma_tarihi: datetime = Field(default_factory=datetime.utcnow)
    guncellenme_tarihi: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "randevu"
        use_state_management = True
        indexes = [
            [("doktor_id", 1), ("durum", 1)],
            [("guncellenme_tarihi", -1)],
        ]

# Doctors Feature - Models

from typing import Optional
from app.shared.models import BaseDocument, TimestampMixin


class Doctor(BaseDocument, TimestampMixin):
    """
    Doctor profile.
    ``ad``, ``soyad`` and ``email`` double as the display profile shown
    to a signed-in doctor.
    """

    ad: str
    soyad: str
    unvan: Optional[str] = None  # title, e.g. "Dr."
    uzmanlik_id: Optional[str] = None
    telefon: Optional[str] = None
    email: Optional[str] = None
    aktif: bool = True
    klinik_lokasyon: Optional[str] = None

    class Settings:
        name = "doktor"
        use_state_management = True

    @property
    def display_name(self) -> str:
        return " ".join(part for part in [self.unvan, self.ad, self.soyad] if part)

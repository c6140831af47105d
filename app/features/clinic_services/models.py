# Clinic Services Feature - Models

from typing import Optional
from datetime import datetime
from pydantic import Field
from app.shared.models import BaseDocument


class ClinicService(BaseDocument):
    """Bookable clinic service (hizmet). Deleted services are only deactivated."""

    hizmet_adi: str
    uzmanlik_id: Optional[str] = None
    fiyat: Optional[float] = None
    sure_dakika: Optional[int] = None
    aciklama: Optional[str] = None
    aktif: bool = True
    olusturulma_tarihi: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "hizmetler"
        use_state_management = True

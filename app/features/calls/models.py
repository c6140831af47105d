# Calls Feature - Models

from typing import Optional
from datetime import datetime
from beanie import Indexed
from pydantic import Field
from app.shared.models import BaseDocument


class CallRecord(BaseDocument):
    """
    Call-log record written by the voice assistant.
    ``arama_tipi`` is the call category: gelen, form or liste.
    """

    arama_tipi: Indexed(str)
    kayit_tarihi: datetime = Field(default_factory=datetime.utcnow)

    numara: Optional[str] = None
    isim: Optional[str] = None
    soyisim: Optional[str] = None
    liste_ismi: Optional[str] = None
    cagri_tarihi: Optional[datetime] = None
    cagri_suresi: Optional[int] = None  # seconds
    ozet: Optional[str] = None
    durum: Optional[str] = None
    not_oncelik: Optional[str] = None
    kayit_url: Optional[str] = None
    transkript: Optional[str] = None
    randevu_id: Optional[str] = None

    class Settings:
        name = "arama_kayit"
        use_state_management = True
        indexes = [
            [("arama_tipi", 1), ("kayit_tarihi", -1)],
        ]

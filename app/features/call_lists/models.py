# Call Lists Feature - Models

from typing import Optional, Literal
from datetime import datetime
from beanie import Indexed
from pydantic import Field
from app.shared.models import BaseDocument


ContactCallStatus = Literal["bekliyor", "aramada", "mesgul", "basarili"]

# A contact in this state counts towards the list's ``tamamlanan``
COMPLETED_STATUS = "basarili"


class CallList(BaseDocument):
    """Outbound call list worked through by the voice assistant."""

    liste_ismi: str
    aranma_durumu: bool = False  # calling started
    toplam_kisi: int = 0
    tamamlanan: int = 0
    asistan_mesaji: Optional[str] = None
    olusturulma_tarihi: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "liste"
        use_state_management = True


class CallListContact(BaseDocument):
    """A person on an outbound call list."""

    liste_id: Indexed(str)
    isim: str
    soyisim: Optional[str] = None
    telefon: str
    arama_durumu: ContactCallStatus = "bekliyor"
    kayit: Optional[str] = None

    class Settings:
        name = "liste_kisi"
        use_state_management = True

# Forms Feature - Models

from typing import Optional
from datetime import datetime
from pydantic import Field
from app.shared.models import BaseDocument


class WebForm(BaseDocument):
    """Lead submitted through the clinic website form."""

    isim: Optional[str] = None
    soyisim: Optional[str] = None
    eposta: Optional[str] = None
    telefon: Optional[str] = None
    mesaj: Optional[str] = None
    arama_tetiklendi: bool = False  # a callback call was triggered
    olusturulma_tarihi: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "form"
        use_state_management = True

# Call Lists Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class CreateCallListRequest(BaseModel):
    liste_ismi: str = Field(..., min_length=1, max_length=200)
    asistan_mesaji: Optional[str] = Field(None, max_length=2000)


class CallListResponse(BaseModel):
    id: str
    liste_ismi: str
    aranma_durumu: bool
    toplam_kisi: int
    tamamlanan: int
    asistan_mesaji: Optional[str] = None
    olusturulma_tarihi: datetime


class CreateContactRequest(BaseModel):
    isim: str = Field(..., min_length=1, max_length=100)
    soyisim: Optional[str] = Field(None, max_length=100)
    telefon: str = Field(..., min_length=5, max_length=20)


class ContactResponse(BaseModel):
    id: str
    liste_id: str
    isim: str
    soyisim: Optional[str] = None
    telefon: str
    arama_durumu: str
    kayit: Optional[str] = None


class UpdateCallListRequest(BaseModel):
    """Partial update; only the fields sent are changed."""
    liste_ismi: str = Field(None, min_length=1, max_length=200)
    asistan_mesaji: Optional[str] = Field(None, max_length=2000)


class UpdateContactRequest(BaseModel):
    isim: str = Field(None, min_length=1, max_length=100)
    soyisim: Optional[str] = Field(None, max_length=100)
    telefon: str = Field(None, min_length=5, max_length=20)

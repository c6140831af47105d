# Calls Feature - Schemas

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel


class CallRecordResponse(BaseModel):
    """A single call-log record."""
    id: str
    arama_tipi: str
    kayit_tarihi: datetime
    numara: Optional[str] = None
    isim: Optional[str] = None
    soyisim: Optional[str] = None
    liste_ismi: Optional[str] = None
    cagri_tarihi: Optional[datetime] = None
    cagri_suresi: Optional[int] = None
    ozet: Optional[str] = None
    durum: Optional[str] = None
    not_oncelik: Optional[str] = None
    kayit_url: Optional[str] = None
    transkript: Optional[str] = None
    randevu_id: Optional[str] = None


class CallRecordListResponse(BaseModel):
    """Call-log page."""
    calls: List[CallRecordResponse]
    total: int

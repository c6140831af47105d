# Forms router
from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from app.features.auth.dependencies import require_admin
from app.features.forms.models import WebForm
from app.features.session.schemas import CurrentUser

router = APIRouter(prefix="/forms", tags=["Forms"])


class WebFormResponse(BaseModel):
    """Response schema for a web-form lead."""
    id: str
    isim: Optional[str] = None
    soyisim: Optional[str] = None
    eposta: Optional[str] = None
    telefon: Optional[str] = None
    mesaj: Optional[str] = None
    arama_tetiklendi: bool = False
    olusturulma_tarihi: datetime


@router.get("", response_model=List[WebFormResponse])
async def list_forms(
    arama_tetiklendi: Optional[bool] = Query(None, description="Filter by callback triggered"),
    current_user: CurrentUser = Depends(require_admin),
):
    """
    Web-form leads, newest first.

    Requires admin access.
    """
    if arama_tetiklendi is None:
        query = WebForm.find_all()
    else:
        query = WebForm.find(WebForm.arama_tetiklendi == arama_tetiklendi)

    forms = await query.sort([("olusturulma_tarihi", -1)]).to_list()
    return [WebFormResponse(**form.model_dump()) for form in forms]

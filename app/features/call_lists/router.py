# Call Lists Feature - Router

from typing import List
from fastapi import APIRouter, Depends, status
from app.core.webhooks import WebhookNotifier, get_webhook_notifier
from app.features.auth.dependencies import require_admin
from app.features.call_lists.models import CallList, CallListContact
from app.features.call_lists.schemas import (
    CallListResponse,
    ContactResponse,
    CreateCallListRequest,
    CreateContactRequest,
    UpdateCallListRequest,
    UpdateContactRequest,
)
from app.features.call_lists.service import CallListService
from app.features.session.schemas import CurrentUser
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/call-lists", tags=["Call Lists"])


def _list_response(call_list: CallList) -> CallListResponse:
    return CallListResponse(
        id=call_list.id,
        liste_ismi=call_list.liste_ismi,
        aranma_durumu=call_list.aranma_durumu,
        toplam_kisi=call_list.toplam_kisi,
        tamamlanan=call_list.tamamlanan,
        asistan_mesaji=call_list.asistan_mesaji,
        olusturulma_tarihi=call_list.olusturulma_tarihi,
    )


def _contact_response(contact: CallListContact) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        liste_id=contact.liste_id,
        isim=contact.isim,
        soyisim=contact.soyisim,
        telefon=contact.telefon,
        arama_durumu=contact.arama_durumu,
        kayit=contact.kayit,
    )


@router.get("", response_model=List[CallListResponse])
async def list_call_lists(current_user: CurrentUser = Depends(require_admin)):
    """Outbound call lists, newest first. Admin only."""
    return [_list_response(c) for c in await CallListService.list_lists()]


@router.post("", response_model=CallListResponse, status_code=status.HTTP_201_CREATED)
async def create_call_list(
    request: CreateCallListRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Create an outbound call list. Admin only."""
    return _list_response(await CallListService.create_list(request))


@router.put("/{list_id}", response_model=CallListResponse)
async def update_call_list(
    list_id: str,
    request: UpdateCallListRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Rename a list or change the assistant's message."""
    return _list_response(await CallListService.update_list(list_id, request))


@router.delete("/{list_id}", response_model=MessageResponse)
async def delete_call_list(list_id: str, current_user: CurrentUser = Depends(require_admin)):
    """Delete a list and all of its contacts."""
    await CallListService.delete_list(list_id)
    return MessageResponse(message="Call list deleted")


@router.get("/{list_id}/contacts", response_model=List[ContactResponse])
async def list_contacts(list_id: str, current_user: CurrentUser = Depends(require_admin)):
    """Contacts of a call list."""
    return [_contact_response(c) for c in await CallListService.list_contacts(list_id)]


@router.post("/{list_id}/contacts", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def add_contact(
    list_id: str,
    request: CreateContactRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    """Add a contact to a call list."""
    return _contact_response(await CallListService.add_contact(list_id, request))


@router.put("/{list_id}/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    list_id: str,
    contact_id: str,
    request: UpdateContactRequest,
    current_user: CurrentUser = Depends(require_admin),
):
    return _contact_response(await CallListService.update_contact(list_id, contact_id, request))


@router.delete("/{list_id}/contacts/{contact_id}", response_model=CallListResponse)
async def delete_contact(
    list_id: str,
    contact_id: str,
    current_user: CurrentUser = Depends(require_admin),
):
    """Remove a contact. Answers with the updated list."""
    return _list_response(await CallListService.delete_contact(list_id, contact_id))


@router.post("/{list_id}/start", response_model=CallListResponse)
async def start_calling(
    list_id: str,
    current_user: CurrentUser = Depends(require_admin),
    notifier: WebhookNotifier = Depends(get_webhook_notifier),
):
    """
    Start calling the list through the automation service.

    Answers 502 when the automation service does not accept the request.
    """
    return _list_response(await CallListService.start_calling(list_id, notifier))

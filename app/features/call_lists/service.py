# Call Lists Feature - Service

from typing import List

from app.core.logging import logger
from app.core.webhooks import WebhookNotifier
from app.features.call_lists.models import COMPLETED_STATUS, CallList, CallListContact
from app.features.call_lists.schemas import (
    CreateCallListRequest,
    CreateContactRequest,
    UpdateCallListRequest,
    UpdateContactRequest,
)
from app.shared.exceptions import BadGatewayException, NotFoundException


class CallListService:
    """Service for outbound call lists and their contacts."""

    @staticmethod
    async def get_list(list_id: str) -> CallList:
        call_list = await CallList.get(list_id)
        if not call_list:
            raise NotFoundException("Call list not found")
        return call_list

    @staticmethod
    async def list_lists() -> List[CallList]:
        return await CallList.find_all().sort([("olusturulma_tarihi", -1)]).to_list()

    @staticmethod
    async def create_list(data: CreateCallListRequest) -> CallList:
        call_list = CallList(liste_ismi=data.liste_ismi, asistan_mesaji=data.asistan_mesaji)
        await call_list.insert()
        logger.info(f"Created call list {call_list.id} ({call_list.liste_ismi})")
        return call_list

    @staticmethod
    async def update_list(list_id: str, data: UpdateCallListRequest) -> CallList:
        call_list = await CallListService.get_list(list_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(call_list, field, value)
        await call_list.save()

        logger.info(f"Updated call list {list_id}")
        return call_list

    @staticmethod
    async def delete_list(list_id: str):
        """Delete a list together with its contacts."""
        call_list = await CallListService.get_list(list_id)

        await CallListContact.find(CallListContact.liste_id == list_id).delete()
        await call_list.delete()

        logger.info(f"Deleted call list {list_id} ({call_list.liste_ismi})")

    @staticmethod
    async def list_contacts(list_id: str) -> List[CallListContact]:
        await CallListService.get_list(list_id)
        return await CallListContact.find(CallListContact.liste_id == list_id).to_list()

    @staticmethod
    async def add_contact(list_id: str, data: CreateContactRequest) -> CallListContact:
        """Add a contact and bump the list's ``toplam_kisi``."""
        call_list = await CallListService.get_list(list_id)

        contact = CallListContact(
            liste_id=list_id,
            isim=data.isim,
            soyisim=data.soyisim,
            telefon=data.telefon,
        )
        await contact.insert()

        call_list.toplam_kisi += 1
        await call_list.save()

        return contact

    @staticmethod
    async def _get_contact(list_id: str, contact_id: str) -> CallListContact:
        contact = await CallListContact.get(contact_id)
        if not contact or contact.liste_id != list_id:
            raise NotFoundException("Contact not found")
        return contact

    @staticmethod
    async def update_contact(list_id: str, contact_id: str, data: UpdateContactRequest) -> CallListContact:
        call_list = await CallListService.get_list(list_id)
        contact = await CallListService._get_contact(list_id, contact_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(contact, field, value)
        await contact.save()

        await CallListService.sync_completion(call_list)
        return contact

    @staticmethod
    async def delete_contact(list_id: str, contact_id: str) -> CallList:
        """Remove a contact; ``toplam_kisi`` drops by one but never below zero."""
        call_list = await CallListService.get_list(list_id)
        contact = await CallListService._get_contact(list_id, contact_id)

        await contact.delete()

        call_list.toplam_kisi = max(0, call_list.toplam_kisi - 1)
        await call_list.save()

        await CallListService.sync_completion(call_list)
        return call_list

    @staticmethod
    async def sync_completion(call_list: CallList) -> CallList:
        """
        Recount successful contacts into ``tamamlanan``.

        A list that was calling stops once every contact succeeded.
        """
        completed = await CallListContact.find(
            CallListContact.liste_id == call_list.id,
            CallListContact.arama_durumu == COMPLETED_STATUS,
        ).count()

        if completed == call_list.tamamlanan:
            return call_list

        call_list.tamamlanan = completed
        if call_list.aranma_durumu and call_list.toplam_kisi > 0 and completed >= call_list.toplam_kisi:
            call_list.aranma_durumu = False
            logger.info(f"Call list {call_list.id} completed")
        await call_list.save()
        return call_list

    @staticmethod
    async def start_calling(list_id: str, notifier: WebhookNotifier) -> CallList:
        """
        Ask the automation service to start calling a list.

        The list is only marked as calling once the webhook accepted it.
        """
        call_list = await CallListService.get_list(list_id)

        delivered = await notifier.call_list_activated(call_list.id, call_list.asistan_mesaji)
        if not delivered:
            raise BadGatewayException("Calling could not be started, please try again")

        call_list.aranma_durumu = True
        await call_list.save()

        logger.info(f"Calling started for list {call_list.id}")
        return call_list

# Appointments Feature - Service

from typing import Any, Dict, List, Optional
from datetime import datetime

from app.core.logging import logger
from app.core.timeutil import now_iso, to_iso
from app.core.webhooks import WebhookNotifier
from app.features.appointments.models import Appointment, AppointmentContact
from app.features.clinic_services.models import ClinicService
from app.features.appointments.schemas import AppointmentResponse, UpdateAppointmentRequest
from app.features.calls.models import CallRecord
from app.features.doctors.models import Doctor
from app.features.specialties.models import Specialty
from app.features.session.schemas import CurrentUser, Role
from app.shared.exceptions import ForbiddenException, NotFoundException


def build_status_payload(
    action: str,
    appointment: Appointment,
    contact: Optional[AppointmentContact],
    doctor: Optional[Doctor],
    specialty: Optional[Specialty],
    service: Optional[ClinicService],
    old_status: str,
    new_status: str,
    red_nedeni: Optional[str],
) -> Dict[str, Any]:
    """
    Webhook body describing an appointment status change.

    Approvals carry a ``status`` block with old and new status; rejections
    carry the reason inside ``appointment_details``.
    """
    details = {
        "date": to_iso(appointment.randevu_tarihi),
        "type": appointment.randevu_tipi,
        "online_link": appointment.online_link,
        "service": service.hizmet_adi if service else None,
        "notes": appointment.randevu_notu,
    }
    body: Dict[str, Any] = {
        "id": appointment.id,
        "randevu_id": appointment.id,
        "patient": {
            "name": contact.full_name if contact else "",
            "phone": contact.telefon if contact else None,
        },
        "doctor": {
            "id": appointment.doktor_id,
            "doktor_id": appointment.doktor_id,
            "name": doctor.display_name if doctor else "",
            "specialty": specialty.ad if specialty else None,
            "location": doctor.klinik_lokasyon if doctor else None,
        },
        "appointment_details": details,
    }

    if action == "appointment_rejected":
        details["rejection_reason"] = red_nedeni
    else:
        body["status"] = {
            "old_status": old_status,
            "new_status": new_status,
            "rejection_reason": red_nedeni,
        }

    return {"action": action, "timestamp": now_iso(), "appointment": body}


class AppointmentService:
    """Service for appointment listing and status transitions."""

    @staticmethod
    async def _related(appointment: Appointment):
        contact = await AppointmentContact.get(appointment.randevu_kisi_id) if appointment.randevu_kisi_id else None
        doctor = await Doctor.get(appointment.doktor_id) if appointment.doktor_id else None
        specialty = await Specialty.get(doctor.uzmanlik_id) if doctor and doctor.uzmanlik_id else None
        service = await ClinicService.get(appointment.hizmet_id) if appointment.hizmet_id else None
        return contact, doctor, specialty, service

    @staticmethod
    async def _to_response(appointment: Appointment) -> AppointmentResponse:
        contact, doctor, _, service = await AppointmentService._related(appointment)
        return AppointmentResponse(
            id=appointment.id,
            randevu_tarihi=appointment.randevu_tarihi,
            randevu_tipi=appointment.randevu_tipi,
            online_link=appointment.online_link,
            randevu_notu=appointment.randevu_notu,
            durum=appointment.durum,
            red_nedeni=appointment.red_nedeni,
            sms=appointment.sms,
            olusturulma_tarihi=appointment.olusturulma_tarihi,
            guncellenme_tarihi=appointment.guncellenme_tarihi,
            doktor_id=appointment.doktor_id,
            doktor_adi=doctor.display_name if doctor else None,
            hasta_adi=contact.full_name if contact else None,
            hasta_telefon=contact.telefon if contact else None,
            hizmet_adi=service.hizmet_adi if service else None,
        )

    @staticmethod
    async def _get_for_user(current_user: CurrentUser, appointment_id: str) -> Appointment:
        appointment = await Appointment.get(appointment_id)
        if not appointment:
            raise NotFoundException("Appointment not found")
        if current_user.role == Role.DOCTOR and appointment.doktor_id != current_user.doctor_id:
            raise ForbiddenException("Appointment belongs to another doctor")
        return appointment

    @staticmethod
    async def list_appointments(
        current_user: CurrentUser,
        durum: Optional[str] = None,
    ) -> List[AppointmentResponse]:
        """
        Appointments, most recently updated first.
        Doctors only see their own appointments.
        """
        filters = []
        if current_user.role == Role.DOCTOR:
            filters.append(Appointment.doktor_id == current_user.doctor_id)
        if durum:
            filters.append(Appointment.durum == durum)

        appointments = await Appointment.find(*filters).sort([("guncellenme_tarihi", -1)]).to_list()
        return [await AppointmentService._to_response(a) for a in appointments]

    @staticmethod
    async def update_status(
        current_user: CurrentUser,
        appointment_id: str,
        durum: str,
        red_nedeni: Optional[str],
        notifier: WebhookNotifier,
    ) -> AppointmentResponse:
        """
        Move an appointment to a new status.

        Approvals and rejections are announced to the automation webhooks
        after the update is saved; a failed delivery is only logged.
        """
        appointment = await AppointmentService._get_for_user(current_user, appointment_id)
        old_status = appointment.durum

        appointment.durum = durum
        appointment.red_nedeni = red_nedeni or None
        appointment.guncellenme_tarihi = datetime.utcnow()
        await appointment.save()

        logger.info(f"Appointment {appointment.id}: {old_status} -> {durum}")

        if durum in ("onaylandi", "reddedildi"):
            action = "appointment_approved" if durum == "onaylandi" else "appointment_rejected"
            contact, doctor, specialty, service = await AppointmentService._related(appointment)
            payload = build_status_payload(
                action, appointment, contact, doctor, specialty, service,
                old_status, durum, red_nedeni,
            )
            if action == "appointment_approved":
                delivered = await notifier.appointment_approved(payload)
            else:
                delivered = await notifier.appointment_rejected(payload)
            if not delivered:
                logger.warning(f"{action} for appointment {appointment.id} was not delivered")

        return await AppointmentService._to_response(appointment)

    @staticmethod
    async def update_sms_status(
        current_user: CurrentUser,
        appointment_id: str,
        sms: str,
    ) -> AppointmentResponse:
        appointment = await AppointmentService._get_for_user(current_user, appointment_id)
        appointment.sms = sms
        appointment.guncellenme_tarihi = datetime.utcnow()
        await appointment.save()
        return await AppointmentService._to_response(appointment)

    @staticmethod
    async def update_appointment(
        current_user: CurrentUser,
        appointment_id: str,
        request: UpdateAppointmentRequest,
    ) -> AppointmentResponse:
        appointment = await AppointmentService._get_for_user(current_user, appointment_id)

        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(appointment, field, value)
        appointment.guncellenme_tarihi = datetime.utcnow()
        await appointment.save()

        logger.info(f"Updated appointment {appointment_id}")
        return await AppointmentService._to_response(appointment)

    @staticmethod
    async def delete_appointment(current_user: CurrentUser, appointment_id: str):
        """Delete an appointment. Call records that pointed at it are unlinked first."""
        appointment = await AppointmentService._get_for_user(current_user, appointment_id)

        await CallRecord.find(CallRecord.randevu_id == appointment_id).update(
            {"$set": {"randevu_id": None}}
        )
        await appointment.delete()

        logger.info(f"Deleted appointment {appointment_id}")

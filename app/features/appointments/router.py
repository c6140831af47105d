# Appointments Feature - Router

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from app.core.webhooks import WebhookNotifier, get_webhook_notifier
from app.features.auth.dependencies import get_current_user
from app.features.appointments.schemas import (
    AppointmentResponse,
    UpdateAppointmentRequest,
    UpdateAppointmentStatusRequest,
    UpdateSmsStatusRequest,
)
from app.features.appointments.service import AppointmentService
from app.features.session.schemas import CurrentUser
from app.shared.schemas import MessageResponse


router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    durum: Optional[str] = Query(None, description="Filter by status, e.g. beklemede"),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    List appointments, most recently updated first.

    Doctors only see their own appointments.
    """
    return await AppointmentService.list_appointments(current_user, durum)


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: str,
    request: UpdateAppointmentStatusRequest,
    current_user: CurrentUser = Depends(get_current_user),
    notifier: WebhookNotifier = Depends(get_webhook_notifier),
):
    """
    Change an appointment's status.

    - **durum**: new status (`onaylandi` and `reddedildi` notify the automation service)
    - **red_nedeni**: rejection reason (optional)
    """
    return await AppointmentService.update_status(
        current_user, appointment_id, request.durum, request.red_nedeni, notifier
    )


@router.patch("/{appointment_id}/sms", response_model=AppointmentResponse)
async def update_sms_status(
    appointment_id: str,
    request: UpdateSmsStatusRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Record that the appointment SMS was sent."""
    return await AppointmentService.update_sms_status(current_user, appointment_id, request.sms)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    request: UpdateAppointmentRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Edit an appointment.

    - **randevu_tarihi**: New date and time
    - **randevu_tipi**: `online` or `klinik`
    - **online_link**, **randevu_notu**: Meeting link and note
    """
    return await AppointmentService.update_appointment(current_user, appointment_id, request)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    await AppointmentService.delete_appointment(current_user, appointment_id)
    return MessageResponse(message="Appointment deleted")

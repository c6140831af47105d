# Schedules router
from typing import List
from fastapi import APIRouter, Depends, status
from app.features.auth.dependencies import get_current_user
from app.features.schedules.schemas import ScheduleEntryRequest, ScheduleEntryResponse
from app.features.schedules.service import ScheduleService
from app.features.session.schemas import CurrentUser
from app.shared.schemas import MessageResponse

router = APIRouter(prefix="/doctors/{doctor_id}/schedule", tags=["Schedules"])


@router.get("", response_model=List[ScheduleEntryResponse])
async def list_schedule(
    doctor_id: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    """A doctor's calendar in date and start-time order."""
    entries = await ScheduleService.list_entries(current_user, doctor_id)
    return [ScheduleService.to_response(e) for e in entries]


@router.post("", response_model=ScheduleEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_schedule_entry(
    doctor_id: str,
    request: ScheduleEntryRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Add a calendar block.

    - **tarih**: Day, `YYYY-MM-DD` or `DD-MM-YYYY`
    - **baslangic_saat**, **bitis_saat**: Start and end time, `HH:MM`
    - **musait**: Whether the doctor is available in this block
    """
    entry = await ScheduleService.create_entry(current_user, doctor_id, request)
    return ScheduleService.to_response(entry)


@router.put("/{entry_id}", response_model=ScheduleEntryResponse)
async def update_schedule_entry(
    doctor_id: str,
    entry_id: str,
    request: ScheduleEntryRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    entry = await ScheduleService.update_entry(current_user, doctor_id, entry_id, request)
    return ScheduleService.to_response(entry)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_schedule_entry(
    doctor_id: str,
    entry_id: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    await ScheduleService.delete_entry(current_user, doctor_id, entry_id)
    return MessageResponse(message="Schedule entry deleted")

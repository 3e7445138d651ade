from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from wedding_api.admin.urls import REMINDERS_URL
from wedding_api.email_service.notifications import (
    ReminderResultDTO,
    RsvpNotifier,
    get_rsvp_notifier,
)
from wedding_api.guests.dtos import ReminderKind
from wedding_api.guests.schemas import CamelModel

router = APIRouter()


class ReminderRequest(CamelModel):
    guest_ids: list[UUID] = Field(min_length=1, max_length=500)


class ReminderErrorResponse(CamelModel):
    guest_id: str
    name: str
    email: str
    reason: str


class ReminderResponse(CamelModel):
    sent: int
    skipped: int
    errors: list[ReminderErrorResponse]

    @classmethod
    def from_dto(cls, result: ReminderResultDTO) -> "ReminderResponse":
        return cls(
            sent=result.sent,
            skipped=result.skipped,
            errors=[ReminderErrorResponse(**error.__dict__) for error in result.errors],
        )


@router.post(REMINDERS_URL, response_model=ReminderResponse)
async def send_reminders(
    kind: ReminderKind,
    reminder_data: ReminderRequest,
    notifier: RsvpNotifier = Depends(get_rsvp_notifier),
) -> ReminderResponse:
    """
    Email an RSVP reminder (``/reminders/rsvp``) or travel-booking reminder
    (``/reminders/travel``) to each selected guest. Failures are reported per guest.
    """
    result = await notifier.send_reminders(kind, reminder_data.guest_ids)
    return ReminderResponse.from_dto(result)

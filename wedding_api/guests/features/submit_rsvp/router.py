from typing import Literal
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from pydantic import EmailStr, Field, StrictBool, field_validator

from wedding_api.email_service.notifications import RsvpNotifier, get_rsvp_notifier
from wedding_api.guests.dtos import GuestRsvpUpdateDTO
from wedding_api.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from wedding_api.guests.rsvp_window import require_rsvp_open
from wedding_api.guests.schemas import CamelModel, MailingAddressSchema, PlusOneSchema, blank_to_none
from wedding_api.guests.urls import SUBMIT_RSVP_URL

router = APIRouter()


class GuestRsvpSubmit(CamelModel):
    guest_id: UUID
    # Only true, false and "maybe" are answers; "yes", "no", 0 and 1 are rejected
    attending: Literal["maybe"] | StrictBool | None = None
    email: EmailStr | None = None
    events: list[str] | None = Field(default=None, max_length=20)
    dietary_restrictions: str | None = Field(default=None, max_length=500)
    plus_one: PlusOneSchema | None = None
    song_request: str | None = Field(default=None, max_length=500)
    mailing_address: MailingAddressSchema | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return blank_to_none(value)

    def to_dto(self) -> GuestRsvpUpdateDTO:
        """Only fields present in the request are carried over, explicit nulls included."""
        sent = self.model_fields_set
        changes = {}
        if "email" in sent:
            changes["email"] = str(self.email) if self.email else None
        if self.events is not None:
            changes["events"] = self.events
        if self.dietary_restrictions is not None:
            changes["dietary_restrictions"] = self.dietary_restrictions
        if "plus_one" in sent:
            changes["plus_one"] = self.plus_one.to_dto() if self.plus_one else None
        if self.song_request is not None:
            changes["song_request"] = self.song_request
        if "mailing_address" in sent:
            changes["mailing_address"] = self.mailing_address.to_dto() if self.mailing_address else None
        return GuestRsvpUpdateDTO(guest_id=self.guest_id, attending=self.attending, **changes)


class RsvpSubmit(CamelModel):
    group_id: UUID
    guests: list[GuestRsvpSubmit] = Field(min_length=1, max_length=50)


class RsvpSubmitResponse(CamelModel):
    success: bool
    message: str


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel()


@router.post(
    SUBMIT_RSVP_URL,
    response_model=RsvpSubmitResponse,
    dependencies=[Depends(require_rsvp_open)],
)
async def submit_rsvp(
    rsvp_data: RsvpSubmit,
    background_tasks: BackgroundTasks,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
    notifier: RsvpNotifier = Depends(get_rsvp_notifier),
) -> RsvpSubmitResponse:
    """
    Submit the RSVP for every guest in a group.
    The confirmation email is sent after the response and never affects it.
    """
    submission = await write_model.submit_rsvp(
        group_id=rsvp_data.group_id,
        updates=[guest.to_dto() for guest in rsvp_data.guests],
    )
    background_tasks.add_task(notifier.send_group_confirmation, submission.group_id)

    return RsvpSubmitResponse(success=True, message="RSVP submitted successfully")

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import EmailStr, Field, field_validator

from wedding_api.admin.dtos import GuestCreateDTO
from wedding_api.admin.repository.write_models import AdminGuestWriteModel, SqlAdminGuestWriteModel
from wedding_api.admin.urls import GUEST_URL, GUESTS_URL
from wedding_api.guests.dtos import GuestDTO, GuestNotFoundError, GuestStatus
from wedding_api.guests.schemas import CamelModel, GuestResponse, MailingAddressSchema, blank_to_none

router = APIRouter()


def strip_required_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class AdminGuestResponse(GuestResponse):
    group_name: str | None = None
    last_rsvp_reminder_at: datetime | None = None
    last_travel_reminder_at: datetime | None = None

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "AdminGuestResponse":
        return cls(
            **GuestResponse.from_dto(guest).model_dump(),
            group_name=guest.group_name,
            last_rsvp_reminder_at=guest.last_rsvp_reminder_at,
            last_travel_reminder_at=guest.last_travel_reminder_at,
        )


class GuestCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    group_id: UUID
    email: EmailStr | None = None
    allowed_plus_one: bool = False
    has_booked: bool = False
    mailing_address: MailingAddressSchema | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return blank_to_none(value)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return strip_required_name(value)


class GuestUpdate(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    group_id: UUID | None = None
    email: EmailStr | None = None
    allowed_plus_one: bool | None = None
    has_booked: bool | None = None
    mailing_address: MailingAddressSchema | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return blank_to_none(value)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return strip_required_name(value)

    def to_changes(self) -> dict:
        """Fields present in the request. Only email and mailing address may be cleared."""
        changes = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None and name not in ("email", "mailing_address"):
                continue
            if name == "mailing_address" and value is not None:
                value = value.to_dto()
            if name == "email" and value is not None:
                value = str(value)
            changes[name] = value
        return changes


def get_admin_guest_write_model() -> AdminGuestWriteModel:
    """Dependency to get admin guest write model instance."""
    return SqlAdminGuestWriteModel()


@router.get(GUESTS_URL, response_model=list[AdminGuestResponse])
async def list_guests(
    status_filter: GuestStatus | None = Query(None, alias="status"),
    write_model: AdminGuestWriteModel = Depends(get_admin_guest_write_model),
) -> list[AdminGuestResponse]:
    """List all guests, newest first. Filter with ``?status=confirmed``."""
    guests = await write_model.list_guests(status=status_filter)
    return [AdminGuestResponse.from_dto(guest) for guest in guests]


@router.get(GUEST_URL, response_model=AdminGuestResponse)
async def get_guest(
    guest_id: UUID,
    write_model: AdminGuestWriteModel = Depends(get_admin_guest_write_model),
) -> AdminGuestResponse:
    guest = await write_model.get_guest(guest_id)
    if guest is None:
        raise GuestNotFoundError()
    return AdminGuestResponse.from_dto(guest)


@router.post(GUESTS_URL, response_model=AdminGuestResponse, status_code=status.HTTP_201_CREATED)
async def create_guest(
    guest_data: GuestCreate,
    write_model: AdminGuestWriteModel = Depends(get_admin_guest_write_model),
) -> AdminGuestResponse:
    """Add a guest to an existing group. New guests start as pending with no events."""
    guest = await write_model.create_guest(
        GuestCreateDTO(
            first_name=guest_data.first_name,
            last_name=guest_data.last_name,
            group_id=guest_data.group_id,
            email=str(guest_data.email) if guest_data.email else None,
            allowed_plus_one=guest_data.allowed_plus_one,
            has_booked=guest_data.has_booked,
            mailing_address=guest_data.mailing_address.to_dto() if guest_data.mailing_address else None,
        )
    )
    return AdminGuestResponse.from_dto(guest)


@router.put(GUEST_URL, response_model=AdminGuestResponse)
async def update_guest(
    guest_id: UUID,
    guest_data: GuestUpdate,
    write_model: AdminGuestWriteModel = Depends(get_admin_guest_write_model),
) -> AdminGuestResponse:
    guest = await write_model.update_guest(guest_id, guest_data.to_changes())
    return AdminGuestResponse.from_dto(guest)


@router.delete(GUEST_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(
    guest_id: UUID,
    write_model: AdminGuestWriteModel = Depends(get_admin_guest_write_model),
) -> Response:
    await write_model.delete_guest(guest_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

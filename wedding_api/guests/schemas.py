"""Request/response models shared by the RSVP and admin routers.

The wire format uses camelCase keys, Python code uses snake_case.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wedding_api.guests.dtos import GroupDTO, GuestDTO, GuestStatus, MailingAddressDTO, PlusOneDTO


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PlusOneSchema(CamelModel):
    name: str = Field(default="", max_length=200)
    dietary_restrictions: str = Field(default="", max_length=500)

    def to_dto(self) -> PlusOneDTO:
        return PlusOneDTO(name=self.name.strip(), dietary_restrictions=self.dietary_restrictions)


class MailingAddressSchema(CamelModel):
    address_line1: str = Field(default="", max_length=200)
    address_line2: str = Field(default="", max_length=200)
    city: str = Field(default="", max_length=100)
    state_or_province: str = Field(default="", max_length=100)
    postal_code: str = Field(default="", max_length=20)
    country: str = Field(default="", max_length=100)

    def to_dto(self) -> MailingAddressDTO:
        return MailingAddressDTO(**{key: value.strip() for key, value in self.model_dump().items()})


class GuestResponse(CamelModel):
    id: UUID
    group_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    events: list[str] = []
    dietary_restrictions: str = ""
    plus_one: PlusOneSchema | None = None
    song_request: str = ""
    mailing_address: MailingAddressSchema | None = None
    rsvp_status: GuestStatus
    rsvp_date: datetime | None = None
    allowed_plus_one: bool = False
    has_booked: bool = False

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "GuestResponse":
        return cls(
            id=guest.id,
            group_id=guest.group_id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            events=guest.events,
            dietary_restrictions=guest.dietary_restrictions,
            plus_one=PlusOneSchema(**guest.plus_one.to_dict()) if guest.plus_one else None,
            song_request=guest.song_request,
            mailing_address=(
                MailingAddressSchema(**guest.mailing_address.to_dict())
                if guest.mailing_address
                else None
            ),
            rsvp_status=guest.rsvp_status,
            rsvp_date=guest.rsvp_date,
            allowed_plus_one=guest.allowed_plus_one,
            has_booked=guest.has_booked,
        )


class GroupResponse(CamelModel):
    id: UUID
    name: str
    guests: list[GuestResponse] = []

    @classmethod
    def from_dto(cls, group: GroupDTO) -> "GroupResponse":
        return cls(
            id=group.id,
            name=group.name,
            guests=[GuestResponse.from_dto(guest) for guest in group.guests],
        )


class RsvpStatusResponse(CamelModel):
    rsvp_open: bool
    rsvp_by_date: str | None = None


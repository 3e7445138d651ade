from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Literal, TypeAlias
from uuid import UUID

from wedding_api.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from wedding_api.guests.repository.orm_models import Group, Guest


class RsvpClosedError(ForbiddenError):
    default_message = "RSVP has closed"


class GroupNotFoundError(NotFoundError):
    default_message = "Group not found"


class GuestNotFoundError(NotFoundError):
    default_message = "Guest not found"


class NoMatchingGuestError(NotFoundError):
    default_message = "No guest found with that name"


class GuestNotInGroupError(ValidationError):
    default_message = "all guestIds must belong to the group"


class EmailAlreadyInUseError(ConflictError):
    """Raised when an email address is already held by a different guest."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email {email} is already in use by another guest")


class GuestStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    MAYBE = "maybe"
    DECLINED = "declined"


ATTENDING_STATUSES = frozenset({GuestStatus.CONFIRMED, GuestStatus.MAYBE})


class EventType(str, Enum):
    WELCOME = "welcome"
    HALDI = "haldi"
    MEHNDI = "mehndi"
    BARAAT = "baraat"
    WEDDING = "wedding"
    COCKTAIL = "cocktail"
    RECEPTION = "reception"


class ReminderKind(str, Enum):
    RSVP = "rsvp"
    TRAVEL = "travel"


Attendance: TypeAlias = bool | Literal["maybe"] | None


class _Unset(Enum):
    UNSET = "UNSET"


# Marks an optional RSVP field the guest did not send, as opposed to an explicit null
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class PlusOneDTO:
    name: str
    dietary_restrictions: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "PlusOneDTO | None":
        if not data:
            return None
        return cls(
            name=data.get("name", ""),
            dietary_restrictions=data.get("dietary_restrictions", ""),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "dietary_restrictions": self.dietary_restrictions}


@dataclass(frozen=True)
class MailingAddressDTO:
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state_or_province: str = ""
    postal_code: str = ""
    country: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "MailingAddressDTO | None":
        if not data:
            return None
        return cls(**{key: data.get(key, "") for key in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.__dataclass_fields__}

    def is_complete(self) -> bool:
        """Every line except the second address line is filled in."""
        return all(
            value.strip()
            for value in (
                self.address_line1,
                self.city,
                self.state_or_province,
                self.postal_code,
                self.country,
            )
        )

    def format_single_line(self) -> str:
        parts = [
            self.address_line1,
            self.address_line2,
            self.city,
            self.state_or_province,
            self.postal_code,
            self.country,
        ]
        return ", ".join(part.strip() for part in parts if part and part.strip())


@dataclass(frozen=True)
class GuestDTO:
    """Guest as returned by read and write models."""

    id: UUID
    group_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    events: list[str] = field(default_factory=list)
    dietary_restrictions: str = ""
    plus_one: PlusOneDTO | None = None
    song_request: str = ""
    mailing_address: MailingAddressDTO | None = None
    rsvp_status: GuestStatus = GuestStatus.PENDING
    rsvp_date: datetime | None = None
    allowed_plus_one: bool = False
    has_booked: bool = False
    last_rsvp_reminder_at: datetime | None = None
    last_travel_reminder_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    group_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_attending(self) -> bool:
        return self.rsvp_status in ATTENDING_STATUSES

    @classmethod
    def from_guest(cls, guest: "Guest", group_name: str | None = None) -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.uuid,
            group_id=guest.group_id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            events=list(guest.events or []),
            dietary_restrictions=guest.dietary_restrictions or "",
            plus_one=PlusOneDTO.from_dict(guest.plus_one),
            song_request=guest.song_request or "",
            mailing_address=MailingAddressDTO.from_dict(guest.mailing_address),
            rsvp_status=GuestStatus(guest.rsvp_status),
            rsvp_date=guest.rsvp_date,
            allowed_plus_one=guest.allowed_plus_one,
            has_booked=guest.has_booked,
            last_rsvp_reminder_at=guest.last_rsvp_reminder_at,
            last_travel_reminder_at=guest.last_travel_reminder_at,
            created_at=guest.created_at,
            updated_at=guest.updated_at,
            group_name=group_name,
        )


@dataclass(frozen=True)
class GroupDTO:
    id: UUID
    name: str
    guests: list[GuestDTO] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def first_guest(self) -> GuestDTO | None:
        return self.guests[0] if self.guests else None

    @classmethod
    def from_group(cls, group: "Group", guests: list["Guest"]) -> "GroupDTO":
        return cls(
            id=group.uuid,
            name=group.name or "",
            guests=[GuestDTO.from_guest(guest, group_name=group.name) for guest in guests],
            created_at=group.created_at,
        )


@dataclass(frozen=True)
class GuestRsvpUpdateDTO:
    """One guest's answer inside a group RSVP.

    Optional fields default to ``UNSET`` and are left untouched on the stored guest.
    """

    guest_id: UUID
    attending: Attendance = None
    email: str | None | _Unset = UNSET
    events: list[str] | _Unset = UNSET
    dietary_restrictions: str | _Unset = UNSET
    plus_one: PlusOneDTO | None | _Unset = UNSET
    song_request: str | _Unset = UNSET
    mailing_address: MailingAddressDTO | None | _Unset = UNSET


@dataclass(frozen=True)
class RsvpSubmissionDTO:
    group_id: UUID
    guest_ids: list[UUID]
    submitted_at: datetime

from dataclasses import dataclass, field
from uuid import UUID

from wedding_api.guests.dtos import GuestDTO, MailingAddressDTO

# Columns an admin may change on an existing guest
GUEST_UPDATABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "group_id",
        "allowed_plus_one",
        "has_booked",
        "mailing_address",
    }
)


@dataclass(frozen=True)
class GuestCreateDTO:
    first_name: str
    last_name: str
    group_id: UUID
    email: str | None = None
    allowed_plus_one: bool = False
    has_booked: bool = False
    mailing_address: MailingAddressDTO | None = None


@dataclass(frozen=True)
class GuestSnapshotDTO:
    """Every guest (with group names) plus the number of groups, read together."""

    guests: list[GuestDTO] = field(default_factory=list)
    group_count: int = 0
    group_names: dict[UUID, str] = field(default_factory=dict)

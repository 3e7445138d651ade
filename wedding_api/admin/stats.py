"""Dashboard statistics computed from a snapshot of all guests."""

from collections import Counter
from dataclasses import dataclass, field
from uuid import UUID

from wedding_api.admin.dtos import GuestSnapshotDTO
from wedding_api.guests.dtos import EventType, GuestDTO, GuestStatus
from wedding_api.guests.rsvp_window import RsvpWindow


@dataclass(frozen=True)
class GuestStatsDTO:
    total: int
    total_groups: int
    confirmed: int
    maybe: int
    declined: int
    pending: int
    response_rate: float
    rsvp_open: bool
    rsvp_by_date: str | None
    has_booked_count: int
    event_counts: dict[str, int] = field(default_factory=dict)
    groups_with_response: int = 0
    groups_without_response: int = 0
    groups_fully_declined: int = 0
    groups_mixed: int = 0
    plus_one_allowed: int = 0
    plus_one_with_guest: int = 0
    plus_one_coming_alone: int = 0
    dietary_count: int = 0


def _has_plus_one(guest: GuestDTO) -> bool:
    return guest.plus_one is not None and bool(guest.plus_one.name.strip())


def compute_stats(snapshot: GuestSnapshotDTO, window: RsvpWindow) -> GuestStatsDTO:
    guests = snapshot.guests
    by_status = Counter(guest.rsvp_status for guest in guests)
    total = len(guests)
    responded = total - by_status[GuestStatus.PENDING]

    event_counts = {event.value: 0 for event in EventType}
    for guest in guests:
        if guest.is_attending:
            for event in guest.events:
                if event in event_counts:
                    event_counts[event] += 1

    guests_by_group: dict[UUID, list[GuestDTO]] = {}
    for guest in guests:
        guests_by_group.setdefault(guest.group_id, []).append(guest)

    groups_with_response = 0
    groups_fully_declined = 0
    groups_mixed = 0
    for members in guests_by_group.values():
        statuses = {guest.rsvp_status for guest in members}
        if statuses != {GuestStatus.PENDING}:
            groups_with_response += 1
        if statuses == {GuestStatus.DECLINED}:
            groups_fully_declined += 1
        if GuestStatus.DECLINED in statuses and (
            GuestStatus.CONFIRMED in statuses or GuestStatus.MAYBE in statuses
        ):
            groups_mixed += 1

    allowed = [guest for guest in guests if guest.allowed_plus_one]
    attending_allowed = [guest for guest in allowed if guest.is_attending]

    dietary_count = sum(
        1 for guest in guests if guest.is_attending and guest.dietary_restrictions.strip()
    ) + sum(
        1
        for guest in guests
        if guest.is_attending and _has_plus_one(guest) and guest.plus_one.dietary_restrictions.strip()
    )

    return GuestStatsDTO(
        total=total,
        total_groups=snapshot.group_count,
        confirmed=by_status[GuestStatus.CONFIRMED],
        maybe=by_status[GuestStatus.MAYBE],
        declined=by_status[GuestStatus.DECLINED],
        pending=by_status[GuestStatus.PENDING],
        response_rate=round(responded / total * 100, 1) if total else 0.0,
        rsvp_open=window.is_open(),
        rsvp_by_date=window.rsvp_by_date,
        has_booked_count=sum(1 for guest in guests if guest.has_booked),
        event_counts=event_counts,
        groups_with_response=groups_with_response,
        groups_without_response=snapshot.group_count - groups_with_response,
        groups_fully_declined=groups_fully_declined,
        groups_mixed=groups_mixed,
        plus_one_allowed=len(allowed),
        plus_one_with_guest=sum(1 for guest in attending_allowed if _has_plus_one(guest)),
        plus_one_coming_alone=sum(1 for guest in attending_allowed if not _has_plus_one(guest)),
        dietary_count=dietary_count,
    )

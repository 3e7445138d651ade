"""Rules for turning a guest's RSVP answer into stored guest state."""

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from wedding_api.guests.dtos import (
    ATTENDING_STATUSES,
    UNSET,
    Attendance,
    EventType,
    GuestRsvpUpdateDTO,
    GuestStatus,
)

if TYPE_CHECKING:
    from wedding_api.guests.repository.orm_models import Guest

KNOWN_EVENTS = tuple(event.value for event in EventType)


def status_from_attending(attending: Attendance) -> GuestStatus:
    if attending is True:
        return GuestStatus.CONFIRMED
    if attending == "maybe":
        return GuestStatus.MAYBE
    if attending is False:
        return GuestStatus.DECLINED
    return GuestStatus.PENDING


def filter_events(events: Iterable[str]) -> list[str]:
    """Keep known event ids in the order given, dropping unknown ones and repeats."""
    kept: list[str] = []
    for event in events:
        if event in KNOWN_EVENTS and event not in kept:
            kept.append(event)
    return kept


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


def apply_rsvp_update(guest: "Guest", update: GuestRsvpUpdateDTO, now: datetime) -> None:
    """Write one guest's answer onto the ORM row. Only supplied fields are touched."""
    status = status_from_attending(update.attending)
    guest.rsvp_status = status
    guest.rsvp_date = now

    if status not in ATTENDING_STATUSES:
        guest.events = []
    elif update.events is not UNSET:
        guest.events = filter_events(update.events)

    if update.email is not UNSET:
        guest.email = normalize_email(update.email)
    if update.dietary_restrictions is not UNSET:
        guest.dietary_restrictions = update.dietary_restrictions
    if update.plus_one is not UNSET:
        guest.plus_one = update.plus_one.to_dict() if update.plus_one else None
    if update.song_request is not UNSET:
        guest.song_request = update.song_request
    if update.mailing_address is not UNSET:
        guest.mailing_address = update.mailing_address.to_dict() if update.mailing_address else None

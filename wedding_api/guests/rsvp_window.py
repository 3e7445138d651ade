"""The RSVP gate: submissions are accepted up to and including the deadline day."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from fastapi import Depends

from wedding_api.config.settings import Settings
from wedding_api.guests.dtos import RsvpClosedError

logger = logging.getLogger(__name__)


def parse_deadline(raw: str | None) -> date | None:
    """Parse an ISO date (or datetime) string. Empty or invalid values mean no deadline."""
    if not raw or not raw.strip():
        return None
    try:
        return datetime.fromisoformat(raw.strip()).date()
    except ValueError:
        logger.warning("Ignoring invalid RSVP_BY_DATE value %r, RSVP stays open", raw)
        return None


def is_rsvp_open(today: date, deadline: date | None) -> bool:
    if deadline is None:
        return True
    return today <= deadline


@dataclass(frozen=True)
class RsvpWindow:
    deadline: date | None = None

    @classmethod
    def from_setting(cls, raw: str | None) -> "RsvpWindow":
        return cls(deadline=parse_deadline(raw))

    def is_open(self, today: date | None = None) -> bool:
        return is_rsvp_open(today or date.today(), self.deadline)

    @property
    def rsvp_by_date(self) -> str | None:
        return self.deadline.isoformat() if self.deadline else None


def get_rsvp_window() -> RsvpWindow:
    """Dependency reading the deadline fresh from the environment on every request."""
    return RsvpWindow.from_setting(Settings().rsvp_by_date)


async def require_rsvp_open(window: RsvpWindow = Depends(get_rsvp_window)) -> RsvpWindow:
    """Route dependency rejecting the request once the deadline has passed."""
    if not window.is_open():
        raise RsvpClosedError()
    return window

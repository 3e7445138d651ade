"""RSVP write model - applies a group's RSVP and returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_api.config.database import async_session_manager
from wedding_api.errors import ConflictError
from wedding_api.guests.dtos import (
    UNSET,
    EmailAlreadyInUseError,
    GroupNotFoundError,
    GuestNotInGroupError,
    GuestRsvpUpdateDTO,
    RsvpSubmissionDTO,
)
from wedding_api.guests.repository.orm_models import Group, Guest
from wedding_api.guests.rsvp_rules import apply_rsvp_update, normalize_email

logger = logging.getLogger(__name__)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self,
        group_id: UUID,
        updates: Sequence[GuestRsvpUpdateDTO],
    ) -> RsvpSubmissionDTO:
        """
        Apply every guest's answer for one group.
        Either all guests are updated or, on any failed check, none are.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """Write operations for group RSVPs."""

    def __init__(self, session_overwrite: AsyncSession | None = None):
        self._session_overwrite = session_overwrite

    async def _check_email_collisions(
        self, session: AsyncSession, updates: Sequence[GuestRsvpUpdateDTO]
    ) -> None:
        """Reject emails held by another guest, or claimed twice within the same payload."""
        claimed: dict[str, UUID] = {}
        for update in updates:
            if update.email is UNSET:
                continue
            email = normalize_email(update.email)
            if email is None:
                continue
            if claimed.get(email, update.guest_id) != update.guest_id:
                raise EmailAlreadyInUseError(email)
            claimed[email] = update.guest_id

            stmt = select(Guest.uuid).where(Guest.email == email).where(Guest.uuid != update.guest_id)
            result = await session.execute(stmt)
            if result.first() is not None:
                raise EmailAlreadyInUseError(email)

    async def submit_rsvp(
        self,
        group_id: UUID,
        updates: Sequence[GuestRsvpUpdateDTO],
    ) -> RsvpSubmissionDTO:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            group = await session.get(Group, group_id)
            if group is None:
                raise GroupNotFoundError()

            result = await session.execute(select(Guest).where(Guest.group_id == group_id))
            guests_by_id = {guest.uuid: guest for guest in result.scalars().all()}
            if any(update.guest_id not in guests_by_id for update in updates):
                raise GuestNotInGroupError()

            await self._check_email_collisions(session, updates)

            now = datetime.now(UTC)
            for update in updates:
                apply_rsvp_update(guests_by_id[update.guest_id], update, now)

            try:
                await session.flush()
            except IntegrityError as e:
                # Another request claimed one of the emails after our check
                emails = {
                    normalize_email(update.email) for update in updates if update.email is not UNSET
                } - {None}
                if len(emails) == 1:
                    raise EmailAlreadyInUseError(emails.pop()) from e
                raise ConflictError("Email is already in use by another guest") from e

            logger.info("Recorded RSVP for group %s (%d guests)", group_id, len(updates))
            return RsvpSubmissionDTO(
                group_id=group_id,
                guest_ids=[update.guest_id for update in updates],
                submitted_at=now,
            )

"""Admin write models for guests and groups. They return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_api.admin.dtos import GUEST_UPDATABLE_FIELDS, GuestCreateDTO
from wedding_api.config.database import async_session_manager
from wedding_api.guests.dtos import (
    EmailAlreadyInUseError,
    GroupDTO,
    GroupNotFoundError,
    GuestDTO,
    GuestNotFoundError,
    GuestStatus,
    MailingAddressDTO,
    ReminderKind,
)
from wedding_api.guests.repository.orm_models import Group, Guest
from wedding_api.guests.repository.read_models import load_groups
from wedding_api.guests.rsvp_rules import normalize_email

logger = logging.getLogger(__name__)


async def ensure_email_available(
    session: AsyncSession, email: str | None, guest_id: UUID | None = None
) -> None:
    """Raise if another guest already holds this (normalized) email."""
    if email is None:
        return
    stmt = select(Guest.uuid).where(Guest.email == email)
    if guest_id is not None:
        stmt = stmt.where(Guest.uuid != guest_id)
    result = await session.execute(stmt)
    if result.first() is not None:
        raise EmailAlreadyInUseError(email)


async def ensure_group_exists(session: AsyncSession, group_id: UUID) -> Group:
    group = await session.get(Group, group_id)
    if group is None:
        raise GroupNotFoundError()
    return group


class AdminGuestWriteModel(ABC):
    @abstractmethod
    async def list_guests(self, status: GuestStatus | None = None) -> list[GuestDTO]:
        """List guests, newest first, optionally filtered by RSVP status."""
        raise NotImplementedError

    @abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def create_guest(self, data: GuestCreateDTO) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest_id: UUID, changes: dict[str, Any]) -> GuestDTO:
        """Apply a partial update. Keys are guest attribute names."""
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        raise NotImplementedError

    @abstractmethod
    async def mark_reminder_sent(self, guest_id: UUID, kind: ReminderKind, sent_at: datetime) -> None:
        raise NotImplementedError


class SqlAdminGuestWriteModel(AdminGuestWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None):
        self._session_overwrite = session_overwrite

    async def _group_name(self, session: AsyncSession, group_id: UUID) -> str | None:
        group = await session.get(Group, group_id)
        return group.name if group else None

    async def _flush(self, session: AsyncSession, email: str | None) -> None:
        try:
            await session.flush()
        except IntegrityError as e:
            raise EmailAlreadyInUseError(email or "") from e

    async def list_guests(self, status: GuestStatus | None = None) -> list[GuestDTO]:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            stmt = (
                select(Guest, Group.name)
                .join(Group, Guest.group_id == Group.uuid)
                .order_by(Guest.created_at.desc(), Guest.uuid)
            )
            if status is not None:
                stmt = stmt.where(Guest.rsvp_status == status)
            result = await session.execute(stmt)
            return [GuestDTO.from_guest(guest, group_name=name) for guest, name in result.all()]

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                return None
            return GuestDTO.from_guest(guest, group_name=await self._group_name(session, guest.group_id))

    async def create_guest(self, data: GuestCreateDTO) -> GuestDTO:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            group = await ensure_group_exists(session, data.group_id)
            email = normalize_email(data.email)
            await ensure_email_available(session, email)

            guest = Guest(
                group_id=data.group_id,
                first_name=data.first_name.strip(),
                last_name=data.last_name.strip(),
                email=email,
                rsvp_status=GuestStatus.PENDING,
                events=[],
                allowed_plus_one=data.allowed_plus_one,
                has_booked=data.has_booked,
                mailing_address=data.mailing_address.to_dict() if data.mailing_address else None,
            )
            session.add(guest)
            await self._flush(session, email)
            await session.refresh(guest)

            logger.info("Created guest %s in group %s", guest.uuid, group.uuid)
            return GuestDTO.from_guest(guest, group_name=group.name)

    async def update_guest(self, guest_id: UUID, changes: dict[str, Any]) -> GuestDTO:
        unknown = set(changes) - GUEST_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update guest fields: {', '.join(sorted(unknown))}")
        changes = dict(changes)

        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise GuestNotFoundError()

            if "group_id" in changes:
                await ensure_group_exists(session, changes["group_id"])
            if "email" in changes:
                changes["email"] = normalize_email(changes["email"])
                await ensure_email_available(session, changes["email"], guest_id=guest_id)
            if "mailing_address" in changes:
                address = changes["mailing_address"]
                if isinstance(address, MailingAddressDTO):
                    changes["mailing_address"] = address.to_dict()
            for name_field in ("first_name", "last_name"):
                if name_field in changes:
                    changes[name_field] = changes[name_field].strip()

            for key, value in changes.items():
                setattr(guest, key, value)
            await self._flush(session, changes.get("email"))
            await session.refresh(guest)

            return GuestDTO.from_guest(guest, group_name=await self._group_name(session, guest.group_id))

    async def delete_guest(self, guest_id: UUID) -> None:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise GuestNotFoundError()
            await session.delete(guest)
            await session.flush()
            logger.info("Deleted guest %s", guest_id)

    async def mark_reminder_sent(self, guest_id: UUID, kind: ReminderKind, sent_at: datetime) -> None:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                return
            if kind == ReminderKind.RSVP:
                guest.last_rsvp_reminder_at = sent_at
            else:
                guest.last_travel_reminder_at = sent_at
            await session.flush()


class AdminGroupWriteModel(ABC):
    @abstractmethod
    async def list_groups(self) -> list[GroupDTO]:
        raise NotImplementedError

    @abstractmethod
    async def get_group(self, group_id: UUID) -> GroupDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def create_group(self, name: str) -> GroupDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_group(self, group_id: UUID, name: str) -> GroupDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_group(self, group_id: UUID) -> int:
        """Delete a group and all of its guests. Returns the number of guests removed."""
        raise NotImplementedError


class SqlAdminGroupWriteModel(AdminGroupWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None):
        self._session_overwrite = session_overwrite

    async def list_groups(self) -> list[GroupDTO]:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            result = await session.execute(select(Group.uuid))
            return await load_groups(session, list(result.scalars().all()))

    async def get_group(self, group_id: UUID) -> GroupDTO | None:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            groups = await load_groups(session, [group_id])
            return groups[0] if groups else None

    async def create_group(self, name: str) -> GroupDTO:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            group = Group(name=name.strip())
            session.add(group)
            await session.flush()
            await session.refresh(group)
            logger.info("Created group %s (%s)", group.uuid, group.name)
            return GroupDTO.from_group(group, [])

    async def update_group(self, group_id: UUID, name: str) -> GroupDTO:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            group = await ensure_group_exists(session, group_id)
            group.name = name.strip()
            await session.flush()
            groups = await load_groups(session, [group_id])
            return groups[0]

    async def delete_group(self, group_id: UUID) -> int:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            group = await ensure_group_exists(session, group_id)
            # Remove guests explicitly so no orphans remain even without FK cascades
            result = await session.execute(delete(Guest).where(Guest.group_id == group_id))
            await session.delete(group)
            await session.flush()
            logger.info("Deleted group %s and %d guests", group_id, result.rowcount)
            return result.rowcount

"""Guest-facing read models. They return DTOs, never ORM models."""

import abc
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_api.config.database import async_session_manager
from wedding_api.guests.dtos import GroupDTO
from wedding_api.guests.repository.orm_models import Group, Guest


class GroupReadModel(abc.ABC):
    @abc.abstractmethod
    async def find_groups_by_guest_name(self, first_name: str, last_name: str) -> list[GroupDTO]:
        """
        Find every group containing a guest with this exact name (case-insensitive).
        Each group carries its complete guest list, ordered by creation time.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_group(self, group_id: UUID) -> GroupDTO | None:
        """Get a group with all of its guests, or None if it does not exist."""
        raise NotImplementedError


async def load_groups(session: AsyncSession, group_ids: Sequence[UUID]) -> list[GroupDTO]:
    """Load groups (oldest first) together with their guests."""
    if not group_ids:
        return []
    groups_result = await session.execute(
        select(Group).where(Group.uuid.in_(group_ids)).order_by(Group.created_at, Group.uuid)
    )
    groups = groups_result.scalars().all()

    guests_result = await session.execute(
        select(Guest)
        .where(Guest.group_id.in_(group_ids))
        .order_by(Guest.created_at, Guest.uuid)
    )
    guests_by_group: dict[UUID, list[Guest]] = {}
    for guest in guests_result.scalars().all():
        guests_by_group.setdefault(guest.group_id, []).append(guest)

    return [GroupDTO.from_group(group, guests_by_group.get(group.uuid, [])) for group in groups]


class SqlGroupReadModel(GroupReadModel):
    """SQL implementation of the guest-facing group read model."""

    def __init__(self, session_overwrite: AsyncSession | None = None):
        self._session_overwrite = session_overwrite

    async def find_groups_by_guest_name(self, first_name: str, last_name: str) -> list[GroupDTO]:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            stmt = (
                select(Guest.group_id)
                .where(func.lower(Guest.first_name) == first_name.strip().lower())
                .where(func.lower(Guest.last_name) == last_name.strip().lower())
                .distinct()
            )
            result = await session.execute(stmt)
            group_ids = list(result.scalars().all())
            return await load_groups(session, group_ids)

    async def get_group(self, group_id: UUID) -> GroupDTO | None:
        async with async_session_manager(session_overwrite=self._session_overwrite) as session:
            groups = await load_groups(session, [group_id])
            return groups[0] if groups else None

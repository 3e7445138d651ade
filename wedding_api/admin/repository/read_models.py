import abc

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_api.admin.dtos import GuestSnapshotDTO
from wedding_api.config.database import async_session_manager
from wedding_api.guests.dtos import GuestDTO
from wedding_api.guests.repository.orm_models import Group, Guest


class GuestSnapshotReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_snapshot(self) -> GuestSnapshotDTO:
        """
        Read every guest and the group count for stats and exports.
        The reads are independent, there is no cross-read consistency.
        """
        raise NotImplementedError


class SqlGuestSnapshotReadModel(GuestSnapshotReadModel):
    def __init__(self, session_overwrite: AsyncSession | None = None):
        self._session_overwrite = session_overwrite

    async def get_snapshot(self) -> GuestSnapshotDTO:
        async with async_session_manager(
            auto_commit=False, session_overwrite=self._session_overwrite
        ) as session:
            group_count = (await session.execute(select(func.count(Group.uuid)))).scalar_one()
            groups_result = await session.execute(select(Group.uuid, Group.name))
            group_names = {uuid: name for uuid, name in groups_result.all()}

            guests_result = await session.execute(
                select(Guest).order_by(Guest.last_name, Guest.first_name, Guest.created_at)
            )
            guests = [
                GuestDTO.from_guest(guest, group_name=group_names.get(guest.group_id))
                for guest in guests_result.scalars().all()
            ]
            return GuestSnapshotDTO(guests=guests, group_count=group_count, group_names=group_names)

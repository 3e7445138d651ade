from fastapi import APIRouter, Depends

from wedding_api.admin.repository.read_models import (
    GuestSnapshotReadModel,
    SqlGuestSnapshotReadModel,
)
from wedding_api.admin.stats import GuestStatsDTO, compute_stats
from wedding_api.admin.urls import STATS_URL
from wedding_api.guests.rsvp_window import RsvpWindow, get_rsvp_window
from wedding_api.guests.schemas import CamelModel

router = APIRouter()


class StatsResponse(CamelModel):
    total: int
    total_groups: int
    confirmed: int
    maybe: int
    declined: int
    pending: int
    response_rate: float
    rsvp_open: bool
    rsvp_by_date: str | None = None
    has_booked_count: int
    event_counts: dict[str, int]
    groups_with_response: int
    groups_without_response: int
    groups_fully_declined: int
    groups_mixed: int
    plus_one_allowed: int
    plus_one_with_guest: int
    plus_one_coming_alone: int
    dietary_count: int

    @classmethod
    def from_dto(cls, stats: GuestStatsDTO) -> "StatsResponse":
        return cls(**stats.__dict__)


def get_guest_snapshot_read_model() -> GuestSnapshotReadModel:
    """Dependency to get the guest snapshot read model instance."""
    return SqlGuestSnapshotReadModel()


@router.get(STATS_URL, response_model=StatsResponse)
async def get_stats(
    read_model: GuestSnapshotReadModel = Depends(get_guest_snapshot_read_model),
    window: RsvpWindow = Depends(get_rsvp_window),
) -> StatsResponse:
    """Dashboard counts by status, event, group outcome, plus-ones and dietary needs."""
    snapshot = await read_model.get_snapshot()
    return StatsResponse.from_dto(compute_stats(snapshot, window))

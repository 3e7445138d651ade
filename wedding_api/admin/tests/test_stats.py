"""Tests for compute_stats over hand-built snapshots."""

from datetime import date
from uuid import uuid4

from wedding_api.admin.dtos import GuestSnapshotDTO
from wedding_api.admin.stats import compute_stats
from wedding_api.guests.dtos import GuestDTO, GuestStatus, PlusOneDTO
from wedding_api.guests.rsvp_window import RsvpWindow


def guest(group_id, status=GuestStatus.PENDING, **fields) -> GuestDTO:
    return GuestDTO(
        id=uuid4(),
        group_id=group_id,
        first_name=fields.pop("first_name", "Guest"),
        last_name="Test",
        rsvp_status=status,
        **fields,
    )


def test_empty_snapshot():
    stats = compute_stats(GuestSnapshotDTO(), RsvpWindow())

    assert stats.total == 0
    assert stats.response_rate == 0.0
    assert stats.rsvp_open is True
    assert stats.event_counts == {
        "welcome": 0,
        "haldi": 0,
        "mehndi": 0,
        "baraat": 0,
        "wedding": 0,
        "cocktail": 0,
        "reception": 0,
    }


def test_counts_and_group_rollups():
    declined_group, mixed_group, pending_group, maybe_group = (uuid4() for _ in range(4))
    guests = [
        guest(declined_group, GuestStatus.DECLINED),
        guest(declined_group, GuestStatus.DECLINED),
        guest(
            mixed_group,
            GuestStatus.CONFIRMED,
            events=["wedding", "reception"],
            dietary_restrictions="Halal",
            allowed_plus_one=True,
            plus_one=PlusOneDTO(name="Tom Williams", dietary_restrictions="Vegan"),
            has_booked=True,
        ),
        guest(mixed_group, GuestStatus.DECLINED, dietary_restrictions="Ignored when declined"),
        guest(pending_group, allowed_plus_one=True),
        guest(maybe_group, GuestStatus.MAYBE, events=["wedding"], allowed_plus_one=True),
    ]
    snapshot = GuestSnapshotDTO(guests=guests, group_count=5)

    stats = compute_stats(snapshot, RsvpWindow(deadline=date(2000, 1, 1)))

    assert (stats.total, stats.confirmed, stats.maybe, stats.declined, stats.pending) == (6, 1, 1, 3, 1)
    assert stats.total_groups == 5
    assert stats.response_rate == 83.3
    assert stats.rsvp_open is False
    assert stats.rsvp_by_date == "2000-01-01"
    assert stats.has_booked_count == 1
    assert stats.event_counts["wedding"] == 2
    assert stats.event_counts["reception"] == 1
    assert stats.event_counts["welcome"] == 0
    assert stats.groups_with_response == 3
    # One group has no guests at all and counts as not responded
    assert stats.groups_without_response == 2
    assert stats.groups_fully_declined == 1
    assert stats.groups_mixed == 1
    assert stats.plus_one_allowed == 3
    assert stats.plus_one_with_guest == 1
    assert stats.plus_one_coming_alone == 1
    assert stats.dietary_count == 2


def test_events_of_declined_guests_are_not_counted():
    group_id = uuid4()
    snapshot = GuestSnapshotDTO(
        guests=[guest(group_id, GuestStatus.DECLINED, events=["wedding"])], group_count=1
    )

    stats = compute_stats(snapshot, RsvpWindow())

    assert stats.event_counts["wedding"] == 0

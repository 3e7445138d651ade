"""Demo groups and guests in a spread of RSVP states, for local development."""

import logging
from collections import Counter
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_api.guests.dtos import EventType, GuestStatus
from wedding_api.guests.repository.orm_models import Group, Guest

logger = logging.getLogger(__name__)

ALL_EVENTS = [event.value for event in EventType]


def _on(day: str) -> datetime:
    return datetime.fromisoformat(day).replace(tzinfo=timezone.utc)


# (group name, [guest fields]) in creation order; the first guest of each group is its contact
DEMO_GROUPS: list[tuple[str, list[dict]]] = [
    (
        "Smith Family",
        [
            dict(
                first_name="John",
                last_name="Smith",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-15"),
                events=ALL_EVENTS,
                has_booked=True,
                song_request="September - Earth, Wind & Fire",
            ),
            dict(
                first_name="Jane",
                last_name="Smith",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-15"),
                events=ALL_EVENTS,
                dietary_restrictions="Vegetarian",
                has_booked=True,
            ),
            dict(
                first_name="Emily",
                last_name="Smith",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-15"),
                events=["wedding", "cocktail", "reception"],
                dietary_restrictions="Gluten free",
                allowed_plus_one=True,
                plus_one={"name": "Alex Rivera", "dietary_restrictions": ""},
                song_request="Levitating - Dua Lipa",
            ),
        ],
    ),
    (
        "Nguyen Family",
        [
            dict(
                first_name="David",
                last_name="Nguyen",
                rsvp_status=GuestStatus.DECLINED,
                rsvp_date=_on("2027-02-01"),
            ),
            dict(
                first_name="Lisa",
                last_name="Nguyen",
                rsvp_status=GuestStatus.DECLINED,
                rsvp_date=_on("2027-02-01"),
            ),
        ],
    ),
    (
        "Patel Group",
        [
            dict(
                first_name="Raj",
                last_name="Patel",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-20"),
                events=["welcome", "haldi", "baraat", "wedding", "reception"],
                allowed_plus_one=True,
                has_booked=True,
                plus_one={"name": "Priya Sharma", "dietary_restrictions": "No shellfish"},
                song_request="Chaiyya Chaiyya",
            ),
            dict(
                first_name="Anita",
                last_name="Patel",
                rsvp_status=GuestStatus.MAYBE,
                rsvp_date=_on("2027-01-20"),
                events=["wedding", "reception"],
                dietary_restrictions="Vegan",
            ),
            dict(first_name="Vikram", last_name="Patel"),
        ],
    ),
    ("", [dict(first_name="Mike", last_name="Johnson", allowed_plus_one=True)]),
    (
        "",
        [
            dict(
                first_name="Sarah",
                last_name="Chen",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-02-10"),
                events=["welcome", "wedding", "cocktail", "reception"],
                dietary_restrictions="Nut allergy",
                allowed_plus_one=True,
                has_booked=True,
                plus_one={"name": "Tom Williams", "dietary_restrictions": ""},
                song_request="Don't Stop Me Now - Queen",
            ),
        ],
    ),
    (
        "",
        [
            dict(
                first_name="Alex",
                last_name="Kim",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-25"),
                events=ALL_EVENTS,
                allowed_plus_one=True,
                song_request="Uptown Funk - Bruno Mars",
            ),
        ],
    ),
    (
        "Brown Family",
        [
            dict(
                first_name="Chris",
                last_name="Brown",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-02-05"),
                events=["welcome", "baraat", "wedding", "cocktail", "reception"],
                dietary_restrictions="Halal",
                has_booked=True,
            ),
            dict(
                first_name="Dana",
                last_name="Brown",
                rsvp_status=GuestStatus.DECLINED,
                rsvp_date=_on("2027-02-05"),
            ),
        ],
    ),
    (
        "Garcia Crew",
        [
            dict(first_name="Carlos", last_name="Garcia", allowed_plus_one=True),
            dict(first_name="Maria", last_name="Garcia"),
            dict(first_name="Sofia", last_name="Garcia"),
            dict(first_name="Marco", last_name="Garcia", allowed_plus_one=True),
        ],
    ),
    (
        "Taylor Couple",
        [
            dict(
                first_name="Jordan",
                last_name="Taylor",
                rsvp_status=GuestStatus.MAYBE,
                rsvp_date=_on("2027-02-08"),
                events=["wedding", "reception"],
                dietary_restrictions="Pescatarian",
                has_booked=True,
                song_request="Shake It Off - Taylor Swift",
            ),
            dict(
                first_name="Morgan",
                last_name="Taylor",
                rsvp_status=GuestStatus.MAYBE,
                rsvp_date=_on("2027-02-08"),
                events=["wedding", "reception"],
            ),
        ],
    ),
    (
        "",
        [
            dict(
                first_name="Preeti",
                last_name="Kapoor",
                rsvp_status=GuestStatus.CONFIRMED,
                rsvp_date=_on("2027-01-18"),
                events=ALL_EVENTS,
                dietary_restrictions="Strictly vegetarian, no eggs",
                has_booked=True,
                song_request="Jai Ho",
            ),
        ],
    ),
]


def demo_email(first_name: str, last_name: str) -> str:
    return f"{first_name}.{last_name}@example.com".lower()


async def seed_database(session: AsyncSession) -> Counter:
    """Delete every group and guest, then load the demo data.

    Returns a counter with ``groups``, ``guests`` and one entry per RSVP status.
    """
    await session.execute(delete(Guest))
    await session.execute(delete(Group))
    logger.info("Cleared existing guests and groups")

    summary: Counter = Counter()
    for group_name, guests in DEMO_GROUPS:
        group = Group(name=group_name)
        session.add(group)
        await session.flush()
        summary["groups"] += 1

        for fields in guests:
            fields = {
                "rsvp_status": GuestStatus.PENDING,
                "email": demo_email(fields["first_name"], fields["last_name"]),
                "events": [],
                **fields,
            }
            fields["events"] = list(fields["events"])
            session.add(Guest(group_id=group.uuid, **fields))
            # One flush per guest keeps creation order stable within the group
            await session.flush()
            summary["guests"] += 1
            summary[fields["rsvp_status"].value] += 1
            summary["has_booked"] += bool(fields.get("has_booked"))

    logger.info("Seeded %d groups and %d guests", summary["groups"], summary["guests"])
    return summary

"""Tests for turning RSVP answers into guest state."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from wedding_api.guests.dtos import GuestRsvpUpdateDTO, GuestStatus, MailingAddressDTO, PlusOneDTO
from wedding_api.guests.repository.orm_models import Guest
from wedding_api.guests.rsvp_rules import (
    apply_rsvp_update,
    filter_events,
    normalize_email,
    status_from_attending,
)

NOW = datetime(2027, 1, 10, 9, 30, tzinfo=UTC)


def make_guest(**fields) -> Guest:
    values = dict(
        uuid=uuid4(),
        group_id=uuid4(),
        first_name="Emma",
        last_name="Wilson",
        email=None,
        rsvp_status=GuestStatus.PENDING,
        rsvp_date=None,
        events=[],
        dietary_restrictions="",
        plus_one=None,
        song_request="",
        mailing_address=None,
    )
    values.update(fields)
    return Guest(**values)


@pytest.mark.parametrize(
    ("attending", "expected"),
    [
        (True, GuestStatus.CONFIRMED),
        ("maybe", GuestStatus.MAYBE),
        (False, GuestStatus.DECLINED),
        (None, GuestStatus.PENDING),
    ],
)
def test_status_from_attending(attending, expected):
    assert status_from_attending(attending) == expected


def test_filter_events_drops_unknown_and_repeated_events():
    assert filter_events(["wedding", "afterparty", "haldi", "wedding"]) == ["wedding", "haldi"]


def test_normalize_email():
    assert normalize_email("  Emma.Wilson@Example.COM ") == "emma.wilson@example.com"
    assert normalize_email("   ") is None
    assert normalize_email(None) is None


def test_attending_guest_gets_every_supplied_field():
    guest = make_guest()
    update = GuestRsvpUpdateDTO(
        guest_id=guest.uuid,
        attending=True,
        email="Emma@Example.com",
        events=["welcome", "wedding", "bogus"],
        dietary_restrictions="Vegetarian",
        plus_one=PlusOneDTO(name="Sam Lee", dietary_restrictions="Vegan"),
        song_request="Dancing Queen",
        mailing_address=MailingAddressDTO(
            address_line1="1 Main St",
            city="Austin",
            state_or_province="TX",
            postal_code="78701",
            country="USA",
        ),
    )

    apply_rsvp_update(guest, update, NOW)

    assert guest.rsvp_status == GuestStatus.CONFIRMED
    assert guest.rsvp_date == NOW
    assert guest.email == "emma@example.com"
    assert guest.events == ["welcome", "wedding"]
    assert guest.dietary_restrictions == "Vegetarian"
    assert guest.plus_one == {"name": "Sam Lee", "dietary_restrictions": "Vegan"}
    assert guest.song_request == "Dancing Queen"
    assert guest.mailing_address["city"] == "Austin"


def test_declining_clears_events_even_when_sent():
    guest = make_guest(rsvp_status=GuestStatus.CONFIRMED, events=["wedding", "reception"])
    update = GuestRsvpUpdateDTO(guest_id=guest.uuid, attending=False, events=["wedding"])

    apply_rsvp_update(guest, update, NOW)

    assert guest.rsvp_status == GuestStatus.DECLINED
    assert guest.events == []


def test_maybe_keeps_events():
    guest = make_guest()
    update = GuestRsvpUpdateDTO(guest_id=guest.uuid, attending="maybe", events=["reception"])

    apply_rsvp_update(guest, update, NOW)

    assert guest.rsvp_status == GuestStatus.MAYBE
    assert guest.events == ["reception"]


def test_unsent_fields_are_left_alone():
    guest = make_guest(
        email="emma@example.com",
        dietary_restrictions="Nut allergy",
        plus_one={"name": "Sam Lee", "dietary_restrictions": ""},
        song_request="Dancing Queen",
    )
    update = GuestRsvpUpdateDTO(guest_id=guest.uuid, attending=True)

    apply_rsvp_update(guest, update, NOW)

    assert guest.email == "emma@example.com"
    assert guest.dietary_restrictions == "Nut allergy"
    assert guest.plus_one == {"name": "Sam Lee", "dietary_restrictions": ""}
    assert guest.song_request == "Dancing Queen"


def test_explicit_null_clears_plus_one_and_address():
    guest = make_guest(
        plus_one={"name": "Sam Lee", "dietary_restrictions": ""},
        mailing_address={"address_line1": "1 Main St"},
    )
    update = GuestRsvpUpdateDTO(
        guest_id=guest.uuid, attending=True, plus_one=None, mailing_address=None
    )

    apply_rsvp_update(guest, update, NOW)

    assert guest.plus_one is None
    assert guest.mailing_address is None

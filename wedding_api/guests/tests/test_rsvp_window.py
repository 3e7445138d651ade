from datetime import date

import pytest

from wedding_api.guests.dtos import RsvpClosedError
from wedding_api.guests.rsvp_window import (
    RsvpWindow,
    get_rsvp_window,
    is_rsvp_open,
    parse_deadline,
    require_rsvp_open,
)


def test_parse_deadline():
    assert parse_deadline("2027-02-15") == date(2027, 2, 15)
    assert parse_deadline("2027-02-15T23:59:00") == date(2027, 2, 15)
    assert parse_deadline("") is None
    assert parse_deadline(None) is None


def test_unparsable_deadline_means_no_deadline(caplog):
    assert parse_deadline("next tuesday") is None
    assert "next tuesday" in caplog.text


def test_deadline_day_is_inclusive():
    deadline = date(2027, 2, 15)
    assert is_rsvp_open(date(2027, 2, 14), deadline)
    assert is_rsvp_open(date(2027, 2, 15), deadline)
    assert not is_rsvp_open(date(2027, 2, 16), deadline)


def test_no_deadline_is_always_open():
    assert is_rsvp_open(date(2099, 1, 1), None)
    assert RsvpWindow().rsvp_by_date is None


def test_window_reads_setting_on_every_call(monkeypatch):
    monkeypatch.setenv("RSVP_BY_DATE", "2027-02-15")
    assert get_rsvp_window().rsvp_by_date == "2027-02-15"

    monkeypatch.setenv("RSVP_BY_DATE", "2027-03-01")
    assert get_rsvp_window().rsvp_by_date == "2027-03-01"


async def test_require_rsvp_open_raises_after_deadline():
    with pytest.raises(RsvpClosedError):
        await require_rsvp_open(RsvpWindow(deadline=date(2000, 1, 1)))


async def test_require_rsvp_open_passes_before_deadline():
    window = RsvpWindow(deadline=date(2999, 1, 1))
    assert await require_rsvp_open(window) is window

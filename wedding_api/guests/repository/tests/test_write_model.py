"""Tests for SqlRSVPWriteModel."""

from uuid import uuid4

import pytest

from wedding_api.guests.dtos import (
    EmailAlreadyInUseError,
    GroupNotFoundError,
    GuestNotInGroupError,
    GuestRsvpUpdateDTO,
    GuestStatus,
    PlusOneDTO,
)
from wedding_api.guests.repository.write_models import SqlRSVPWriteModel
from wedding_api.tests.factories import make_group, make_guest


async def test_submit_rsvp_updates_every_guest(db_session):
    group = await make_group(db_session, "Smith Family")
    john = await make_guest(db_session, group, "John", "Smith")
    jane = await make_guest(db_session, group, "Jane", "Smith")

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    result = await write_model.submit_rsvp(
        group.uuid,
        [
            GuestRsvpUpdateDTO(
                guest_id=john.uuid,
                attending=True,
                email="JOHN@example.com",
                events=["wedding", "reception"],
                plus_one=PlusOneDTO(name="Alex Rivera"),
            ),
            GuestRsvpUpdateDTO(guest_id=jane.uuid, attending=False, events=["wedding"]),
        ],
    )

    assert result.group_id == group.uuid
    assert result.guest_ids == [john.uuid, jane.uuid]

    await db_session.refresh(john)
    await db_session.refresh(jane)
    assert john.rsvp_status == GuestStatus.CONFIRMED
    assert john.email == "john@example.com"
    assert john.events == ["wedding", "reception"]
    assert john.plus_one == {"name": "Alex Rivera", "dietary_restrictions": ""}
    assert john.rsvp_date is not None
    assert jane.rsvp_status == GuestStatus.DECLINED
    assert jane.events == []


async def test_submit_rsvp_is_idempotent(db_session):
    group = await make_group(db_session)
    guest = await make_guest(db_session, group, "Sarah", "Chen")
    update = GuestRsvpUpdateDTO(
        guest_id=guest.uuid,
        attending="maybe",
        email="sarah@example.com",
        events=["welcome"],
        dietary_restrictions="Nut allergy",
    )

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    await write_model.submit_rsvp(group.uuid, [update])
    await db_session.refresh(guest)
    first = (guest.rsvp_status, guest.email, list(guest.events), guest.dietary_restrictions)

    await write_model.submit_rsvp(group.uuid, [update])
    await db_session.refresh(guest)
    second = (guest.rsvp_status, guest.email, list(guest.events), guest.dietary_restrictions)

    assert first == second


async def test_submit_rsvp_unknown_group(db_session):
    write_model = SqlRSVPWriteModel(session_overwrite=db_session)

    with pytest.raises(GroupNotFoundError):
        await write_model.submit_rsvp(
            uuid4(), [GuestRsvpUpdateDTO(guest_id=uuid4(), attending=True)]
        )


async def test_submit_rsvp_rejects_guest_from_another_group(db_session):
    ours = await make_group(db_session, "Ours")
    mine = await make_guest(db_session, ours, "Chris", "Brown")
    theirs = await make_group(db_session, "Theirs")
    stranger = await make_guest(db_session, theirs, "Dana", "Brown")

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    with pytest.raises(GuestNotInGroupError):
        await write_model.submit_rsvp(
            ours.uuid,
            [
                GuestRsvpUpdateDTO(guest_id=mine.uuid, attending=True),
                GuestRsvpUpdateDTO(guest_id=stranger.uuid, attending=False),
            ],
        )

    await db_session.refresh(mine)
    await db_session.refresh(stranger)
    assert mine.rsvp_status == GuestStatus.PENDING
    assert stranger.rsvp_status == GuestStatus.PENDING


async def test_submit_rsvp_rejects_email_of_another_guest(db_session):
    other_group = await make_group(db_session)
    await make_guest(db_session, other_group, "Lisa", "Nguyen", "lisa@example.com")
    group = await make_group(db_session)
    first = await make_guest(db_session, group, "David", "Nguyen")
    second = await make_guest(db_session, group, "Tom", "Nguyen")

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    with pytest.raises(EmailAlreadyInUseError) as exc_info:
        await write_model.submit_rsvp(
            group.uuid,
            [
                GuestRsvpUpdateDTO(guest_id=first.uuid, attending=True, events=["wedding"]),
                GuestRsvpUpdateDTO(guest_id=second.uuid, attending=True, email=" LISA@example.com"),
            ],
        )

    assert exc_info.value.email == "lisa@example.com"
    assert exc_info.value.message == "Email lisa@example.com is already in use by another guest"
    # Nothing in the batch was written
    await db_session.refresh(first)
    assert first.rsvp_status == GuestStatus.PENDING
    assert first.events == []


async def test_submit_rsvp_rejects_same_email_twice_in_payload(db_session):
    group = await make_group(db_session)
    first = await make_guest(db_session, group, "Jordan", "Taylor")
    second = await make_guest(db_session, group, "Morgan", "Taylor")

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    with pytest.raises(EmailAlreadyInUseError):
        await write_model.submit_rsvp(
            group.uuid,
            [
                GuestRsvpUpdateDTO(guest_id=first.uuid, attending=True, email="taylors@example.com"),
                GuestRsvpUpdateDTO(guest_id=second.uuid, attending=True, email="Taylors@example.com"),
            ],
        )


async def test_submit_rsvp_keeps_own_email(db_session):
    group = await make_group(db_session)
    guest = await make_guest(db_session, group, "Alex", "Kim", "alex@example.com")

    write_model = SqlRSVPWriteModel(session_overwrite=db_session)
    await write_model.submit_rsvp(
        group.uuid,
        [GuestRsvpUpdateDTO(guest_id=guest.uuid, attending=True, email="Alex@Example.com")],
    )

    await db_session.refresh(guest)
    assert guest.email == "alex@example.com"


class UncheckedRSVPWriteModel(SqlRSVPWriteModel):
    """Skips the up-front email check, as when a concurrent request claims the email first."""

    async def _check_email_collisions(self, session, updates):
        return None


async def test_submit_rsvp_unique_index_conflict_names_email(db_session):
    other_group = await make_group(db_session)
    await make_guest(db_session, other_group, "Lisa", "Nguyen", "lisa@example.com")
    group = await make_group(db_session)
    david = await make_guest(db_session, group, "David", "Nguyen")

    write_model = UncheckedRSVPWriteModel(session_overwrite=db_session)
    with pytest.raises(EmailAlreadyInUseError) as exc_info:
        await write_model.submit_rsvp(
            group.uuid,
            [GuestRsvpUpdateDTO(guest_id=david.uuid, attending=True, email="Lisa@Example.com")],
        )

    assert exc_info.value.email == "lisa@example.com"
    assert exc_info.value.status_code == 400

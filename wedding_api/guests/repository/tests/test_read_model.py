"""Tests for SqlGroupReadModel."""

from uuid import uuid4

from wedding_api.guests.repository.read_models import SqlGroupReadModel
from wedding_api.tests.factories import make_group, make_guest


async def test_lookup_is_case_insensitive_and_returns_whole_group(db_session):
    group = await make_group(db_session, "Smith Family")
    await make_guest(db_session, group, "John", "Smith", "john@example.com")
    await make_guest(db_session, group, "Jane", "Smith", "jane@example.com")

    read_model = SqlGroupReadModel(session_overwrite=db_session)
    groups = await read_model.find_groups_by_guest_name("jOHN", "smith")

    assert len(groups) == 1
    assert groups[0].id == group.uuid
    assert [guest.first_name for guest in groups[0].guests] == ["John", "Jane"]


async def test_lookup_trims_input(db_session):
    group = await make_group(db_session)
    await make_guest(db_session, group, "Mike", "Johnson")

    read_model = SqlGroupReadModel(session_overwrite=db_session)
    groups = await read_model.find_groups_by_guest_name("  mike ", " JOHNSON  ")

    assert [g.id for g in groups] == [group.uuid]


async def test_lookup_returns_every_group_with_a_matching_guest(db_session):
    first = await make_group(db_session, "Patel Group")
    await make_guest(db_session, first, "Raj", "Patel")
    second = await make_group(db_session, "Other Patels")
    await make_guest(db_session, second, "Raj", "Patel")
    await make_guest(db_session, second, "Anita", "Patel")
    unrelated = await make_group(db_session, "Brown Family")
    await make_guest(db_session, unrelated, "Chris", "Brown")

    read_model = SqlGroupReadModel(session_overwrite=db_session)
    groups = await read_model.find_groups_by_guest_name("Raj", "Patel")

    assert [g.id for g in groups] == [first.uuid, second.uuid]
    assert len(groups[1].guests) == 2


async def test_lookup_requires_exact_name(db_session):
    group = await make_group(db_session)
    await make_guest(db_session, group, "Jonathan", "Smith")

    read_model = SqlGroupReadModel(session_overwrite=db_session)

    assert await read_model.find_groups_by_guest_name("John", "Smith") == []


async def test_get_group_orders_guests_by_creation(db_session):
    group = await make_group(db_session, "Garcia Crew")
    for first_name in ("Carlos", "Maria", "Sofia"):
        await make_guest(db_session, group, first_name, "Garcia")

    read_model = SqlGroupReadModel(session_overwrite=db_session)
    result = await read_model.get_group(group.uuid)

    assert result is not None
    assert result.name == "Garcia Crew"
    assert result.first_guest.first_name == "Carlos"
    assert [guest.first_name for guest in result.guests] == ["Carlos", "Maria", "Sofia"]


async def test_get_group_missing(db_session):
    read_model = SqlGroupReadModel(session_overwrite=db_session)
    assert await read_model.get_group(uuid4()) is None

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from wedding_api.admin.urls import GROUP_URL, GROUPS_URL
from wedding_api.guests.urls import LOOKUP_URL
from wedding_api.guests.repository.orm_models import Guest
from wedding_api.tests.factories import make_group, make_guest


@pytest.mark.asyncio
async def test_create_and_rename_group(client_factory, sql_overrides, admin_headers):
    async with client_factory(sql_overrides) as client:
        created = await client.post(GROUPS_URL, headers=admin_headers, json={"name": " Kapoor "})
        group_id = created.json()["id"]
        renamed = await client.put(
            GROUP_URL.format(group_id=group_id), headers=admin_headers, json={"name": "Kapoors"}
        )
        unnamed = await client.post(GROUPS_URL, headers=admin_headers, json={})

    assert created.status_code == 201
    assert created.json() == {"id": group_id, "name": "Kapoor", "guests": []}
    assert renamed.json()["name"] == "Kapoors"
    assert unnamed.json()["name"] == ""


@pytest.mark.asyncio
async def test_list_groups_includes_guests(client_factory, db_session, sql_overrides, admin_headers):
    smiths = await make_group(db_session, "Smith Family")
    await make_guest(db_session, smiths, "John", "Smith")
    await make_guest(db_session, smiths, "Jane", "Smith")
    empty = await make_group(db_session, "Empty")

    async with client_factory(sql_overrides) as client:
        response = await client.get(GROUPS_URL, headers=admin_headers)

    groups = response.json()
    assert [group["id"] for group in groups] == [str(smiths.uuid), str(empty.uuid)]
    assert [guest["firstName"] for guest in groups[0]["guests"]] == ["John", "Jane"]
    assert groups[1]["guests"] == []


@pytest.mark.asyncio
async def test_delete_group_removes_its_guests(client_factory, db_session, sql_overrides, admin_headers):
    doomed = await make_group(db_session, "Doomed")
    await make_guest(db_session, doomed, "Carlos", "Garcia")
    await make_guest(db_session, doomed, "Maria", "Garcia")
    kept = await make_group(db_session, "Kept")
    await make_guest(db_session, kept, "Sofia", "Garcia")

    async with client_factory(sql_overrides) as client:
        response = await client.delete(GROUP_URL.format(group_id=doomed.uuid), headers=admin_headers)
        gone = await client.get(GROUP_URL.format(group_id=doomed.uuid), headers=admin_headers)
        lookup = await client.get(LOOKUP_URL, params={"firstName": "Carlos", "lastName": "Garcia"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedGuests": 2}
    assert gone.status_code == 404
    assert lookup.status_code == 404
    assert lookup.json() == {"error": "No guest found with that name"}
    remaining = (await db_session.execute(select(func.count(Guest.uuid)))).scalar_one()
    assert remaining == 1


@pytest.mark.asyncio
async def test_unknown_group(client_factory, sql_overrides, admin_headers):
    async with client_factory(sql_overrides) as client:
        renamed = await client.put(
            GROUP_URL.format(group_id=uuid4()), headers=admin_headers, json={"name": "x"}
        )
        deleted = await client.delete(GROUP_URL.format(group_id=uuid4()), headers=admin_headers)

    assert renamed.status_code == 404
    assert deleted.status_code == 404

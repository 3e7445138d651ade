import logging
from uuid import UUID

import pytest

from wedding_api.guests.dtos import GroupDTO
from wedding_api.guests.features.lookup.router import get_group_read_model
from wedding_api.guests.repository.read_models import GroupReadModel
from wedding_api.guests.rsvp_window import RsvpWindow, get_rsvp_window
from wedding_api.guests.urls import LOOKUP_URL
from wedding_api.middleware.request_id import REQUEST_ID_HEADER


class BrokenGroupReadModel(GroupReadModel):
    async def find_groups_by_guest_name(self, first_name: str, last_name: str) -> list[GroupDTO]:
        raise RuntimeError("database is gone")

    async def get_group(self, group_id: UUID) -> GroupDTO | None:
        raise RuntimeError("database is gone")


@pytest.fixture
def broken_overrides():
    return {
        get_group_read_model: BrokenGroupReadModel,
        get_rsvp_window: lambda: RsvpWindow(deadline=None),
    }


@pytest.mark.asyncio
async def test_unhandled_error_keeps_request_id(client_factory, broken_overrides, caplog):
    caplog.set_level(logging.INFO)
    async with client_factory(broken_overrides) as client:
        response = await client.get(
            LOOKUP_URL,
            params={"firstName": "Ann", "lastName": "Lee"},
            headers={REQUEST_ID_HEADER: "req_abc"},
        )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers[REQUEST_ID_HEADER] == "req_abc"
    assert f"GET {LOOKUP_URL} -> 500" in caplog.text
    assert "req_abc" in caplog.text


@pytest.mark.asyncio
async def test_unhandled_error_gets_generated_request_id(client_factory, broken_overrides):
    async with client_factory(broken_overrides) as client:
        response = await client.get(LOOKUP_URL, params={"firstName": "Ann", "lastName": "Lee"})

    assert response.status_code == 500
    assert response.headers[REQUEST_ID_HEADER].startswith("req_")

"""Thin async client for the public RSVP endpoints."""

import logging
from typing import Any
from uuid import UUID

import httpx

from wedding_api.guests.schemas import CamelModel, GroupResponse, RsvpStatusResponse
from wedding_api.guests.urls import LOOKUP_URL, RSVP_STATUS_URL, SUBMIT_RSVP_URL

logger = logging.getLogger(__name__)


class RsvpApiError(Exception):
    """The API answered with an error, or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LookupResult(CamelModel):
    groups: list[GroupResponse]
    rsvp_open: bool
    rsvp_by_date: str | None = None


class RsvpApiClient:
    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise RsvpApiError("Could not reach the RSVP service. Please try again.") from e

        if response.is_error:
            raise RsvpApiError(_error_message(response), status_code=response.status_code)
        return response.json()

    async def lookup(self, first_name: str, last_name: str) -> LookupResult:
        data = await self._request(
            "GET", LOOKUP_URL, params={"firstName": first_name, "lastName": last_name}
        )
        return LookupResult.model_validate(data)

    async def get_status(self) -> RsvpStatusResponse:
        data = await self._request("GET", RSVP_STATUS_URL)
        return RsvpStatusResponse.model_validate(data)

    async def submit(self, group_id: UUID, guests: list[dict]) -> str:
        """Submit answers for a group. Returns the server's confirmation message."""
        data = await self._request(
            "POST", SUBMIT_RSVP_URL, json={"groupId": str(group_id), "guests": guests}
        )
        return data.get("message", "")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Request failed with status {response.status_code}"

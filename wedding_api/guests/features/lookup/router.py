from fastapi import APIRouter, Depends, Query

from wedding_api.errors import ValidationError
from wedding_api.guests.dtos import NoMatchingGuestError
from wedding_api.guests.repository.read_models import GroupReadModel, SqlGroupReadModel
from wedding_api.guests.rsvp_window import RsvpWindow, get_rsvp_window
from wedding_api.guests.schemas import CamelModel, GroupResponse
from wedding_api.guests.urls import LOOKUP_URL

router = APIRouter()

MAX_NAME_LENGTH = 100


class LookupResponse(CamelModel):
    groups: list[GroupResponse]
    rsvp_open: bool
    rsvp_by_date: str | None = None


def get_group_read_model() -> GroupReadModel:
    """Dependency to get group read model instance."""
    return SqlGroupReadModel()


def _clean_name(value: str | None, field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    if len(value) > MAX_NAME_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_NAME_LENGTH} characters")
    return value


@router.get(LOOKUP_URL, response_model=LookupResponse)
async def lookup_guest(
    first_name: str | None = Query(None, alias="firstName"),
    last_name: str | None = Query(None, alias="lastName"),
    read_model: GroupReadModel = Depends(get_group_read_model),
    window: RsvpWindow = Depends(get_rsvp_window),
) -> LookupResponse:
    """
    Find the groups a guest belongs to by first and last name.
    Each group is returned with all of its guests so the whole party can RSVP together.
    """
    first_name = _clean_name(first_name, "firstName")
    last_name = _clean_name(last_name, "lastName")

    groups = await read_model.find_groups_by_guest_name(first_name, last_name)
    if not groups:
        raise NoMatchingGuestError()

    return LookupResponse(
        groups=[GroupResponse.from_dto(group) for group in groups],
        rsvp_open=window.is_open(),
        rsvp_by_date=window.rsvp_by_date,
    )

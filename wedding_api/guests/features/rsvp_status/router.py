from fastapi import APIRouter, Depends

from wedding_api.guests.rsvp_window import RsvpWindow, get_rsvp_window
from wedding_api.guests.schemas import RsvpStatusResponse
from wedding_api.guests.urls import RSVP_STATUS_URL

router = APIRouter()


@router.get(RSVP_STATUS_URL, response_model=RsvpStatusResponse)
async def get_rsvp_status(window: RsvpWindow = Depends(get_rsvp_window)) -> RsvpStatusResponse:
    """Whether RSVPs are currently accepted, and until when."""
    return RsvpStatusResponse(rsvp_open=window.is_open(), rsvp_by_date=window.rsvp_by_date)

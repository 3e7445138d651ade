from fastapi import APIRouter

from .features.lookup.router import router as lookup_router
from .features.rsvp_status.router import router as rsvp_status_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(lookup_router)
router.include_router(rsvp_status_router)
router.include_router(submit_rsvp_router)

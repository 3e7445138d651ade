from fastapi import APIRouter, Depends

from .auth import require_admin
from .features.export.router import router as export_router
from .features.groups.router import router as groups_router
from .features.guests.router import router as guests_router
from .features.reminders.router import router as reminders_router
from .features.stats.router import router as stats_router

router = APIRouter(dependencies=[Depends(require_admin)])

# export.csv must be matched before /guests/{guest_id}
router.include_router(export_router)
router.include_router(guests_router)
router.include_router(groups_router)
router.include_router(stats_router)
router.include_router(reminders_router)

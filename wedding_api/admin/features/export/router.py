from fastapi import APIRouter, Depends, Response

from wedding_api.admin.csv_export import guests_to_csv
from wedding_api.admin.features.stats.router import get_guest_snapshot_read_model
from wedding_api.admin.repository.read_models import GuestSnapshotReadModel
from wedding_api.admin.urls import GUESTS_EXPORT_URL

router = APIRouter()

EXPORT_FILENAME = "wedding-guests.csv"


@router.get(GUESTS_EXPORT_URL, response_class=Response)
async def export_guests_csv(
    read_model: GuestSnapshotReadModel = Depends(get_guest_snapshot_read_model),
) -> Response:
    """Download the guest list as CSV."""
    snapshot = await read_model.get_snapshot()
    return Response(
        content=guests_to_csv(snapshot.guests),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )

from fastapi import APIRouter
from pydantic import BaseModel

from wedding_api import __version__
from wedding_api.config.settings import settings

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    message: str
    version: str = __version__


@router.get("/api/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running.
    """
    return HealthCheckResponse(status="ok", message=f"{settings.wedding_name} Wedding API is running")

"""Health check endpoints."""

from fastapi import APIRouter, Depends

from sample_web.config import SampleSettings, get_sample_settings
from sample_web.schemas import HealthCheckResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(settings: SampleSettings = Depends(get_sample_settings)) -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(status="ok", service=settings.api_title)

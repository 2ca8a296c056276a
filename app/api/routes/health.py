# app/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.config import get_settings


router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Liveness payload of the timetable service.
    """

    status: str = Field(..., description="Always `ok` while the process serves requests.", examples=["ok"])
    app_name: str = Field(..., description="Configured `APP_NAME`.", examples=["Timetable Engine"])
    environment: str = Field(..., description="Configured `APP_ENV`.", examples=["local"])
    timestamp_utc: datetime = Field(
        ...,
        description="Time the response was produced, in UTC.",
        examples=["2025-01-06T08:00:00Z"],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description=(
        "Report that the service is up together with its configured name and "
        "environment.\n\n"
        "No timetable data is read, so the answer does not depend on the "
        "collaborator database."
    ),
)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )

# tutordesk/api/routes/health.py
import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from http import HTTPStatus
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.core.config import get_settings
from tutordesk.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: str = Field(..., json_schema_extra={"example": "ok"})
    app_name: str = Field(..., json_schema_extra={"example": "TutorDesk"})
    environment: str = Field(
        ...,
        description="Deployment environment (local/dev/stage/prod).",
        json_schema_extra={"example": "local"},
    )
    server_time: datetime = Field(
        ...,
        description="Server local time. All calendar data uses this clock.",
    )
    database: str | None = Field(
        default=None,
        description="'ok' or 'unavailable'; only set by the readiness probe.",
    )


@router.get(
    "",
    response_model=HealthResponse,
    summary="Liveness probe",
    description=(
        "Confirms the API process is up. Does not touch the database so it "
        "stays green while storage is degraded."
    ),
)
async def liveness() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        server_time=datetime.now(),
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness probe",
    description="Runs a trivial query; returns 503 when the database cannot be reached.",
    responses={503: {"description": "Database unavailable."}},
)
async def readiness(db: AsyncSession = Depends(get_db)):
    settings = get_settings()
    body = HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        server_time=datetime.now(),
        database="ok",
    )

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Readiness check failed")
        body.status = "degraded"
        body.database = "unavailable"
        return JSONResponse(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            content=body.model_dump(mode="json"),
        )

    return body

from typing import Any

from fastapi import APIRouter, Depends, Request

from ...config.settings import Settings
from ...database.session import Database
from ...schemas.envelope import ApiResponse, success_response
from ...schemas.health import HealthStatus
from ...services.health import check_health
from ..deps import get_app_settings, get_database

router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request, settings: Settings = Depends(get_app_settings)) -> Any:
    return success_response(
        {"service": settings.APP_NAME, "version": request.app.state.version},
        "Warehouse Catalog API",
    )


@router.get("/health", response_model=ApiResponse[HealthStatus])
async def health(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    database: Database = Depends(get_database),
) -> Any:
    # always 200: the body says whether dependencies are healthy
    status = await check_health(
        database,
        timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS,
        version=request.app.state.version,
        started_at=request.app.state.started_at,
    )
    return success_response(status)

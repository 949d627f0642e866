"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory.core.config import Settings, get_settings
from inventory.core.database import check_db_connected, get_db
from inventory.schemas.common import ApiResponse
from inventory.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthResponse])
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[HealthResponse]:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return ApiResponse[HealthResponse].ok(
        HealthResponse(environment=settings.APP_ENV, database=db_status)
    )

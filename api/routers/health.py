"""
Health check endpoint.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from barangay.database import RowStore
from ..models import HealthResponse
from ..dependencies import get_row_store, get_settings
from ..config import Settings


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """
    Health check endpoint.

    Returns the health status of the API and database connection. This is
    the only route besides /auth that needs no session.
    """
    connected = store.ping()
    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=settings.app_version,
        database="connected" if connected else "disconnected"
    )

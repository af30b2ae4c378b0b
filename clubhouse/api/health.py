"""Liveness probe for load balancers: process is up and the account/session store answers."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from clubhouse.core.config import settings
from clubhouse.core.database import check_db_connected, get_db
from clubhouse.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Always 200 while the process serves; database is 'disconnected' if SELECT 1 fails."""
    store = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(environment=settings.APP_ENV, database=store)

"""Connectivity and health check endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.schemas.system import ConnectionTestResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _database_reachable(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Database check failed: {e}")
        return False
    return True


@router.get("/test", response_model=ConnectionTestResponse)
def connection_test(db: Annotated[Session, Depends(get_db)]):
    """Tell the client the server is up, and whether the database answers."""
    return ConnectionTestResponse(
        message="Backend server is working!",
        timestamp=_now(),
        database="Connected" if _database_reachable(db) else "Disconnected",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
)
def health_check(db: Annotated[Session, Depends(get_db)]):
    """Health check endpoint."""
    if _database_reachable(db):
        return HealthResponse(status="healthy", database="connected", timestamp=_now())

    unhealthy = HealthResponse(status="unhealthy", database="error", timestamp=_now())
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=unhealthy.model_dump(),
    )

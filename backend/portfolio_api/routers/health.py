# backend/portfolio_api/routers/health.py
"""
Liveness and readiness probes.

GET /health        - database check with latency (503 when unhealthy)
GET /health/live   - process is up, no dependencies touched
GET /health/ready  - a session can run a query (503 when not)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_api.database import check_database_health, get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """Report database connectivity; 503 tells load balancers to stop routing here."""
    database = check_database_health()
    body = {"status": database["status"], "checks": {"database": database}}

    if database["status"] != "healthy":
        return JSONResponse(status_code=503, content=body)
    return body


@router.get("/live")
def liveness_check():
    return {"status": "alive"}


@router.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Ready when the request-scoped session can reach the database."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "Database unavailable"},
        )
    return {"status": "ready"}

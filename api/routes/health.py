"""Health check and utility routes"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealledger.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health-check/db")
def database_status(db: Session = Depends(get_db)):
    """Report whether the ledger database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except SQLAlchemyError as e:
        logger.exception("Error checking database status")
        return {"database": "unavailable", "error": str(e)}

"""
Health check endpoint with database and fetch status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from api.dependencies import get_db
from schemas.api import HealthCheckResponse, FetchRunInfo
from models.base import SourceType
from models.fetch_run import FetchRun
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - Most recent fetch run of every source
    """
    db_connected = False
    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {str(e)}")

    last_fetches = []
    if db_connected:
        try:
            for source_type in SourceType:
                result = await db.execute(
                    select(FetchRun)
                    .where(FetchRun.source_type == source_type)
                    .order_by(FetchRun.started_at.desc(), FetchRun.id.desc())
                    .limit(1)
                )
                run = result.scalar_one_or_none()
                if run is not None:
                    last_fetches.append(FetchRunInfo.model_validate(run))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch run history: {str(e)}")

    # Status is derived by the HealthCheckResponse validator
    return HealthCheckResponse(
        database_connected=db_connected,
        last_fetches=last_fetches
    )

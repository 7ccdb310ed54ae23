"""
Cross-source analytics: search, trending tickers, dashboard stats, demo seeding
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from api import queries
from schemas.api import SearchResponse, TrendingTicker, StatsResponse, SeedResponse
from ingestion.loaders.sqlite_loader import SQLiteLoader
from ingestion.seed import seed_sample_holdings
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Analytics"])


@router.get("/search", response_model=SearchResponse)
async def search(
    request: Request,
    q: Optional[str] = Query(None, description="Ticker, company, member or insider name"),
    db: AsyncSession = Depends(get_db)
):
    """
    Substring search across holdings, congressional and insider trades.

    Up to 10 results per source; queries shorter than 2 characters get a 400.
    """
    request_id = getattr(request.state, "request_id", "-")
    logger.info(f"[{request_id}] GET /api/search q={q!r}")
    return await queries.search_all(db, q)


@router.get("/trending", response_model=List[TrendingTicker])
async def trending(db: AsyncSession = Depends(get_db)):
    """Tickers most mentioned in recent congressional and insider activity"""
    return await queries.get_trending_tickers(db)


@router.get("/stats", response_model=StatsResponse)
async def stats(db: AsyncSession = Depends(get_db)):
    return await queries.get_stats(db)


@router.post("/seed", response_model=SeedResponse)
async def seed(db: AsyncSession = Depends(get_db)):
    """Load the demo 13F portfolios for the tracked institutions"""
    seeded = await seed_sample_holdings(SQLiteLoader(db))
    return SeedResponse(message="Sample data seeded", seeded=seeded)

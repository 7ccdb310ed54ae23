"""
Form 4 insider trade endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from api import queries
from schemas.api import InsiderTradeResponse

router = APIRouter(prefix="/api/insider", tags=["Insider"])


@router.get("", response_model=List[InsiderTradeResponse])
async def get_recent_trades(
    limit: int = Query(50, ge=1, le=1000, description="Number of trades"),
    offset: int = Query(0, ge=0, description="Number of trades to skip"),
    db: AsyncSession = Depends(get_db)
):
    """Most recent filings first"""
    return await queries.get_recent_insider_trades(db, limit=limit, offset=offset)


# Must precede /{ticker}
@router.get("/buys", response_model=List[InsiderTradeResponse])
async def get_recent_buys(
    limit: int = Query(20, ge=1, le=1000, description="Number of purchases"),
    db: AsyncSession = Depends(get_db)
):
    return await queries.get_recent_insider_buys(db, limit=limit)


@router.get("/{ticker}", response_model=List[InsiderTradeResponse])
async def get_ticker_trades(ticker: str, db: AsyncSession = Depends(get_db)):
    return await queries.get_insider_trades_by_ticker(db, ticker)

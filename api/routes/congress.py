"""
Congressional trade endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from api import queries
from schemas.api import CongressTradeResponse, CongressMemberSummary, MemberTotalsResponse

router = APIRouter(prefix="/api/congress", tags=["Congress"])


@router.get("", response_model=List[CongressTradeResponse])
async def get_recent_trades(
    limit: int = Query(50, ge=1, le=1000, description="Number of trades"),
    offset: int = Query(0, ge=0, description="Number of trades to skip"),
    db: AsyncSession = Depends(get_db)
):
    """Most recently disclosed trades first"""
    return await queries.get_recent_congress_trades(db, limit=limit, offset=offset)


@router.get("/members", response_model=List[CongressMemberSummary])
async def get_members(db: AsyncSession = Depends(get_db)):
    return await queries.get_congress_members(db)


@router.get("/member/{name}", response_model=List[CongressTradeResponse])
async def get_member_trades(name: str, db: AsyncSession = Depends(get_db)):
    """Trades of every member whose name contains `name`"""
    return await queries.get_trades_by_member(db, name)


@router.get("/member/{name}/totals", response_model=MemberTotalsResponse)
async def get_member_totals(name: str, db: AsyncSession = Depends(get_db)):
    return await queries.member_trade_totals(db, name)


@router.get("/ticker/{ticker}", response_model=List[CongressTradeResponse])
async def get_ticker_trades(ticker: str, db: AsyncSession = Depends(get_db)):
    return await queries.get_congress_trades_by_ticker(db, ticker)

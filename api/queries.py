"""
Read-side queries over the disclosure store.

All functions are side-effect free and take the request's AsyncSession.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from models.institution import Institution, Holding
from models.trades import CongressTrade, InsiderTrade
from models.base import CongressTransactionType, InsiderTransactionType
from schemas.api import (
    HoldingResponse,
    CongressMemberSummary,
    MemberTotalsResponse,
    TrendingTicker,
    StatsResponse,
    SearchHit,
    SearchResponse,
)
from ingestion.transformers.heuristics import pad_cik, parse_amount_range
from core.exceptions import InvalidQueryError

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 10
CONGRESS_TRENDING_DAYS = 30
INSIDER_TRENDING_DAYS = 7


# ============================================================================
# Institutions / Holdings
# ============================================================================

async def list_institutions(db: AsyncSession) -> List[Institution]:
    result = await db.execute(select(Institution).order_by(Institution.name))
    return list(result.scalars().all())


async def get_institution(db: AsyncSession, cik: str) -> Optional[Institution]:
    """Look up an institution; the CIK may be given without leading zeros"""
    result = await db.execute(select(Institution).where(Institution.cik == pad_cik(cik)))
    return result.scalar_one_or_none()


def _holding_response(holding: Holding, institution_name: str) -> HoldingResponse:
    response = HoldingResponse.model_validate(holding)
    response.institution_name = institution_name
    return response


async def get_latest_holdings(db: AsyncSession, institution: Institution) -> List[HoldingResponse]:
    """Holdings of the institution's most recent quarter, largest value first"""
    latest_quarter = (
        select(func.max(Holding.quarter))
        .where(Holding.institution_id == institution.id)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Holding)
        .where(
            Holding.institution_id == institution.id,
            Holding.quarter == latest_quarter
        )
        .order_by(Holding.value.desc())
    )
    return [_holding_response(h, institution.name) for h in result.scalars().all()]


async def get_holdings_history(db: AsyncSession, institution: Institution) -> List[HoldingResponse]:
    """All quarters, newest first; within a quarter by value descending"""
    result = await db.execute(
        select(Holding)
        .where(Holding.institution_id == institution.id)
        .order_by(Holding.quarter.desc(), Holding.value.desc())
    )
    return [_holding_response(h, institution.name) for h in result.scalars().all()]


# ============================================================================
# Congress
# ============================================================================

async def get_recent_congress_trades(
    db: AsyncSession,
    limit: int = 50,
    offset: int = 0
) -> List[CongressTrade]:
    result = await db.execute(
        select(CongressTrade)
        .order_by(
            CongressTrade.disclosure_date.desc(),
            CongressTrade.transaction_date.desc(),
            CongressTrade.id.desc()
        )
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def get_congress_members(db: AsyncSession) -> List[CongressMemberSummary]:
    """Distinct members with their trade counts, most active first"""
    trade_count = func.count(CongressTrade.id).label("trade_count")
    result = await db.execute(
        select(
            CongressTrade.member,
            func.max(CongressTrade.chamber).label("chamber"),
            func.max(CongressTrade.party).label("party"),
            func.max(CongressTrade.state).label("state"),
            trade_count,
        )
        .group_by(CongressTrade.member)
        .order_by(trade_count.desc(), CongressTrade.member)
    )
    return [CongressMemberSummary.model_validate(row) for row in result.all()]


async def get_trades_by_member(db: AsyncSession, name: str) -> List[CongressTrade]:
    """Substring match on the member name"""
    result = await db.execute(
        select(CongressTrade)
        .where(CongressTrade.member.contains(name, autoescape=True))
        .order_by(CongressTrade.transaction_date.desc())
    )
    return list(result.scalars().all())


async def get_congress_trades_by_ticker(db: AsyncSession, ticker: str) -> List[CongressTrade]:
    result = await db.execute(
        select(CongressTrade)
        .where(CongressTrade.ticker == ticker.strip().upper())
        .order_by(CongressTrade.transaction_date.desc())
    )
    return list(result.scalars().all())


async def member_trade_totals(db: AsyncSession, name: str) -> MemberTotalsResponse:
    """
    Estimated net dollar range of a member's trades.

    Purchases add the disclosed bucket; sales subtract it, so the sale's
    upper bound lowers the minimum and its lower bound lowers the maximum.
    """
    trades = await get_trades_by_member(db, name)

    total_min = 0
    total_max = 0
    for trade in trades:
        low, high = parse_amount_range(trade.amount_range)
        if trade.transaction_type == CongressTransactionType.PURCHASE.value:
            total_min += low
            total_max += high
        else:
            total_min -= high
            total_max -= low

    return MemberTotalsResponse(
        member=name,
        total_min=total_min,
        total_max=total_max,
        trade_count=len(trades)
    )


# ============================================================================
# Insider
# ============================================================================

async def get_recent_insider_trades(
    db: AsyncSession,
    limit: int = 50,
    offset: int = 0
) -> List[InsiderTrade]:
    result = await db.execute(
        select(InsiderTrade)
        .order_by(InsiderTrade.filing_date.desc(), InsiderTrade.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def get_recent_insider_buys(db: AsyncSession, limit: int = 20) -> List[InsiderTrade]:
    result = await db.execute(
        select(InsiderTrade)
        .where(InsiderTrade.transaction_type == InsiderTransactionType.PURCHASE.value)
        .order_by(InsiderTrade.filing_date.desc(), InsiderTrade.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def get_insider_trades_by_ticker(db: AsyncSession, ticker: str) -> List[InsiderTrade]:
    result = await db.execute(
        select(InsiderTrade)
        .where(InsiderTrade.ticker == ticker.strip().upper())
        .order_by(InsiderTrade.filing_date.desc())
    )
    return list(result.scalars().all())


# ============================================================================
# Analytics
# ============================================================================

async def get_stats(db: AsyncSession) -> StatsResponse:
    """Row counts of every entity table"""
    result = await db.execute(
        select(
            select(func.count()).select_from(Institution).scalar_subquery().label("institution_count"),
            select(func.count()).select_from(Holding).scalar_subquery().label("holding_count"),
            select(func.count()).select_from(CongressTrade).scalar_subquery().label("congress_trade_count"),
            select(func.count()).select_from(InsiderTrade).scalar_subquery().label("insider_trade_count"),
        )
    )
    return StatsResponse.model_validate(dict(result.one()._mapping))


async def get_trending_tickers(
    db: AsyncSession,
    now: Optional[datetime] = None,
    limit: int = 20
) -> List[TrendingTicker]:
    """
    Tickers mentioned in congressional trades of the last 30 days or insider
    filings of the last 7 days, ranked by total mentions (ties by ticker).
    """
    now = now or datetime.utcnow()
    congress_since = (now - timedelta(days=CONGRESS_TRENDING_DAYS)).date()
    insider_since = now - timedelta(days=INSIDER_TRENDING_DAYS)

    congress_rows = await db.execute(
        select(CongressTrade.ticker, func.count().label("mentions"))
        .where(
            CongressTrade.ticker.isnot(None),
            CongressTrade.transaction_date > congress_since
        )
        .group_by(CongressTrade.ticker)
    )
    insider_rows = await db.execute(
        select(InsiderTrade.ticker, func.count().label("mentions"))
        .where(InsiderTrade.filing_date > insider_since)
        .group_by(InsiderTrade.ticker)
    )

    aggregated: Dict[str, TrendingTicker] = {}
    for source, rows in (("congress", congress_rows.all()), ("insider", insider_rows.all())):
        for ticker, mentions in rows:
            entry = aggregated.setdefault(
                ticker, TrendingTicker(ticker=ticker, sources=[], total_mentions=0)
            )
            entry.sources.append(source)
            entry.total_mentions += mentions

    ranked = sorted(aggregated.values(), key=lambda t: (-t.total_mentions, t.ticker))
    return ranked[:limit]


async def search_all(db: AsyncSession, q: Optional[str]) -> SearchResponse:
    """
    Substring search across holdings, congressional and insider trades.

    Raises:
        InvalidQueryError: Query shorter than two characters
    """
    term = (q or "").strip()
    if len(term) < MIN_SEARCH_LENGTH:
        raise InvalidQueryError(
            f"Search query must be at least {MIN_SEARCH_LENGTH} characters",
            context={"q": q}
        )

    holdings = await db.execute(
        select(Holding, Institution.name)
        .join(Institution, Holding.institution_id == Institution.id)
        .where(or_(
            Holding.ticker.contains(term, autoescape=True),
            Holding.company_name.contains(term, autoescape=True)
        ))
        .order_by(Holding.value.desc())
        .limit(SEARCH_LIMIT)
    )
    congress = await db.execute(
        select(CongressTrade)
        .where(or_(
            CongressTrade.ticker.contains(term, autoescape=True),
            CongressTrade.member.contains(term, autoescape=True)
        ))
        .order_by(CongressTrade.transaction_date.desc())
        .limit(SEARCH_LIMIT)
    )
    insider = await db.execute(
        select(InsiderTrade)
        .where(or_(
            InsiderTrade.ticker.contains(term, autoescape=True),
            InsiderTrade.company_name.contains(term, autoescape=True),
            InsiderTrade.insider_name.contains(term, autoescape=True)
        ))
        .order_by(InsiderTrade.filing_date.desc())
        .limit(SEARCH_LIMIT)
    )

    return SearchResponse(
        holdings=[
            SearchHit(
                type="holding",
                ticker=h.ticker,
                name=h.company_name,
                source=institution_name,
                value=h.value,
                date=h.quarter
            )
            for h, institution_name in holdings.all()
        ],
        congress=[
            SearchHit(
                type="congress",
                ticker=t.ticker,
                name=t.member,
                source=t.transaction_type,
                value=t.amount_range,
                date=t.transaction_date.isoformat()
            )
            for t in congress.scalars().all()
        ],
        insider=[
            SearchHit(
                type="insider",
                ticker=t.ticker,
                name=t.insider_name,
                source=t.transaction_type,
                value=t.total_value,
                date=t.filing_date.isoformat()
            )
            for t in insider.scalars().all()
        ],
    )

"""
Read-side queries over a populated store
"""

import pytest
import pytest_asyncio
from datetime import date, datetime
from unittest.mock import AsyncMock
from api import queries
from ingestion.loaders.sqlite_loader import SQLiteLoader
from schemas.normalized import CongressTradeCreate, InsiderTradeCreate, HoldingCreate
from core.exceptions import InvalidQueryError


def _congress(base, **overrides):
    return CongressTradeCreate(**{**base, **overrides})


def _insider(ticker, filing_date, **overrides):
    fields = dict(
        ticker=ticker,
        company_name=f"{ticker} Corp",
        insider_name="Cook Timothy D",
        insider_title="CEO",
        transaction_type="P",
        shares=100,
        transaction_date=filing_date.date(),
        filing_date=filing_date,
    )
    fields.update(overrides)
    return InsiderTradeCreate(**fields)


@pytest_asyncio.fixture
async def populated(db_session, pelosi_nvda_trade):
    loader = SQLiteLoader(db_session)

    for trade in (
        _congress(pelosi_nvda_trade),
        _congress(pelosi_nvda_trade, ticker="AAPL", asset_description="Apple Inc",
                  transaction_date="2024-11-18", disclosure_date="2024-11-29"),
        _congress(pelosi_nvda_trade, ticker="TSLA", transaction_type="Sale",
                  amount_range="$500,001 - $1,000,000",
                  transaction_date="2024-09-15", disclosure_date="2024-10-01"),
        _congress(pelosi_nvda_trade, member="Dan Crenshaw", party="R", state="TX",
                  ticker="AAPL", amount_range="$15,001 - $50,000",
                  transaction_date="2024-10-20", disclosure_date="2024-11-05"),
    ):
        await loader.insert_congress_trade(trade)

    await loader.insert_insider_trade(_insider("AAPL", datetime(2024, 11, 28, 15, 0)))
    await loader.insert_insider_trade(
        _insider("MSFT", datetime(2024, 11, 20, 15, 0), insider_name="Nadella Satya", transaction_type="S")
    )

    berkshire = await loader.upsert_institution("0001067983", "Berkshire Hathaway")
    for quarter, value in (("2024-Q2", 84_200_000_000), ("2024-Q3", 69_900_000_000)):
        await loader.replace_holding(HoldingCreate(
            institution_id=berkshire.id, ticker="AAPL", cusip="037833100",
            company_name="APPLE INC", shares=300_000_000, value=value, quarter=quarter,
            filing_date=date(2024, 11, 14)
        ))
    await loader.replace_holding(HoldingCreate(
        institution_id=berkshire.id, ticker="KO", company_name="COCA COLA CO",
        shares=400_000_000, value=28_700_000_000, quarter="2024-Q3"
    ))
    await loader.commit()
    return db_session


class TestTrending:

    @pytest.mark.asyncio
    async def test_windows_and_ranking(self, populated, reference_now):
        trending = await queries.get_trending_tickers(populated, now=reference_now)

        assert [t.ticker for t in trending] == ["AAPL", "NVDA"]
        assert trending[0].total_mentions == 2
        assert trending[0].sources == ["congress", "insider"]
        assert trending[1].sources == ["congress"]

    @pytest.mark.asyncio
    async def test_nothing_recent(self, populated):
        trending = await queries.get_trending_tickers(populated, now=datetime(2026, 1, 1))
        assert trending == []


class TestSearch:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("q", [None, "", "a", "  b  "])
    async def test_short_query_rejected_before_querying(self, q):
        db = AsyncMock()

        with pytest.raises(InvalidQueryError):
            await queries.search_all(db, q)

        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_matches_every_table(self, populated):
        result = await queries.search_all(populated, "aapl")

        assert len(result.holdings) == 2
        assert result.holdings[0].source == "Berkshire Hathaway"
        assert {h.type for h in result.congress} == {"congress"}
        assert len(result.congress) == 2
        assert len(result.insider) == 1

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_ignored(self, populated):
        padded = await queries.search_all(populated, "  aapl  ")
        plain = await queries.search_all(populated, "aapl")

        assert padded == plain

    @pytest.mark.asyncio
    async def test_matches_people(self, populated):
        result = await queries.search_all(populated, "Nadella")

        assert result.holdings == []
        assert result.congress == []
        assert [h.ticker for h in result.insider] == ["MSFT"]


class TestCongressQueries:

    @pytest.mark.asyncio
    async def test_member_totals_net_sales(self, populated):
        totals = await queries.member_trade_totals(populated, "Pelosi")

        assert totals.trade_count == 3
        # NVDA + AAPL purchases, minus the TSLA sale
        assert totals.total_min == 1_000_001 + 1_000_001 - 1_000_000
        assert totals.total_max == 5_000_000 + 5_000_000 - 500_001

    @pytest.mark.asyncio
    async def test_members_most_active_first(self, populated):
        members = await queries.get_congress_members(populated)

        assert [(m.member, m.trade_count) for m in members] == [
            ("Nancy Pelosi", 3), ("Dan Crenshaw", 1)
        ]

    @pytest.mark.asyncio
    async def test_member_substring_match(self, populated):
        trades = await queries.get_trades_by_member(populated, "Crensh")
        assert [t.ticker for t in trades] == ["AAPL"]

    @pytest.mark.asyncio
    async def test_recent_ordered_by_disclosure(self, populated):
        trades = await queries.get_recent_congress_trades(populated, limit=2)
        assert [t.ticker for t in trades] == ["NVDA", "AAPL"]


class TestHoldingsQueries:

    @pytest.mark.asyncio
    async def test_unpadded_cik_lookup(self, populated):
        institution = await queries.get_institution(populated, "1067983")
        assert institution.name == "Berkshire Hathaway"

    @pytest.mark.asyncio
    async def test_latest_quarter_only(self, populated):
        institution = await queries.get_institution(populated, "0001067983")
        holdings = await queries.get_latest_holdings(populated, institution)

        assert [(h.ticker, h.quarter) for h in holdings] == [("AAPL", "2024-Q3"), ("KO", "2024-Q3")]
        assert holdings[0].institution_name == "Berkshire Hathaway"

    @pytest.mark.asyncio
    async def test_history_newest_quarter_first(self, populated):
        institution = await queries.get_institution(populated, "0001067983")
        history = await queries.get_holdings_history(populated, institution)

        assert [h.quarter for h in history] == ["2024-Q3", "2024-Q3", "2024-Q2"]

    @pytest.mark.asyncio
    async def test_stats(self, populated):
        stats = await queries.get_stats(populated)

        assert stats.institution_count == 1
        assert stats.holding_count == 3
        assert stats.congress_trade_count == 4
        assert stats.insider_trade_count == 2

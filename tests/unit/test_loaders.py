"""
Unit tests for the SQLite loader
"""

import pytest
from datetime import date, datetime
from sqlalchemy import select, func, update
from ingestion.loaders.sqlite_loader import SQLiteLoader
from models.institution import Institution, Holding
from models.trades import CongressTrade, InsiderTrade
from schemas.normalized import CongressTradeCreate, InsiderTradeCreate, HoldingCreate


def _insider_trade(**overrides):
    fields = dict(
        ticker="APPLE",
        company_name="Apple Inc",
        insider_name="Cook Timothy D",
        insider_title="CEO",
        transaction_type="S",
        shares=1000,
        price_per_share=225.5,
        total_value=225500.0,
        transaction_date=date(2024, 11, 15),
        filing_date=datetime(2024, 11, 18, 21, 30),
        filing_url="https://www.sec.gov/Archives/edgar/data/320193/000032019324000123-index.htm",
    )
    fields.update(overrides)
    return InsiderTradeCreate(**fields)


async def _count(session, model):
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar()


class TestSQLiteLoader:
    """Test idempotent writes"""

    @pytest.mark.asyncio
    async def test_congress_trade_inserted_once(self, db_session, pelosi_nvda_trade):
        loader = SQLiteLoader(db_session)
        trade = CongressTradeCreate(**pelosi_nvda_trade)

        assert await loader.insert_congress_trade(trade) is True
        assert await loader.insert_congress_trade(trade) is False
        await loader.commit()

        assert await _count(db_session, CongressTrade) == 1

    @pytest.mark.asyncio
    async def test_congress_trades_differing_in_amount_are_distinct(self, db_session, pelosi_nvda_trade):
        loader = SQLiteLoader(db_session)

        await loader.insert_congress_trade(CongressTradeCreate(**pelosi_nvda_trade))
        created = await loader.insert_congress_trade(
            CongressTradeCreate(**{**pelosi_nvda_trade, "amount_range": "$15,001 - $50,000"})
        )

        assert created is True
        assert await _count(db_session, CongressTrade) == 2

    @pytest.mark.asyncio
    async def test_insider_trade_inserted_once(self, db_session):
        loader = SQLiteLoader(db_session)

        assert await loader.insert_insider_trade(_insider_trade()) is True
        assert await loader.insert_insider_trade(_insider_trade()) is False
        assert await _count(db_session, InsiderTrade) == 1

    @pytest.mark.asyncio
    async def test_insider_trade_without_price_is_still_deduplicated(self, db_session):
        loader = SQLiteLoader(db_session)
        trade = _insider_trade(price_per_share=None, total_value=None)

        assert await loader.insert_insider_trade(trade) is True
        assert await loader.insert_insider_trade(trade) is False

    @pytest.mark.asyncio
    async def test_upsert_institution_is_create_only(self, db_session):
        loader = SQLiteLoader(db_session)

        first = await loader.upsert_institution("0001067983", "Berkshire Hathaway")
        second = await loader.upsert_institution("0001067983", "Renamed")

        assert first.id == second.id
        assert second.name == "Berkshire Hathaway"
        assert await _count(db_session, Institution) == 1

    @pytest.mark.asyncio
    async def test_touch_institution_moves_updated_at(self, db_session):
        loader = SQLiteLoader(db_session)
        institution = await loader.upsert_institution("0001067983", "Berkshire Hathaway")
        old = datetime(2020, 1, 1)
        await db_session.execute(
            update(Institution).where(Institution.id == institution.id).values(updated_at=old)
        )

        await loader.touch_institution("0001067983")
        await db_session.refresh(institution)

        assert institution.updated_at > old

    @pytest.mark.asyncio
    async def test_replace_holding_keeps_latest_write(self, db_session):
        loader = SQLiteLoader(db_session)
        institution = await loader.upsert_institution("0001067983", "Berkshire Hathaway")
        base = dict(
            institution_id=institution.id,
            ticker="AAPL",
            cusip="037833100",
            company_name="Apple Inc",
            quarter="2024-Q3",
            filing_date=date(2024, 11, 14),
        )

        await loader.replace_holding(HoldingCreate(**base, shares=100, value=1000))
        await loader.replace_holding(HoldingCreate(**base, shares=250, value=9000))
        await loader.commit()

        result = await db_session.execute(select(Holding))
        holdings = result.scalars().all()
        assert len(holdings) == 1
        assert holdings[0].shares == 250
        assert holdings[0].value == 9000

    @pytest.mark.asyncio
    async def test_holdings_of_different_quarters_coexist(self, db_session):
        loader = SQLiteLoader(db_session)
        institution = await loader.upsert_institution("0001067983", "Berkshire Hathaway")

        for quarter in ("2024-Q2", "2024-Q3"):
            await loader.replace_holding(HoldingCreate(
                institution_id=institution.id, ticker="AAPL", shares=1, value=1, quarter=quarter
            ))

        assert await _count(db_session, Holding) == 2

    @pytest.mark.asyncio
    async def test_list_institutions(self, db_session):
        loader = SQLiteLoader(db_session)
        await loader.upsert_institution("0001067983", "Berkshire Hathaway")
        await loader.upsert_institution("0001350694", "Bridgewater Associates")

        institutions = await loader.list_institutions()

        assert [i.cik for i in institutions] == ["0001067983", "0001350694"]
        assert await loader.get_institution_by_cik("0000000001") is None

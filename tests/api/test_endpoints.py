"""
API endpoint tests
"""

import pytest
import pytest_asyncio
import httpx
from datetime import datetime
from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_db
from core.database import init_db
from ingestion.loaders.sqlite_loader import SQLiteLoader
from models.base import SourceType, FetchStatus
from models.fetch_run import FetchRun
from schemas.normalized import CongressTradeCreate, InsiderTradeCreate


@pytest_asyncio.fixture
async def client(session_maker):
    """Async client bound to the app with the test database"""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def tracked_store(test_engine):
    """Store initialized the way application startup does it"""
    await init_db(test_engine)
    return test_engine


# ============================================================================
# Errors
# ============================================================================

@pytest.mark.asyncio
async def test_unknown_institution_is_404(client):
    response = await client.get("/api/institutions/0000000001")

    assert response.status_code == 404
    assert response.json() == {"error": "Institution not found"}


@pytest.mark.asyncio
async def test_unknown_institution_history_is_404(client):
    response = await client.get("/api/institutions/0000000001/history")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_short_search_is_400(client):
    response = await client.get("/api/search", params={"q": "a"})

    assert response.status_code == 400
    assert "2 characters" in response.json()["error"]


@pytest.mark.asyncio
async def test_search_without_query_is_400(client):
    response = await client.get("/api/search")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_pagination_bounds_validated(client):
    response = await client.get("/api/congress", params={"limit": 0})
    assert response.status_code == 422


# ============================================================================
# Institutions / seeding
# ============================================================================

@pytest.mark.asyncio
async def test_empty_store_stats(client):
    response = await client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {
        "institution_count": 0,
        "holding_count": 0,
        "congress_trade_count": 0,
        "insider_trade_count": 0,
    }


@pytest.mark.asyncio
async def test_seed_then_read_portfolio(client, tracked_store):
    institutions = (await client.get("/api/institutions")).json()
    assert len(institutions) == 12
    assert [i["name"] for i in institutions] == sorted(i["name"] for i in institutions)

    response = await client.post("/api/seed")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Sample data seeded"
    assert body["seeded"] > 0

    detail = (await client.get("/api/institutions/1067983")).json()
    assert detail["name"] == "Berkshire Hathaway"
    assert len(detail["holdings"]) == 6
    assert detail["holdings"][0]["ticker"] == "AAPL"
    assert detail["holdings"][0]["institution_name"] == "Berkshire Hathaway"
    assert detail["holdings"][0]["quarter"] == "2024-Q3"
    values = [h["value"] for h in detail["holdings"]]
    assert values == sorted(values, reverse=True)

    # Seeding is repeatable
    again = (await client.post("/api/seed")).json()
    assert again["seeded"] == body["seeded"]
    stats = (await client.get("/api/stats")).json()
    assert stats["holding_count"] == body["seeded"]

    history = (await client.get("/api/institutions/0001067983/history")).json()
    assert len(history) == 6


# ============================================================================
# Trades
# ============================================================================

@pytest.mark.asyncio
async def test_congress_endpoints(client, db_session, pelosi_nvda_trade):
    loader = SQLiteLoader(db_session)
    await loader.insert_congress_trade(CongressTradeCreate(**pelosi_nvda_trade))
    await loader.insert_congress_trade(CongressTradeCreate(**{
        **pelosi_nvda_trade, "ticker": "TSLA", "transaction_type": "Sale",
        "amount_range": "$500,001 - $1,000,000",
    }))
    await loader.commit()

    recent = (await client.get("/api/congress")).json()
    assert len(recent) == 2

    members = (await client.get("/api/congress/members")).json()
    assert members == [{
        "member": "Nancy Pelosi", "chamber": "House", "party": "D", "state": "CA", "trade_count": 2
    }]

    by_member = (await client.get("/api/congress/member/pelosi")).json()
    assert len(by_member) == 2

    by_ticker = (await client.get("/api/congress/ticker/nvda")).json()
    assert [t["ticker"] for t in by_ticker] == ["NVDA"]
    assert by_ticker[0]["transaction_date"] == "2024-11-15"

    totals = (await client.get("/api/congress/member/Nancy Pelosi/totals")).json()
    assert totals["trade_count"] == 2
    assert totals["total_min"] == 1_000_001 - 1_000_000
    assert totals["total_max"] == 5_000_000 - 500_001


@pytest.mark.asyncio
async def test_insider_buys_route_not_taken_for_ticker(client, db_session):
    loader = SQLiteLoader(db_session)
    for ticker, transaction_type in (("APPLE", "S"), ("META", "P")):
        await loader.insert_insider_trade(InsiderTradeCreate(
            ticker=ticker,
            company_name=f"{ticker} Inc",
            insider_name="Insider",
            transaction_type=transaction_type,
            transaction_date=datetime(2024, 11, 15).date(),
            filing_date=datetime(2024, 11, 18, 21, 30),
        ))
    await loader.commit()

    buys = (await client.get("/api/insider/buys")).json()
    assert [t["ticker"] for t in buys] == ["META"]

    by_ticker = (await client.get("/api/insider/apple")).json()
    assert [t["transaction_type"] for t in by_ticker] == ["S"]

    assert len((await client.get("/api/insider")).json()) == 2


@pytest.mark.asyncio
async def test_trending_shape(client):
    response = await client.get("/api/trending")

    assert response.status_code == 200
    assert response.json() == []


# ============================================================================
# Health / middleware
# ============================================================================

@pytest.mark.asyncio
async def test_health_reports_latest_runs(client, db_session):
    db_session.add(FetchRun(
        source_type=SourceType.INSIDER,
        status=FetchStatus.FAILED,
        started_at=datetime(2024, 12, 1, 12, 0),
        completed_at=datetime(2024, 12, 1, 12, 0, 3),
        error_message="SEC feed returned 503"
    ))
    db_session.add(FetchRun(
        source_type=SourceType.CONGRESS,
        status=FetchStatus.SUCCESS,
        started_at=datetime(2024, 12, 1, 12, 0),
        records_fetched=260,
        records_new=260
    ))
    await db_session.commit()

    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["database_connected"] is True
    assert data["status"] == "degraded"
    by_source = {run["source_type"]: run for run in data["last_fetches"]}
    assert set(by_source) == {"insider", "congress"}
    assert by_source["insider"]["error_message"] == "SEC feed returned 503"


@pytest.mark.asyncio
async def test_health_without_runs_is_healthy(client):
    data = (await client.get("/health")).json()

    assert data["status"] == "healthy"
    assert data["last_fetches"] == []


@pytest.mark.asyncio
async def test_request_id_header(client):
    response = await client.get("/", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-API-Latency-ms" in response.headers

    generated = await client.get("/")
    assert generated.headers["X-Request-ID"]


def test_websocket_accepts_and_ignores_messages():
    test_client = TestClient(app)

    with test_client.websocket_connect("/ws") as websocket:
        websocket.send_text("ping")

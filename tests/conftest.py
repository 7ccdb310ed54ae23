"""
Pytest configuration and fixtures
"""

import os

# Keep the module-level engine away from the real database file
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
import pytest_asyncio
from datetime import date, datetime
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import create_engine, create_session_maker
from models import Base


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Throw-away SQLite database file per test"""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return create_session_maker(test_engine)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def pelosi_nvda_trade():
    """Raw congressional disclosure as the congress adapter receives it"""
    return {
        "member": "Nancy Pelosi",
        "chamber": "House",
        "party": "D",
        "state": "CA",
        "ticker": "NVDA",
        "asset_description": "NVIDIA Corporation",
        "transaction_type": "Purchase",
        "amount_range": "$1,000,001 - $5,000,000",
        "transaction_date": "2024-11-15",
        "disclosure_date": "2024-12-01",
    }


@pytest.fixture
def form4_feed():
    """SEC current-filings Atom feed with two usable Form 4 entries"""
    return """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Latest Filings - Mon, 18 Nov 2024 16:30:00 EST</title>
  <id>https://www.sec.gov/cgi-bin/browse-edgar?action=getcurrent</id>
  <updated>2024-11-18T16:30:00-05:00</updated>
  <entry>
    <title>4 - Apple Inc (0000320193) (Cook Timothy D)</title>
    <link rel="alternate" type="text/html" href="https://www.sec.gov/Archives/edgar/data/320193/000032019324000123-index.htm"/>
    <summary type="text">CEO sold 1,000 shares at $225.50 per share on 2024-11-15</summary>
    <updated>2024-11-18T16:30:00-05:00</updated>
    <id>urn:tag:sec.gov,2008:accession-number=0000320193-24-000123</id>
  </entry>
  <entry>
    <title>4 - Meta Platforms, Inc. (0001326801) (Zuckerberg Mark)</title>
    <link rel="alternate" type="text/html" href="https://www.sec.gov/Archives/edgar/data/1326801/000132680124000456-index.htm"/>
    <summary type="text">Filed 2024-11-18, Accession Number: 0001326801-24-000456</summary>
    <updated>2024-11-18T15:00:00-05:00</updated>
    <id>urn:tag:sec.gov,2008:accession-number=0001326801-24-000456</id>
  </entry>
  <entry>
    <title>10-Q - Some Company (0000000002) (Filer)</title>
    <link rel="alternate" type="text/html" href="https://www.sec.gov/Archives/edgar/data/2/000000000224000001-index.htm"/>
    <summary type="text">Quarterly report</summary>
    <updated>2024-11-18T14:00:00-05:00</updated>
    <id>urn:tag:sec.gov,2008:accession-number=0000000002-24-000001</id>
  </entry>
  <entry>
    <title>4 - Inc. (0000000003) (Nobody)</title>
    <link rel="alternate" type="text/html" href="https://www.sec.gov/Archives/edgar/data/3/000000000324000001-index.htm"/>
    <summary type="text">Purchase of 10 shares</summary>
    <updated>2024-11-18T13:00:00-05:00</updated>
    <id>urn:tag:sec.gov,2008:accession-number=0000000003-24-000001</id>
  </entry>
</feed>
"""


@pytest.fixture
def reference_now():
    return datetime(2024, 12, 1, 12, 0, 0)


@pytest.fixture
def reference_today(reference_now) -> date:
    return reference_now.date()

"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class and shared enums (SourceType, FetchStatus, ...)
    institution: 13F filers and their quarterly holdings
    trades: Congressional and Form 4 insider trades
    fetch_run: Per-cycle ingestion tracking

Database Schema:
    A single SQLite file in WAL mode with foreign keys enforced between
    holdings and institutions. Uniqueness rules are carried by indexes so
    ingestion can rely on INSERT ... ON CONFLICT for deduplication.

Usage:
    from models import Institution, Holding, CongressTrade, InsiderTrade
    from models.base import SourceType

Relationships:
    - Institution → Holding (one-to-many, owned)
"""

from models.base import Base, SourceType, FetchStatus
from models.institution import Institution, Holding
from models.trades import CongressTrade, InsiderTrade
from models.fetch_run import FetchRun

__all__ = [
    "Base",
    "SourceType",
    "FetchStatus",
    "Institution",
    "Holding",
    "CongressTrade",
    "InsiderTrade",
    "FetchRun",
]

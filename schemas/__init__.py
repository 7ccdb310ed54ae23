"""
Pydantic schemas for data validation and serialization.

Schemas:
    normalized: Validated records produced by the ingestion adapters
        (CongressTradeCreate, InsiderTradeCreate, HoldingCreate)
    api: API response models and the live update event

Usage:
    from schemas.normalized import CongressTradeCreate
    from schemas.api import StatsResponse, TrendingTicker

Example:
    trade = CongressTradeCreate(
        member="Nancy Pelosi",
        chamber="House",
        party="D",
        state="CA",
        ticker="nvda",
        transaction_type="Purchase",
        amount_range="$1,000,001 - $5,000,000",
        transaction_date="2024-11-15",
    )
    assert trade.ticker == "NVDA"
"""

__all__ = [
    "CongressTradeCreate",
    "InsiderTradeCreate",
    "HoldingCreate",
    "InstitutionResponse",
    "InstitutionDetailResponse",
    "HoldingResponse",
    "CongressTradeResponse",
    "InsiderTradeResponse",
    "StatsResponse",
    "TrendingTicker",
    "SearchResponse",
    "HealthCheckResponse",
    "UpdateEvent",
]

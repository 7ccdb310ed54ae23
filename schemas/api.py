"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List, Any, Union
from datetime import date, datetime, timezone
from models.base import SourceType, FetchStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Institution / Holding Schemas
# ============================================================================

class InstitutionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cik: str
    name: str
    updated_at: Optional[datetime] = None


class HoldingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    institution_id: int
    institution_name: Optional[str] = None
    ticker: Optional[str] = None
    cusip: Optional[str] = None
    company_name: Optional[str] = None
    shares: int
    value: int
    quarter: str
    filing_date: Optional[date] = None


class InstitutionDetailResponse(InstitutionResponse):
    """Institution with its latest-quarter holdings (value descending)"""
    holdings: List[HoldingResponse] = Field(default_factory=list)


# ============================================================================
# Trade Schemas
# ============================================================================

class CongressTradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    member: str
    chamber: str
    party: str
    state: str
    ticker: Optional[str] = None
    asset_description: Optional[str] = None
    transaction_type: str
    amount_range: str
    transaction_date: date
    disclosure_date: Optional[date] = None


class CongressMemberSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    member: str
    chamber: str
    party: str
    state: str
    trade_count: int


class MemberTotalsResponse(BaseModel):
    """
    Estimated net dollar range of a member's disclosed trades.

    Purchases add the bucket bounds, sales subtract them.
    """
    member: str
    total_min: int
    total_max: int
    trade_count: int


class InsiderTradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticker: str
    company_name: str
    insider_name: str
    insider_title: Optional[str] = None
    transaction_type: str
    shares: int
    price_per_share: Optional[float] = None
    total_value: Optional[float] = None
    transaction_date: date
    filing_date: datetime
    filing_url: str


# ============================================================================
# Analytics Schemas
# ============================================================================

class TrendingTicker(BaseModel):
    ticker: str
    sources: List[str]
    total_mentions: int


class StatsResponse(BaseModel):
    """Dashboard counts, one per entity table"""
    institution_count: int
    holding_count: int
    congress_trade_count: int
    insider_trade_count: int

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "institution_count": 12,
            "holding_count": 64,
            "congress_trade_count": 260,
            "insider_trade_count": 87
        }
    })


class SearchHit(BaseModel):
    type: str
    ticker: Optional[str] = None
    name: Optional[str] = None
    source: Optional[str] = None
    value: Optional[Union[int, float, str]] = None
    date: Optional[str] = None


class SearchResponse(BaseModel):
    holdings: List[SearchHit] = Field(default_factory=list)
    congress: List[SearchHit] = Field(default_factory=list)
    insider: List[SearchHit] = Field(default_factory=list)


class SeedResponse(BaseModel):
    message: str
    seeded: int


# ============================================================================
# Health Check Schemas
# ============================================================================

class FetchRunInfo(BaseModel):
    """Outcome of the most recent fetch cycle of a source"""
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    source_type: SourceType
    status: FetchStatus
    started_at: datetime
    completed_at: Optional[datetime] = None
    records_fetched: int = 0
    records_new: int = 0
    error_message: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field("healthy", description="Overall system status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(default_factory=_utcnow)
    database_connected: bool
    last_fetches: List[FetchRunInfo] = Field(default_factory=list)

    @model_validator(mode="after")
    def determine_status(self):
        """Determine overall health status"""
        if not self.database_connected:
            self.status = "unhealthy"
        elif any(run.status == FetchStatus.FAILED.value for run in self.last_fetches):
            self.status = "degraded"
        else:
            self.status = "healthy"
        return self


# ============================================================================
# Live Update / Error Schemas
# ============================================================================

class UpdateEvent(BaseModel):
    """Payload of the live `update` event"""
    model_config = ConfigDict(use_enum_values=True)

    type: SourceType
    data: Any
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str

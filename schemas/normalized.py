"""
Pydantic schemas for normalized disclosure records with validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date, datetime
from models.base import Chamber, Party, CongressTransactionType, InsiderTransactionType

# Largest value an SQLite INTEGER column can hold
SQLITE_MAX_INT = 2**63 - 1


def _clean_ticker(v):
    if v is None:
        return None
    v = str(v).strip().upper()
    return v or None


class CongressTradeCreate(BaseModel):
    """
    Schema for a congressional trade ready to be persisted.

    Ensures:
    - Member, ticker, type and transaction date are present
    - Chamber/party/type are one of the disclosed values
    """

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    member: str = Field(..., min_length=1, max_length=200)
    chamber: Chamber
    party: Party
    state: str = Field(..., min_length=2, max_length=2)

    ticker: str = Field(..., min_length=1, max_length=16)
    asset_description: Optional[str] = Field(None, max_length=300)
    transaction_type: CongressTransactionType
    amount_range: str = Field(..., min_length=1, max_length=50)

    transaction_date: date
    disclosure_date: Optional[date] = None

    @field_validator("member", "state", "amount_range", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("ticker", mode="before")
    @classmethod
    def clean_ticker(cls, v):
        return _clean_ticker(v)


class InsiderTradeCreate(BaseModel):
    """Schema for a Form 4 insider trade ready to be persisted"""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    ticker: str = Field(..., min_length=1, max_length=16)
    company_name: str = Field(..., min_length=1, max_length=300)
    insider_name: str = Field(..., min_length=1, max_length=200)
    insider_title: Optional[str] = Field(None, max_length=200)

    transaction_type: InsiderTransactionType = InsiderTransactionType.PURCHASE
    shares: int = Field(0, ge=0, le=SQLITE_MAX_INT)
    price_per_share: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    total_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    transaction_date: date
    filing_date: datetime
    filing_url: str = Field("", max_length=2048)

    @field_validator("ticker", mode="before")
    @classmethod
    def clean_ticker(cls, v):
        return _clean_ticker(v)


class HoldingCreate(BaseModel):
    """Schema for one 13F position of an institution for a quarter"""

    model_config = ConfigDict(frozen=True)

    institution_id: int
    ticker: str = Field(..., min_length=1, max_length=16)
    cusip: Optional[str] = Field(None, max_length=16)
    company_name: Optional[str] = Field(None, max_length=300)
    shares: int = Field(0, ge=0, le=SQLITE_MAX_INT)
    value: int = Field(0, ge=0, le=SQLITE_MAX_INT)
    quarter: str = Field(..., pattern=r"^\d{4}-Q[1-4]$")
    filing_date: Optional[date] = None

    @field_validator("ticker", mode="before")
    @classmethod
    def clean_ticker(cls, v):
        return _clean_ticker(v)

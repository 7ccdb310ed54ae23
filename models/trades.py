from sqlalchemy import Column, Integer, BigInteger, String, Float, Date, DateTime, Index
from datetime import datetime
from models.base import Base


class CongressTrade(Base):
    """
    A securities transaction disclosed by a member of Congress (STOCK Act).

    amount_range is the bucketed string from the disclosure; exact amounts
    are not reported. Duplicate disclosures are ignored on insert, never
    updated.
    """
    __tablename__ = "congress_trades"

    id = Column(Integer, primary_key=True, autoincrement=True)

    member = Column(String(200), nullable=False, index=True)
    chamber = Column(String(10), nullable=False)  # House | Senate
    party = Column(String(1), nullable=False)  # D | R
    state = Column(String(2), nullable=False)

    ticker = Column(String(16), nullable=True, index=True)
    asset_description = Column(String(300), nullable=True)
    transaction_type = Column(String(10), nullable=False)  # Purchase | Sale
    amount_range = Column(String(50), nullable=False)

    transaction_date = Column(Date, nullable=False, index=True)
    disclosure_date = Column(Date, nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index(
            "idx_congress_natural_key",
            "member", "ticker", "transaction_type", "transaction_date", "amount_range",
            unique=True
        ),
    )


class InsiderTrade(Base):
    """
    A corporate insider transaction taken from an SEC Form 4 filing.

    Ticker and transaction details are best-effort guesses from feed text.
    The natural key covers every non-nullable column of the insert; nullable
    price fields are left out because NULLs never collide in a unique index.
    """
    __tablename__ = "insider_trades"

    id = Column(Integer, primary_key=True, autoincrement=True)

    ticker = Column(String(16), nullable=False, index=True)
    company_name = Column(String(300), nullable=False)
    insider_name = Column(String(200), nullable=False)
    insider_title = Column(String(200), nullable=True)

    transaction_type = Column(String(1), nullable=False, index=True)  # P | S
    shares = Column(BigInteger, nullable=False, default=0)
    price_per_share = Column(Float, nullable=True)
    total_value = Column(Float, nullable=True)

    transaction_date = Column(Date, nullable=False)
    filing_date = Column(DateTime, nullable=False, index=True)
    filing_url = Column(String(2048), nullable=False, default="")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index(
            "idx_insider_natural_key",
            "ticker", "insider_name", "transaction_type", "shares",
            "transaction_date", "filing_date", "filing_url",
            unique=True
        ),
    )

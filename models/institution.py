from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, BigInteger, Date, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from models.base import Base


class Institution(Base):
    """
    An institutional investment manager that files 13F reports.

    Rows are created on the first holdings fetch (or pre-seeded at startup)
    and never deleted; updated_at moves on every successful fetch.
    """
    __tablename__ = "institutions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    cik = Column(String(10), nullable=False, unique=True, index=True)  # Zero-padded SEC CIK
    name = Column(String(200), nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    holdings = relationship("Holding", back_populates="institution")


class Holding(Base):
    """
    One position reported in an institution's 13F for a quarter.

    Design:
    - At most one row per (institution, ticker, quarter); a later write for
      the same key replaces the values instead of adding a row
    - value is stored in whole dollars
    """
    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    institution_id = Column(Integer, ForeignKey("institutions.id"), nullable=False, index=True)

    ticker = Column(String(16), nullable=True, index=True)
    cusip = Column(String(16), nullable=True)
    company_name = Column(String(300), nullable=True)

    shares = Column(BigInteger, nullable=False, default=0)
    value = Column(BigInteger, nullable=False, default=0)

    quarter = Column(String(7), nullable=False, index=True)  # e.g. "2024-Q3"
    filing_date = Column(Date, nullable=True)

    institution = relationship("Institution", back_populates="holdings")

    __table_args__ = (
        Index("idx_holding_institution_ticker_quarter", "institution_id", "ticker", "quarter", unique=True),
    )

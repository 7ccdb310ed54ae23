from sqlalchemy import Column, String, Enum, DateTime, Float, Integer, Text, Index
from datetime import datetime
import uuid
from models.base import Base, SourceType, FetchStatus


class FetchRun(Base):
    """
    Tracks metadata for each adapter fetch cycle.

    Purpose:
    - Audit trail of scheduled and manual fetches
    - Surface the last outcome per source on /health
    """
    __tablename__ = "fetch_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(String(36), default=lambda: str(uuid.uuid4()), unique=True, nullable=False)

    source_type = Column(Enum(SourceType), nullable=False, index=True)
    status = Column(Enum(FetchStatus), default=FetchStatus.RUNNING, nullable=False)

    # Timestamps
    started_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)
    duration_seconds = Column(Float, nullable=True)

    # Statistics
    records_fetched = Column(Integer, default=0)
    records_new = Column(Integer, default=0)

    error_message = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_fetch_run_source_started", "source_type", "started_at"),
    )

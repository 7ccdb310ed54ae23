"""
Persist normalized disclosure records into SQLite with idempotent writes
"""

from typing import List, Optional
from datetime import datetime
from sqlalchemy import select, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.institution import Institution, Holding
from models.trades import CongressTrade, InsiderTrade
from schemas.normalized import CongressTradeCreate, InsiderTradeCreate, HoldingCreate
from core.exceptions import DatabaseError
import logging

logger = logging.getLogger(__name__)


class SQLiteLoader:
    """
    Write side of the store.

    Ensures:
    - Repeated trade inserts never create duplicate rows (INSERT OR IGNORE)
    - Holdings are replaced per (institution, ticker, quarter)
    - Institutions are created once and never deleted

    The loader does not commit; the caller owns the transaction.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    # ------------------------------------------------------------------
    # Institutions
    # ------------------------------------------------------------------

    async def upsert_institution(self, cik: str, name: str) -> Institution:
        """Create the institution if its CIK is unknown; existing rows are left as-is"""
        stmt = insert(Institution).values(
            cik=cik,
            name=name,
            updated_at=datetime.utcnow()
        ).on_conflict_do_nothing(index_elements=["cik"])

        await self._execute(stmt, "INSERT", Institution.__tablename__)
        return await self.get_institution_by_cik(cik)

    async def touch_institution(self, cik: str) -> None:
        """Mark an institution as freshly fetched"""
        stmt = (
            update(Institution)
            .where(Institution.cik == cik)
            .values(updated_at=datetime.utcnow())
        )
        await self._execute(stmt, "UPDATE", Institution.__tablename__)

    async def get_institution_by_cik(self, cik: str) -> Optional[Institution]:
        result = await self.db.execute(select(Institution).where(Institution.cik == cik))
        return result.scalar_one_or_none()

    async def list_institutions(self) -> List[Institution]:
        result = await self.db.execute(select(Institution).order_by(Institution.id))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Holdings
    # ------------------------------------------------------------------

    async def replace_holding(self, holding: HoldingCreate) -> None:
        """
        Write a 13F position, replacing any earlier row for the same
        institution, ticker and quarter.
        """
        stmt = insert(Holding).values(**holding.model_dump())
        stmt = stmt.on_conflict_do_update(
            index_elements=["institution_id", "ticker", "quarter"],
            set_={
                "cusip": stmt.excluded.cusip,
                "company_name": stmt.excluded.company_name,
                "shares": stmt.excluded.shares,
                "value": stmt.excluded.value,
                "filing_date": stmt.excluded.filing_date,
            }
        )
        await self._execute(stmt, "UPSERT", Holding.__tablename__)

    # ------------------------------------------------------------------
    # Trades
    # ------------------------------------------------------------------

    async def insert_congress_trade(self, trade: CongressTradeCreate) -> bool:
        """
        Insert a congressional trade unless an identical disclosure exists.

        Returns:
            True if a new row was created
        """
        stmt = insert(CongressTrade).values(
            **trade.model_dump(),
            created_at=datetime.utcnow()
        ).on_conflict_do_nothing()

        result = await self._execute(stmt, "INSERT", CongressTrade.__tablename__)
        return result.rowcount == 1

    async def insert_insider_trade(self, trade: InsiderTradeCreate) -> bool:
        """
        Insert a Form 4 trade unless an identical filing row exists.

        Returns:
            True if a new row was created
        """
        stmt = insert(InsiderTrade).values(
            **trade.model_dump(),
            created_at=datetime.utcnow()
        ).on_conflict_do_nothing()

        result = await self._execute(stmt, "INSERT", InsiderTrade.__tablename__)
        return result.rowcount == 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseError(
                "Commit failed",
                context={"operation": "COMMIT"},
                original_exception=e
            )

    async def _execute(self, stmt, operation: str, table_name: str):
        try:
            return await self.db.execute(stmt)
        except (SQLAlchemyError, OverflowError) as e:
            raise DatabaseError(
                f"{operation} into {table_name} failed",
                context={"operation": operation, "table_name": table_name},
                original_exception=e
            )

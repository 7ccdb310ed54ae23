"""
13F institution and holdings endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from api.dependencies import get_db
from api import queries
from schemas.api import InstitutionResponse, InstitutionDetailResponse, HoldingResponse
from models.institution import Institution
from core.exceptions import ResourceNotFoundError
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Institutions"])


async def _require_institution(db: AsyncSession, cik: str) -> Institution:
    institution = await queries.get_institution(db, cik)
    if institution is None:
        raise ResourceNotFoundError("Institution not found", context={"cik": cik})
    return institution


@router.get("/institutions", response_model=List[InstitutionResponse])
async def list_institutions(db: AsyncSession = Depends(get_db)):
    """All tracked institutions ordered by name"""
    return await queries.list_institutions(db)


@router.get("/institutions/{cik}", response_model=InstitutionDetailResponse)
async def get_institution(cik: str, request: Request, db: AsyncSession = Depends(get_db)):
    """
    Institution with its latest-quarter holdings.

    Returns 404 for an unknown CIK.
    """
    request_id = getattr(request.state, "request_id", "-")
    logger.info(f"[{request_id}] GET /api/institutions/{cik}")

    institution = await _require_institution(db, cik)
    holdings = await queries.get_latest_holdings(db, institution)

    return InstitutionDetailResponse(
        **InstitutionResponse.model_validate(institution).model_dump(),
        holdings=holdings
    )


@router.get("/institutions/{cik}/history", response_model=List[HoldingResponse])
async def get_institution_history(cik: str, db: AsyncSession = Depends(get_db)):
    """Holdings across all quarters (404 for an unknown CIK)"""
    institution = await _require_institution(db, cik)
    return await queries.get_holdings_history(db, institution)

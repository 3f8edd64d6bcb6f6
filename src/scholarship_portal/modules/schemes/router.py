"""
Schemes Router

Public catalog endpoints:
- GET /schemes - Browse schemes with optional filters
- GET /schemes/{scheme_id} - Get a single scheme
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.database import get_db
from scholarship_portal.modules.schemes.repository import SchemeRepository
from scholarship_portal.modules.schemes.schemas import (
    SchemeDetailResponse,
    SchemeFilters,
    SchemeListResponse,
    SchemeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=SchemeListResponse,
    summary="Browse Schemes",
    description="""
List scholarship schemes.

**Filters** (all optional, combined with AND):
- `q`: substring of scheme name or scholarship name
- `academic_year`: exact match
- `type`: exact match
- `category`: comma-separated list, matches any
- `international`: `1` to keep only internationally eligible schemes

Ordered by application deadline, schemes without a deadline last.
""",
)
async def list_schemes(
    q: str | None = Query(None, description="Search scheme/scholarship name"),
    academic_year: str | None = Query(None),
    type: str | None = Query(None),
    category: str | None = Query(None, description="Comma-separated categories"),
    international: str | None = Query(None, description="'1' for international only"),
    db: AsyncSession = Depends(get_db),
) -> SchemeListResponse:
    filters = SchemeFilters.from_query(
        q=q,
        academic_year=academic_year,
        type=type,
        category=category,
        international=international,
    )

    try:
        schemes = await SchemeRepository.list_schemes(db, filters)
    except Exception as e:
        logger.exception(f"Error listing schemes: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "INTERNAL_ERROR", "message": "Server error"},
        ) from e

    return SchemeListResponse(schemes=[SchemeResponse.model_validate(s) for s in schemes])


@router.get(
    "/{scheme_id}",
    response_model=SchemeDetailResponse,
    summary="Get Scheme",
    responses={404: {"description": "Scheme not found"}},
)
async def get_scheme(
    scheme_id: int,
    db: AsyncSession = Depends(get_db),
) -> SchemeDetailResponse:
    try:
        scheme = await SchemeRepository.get_by_id(db, scheme_id)
    except Exception as e:
        logger.exception(f"Error fetching scheme {scheme_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "INTERNAL_ERROR", "message": "Server error"},
        ) from e

    if scheme is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "SCHEME_NOT_FOUND", "message": "Scheme not found"},
        )

    return SchemeDetailResponse(scheme=SchemeResponse.model_validate(scheme))

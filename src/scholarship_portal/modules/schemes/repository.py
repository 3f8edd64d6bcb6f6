"""
Scheme Repository

Read operations for the scholarship scheme catalog.
"""

import logging

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.modules.schemes.models import Scheme
from scholarship_portal.modules.schemes.schemas import SchemeFilters

logger = logging.getLogger(__name__)


def build_scheme_query(filters: SchemeFilters) -> Select:
    """
    Build the browse query for the given filters.

    Ordering is by application deadline ascending with undated schemes last.
    """
    query = select(Scheme)

    if filters.q:
        search_pattern = f"%{filters.q}%"
        query = query.where(
            or_(
                Scheme.scheme_name.ilike(search_pattern),
                Scheme.scholarship_name.ilike(search_pattern),
            )
        )

    if filters.academic_year:
        query = query.where(Scheme.academic_year == filters.academic_year)

    if filters.type:
        query = query.where(Scheme.type == filters.type)

    if filters.categories:
        query = query.where(Scheme.category.in_(filters.categories))

    if filters.international_only:
        query = query.where(Scheme.is_international_eligible.is_(True))

    return query.order_by(
        Scheme.application_deadline.is_(None),
        Scheme.application_deadline,
        Scheme.id,
    )


class SchemeRepository:
    """Repository for scheme database operations."""

    @staticmethod
    async def list_schemes(db: AsyncSession, filters: SchemeFilters) -> list[Scheme]:
        """
        List schemes matching the browse filters. No pagination.

        Args:
            db: Database session
            filters: Parsed browse filters

        Returns:
            Matching schemes, earliest deadline first
        """
        result = await db.execute(build_scheme_query(filters))
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(db: AsyncSession, scheme_id: int) -> Scheme | None:
        """Get a scheme by ID."""
        return await db.get(Scheme, scheme_id)

    @staticmethod
    async def count(db: AsyncSession) -> int:
        """Total number of schemes in the catalog."""
        result = await db.execute(select(func.count()).select_from(Scheme))
        return result.scalar() or 0

"""
Scheme Schemas

Query filters and response models for the scheme catalog.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class SchemeFilters(BaseModel):
    """
    Parsed browse filters.

    Dimensions combine with AND; ``categories`` matches any of its values.
    """

    q: str | None = None
    academic_year: str | None = None
    type: str | None = None
    categories: list[str] | None = None
    international_only: bool = False

    @classmethod
    def from_query(
        cls,
        q: str | None = None,
        academic_year: str | None = None,
        type: str | None = None,
        category: str | None = None,
        international: str | None = None,
    ) -> "SchemeFilters":
        """Build filters from raw query-string values; empty values are ignored."""
        categories = None
        if category:
            categories = [c.strip() for c in category.split(",") if c.strip()] or None

        return cls(
            q=q or None,
            academic_year=academic_year.strip() if academic_year else None,
            type=type.strip() if type else None,
            categories=categories,
            international_only=international == "1",
        )


class SchemeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    scheme_name: str
    scholarship_name: str | None = None
    amount: Decimal | None = None
    academic_year: str | None = None
    type: str | None = None
    category: str | None = None
    is_international_eligible: bool | None = None
    application_deadline: date | None = None
    description: str | None = None
    eligibility: str | None = None


class SchemeListResponse(BaseModel):
    schemes: list[SchemeResponse]


class SchemeDetailResponse(BaseModel):
    scheme: SchemeResponse

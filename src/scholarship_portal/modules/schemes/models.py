"""
Scheme Models

Scholarship scheme catalog. Schemes are maintained outside this API and are
read-only from the portal's point of view.
"""

from datetime import date

from sqlalchemy import Boolean, Date, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scholarship_portal.core.database import Base


class Scheme(Base):
    """A scholarship scheme students can apply to."""

    __tablename__ = "schemes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    scheme_name: Mapped[str] = mapped_column(String(255), nullable=False)
    scholarship_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    amount: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)

    # Browse filters
    academic_year: Mapped[str | None] = mapped_column(String(20), nullable=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_international_eligible: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    application_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Display text
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    eligibility: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_schemes_academic_year", "academic_year"),
        Index("ix_schemes_category", "category"),
        Index("ix_schemes_application_deadline", "application_deadline"),
    )

    def __repr__(self) -> str:
        return f"<Scheme(id={self.id}, scheme_name={self.scheme_name})>"

"""
Application Models

Database models for scholarship applications and their uploaded documents.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scholarship_portal.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """Status of a scholarship application."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# Statuses an admin decision can set
DECISION_STATUSES = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED})


class DocumentType(str, enum.Enum):
    """Upload fields accepted by the apply endpoint."""

    PHOTO = "photo"
    MARK10 = "mark10"


class Application(Base):
    """
    Scholarship application.

    The applicant's form payload is kept verbatim in ``data_json``; only
    ``amount_applied`` is pulled out into its own column.
    """

    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    scheme_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("schemes.id", ondelete="CASCADE"),
        nullable=False,
    )

    application_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    amount_applied: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    data_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(
            ApplicationStatus,
            name="application_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ApplicationStatus.PENDING,
        server_default=ApplicationStatus.PENDING.value,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="application", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_applications_user_id", "user_id"),
        Index("ix_applications_status", "status"),
        Index("ix_applications_application_date", "application_date"),
    )


class Document(Base):
    """A file uploaded with an application. Immutable once created."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    )

    doc_type: Mapped[str] = mapped_column(String(50), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    application: Mapped["Application"] = relationship("Application", back_populates="documents")

    __table_args__ = (Index("ix_documents_application_id", "application_id"),)

"""
Application Schemas

Pydantic schemas for the apply payload and response serialization.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scholarship_portal.modules.applications.helpers import coerce_amount

# Re-use enums from models (they work with Pydantic too!)
from scholarship_portal.modules.applications.models import ApplicationStatus


class ApplicationPayload(BaseModel):
    """
    Applicant form payload sent as the ``data`` multipart field.

    Only the references and the requested amount are typed. Every other
    form field (personal, family, education, activities, ...) is kept as an
    extra attribute and stored verbatim with the application.
    """

    model_config = ConfigDict(extra="allow")

    user_id: int | None = None
    scheme_id: int | None = None
    amount_applied: Decimal | None = None

    @field_validator("amount_applied", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal | None:
        return coerce_amount(value)


class ApplyResponse(BaseModel):
    """Response for POST /apply."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    application_id: int = Field(..., alias="applicationId")


class MyApplicationItem(BaseModel):
    """One row of GET /my-applications/{user_id}."""

    model_config = ConfigDict(from_attributes=True)

    application_id: int
    scheme_name: str | None = None
    scholarship_name: str | None = None
    application_date: datetime
    status: ApplicationStatus


class MyApplicationsResponse(BaseModel):
    applications: list[MyApplicationItem]


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    doc_type: str
    filename: str
    uploaded_at: datetime | None = None


class ApplicationDetail(BaseModel):
    """Application columns merged with the scheme's display fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    scheme_id: int
    application_date: datetime
    amount_applied: Decimal | None = None
    data_json: str | None = None
    status: ApplicationStatus

    # From the scheme
    scheme_name: str | None = None
    scholarship_name: str | None = None
    amount: Decimal | None = None


class ApplicationDetailResponse(BaseModel):
    application: ApplicationDetail
    documents: list[DocumentResponse]


# ============================================
# Admin Schemas
# ============================================


class PendingApplicationItem(BaseModel):
    """One row of the admin review queue."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_date: datetime
    status: ApplicationStatus
    applicant_name: str | None = None
    applicant_email: str | None = None
    scheme_name: str | None = None


class PendingApplicationsResponse(BaseModel):
    applications: list[PendingApplicationItem]


class DashboardStats(BaseModel):
    """Admin dashboard counters."""

    total_users: int
    total_schemes: int
    pending_applications: int


class DecisionResponse(BaseModel):
    """
    Response for approve/reject.

    ``success`` is always true. ``updated`` is false when no application
    matched the id.
    """

    success: bool = True
    message: str
    status: ApplicationStatus
    updated: bool

"""
Applications Service Layer

Business logic for scholarship applications.
Orchestrates repository operations, document storage, and admin decisions.

This module implements:
1. Application Submission Flow:
   - Decode and validate the applicant payload
   - Store uploaded documents
   - Create the application and its document rows in one transaction
   - Remove stored files again if the transaction fails

2. Applicant Views:
   - List a user's applications
   - Application detail with documents

3. Admin Review:
   - Pending review queue (oldest first)
   - Dashboard counters
   - Approve / reject (unconditional status write)

Consistency notes:
- Files are written before the transaction starts. They are not covered by
  the rollback, so a failed submission deletes them best effort.
- Status decisions do not check the current status. Whether a row matched
  is reported back but never turned into an error.
"""

import logging

from fastapi import UploadFile
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.database import Database
from scholarship_portal.core.storage import DocumentStore
from scholarship_portal.modules.applications import repository
from scholarship_portal.modules.applications.helpers import decode_payload, serialize_payload
from scholarship_portal.modules.applications.models import (
    DECISION_STATUSES,
    ApplicationStatus,
    DocumentType,
)
from scholarship_portal.modules.applications.schemas import (
    ApplicationDetail,
    ApplicationDetailResponse,
    ApplicationPayload,
    ApplyResponse,
    DashboardStats,
    DecisionResponse,
    DocumentResponse,
    MyApplicationItem,
    PendingApplicationItem,
)
from scholarship_portal.modules.schemes.repository import SchemeRepository
from scholarship_portal.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


class ApplicationServiceError(Exception):
    """Base exception for application service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class InvalidPayloadError(ApplicationServiceError):
    """Raised when the ``data`` field cannot be decoded."""

    def __init__(self, message: str = "Invalid application data"):
        super().__init__(
            message=message,
            error_code="INVALID_PAYLOAD",
            status_code=400,
        )


class MissingReferenceError(ApplicationServiceError):
    """Raised when the payload lacks a user or scheme reference."""

    def __init__(self):
        super().__init__(
            message="Missing user_id or scheme_id",
            error_code="MISSING_REFERENCE",
            status_code=400,
        )


class ApplicationNotFoundError(ApplicationServiceError):
    """Raised when an application is not found."""

    def __init__(self, application_id: int | None = None):
        message = (
            f"Application {application_id} not found"
            if application_id is not None
            else "Application not found"
        )
        super().__init__(
            message=message,
            error_code="APPLICATION_NOT_FOUND",
            status_code=404,
        )


class ApplicationSubmissionError(ApplicationServiceError):
    """Raised when storing an application fails. Nothing was persisted."""

    def __init__(self):
        super().__init__(
            message="Server error",
            error_code="SUBMISSION_FAILED",
            status_code=500,
        )


def parse_payload(raw: str | None) -> tuple[ApplicationPayload, dict]:
    """
    Decode and validate the ``data`` form field.

    Args:
        raw: JSON text from the multipart form (may be None)

    Returns:
        Tuple of (typed payload, decoded dict for verbatim storage)

    Raises:
        InvalidPayloadError: If the text is not a JSON object or a
            reference is not an integer
        MissingReferenceError: If user_id or scheme_id is absent
    """
    try:
        data = decode_payload(raw)
    except ValueError as e:
        raise InvalidPayloadError(str(e)) from e

    try:
        payload = ApplicationPayload.model_validate(data)
    except ValidationError as e:
        raise InvalidPayloadError("user_id and scheme_id must be integers") from e

    if not payload.user_id or not payload.scheme_id:
        raise MissingReferenceError()

    return payload, data


async def _discard_stored_files(store: DocumentStore, filenames: list[str]) -> None:
    """Best-effort removal of files written for a failed submission."""
    for filename in filenames:
        if not await store.delete(filename):
            logger.error(f"Orphaned upload left in document store: {filename}")


async def submit_application(
    database: Database,
    store: DocumentStore,
    raw_data: str | None,
    uploads: dict[str, UploadFile | None],
) -> ApplyResponse:
    """
    Submit a new scholarship application.

    This is the main entry point for applying. It:
    1. Validates the payload (before any store access)
    2. Writes each recognized upload to the document store
    3. In a single transaction, inserts the application and one document
       row per stored upload
    4. On failure, rolls back and deletes the files written in step 2

    Args:
        database: Database resource providing the transaction
        store: Document store for uploaded files
        raw_data: JSON text of the applicant payload
        uploads: Upload fields keyed by form field name

    Returns:
        ApplyResponse with the new application id

    Raises:
        InvalidPayloadError: If the payload is malformed
        MissingReferenceError: If user_id or scheme_id is missing
        ApplicationSubmissionError: If storage or the transaction fails
    """
    payload, data = parse_payload(raw_data)

    logger.info(
        f"Processing application submission: user={payload.user_id}, scheme={payload.scheme_id}"
    )

    stored: list[tuple[str, str]] = []
    try:
        for doc_type in DocumentType:
            upload = uploads.get(doc_type.value)
            if upload is None or not upload.filename:
                continue
            filename = await store.save(upload)
            stored.append((doc_type.value, filename))

        async with database.transaction() as db:
            application = await repository.create(
                db,
                user_id=payload.user_id,
                scheme_id=payload.scheme_id,
                amount_applied=payload.amount_applied,
                data_json=serialize_payload(data),
            )
            for doc_type, filename in stored:
                await repository.add_document(
                    db,
                    application_id=application.id,
                    doc_type=doc_type,
                    filename=filename,
                )
            application_id = application.id

    except Exception as e:
        logger.exception(
            f"Application submission failed for user={payload.user_id}, "
            f"scheme={payload.scheme_id}: {e}"
        )
        await _discard_stored_files(store, [filename for _, filename in stored])
        raise ApplicationSubmissionError() from e

    logger.info(f"Created application {application_id} with {len(stored)} document(s)")

    return ApplyResponse(success=True, application_id=application_id)


async def list_user_applications(db: AsyncSession, user_id: int) -> list[MyApplicationItem]:
    """Get a user's applications, newest first."""
    rows = await repository.get_for_user(db, user_id)
    return [MyApplicationItem.model_validate(row) for row in rows]


async def get_application_detail(
    db: AsyncSession,
    application_id: int,
) -> ApplicationDetailResponse:
    """
    Get an application with its scheme fields and documents.

    Raises:
        ApplicationNotFoundError: If the application doesn't exist
    """
    detail = await repository.get_detail(db, application_id)
    if detail is None:
        raise ApplicationNotFoundError(application_id)

    documents = await repository.get_documents(db, application_id)

    return ApplicationDetailResponse(
        application=ApplicationDetail.model_validate(detail),
        documents=[DocumentResponse.model_validate(doc) for doc in documents],
    )


# ============================================
# Admin Operations
# ============================================


async def admin_get_pending_applications(db: AsyncSession) -> list[PendingApplicationItem]:
    """Get pending applications in review (FIFO) order."""
    rows = await repository.get_pending_for_admin(db)
    return [PendingApplicationItem.model_validate(row) for row in rows]


async def admin_get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    """
    Get dashboard counters.

    Three independent count queries; the numbers are not a consistent
    snapshot of each other.
    """
    total_users = await UserRepository.count(db)
    total_schemes = await SchemeRepository.count(db)
    pending = await repository.count_by_status(db, ApplicationStatus.PENDING)

    return DashboardStats(
        total_users=total_users,
        total_schemes=total_schemes,
        pending_applications=pending,
    )


async def decide_application(
    db: AsyncSession,
    application_id: int,
    status: ApplicationStatus,
) -> DecisionResponse:
    """
    Set an application's status to a decision.

    The write is unconditional: the current status is not checked and an
    unknown id is not an error. ``updated`` tells the caller whether a row
    matched.

    Raises:
        ValueError: If ``status`` is not a decision status
    """
    if status not in DECISION_STATUSES:
        raise ValueError(f"{status.value} is not a decision status")

    matched = await repository.set_status(db, application_id, status)
    updated = matched > 0

    if updated:
        logger.info(f"Application {application_id} set to {status.value}")
        message = f"Application {application_id} marked {status.value}"
    else:
        logger.warning(f"Decision {status.value} for unknown application {application_id}")
        message = f"No application {application_id}; nothing changed"

    return DecisionResponse(
        success=True,
        message=message,
        status=status,
        updated=updated,
    )


async def approve_application(db: AsyncSession, application_id: int) -> DecisionResponse:
    return await decide_application(db, application_id, ApplicationStatus.APPROVED)


async def reject_application(db: AsyncSession, application_id: int) -> DecisionResponse:
    return await decide_application(db, application_id, ApplicationStatus.REJECTED)

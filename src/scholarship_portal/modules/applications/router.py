"""
Applications Router

Applicant-facing endpoints:
- POST /apply - Submit an application (multipart: data + photo/mark10 files)
- GET /my-applications/{user_id} - List a user's applications
- GET /application/{application_id} - Application detail with documents
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.database import Database, get_database, get_db
from scholarship_portal.core.storage import DocumentStore, get_document_store
from scholarship_portal.modules.applications import service
from scholarship_portal.modules.applications.models import DocumentType
from scholarship_portal.modules.applications.schemas import (
    ApplicationDetailResponse,
    ApplyResponse,
    MyApplicationsResponse,
)
from scholarship_portal.modules.applications.service import (
    ApplicationNotFoundError,
    ApplicationServiceError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _handle_service_error(e: ApplicationServiceError) -> None:
    """Convert service errors to HTTPExceptions."""
    raise HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "Server error",
        },
    )


@router.post(
    "/apply",
    response_model=ApplyResponse,
    summary="Submit Scholarship Application",
    description="""
Submit an application as a multipart form.

**Fields:**
- `data`: JSON object with at least `user_id` and `scheme_id`. Any other
  form fields are stored verbatim. `amount_applied` is also indexed.
- `photo`: optional file
- `mark10`: optional file (mark sheet / transcript)

The application and its document records are created atomically.
""",
    responses={
        400: {"description": "Malformed data or missing user_id/scheme_id"},
        500: {"description": "Storage failure; nothing was saved"},
    },
)
async def apply(
    data: str | None = Form(None, description="JSON-encoded application payload"),
    photo: UploadFile | None = File(None),
    mark10: UploadFile | None = File(None),
    database: Database = Depends(get_database),
    store: DocumentStore = Depends(get_document_store),
) -> ApplyResponse:
    uploads = {
        DocumentType.PHOTO.value: photo,
        DocumentType.MARK10.value: mark10,
    }

    try:
        return await service.submit_application(database, store, data, uploads)
    except ApplicationServiceError as e:
        if e.status_code < 500:
            logger.warning(f"Application rejected: {e.message}")
        _handle_service_error(e)
    except Exception as e:
        logger.exception(f"Unexpected error submitting application: {e}")
        raise _internal_error() from e


@router.get(
    "/my-applications/{user_id}",
    response_model=MyApplicationsResponse,
    summary="List My Applications",
)
async def my_applications(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> MyApplicationsResponse:
    """List the user's applications, newest first."""
    try:
        applications = await service.list_user_applications(db, user_id)
    except Exception as e:
        logger.exception(f"Error listing applications for user {user_id}: {e}")
        raise _internal_error() from e

    return MyApplicationsResponse(applications=applications)


@router.get(
    "/application/{application_id}",
    response_model=ApplicationDetailResponse,
    summary="Get Application Details",
    responses={404: {"description": "Application not found"}},
)
async def get_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApplicationDetailResponse:
    """Get an application with its scheme fields and documents."""
    try:
        return await service.get_application_detail(db, application_id)
    except ApplicationNotFoundError as e:
        _handle_service_error(e)
    except Exception as e:
        logger.exception(f"Error fetching application {application_id}: {e}")
        raise _internal_error() from e

"""
Applications Admin Router

API endpoints for administrators reviewing scholarship applications.
Every endpoint goes through the ``require_admin`` policy dependency, which
admits all callers unless ENFORCE_ADMIN_ROLE is enabled.

Endpoints:
- GET /admin/stats - Dashboard counters
- GET /admin/pending-applications - Review queue, oldest first
- POST /admin/application/{id}/approve - Approve application
- POST /admin/application/{id}/reject - Reject application

Approve and reject are unconditional writes: they succeed for any id and any
current status. The ``updated`` field reports whether a row matched.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.auth import AdminPrincipal, require_admin
from scholarship_portal.core.database import get_db
from scholarship_portal.modules.applications import service
from scholarship_portal.modules.applications.schemas import (
    DashboardStats,
    DecisionResponse,
    PendingApplicationsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "Server error",
        },
    )


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Get Dashboard Statistics",
    description="""
Counts for the admin dashboard:
- `total_users`
- `total_schemes`
- `pending_applications`

Each count is a separate query.
""",
)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    admin: AdminPrincipal = Depends(require_admin),
) -> DashboardStats:
    try:
        stats = await service.admin_get_dashboard_stats(db)
    except Exception as e:
        logger.exception(f"Error getting dashboard stats: {e}")
        raise _internal_error() from e

    logger.info(f"{admin} fetched dashboard stats")
    return stats


@router.get(
    "/pending-applications",
    response_model=PendingApplicationsResponse,
    summary="List Pending Applications",
)
async def list_pending_applications(
    db: AsyncSession = Depends(get_db),
    admin: AdminPrincipal = Depends(require_admin),
) -> PendingApplicationsResponse:
    """Pending applications with applicant and scheme names, oldest first."""
    try:
        applications = await service.admin_get_pending_applications(db)
    except Exception as e:
        logger.exception(f"Error listing pending applications: {e}")
        raise _internal_error() from e

    logger.info(f"{admin} listed pending applications: returned={len(applications)}")
    return PendingApplicationsResponse(applications=applications)


@router.post(
    "/application/{application_id}/approve",
    response_model=DecisionResponse,
    summary="Approve Application",
)
async def approve_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminPrincipal = Depends(require_admin),
) -> DecisionResponse:
    try:
        result = await service.approve_application(db, application_id)
    except Exception as e:
        logger.exception(f"Error approving application {application_id}: {e}")
        raise _internal_error() from e

    logger.info(f"{admin} approved application {application_id} (updated={result.updated})")
    return result


@router.post(
    "/application/{application_id}/reject",
    response_model=DecisionResponse,
    summary="Reject Application",
)
async def reject_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminPrincipal = Depends(require_admin),
) -> DecisionResponse:
    try:
        result = await service.reject_application(db, application_id)
    except Exception as e:
        logger.exception(f"Error rejecting application {application_id}: {e}")
        raise _internal_error() from e

    logger.info(f"{admin} rejected application {application_id} (updated={result.updated})")
    return result

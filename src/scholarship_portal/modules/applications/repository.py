"""
Applications Repository

Database operations for scholarship applications and their documents.
All operations are async and follow the repository pattern for clean separation
of concerns between data access and business logic.

Design Principles:
- All queries are parameterized (no SQL injection)
- Single responsibility - only database operations, no business logic
- ``create`` and ``add_document`` only flush; the caller's unit of work commits
- Status updates are single unconditional statements
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.modules.schemes.models import Scheme
from scholarship_portal.modules.users.models import User

from .models import Application, ApplicationStatus, Document


async def create(
    db: AsyncSession,
    *,
    user_id: int,
    scheme_id: int,
    amount_applied: Decimal | None,
    data_json: str,
) -> Application:
    """
    Insert a new application inside the caller's transaction.

    The row is flushed so its id is available, but not committed.
    """
    application = Application(
        user_id=user_id,
        scheme_id=scheme_id,
        amount_applied=amount_applied,
        data_json=data_json,
        status=ApplicationStatus.PENDING,
    )

    db.add(application)
    await db.flush()

    return application


async def add_document(
    db: AsyncSession,
    *,
    application_id: int,
    doc_type: str,
    filename: str,
) -> Document:
    """Insert a document row inside the caller's transaction."""
    document = Document(
        application_id=application_id,
        doc_type=doc_type,
        filename=filename,
    )

    db.add(document)
    await db.flush()

    return document


async def set_status(
    db: AsyncSession,
    application_id: int,
    status: ApplicationStatus,
) -> int:
    """
    Unconditionally set an application's status.

    There is no read-before-write and no check of the current status.

    Returns:
        Number of rows the update matched (0 when the id does not exist)
    """
    result = await db.execute(
        update(Application).where(Application.id == application_id).values(status=status)
    )
    await db.commit()
    return result.rowcount or 0


async def get_for_user(db: AsyncSession, user_id: int) -> list[dict[str, Any]]:
    """
    Get a user's applications with the scheme's display names.

    Returns:
        Rows with application_id, scheme_name, scholarship_name,
        application_date and status, newest first
    """
    result = await db.execute(
        select(
            Application.id.label("application_id"),
            Scheme.scheme_name,
            Scheme.scholarship_name,
            Application.application_date,
            Application.status,
        )
        .outerjoin(Scheme, Application.scheme_id == Scheme.id)
        .where(Application.user_id == user_id)
        .order_by(Application.application_date.desc(), Application.id.desc())
    )
    return [dict(row._mapping) for row in result.all()]


async def get_detail(db: AsyncSession, application_id: int) -> dict[str, Any] | None:
    """
    Get one application merged with its scheme's display fields.

    Returns:
        Application columns plus scheme_name, scholarship_name and amount,
        or None if the application does not exist
    """
    result = await db.execute(
        select(
            Application,
            Scheme.scheme_name,
            Scheme.scholarship_name,
            Scheme.amount,
        )
        .outerjoin(Scheme, Application.scheme_id == Scheme.id)
        .where(Application.id == application_id)
    )
    row = result.first()
    if row is None:
        return None

    application: Application = row[0]
    return {
        "id": application.id,
        "user_id": application.user_id,
        "scheme_id": application.scheme_id,
        "application_date": application.application_date,
        "amount_applied": application.amount_applied,
        "data_json": application.data_json,
        "status": application.status,
        "scheme_name": row.scheme_name,
        "scholarship_name": row.scholarship_name,
        "amount": row.amount,
    }


async def get_documents(db: AsyncSession, application_id: int) -> list[Document]:
    """Get every document attached to an application."""
    result = await db.execute(
        select(Document).where(Document.application_id == application_id).order_by(Document.id)
    )
    return list(result.scalars().all())


# ============================================
# Admin Repository Methods
# ============================================


async def get_pending_for_admin(db: AsyncSession) -> list[dict[str, Any]]:
    """
    Get the admin review queue.

    Pending applications with applicant name/email and scheme name,
    oldest submission first.
    """
    result = await db.execute(
        select(
            Application.id,
            Application.application_date,
            Application.status,
            User.name.label("applicant_name"),
            User.email.label("applicant_email"),
            Scheme.scheme_name,
        )
        .outerjoin(User, Application.user_id == User.id)
        .outerjoin(Scheme, Application.scheme_id == Scheme.id)
        .where(Application.status == ApplicationStatus.PENDING)
        .order_by(Application.application_date.asc(), Application.id.asc())
    )
    return [dict(row._mapping) for row in result.all()]


async def count_by_status(db: AsyncSession, status: ApplicationStatus) -> int:
    """Count applications in the given status."""
    result = await db.execute(
        select(func.count()).select_from(Application).where(Application.status == status)
    )
    return result.scalar() or 0

"""
Admin Authorization Policy

Provides the ``require_admin`` dependency used by every admin endpoint.

The portal has no session or token scheme. By default the policy admits every
caller (admin routes are open). With ENFORCE_ADMIN_ROLE=true the caller must
identify with an ``X-User-Id`` header naming a user whose role is ``admin``.
The policy is a single dependency so it can be swapped or overridden in
``app.dependency_overrides`` without touching the routes.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.config import Settings, get_settings
from scholarship_portal.core.database import get_db
from scholarship_portal.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AdminPrincipal:
    """
    The caller admitted to an admin endpoint.

    Attributes:
        user_id: Id of the admin user, None when enforcement is off
        enforced: Whether the role check actually ran
    """

    user_id: int | None = None
    enforced: bool = False

    def __str__(self) -> str:
        if not self.enforced:
            return "anonymous"
        return f"admin:{self.user_id}"


ANONYMOUS_ADMIN = AdminPrincipal()


async def require_admin(
    x_user_id: int | None = Header(None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AdminPrincipal:
    """
    FastAPI dependency enforcing the admin policy.

    Usage:
        @router.get("/admin/stats")
        async def stats(admin: AdminPrincipal = Depends(require_admin)):
            ...

    Raises:
        HTTPException 401: Enforcement on and no known user identified
        HTTPException 403: Enforcement on and the user is not an admin
    """
    if not settings.enforce_admin_role:
        return ANONYMOUS_ADMIN

    if x_user_id is None:
        logger.warning("Admin access attempted without X-User-Id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "AUTHENTICATION_REQUIRED",
                "message": "Admin access requires an identified user.",
            },
        )

    user = await UserRepository.get_by_id(db, x_user_id)
    if user is None:
        logger.warning(f"Admin access attempted by unknown user {x_user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "AUTHENTICATION_REQUIRED",
                "message": "Admin access requires an identified user.",
            },
        )

    if not user.is_admin:
        logger.warning(
            f"Access denied: user {user.id} has role '{user.role.value}', but 'admin' is required"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ADMIN_ACCESS_REQUIRED",
                "message": "Admin access is required for this endpoint.",
            },
        )

    logger.debug(f"Authenticated admin: {user.id} ({user.email})")
    return AdminPrincipal(user_id=user.id, enforced=True)


__all__ = [
    "AdminPrincipal",
    "require_admin",
]

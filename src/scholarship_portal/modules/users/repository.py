"""
User Repository

Database operations for user management.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password_hash: str,
        age: int | None = None,
        gender: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """
        Create a new user record and commit it.

        Args:
            db: Database session
            name: Display name
            email: User's email address (unique, stored lowercased)
            password_hash: Hashed password
            age: Age in years (optional)
            gender: Free-text gender (optional)
            role: User's role

        Returns:
            Created User instance

        Raises:
            sqlalchemy.exc.IntegrityError: If the email is already taken
        """
        user = User(
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            age=age,
            gender=gender,
            role=role,
        )

        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} - {user.email} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
        """Get a user by ID."""
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """
        Get a user by email address, ignoring case.

        Args:
            db: Database session
            email: Email address

        Returns:
            User instance or None if not found
        """
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        """Check if an email address is already registered (case-insensitive)."""
        result = await db.execute(
            select(User.id).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def count(db: AsyncSession) -> int:
        """Total number of registered users."""
        result = await db.execute(select(func.count()).select_from(User))
        return result.scalar() or 0

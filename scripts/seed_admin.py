"""
Seed Admin User

Creates an admin account for the review dashboard.
Run this script once after migrating the database.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python scripts/seed_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from scholarship_portal.core.config import settings
from scholarship_portal.core.database import Database
from scholarship_portal.core.security import hash_password
from scholarship_portal.modules.users.models import UserRole
from scholarship_portal.modules.users.repository import UserRepository


async def seed_admin() -> None:
    """Create the admin user if it doesn't exist."""

    email = os.environ.get("ADMIN_EMAIL")
    password = os.environ.get("ADMIN_PASSWORD")
    name = os.environ.get("ADMIN_NAME", "Administrator")

    if not email or not password:
        print("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        sys.exit(1)

    database = Database.from_settings(settings)

    async with database.session() as db:
        existing_user = await UserRepository.get_by_email(db, email)

        if existing_user:
            print(f"User already exists: {email}")
            print(f"  ID: {existing_user.id}")
            print(f"  Role: {existing_user.role.value}")
        else:
            admin_user = await UserRepository.create(
                db,
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.ADMIN,
            )

            print("Admin created successfully!")
            print(f"  Email: {email}")
            print(f"  Name: {name}")
            print(f"  ID: {admin_user.id}")

    await database.close()


if __name__ == "__main__":
    asyncio.run(seed_admin())

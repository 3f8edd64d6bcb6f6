"""
Users module - Registered students and administrators.
"""

from scholarship_portal.modules.users.models import User, UserRole
from scholarship_portal.modules.users.repository import UserRepository

__all__ = ["User", "UserRole", "UserRepository"]

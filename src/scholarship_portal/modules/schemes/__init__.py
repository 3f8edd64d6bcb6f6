"""
Schemes module - Scholarship scheme catalog.
"""

from scholarship_portal.modules.schemes.models import Scheme
from scholarship_portal.modules.schemes.repository import SchemeRepository

__all__ = ["Scheme", "SchemeRepository"]

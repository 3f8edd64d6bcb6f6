"""
Applications Module

Handles the scholarship application workflow:
1. Submission with uploaded documents (application + documents written atomically)
2. Applicant views (my applications, application detail)
3. Admin review queue, dashboard counters, approve/reject

API Endpoints:
- POST /apply - Submit a new application
- GET /my-applications/{user_id} - List a user's applications
- GET /application/{id} - Application detail with documents
- GET /admin/stats - Dashboard counters
- GET /admin/pending-applications - Review queue
- POST /admin/application/{id}/approve - Approve
- POST /admin/application/{id}/reject - Reject
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]

from fastapi import APIRouter

from scholarship_portal.modules.applications import admin_router as admin_applications_router
from scholarship_portal.modules.applications import router as applications_router
from scholarship_portal.modules.auth.router import router as auth_router
from scholarship_portal.modules.schemes.router import router as schemes_router

api_router = APIRouter()

api_router.include_router(auth_router, tags=["Authentication"])

api_router.include_router(schemes_router, prefix="/schemes", tags=["Schemes"])

api_router.include_router(applications_router, tags=["Applications"])

api_router.include_router(
    admin_applications_router,
    prefix="/admin",
    tags=["Admin - Applications"],
)

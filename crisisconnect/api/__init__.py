"""API routes."""

from fastapi import APIRouter

from crisisconnect.api import auth, health, reports, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
router.include_router(users.router, prefix="/users", tags=["users"])

"""API v1 routes."""

from fastapi import APIRouter

from yearbook.api.v1 import admin, auth, colleges, entries, health, messages, montages, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(colleges.router, prefix="/admin/colleges", tags=["colleges"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(entries.router, prefix="/entries", tags=["entries"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(montages.router, prefix="/montages", tags=["montages"])

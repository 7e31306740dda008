"""API v1 routes."""

from fastapi import APIRouter

from taskflow.api.v1 import admin, auth, health, tasks

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])

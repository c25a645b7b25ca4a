"""Rotas API / API routes."""

from fastapi import APIRouter

from lab_scheduler.api import (
    auth,
    users,
    schedules,
    catalog,
    notifications,
    exports,
    audit,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(notifications.router, prefix="/push", tags=["push"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
api_router.include_router(audit.router, prefix="/audit", tags=["audit"])

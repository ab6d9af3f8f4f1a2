"""API v1 router aggregation."""

from fastapi import APIRouter

from panel_api.api.v1 import (
    auth,
    branding,
    communication,
    communication_logs,
    public,
    settings,
    themes,
    webhooks,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
api_router.include_router(public.router, prefix="/public", tags=["Public"])
api_router.include_router(themes.router, prefix="/themes", tags=["Themes"])
api_router.include_router(branding.router, prefix="/branding", tags=["Branding"])
# Logs first: "/communication/{channel}" would otherwise shadow "/communication/logs"
api_router.include_router(
    communication_logs.router, prefix="/communication/logs", tags=["Communication Logs"]
)
api_router.include_router(communication.router, prefix="/communication", tags=["Communication"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])

"""Main API router for v1."""
from fastapi import APIRouter

from officeops.api.v1.endpoints import rooms, meetings, sops, helpdesk

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(rooms.router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(meetings.router, prefix="/meetings", tags=["Meetings"])
api_router.include_router(sops.router, tags=["SOPs"])
api_router.include_router(helpdesk.router, prefix="/helpdesk", tags=["Helpdesk"])

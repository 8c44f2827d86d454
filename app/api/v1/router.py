"""API router aggregator."""

from fastapi import APIRouter

from app.api.v1.live.routes import router as live_router
from app.api.v1.performer.routes import router as performer_router

api_router = APIRouter()

api_router.include_router(live_router, tags=["Live"])
api_router.include_router(performer_router, tags=["Performer"])

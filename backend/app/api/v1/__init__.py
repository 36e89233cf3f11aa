"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import scan

router = APIRouter()

# Include all endpoint routers
router.include_router(scan.router, prefix="/scan", tags=["Signal Scan"])

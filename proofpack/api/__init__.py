"""API router for v1 endpoints."""

from fastapi import APIRouter

from proofpack.api import pack_health

router = APIRouter()

# Pack Health scoring routes
router.include_router(pack_health.router, tags=["pack_health"])

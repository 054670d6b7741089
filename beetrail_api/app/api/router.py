"""
Top-level router.

Aggregates the endpoint routers under their public prefixes.  Paths are
not versioned; ``/auth`` and ``/api-docs`` are public, everything else
needs a bearer token.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, crops, export, hives, sync


router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(hives.router, prefix="/api/hives", tags=["hives"])
router.include_router(crops.router, prefix="/api/crops", tags=["crops"])
router.include_router(export.router, prefix="/export", tags=["export"])
router.include_router(sync.router, prefix="/sync", tags=["sync"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])

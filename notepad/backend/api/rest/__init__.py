"""
REST API Router.

Aggregates the resource routers mounted under the configured API prefix.
"""

from fastapi import APIRouter

from notepad.backend.api.rest.endpoints import categories, notes

router = APIRouter()

# Category endpoints
router.include_router(categories.router, prefix="/categories", tags=["categories"])

# Note endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])

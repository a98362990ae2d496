"""
API v1 - quadtree compression endpoints.
"""
from fastapi import APIRouter
from qtree.api.v1.qt import router as qt_router

router = APIRouter()
router.include_router(qt_router)

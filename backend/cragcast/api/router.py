"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from cragcast.api.conditions import router as conditions_router
from cragcast.api.daylight import router as daylight_router
from cragcast.api.rock_types import router as rock_types_router

router = APIRouter()
router.include_router(conditions_router)
router.include_router(daylight_router)
router.include_router(rock_types_router)

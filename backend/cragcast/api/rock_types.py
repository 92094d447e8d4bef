"""
API routes for rock type profiles.
"""

from fastapi import APIRouter

from cragcast.engine.rock_profiles import ROCK_PROFILES, get_rock_profile
from cragcast.models.conditions import RockProfile

router = APIRouter(prefix="/api/v1/rock-types", tags=["rock-types"])


@router.get("", response_model=list[RockProfile])
def list_rock_types():
    """All rock profiles, including the 'unknown' fallback."""
    return list(ROCK_PROFILES.values())


@router.get("/{rock_type}", response_model=RockProfile)
def rock_type_profile(rock_type: str):
    """Profile for one rock type; unrecognized names get the 'unknown' profile."""
    return get_rock_profile(rock_type)

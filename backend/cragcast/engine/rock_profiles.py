"""
Rock type profiles.

One immutable row per supported rock type. Temperatures in °C, humidity in %,
drying time in hours after a soaking.
"""

import logging
from typing import Union

from cragcast.config import RockType
from cragcast.models.conditions import RockProfile

logger = logging.getLogger(__name__)


def _profile(
    rock_type: RockType,
    optimal_temp: tuple[float, float],
    optimal_humidity: tuple[float, float],
    max_humidity: float,
    drying_hours: float,
) -> RockProfile:
    return RockProfile(
        rock_type=rock_type,
        optimal_temp=optimal_temp,
        optimal_humidity=optimal_humidity,
        max_humidity=max_humidity,
        drying_hours=drying_hours,
    )


ROCK_PROFILES: dict[RockType, RockProfile] = {
    # Impermeable, sheds water fast
    RockType.GRANITE: _profile(RockType.GRANITE, (0, 15), (20, 50), 65, 2),
    # Very porous, weak when wet
    RockType.SANDSTONE: _profile(RockType.SANDSTONE, (5, 20), (30, 45), 50, 36),
    RockType.LIMESTONE: _profile(RockType.LIMESTONE, (10, 25), (45, 70), 80, 4),
    RockType.BASALT: _profile(RockType.BASALT, (5, 18), (30, 60), 70, 3),
    RockType.GNEISS: _profile(RockType.GNEISS, (2, 18), (20, 50), 60, 2),
    RockType.QUARTZITE: _profile(RockType.QUARTZITE, (5, 20), (25, 50), 60, 2),
    RockType.UNKNOWN: _profile(RockType.UNKNOWN, (5, 20), (30, 60), 70, 12),
}

# Rock types that dry fast and grip better in dry air
FAST_DRYING_ROCKS = frozenset({RockType.GRANITE, RockType.GNEISS})


def resolve_rock_type(rock_type: Union[RockType, str, None]) -> RockType:
    """Normalize a rock type name; anything unrecognized maps to UNKNOWN."""
    if isinstance(rock_type, RockType):
        return rock_type
    try:
        return RockType(str(rock_type).strip().lower())
    except ValueError:
        logger.debug("Unrecognized rock type %r, using 'unknown' profile", rock_type)
        return RockType.UNKNOWN


def get_rock_profile(rock_type: Union[RockType, str, None]) -> RockProfile:
    """Look up the profile for a rock type, falling back to 'unknown'."""
    return ROCK_PROFILES[resolve_rock_type(rock_type)]

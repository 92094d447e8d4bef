"""
Residual wetness after rain.

Provides:
  - Drying penalty: friction lost to rock that is still damp from recent
    (not current) precipitation, scaled by rock porosity and by how fast the
    current weather dries it out. Range 0-2.
  - Drying time estimate: rough hours until the rock is climbable again.
"""

from cragcast.config import RockType
from cragcast.engine.rock_profiles import get_rock_profile, resolve_rock_type

# (minimum mm, base penalty), checked top-down
_PRECIP_PENALTY_BRACKETS = [
    (12.0, 1.2),
    (6.0, 0.9),
    (3.0, 0.6),
    (1.5, 0.4),
]
_MIN_PRECIP_PENALTY = 0.25
_NEGLIGIBLE_PRECIP_MM = 0.1
_MAX_PENALTY = 2.0


def _rock_adjustment(rock_type: RockType) -> float:
    if rock_type == RockType.SANDSTONE:
        return 1.25  # porous, stays wet longer
    if rock_type in (RockType.GRANITE, RockType.GNEISS):
        return 0.9
    return 1.0


def weather_drying_factor(temp_c: float, humidity: float, wind_kph: float) -> float:
    """
    Weather multiplier applied to the drying penalty.

    Product of independent temperature, humidity and wind factors.
    """
    # Temperature (no further escalation above 25 °C)
    if temp_c >= 20:
        factor = 1.3
    elif temp_c >= 15:
        factor = 1.15
    elif temp_c >= 10:
        factor = 1.0
    else:
        factor = 0.7

    # Humidity
    if humidity < 40:
        factor *= 1.4
    elif humidity < 60:
        factor *= 1.0
    elif humidity < 75:
        factor *= 0.7
    else:
        factor *= 0.4

    # Wind
    if wind_kph >= 20:
        factor *= 1.3
    elif wind_kph >= 10:
        factor *= 1.15
    elif wind_kph >= 5:
        factor *= 1.05
    else:
        factor *= 0.9

    return factor


def calculate_drying_penalty(
    recent_precip_mm: float,
    rock_type: RockType,
    temp_c: float,
    humidity: float,
    wind_kph: float,
    drying_multiplier: float = 1.0,
) -> float:
    """
    Friction penalty (0-2) for rock still damp from recent precipitation.

    Args:
        recent_precip_mm: Accumulated antecedent rainfall (not this hour's)
        rock_type: Rock type; sandstone is penalized more, granite/gneiss less
        temp_c, humidity, wind_kph: Weather driving evaporation
        drying_multiplier: Extra caller-supplied scaling (e.g. aspect, shade)
    """
    if recent_precip_mm <= _NEGLIGIBLE_PRECIP_MM:
        return 0.0

    penalty = _MIN_PRECIP_PENALTY
    for min_mm, bracket_penalty in _PRECIP_PENALTY_BRACKETS:
        if recent_precip_mm >= min_mm:
            penalty = bracket_penalty
            break

    penalty *= _rock_adjustment(resolve_rock_type(rock_type))
    penalty *= weather_drying_factor(temp_c, humidity, wind_kph) * drying_multiplier
    return min(_MAX_PENALTY, penalty)


def estimate_drying_hours(
    rock_type: RockType,
    temp_c: float,
    humidity: float,
    currently_wet: bool,
) -> float:
    """
    Rough hours until the rock is dry enough to climb.

    While it is still raining the rock's nominal drying time applies; after
    rain, warm dry air shortens it and anything else lengthens it.
    """
    base_hours = get_rock_profile(rock_type).drying_hours
    if currently_wet:
        return base_hours
    drying_factor = 0.8 if (temp_c >= 15 and humidity < 50) else 1.2
    return base_hours * drying_factor

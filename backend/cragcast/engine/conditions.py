"""
Climbing conditions engine.

Assembles the headline verdict for the current reading together with the
hourly friction forecast, optimal windows, precipitation context, dew point
spread and the daylight-aware time context.

Every call is a pure function of its inputs and a single `now` that is read
once and shared by all parts of the computation.
"""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union

from cragcast.config import RockType, OPTIMAL_SCORE
from cragcast.engine.daylight import calculate_daylight_hours, location_zone
from cragcast.engine.friction import rating_for_score, round_friction_score, score_friction
from cragcast.engine.hourly import daily_max_temp, process_hourly_series, require_timestamps
from cragcast.engine.precipitation import calculate_precipitation_context
from cragcast.engine.rock_profiles import resolve_rock_type
from cragcast.engine.time_context import detect_time_context, get_time_context_data
from cragcast.engine.utils import align_now, resolve_time_zone, round_half_up, to_local
from cragcast.engine.windows import find_optimal_windows
from cragcast.models.conditions import (
    ConditionsInput,
    ConditionsResult,
    HourlyCondition,
    WeatherForecast,
)

logger = logging.getLogger(__name__)


def find_optimal_time(conditions: list[HourlyCondition]) -> Optional[datetime]:
    """Earliest hour with the best friction score, if that score is optimal."""
    if not conditions:
        return None
    best = max(conditions, key=lambda c: c.friction_score)
    if best.friction_score < OPTIMAL_SCORE:
        return None
    return best.time


def compute_conditions(
    forecast: WeatherForecast,
    rock_type: Union[RockType, str] = RockType.UNKNOWN,
    recent_precip_mm: float = 0.0,
    include_night_hours: bool = False,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    max_daily_temp: Optional[float] = None,
    query: Optional[str] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    drying_multiplier: float = 1.0,
) -> ConditionsResult:
    """
    Compute climbing conditions from a weather forecast.

    Args:
        forecast: Current reading plus optional hourly series
        rock_type: Rock type; unrecognized values use the 'unknown' profile
        recent_precip_mm: Antecedent rainfall before the current reading (mm)
        include_night_hours: Return every forecast hour instead of
            climbing-relevant ones
        latitude, longitude: Enables daylight filtering and time context
        max_daily_temp: Peak temperature (°C); derived from the series when
            omitted, else the current temperature
        query: Free-text hint that can select dawn/evening/alpine contexts
        now: Evaluation instant; defaults to the current time
        tz: Location time zone for daylight hours; defaults to solar time

    Returns:
        ConditionsResult. Hourly-derived fields are None when no series
        is supplied; time_context is None without a location.
    """
    now = now or datetime.now(timezone.utc)
    rock = resolve_rock_type(rock_type)
    current = forecast.current
    hourly = forecast.hourly or []

    assessment = score_friction(current, rock, recent_precip_mm, drying_multiplier)

    drying_time_hours = None
    if assessment.drying_time_hours:
        drying_time_hours = round_half_up(assessment.drying_time_hours)

    reasons = list(assessment.reasons)
    if not assessment.is_dry and drying_time_hours:
        reasons.append(f"Will be ready to climb in ~{drying_time_hours} hours")
    if not reasons:
        reasons.append("Conditions are acceptable")

    zone = location_zone(longitude, tz)
    if hourly:
        require_timestamps(hourly)
        local_now = to_local(align_now(now, hourly[0].time, zone), zone)
    else:
        local_now = to_local(now, zone)

    if max_daily_temp is None:
        max_daily_temp = daily_max_temp(hourly, local_now, zone)
    if max_daily_temp is None:
        max_daily_temp = current.temp_c

    result = ConditionsResult(
        friction_rating=round_friction_score(assessment.score),
        rating=rating_for_score(assessment.score),
        reasons=reasons,
        warnings=list(assessment.warnings),
        is_dry=assessment.is_dry,
        drying_time_hours=drying_time_hours,
        dew_point_spread=assessment.dew_point_spread,
    )

    if hourly:
        hourly_conditions = process_hourly_series(
            hourly,
            rock,
            local_now,
            include_night_hours=include_night_hours,
            latitude=latitude,
            longitude=longitude,
            max_temp=max_daily_temp,
            query=query,
            tz=tz,
            drying_multiplier=drying_multiplier,
        )
        result.hourly_conditions = hourly_conditions
        result.optimal_windows = find_optimal_windows(hourly_conditions, zone)
        result.precipitation_context = calculate_precipitation_context(hourly, local_now, zone)
        result.optimal_time = find_optimal_time(hourly_conditions)

    if latitude is not None and longitude is not None:
        daylight = calculate_daylight_hours(latitude, longitude, local_now, tz)
        context = detect_time_context(max_daily_temp, latitude, local_now.month, query)
        result.time_context = get_time_context_data(daylight, context, max_daily_temp)

    logger.debug(
        "Conditions for %s: score=%.2f rating=%s hours=%d",
        rock.value,
        assessment.score,
        result.rating.value,
        len(result.hourly_conditions or []),
    )
    return result


def compute_conditions_from_input(data: ConditionsInput) -> ConditionsResult:
    """Run compute_conditions for a validated request body."""
    return compute_conditions(
        forecast=data.forecast,
        rock_type=data.rock_type,
        recent_precip_mm=data.recent_precip_mm,
        include_night_hours=data.include_night_hours,
        latitude=data.latitude,
        longitude=data.longitude,
        max_daily_temp=data.max_daily_temp,
        query=data.query,
        now=data.now,
        tz=resolve_time_zone(data.tz),
        drying_multiplier=data.drying_multiplier,
    )

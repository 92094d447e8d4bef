"""
Hourly friction forecast.

Scores every hour of a forecast series, then (when a location is known and
night hours were not requested) keeps only the hours worth showing: those
close to now plus those inside the day's climbing window.
"""

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from cragcast.config import (
    RockType,
    OPTIMAL_SCORE,
    NEAR_TERM_HOURS,
    FALLBACK_HOURS,
    ANTECEDENT_PRECIP_HOURS,
)
from cragcast.engine.daylight import calculate_daylight_hours, is_climbing_hour, location_zone
from cragcast.engine.friction import rating_for_score, round_friction_score, score_friction
from cragcast.engine.time_context import detect_time_context, get_climbing_hours
from cragcast.engine.utils import align_now, to_local
from cragcast.engine.weather_codes import describe_weather_code
from cragcast.models.conditions import HourlyCondition, WeatherSample
from cragcast.models.daylight import ClimbingHours

logger = logging.getLogger(__name__)


def require_timestamps(hourly: list[WeatherSample]) -> None:
    """Hourly entries must carry a time; the current reading need not."""
    for idx, sample in enumerate(hourly):
        if sample.time is None:
            raise ValueError(f"Hourly sample {idx} has no timestamp")


def antecedent_precipitation(
    hourly: list[WeatherSample],
    hours: int = ANTECEDENT_PRECIP_HOURS,
) -> list[float]:
    """
    Rain (mm) that fell in the `hours` before each sample, excluding the
    sample itself. Assumes the series is in chronological order.
    """
    window = timedelta(hours=hours)
    totals: list[float] = []
    left = 0
    for idx, sample in enumerate(hourly):
        while left < idx and sample.time - hourly[left].time > window:
            left += 1
        totals.append(sum(h.precip_mm for h in hourly[left:idx]))
    return totals


def build_hourly_conditions(
    hourly: list[WeatherSample],
    rock_type: RockType = RockType.UNKNOWN,
    drying_multiplier: float = 1.0,
) -> list[HourlyCondition]:
    """Score every sample of the series, one HourlyCondition per sample."""
    require_timestamps(hourly)

    conditions = []
    for sample, recent_mm in zip(hourly, antecedent_precipitation(hourly)):
        assessment = score_friction(sample, rock_type, recent_mm, drying_multiplier)
        friction_score = round_friction_score(assessment.score)
        conditions.append(HourlyCondition(
            time=sample.time,
            temp_c=sample.temp_c,
            humidity=sample.humidity,
            wind_kph=sample.wind_kph,
            precip_mm=sample.precip_mm,
            weather_code=sample.weather_code,
            weather_description=describe_weather_code(sample.weather_code),
            friction_score=friction_score,
            rating=rating_for_score(assessment.score),
            is_optimal=friction_score >= OPTIMAL_SCORE,
            is_dry=assessment.is_dry,
            warnings=assessment.warnings,
        ))
    return conditions


def daily_max_temp(
    hourly: list[WeatherSample],
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> Optional[float]:
    """Highest forecast temperature on now's local calendar day, if any."""
    if not hourly:
        return None
    day = to_local(align_now(now, hourly[0].time, zone), zone).date()
    temps = [
        s.temp_c for s in hourly
        if s.time is not None and to_local(s.time, zone).date() == day
    ]
    return max(temps) if temps else None


def filter_climbing_hours(
    conditions: list[HourlyCondition],
    climbing_hours: ClimbingHours,
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> list[HourlyCondition]:
    """
    Keep hours within NEAR_TERM_HOURS of now or inside the climbing window.

    The window is in local hours of day; aware timestamps are read in `zone`.
    Never empties a non-empty series: if nothing qualifies, the first
    FALLBACK_HOURS hours are returned unfiltered.
    """
    if not conditions:
        return []

    now = align_now(now, conditions[0].time, zone)
    near_term = timedelta(hours=NEAR_TERM_HOURS)

    kept = [
        c for c in conditions
        if abs(c.time - now) <= near_term
        or is_climbing_hour(to_local(c.time, zone).hour, climbing_hours)
    ]
    if not kept:
        logger.debug(
            "No hours inside climbing window %d-%d; returning first %d hours",
            climbing_hours.start, climbing_hours.end, FALLBACK_HOURS,
        )
        return conditions[:FALLBACK_HOURS]
    return kept


def process_hourly_series(
    hourly: list[WeatherSample],
    rock_type: RockType,
    now: datetime,
    include_night_hours: bool = False,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    max_temp: Optional[float] = None,
    query: Optional[str] = None,
    tz: Optional[tzinfo] = None,
    drying_multiplier: float = 1.0,
) -> list[HourlyCondition]:
    """
    Score a forecast series and trim it to climbing-relevant hours.

    The full series is returned when night hours are requested or the
    location is unknown. Local hours come from `tz`, else solar time at
    `longitude`.
    """
    conditions = build_hourly_conditions(hourly, rock_type, drying_multiplier)
    if include_night_hours or latitude is None or longitude is None or not conditions:
        return conditions

    zone = location_zone(longitude, tz)
    local_now = to_local(align_now(now, conditions[0].time, zone), zone)
    if max_temp is None:
        max_temp = daily_max_temp(hourly, local_now, zone)

    daylight = calculate_daylight_hours(latitude, longitude, local_now, tz)
    context = detect_time_context(max_temp, latitude, local_now.month, query)
    climbing_hours = get_climbing_hours(daylight, context, max_temp)

    return filter_climbing_hours(conditions, climbing_hours, local_now, zone)

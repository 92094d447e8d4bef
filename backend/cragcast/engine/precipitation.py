"""
Precipitation totals around the evaluation instant.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from cragcast.engine.utils import align_now, round_tenth
from cragcast.models.conditions import PrecipitationContext, WeatherSample

_DAY = timedelta(hours=24)
_TWO_DAYS = timedelta(hours=48)
_ZERO = timedelta(0)


def calculate_precipitation_context(
    hourly: list[WeatherSample],
    now: datetime,
    zone: Optional[tzinfo] = None,
) -> PrecipitationContext:
    """
    Sum precipitation over the trailing 24h/48h and the leading 24h.

    A sample stamped exactly at `now` counts as past, not upcoming. `zone`
    is the location zone used to relate an aware `now` to naive samples.
    """
    last_24h = last_48h = next_24h = 0.0

    for sample in hourly:
        if sample.time is None:
            continue
        aligned_now = align_now(now, sample.time, zone)
        age = aligned_now - sample.time

        if _ZERO <= age <= _DAY:
            last_24h += sample.precip_mm
        if _ZERO <= age <= _TWO_DAYS:
            last_48h += sample.precip_mm
        elif _ZERO < -age < _DAY:
            next_24h += sample.precip_mm

    return PrecipitationContext(
        last_24h=round_tenth(last_24h),
        last_48h=round_tenth(last_48h),
        next_24h=round_tenth(next_24h),
    )

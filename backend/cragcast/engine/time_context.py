"""
Climbing time context.

Picks a named policy that reshapes the daylight-derived climbing window:
heat avoidance, short winter days, or a stated preference for dawn or
evening sessions. Checks run in a fixed order and the first match wins:

  1. ALPINE_START     max temp > 30 °C, or an early/dawn hint
  2. WINTER_SHORT     Nov-Jan and |latitude| > 40°
  3. EVENING_SESSION  evening hint in Jun-Sep
  4. DAWN_PATROL      morning hint
  5. NORMAL
"""

import re
from typing import Optional

from cragcast.config import (
    ClimbingTimeContext,
    ALPINE_HINT_PATTERN,
    EVENING_HINT_PATTERN,
    MORNING_HINT_PATTERN,
    ALPINE_MAX_TEMP,
    WINTER_MONTHS,
    EVENING_MONTHS,
    WINTER_MIN_ABS_LATITUDE,
    CONTEXT_NOTES,
)
from cragcast.models.daylight import ClimbingHours, DaylightHours, TimeContextData

_ALPINE_HINT = re.compile(ALPINE_HINT_PATTERN, re.IGNORECASE)
_EVENING_HINT = re.compile(EVENING_HINT_PATTERN, re.IGNORECASE)
_MORNING_HINT = re.compile(MORNING_HINT_PATTERN, re.IGNORECASE)


def detect_time_context(
    max_temp: Optional[float],
    latitude: float,
    month: int,
    query: Optional[str] = None,
) -> ClimbingTimeContext:
    """
    Choose the time context for a day.

    Args:
        max_temp: Peak temperature of the day (°C), if known
        latitude: Decimal degrees
        month: Calendar month, 1-12
        query: Optional free text from the user ("early start", "after work")
    """
    query = query or ""

    too_hot = max_temp is not None and max_temp > ALPINE_MAX_TEMP
    if too_hot or _ALPINE_HINT.search(query):
        return ClimbingTimeContext.ALPINE_START

    if month in WINTER_MONTHS and abs(latitude) > WINTER_MIN_ABS_LATITUDE:
        return ClimbingTimeContext.WINTER_SHORT

    if _EVENING_HINT.search(query) and month in EVENING_MONTHS:
        return ClimbingTimeContext.EVENING_SESSION

    if _MORNING_HINT.search(query):
        return ClimbingTimeContext.DAWN_PATROL

    return ClimbingTimeContext.NORMAL


def get_climbing_hours(
    daylight: DaylightHours,
    context: ClimbingTimeContext,
    max_temp: Optional[float] = None,
) -> ClimbingHours:
    """Narrow the daylight climbing window for a time context."""
    start = daylight.climbing_start
    end = daylight.climbing_end

    if context == ClimbingTimeContext.ALPINE_START:
        return ClimbingHours(start=max(4, start - 2), end=min(18, end - 2))

    if context == ClimbingTimeContext.WINTER_SHORT:
        return ClimbingHours(start=max(9, start), end=min(16, end))

    if context == ClimbingTimeContext.DAWN_PATROL:
        return ClimbingHours(start=max(5, start - 1), end=min(14, end))

    if context == ClimbingTimeContext.EVENING_SESSION:
        return ClimbingHours(start=max(14, start), end=min(21, end + 1))

    # NORMAL: widen on warm days, 9-17 at most on cold ones
    if max_temp is not None:
        if max_temp > 25:
            start = max(6, start - 1)
            end = min(20, end)
        elif max_temp < 10:
            start = max(9, start)
            end = min(17, end)

    return ClimbingHours(start=start, end=end)


def get_time_context_data(
    daylight: DaylightHours,
    context: ClimbingTimeContext,
    max_temp: Optional[float] = None,
) -> TimeContextData:
    """Daylight summary plus the context's climbing window and note id."""
    hours = get_climbing_hours(daylight, context, max_temp)
    return TimeContextData(
        context=context,
        sunrise_iso=daylight.sunrise,
        sunset_iso=daylight.sunset,
        climbing_start_hour=hours.start,
        climbing_end_hour=hours.end,
        total_daylight_hours=daylight.total_daylight_hours,
        context_note=CONTEXT_NOTES[context],
    )

"""
Shared numeric and time helpers for the conditions engine.

Reported values round half-up (2.5 → 3, 0.25 → 0.3) so the same inputs give
the same numbers the web and chat consumers already display.
"""

import math
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +∞."""
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Round to `digits` decimal places, ties toward +∞."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_tenth(value: float) -> float:
    return round_to(value, 1)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def to_local(moment: datetime, zone: Optional[tzinfo]) -> datetime:
    """
    Express an aware timestamp in the location zone.

    Naive timestamps are already location wall-clock times and pass through,
    as does everything when no zone is known.
    """
    if zone is None or moment.tzinfo is None:
        return moment
    return moment.astimezone(zone)


def align_now(now: datetime, reference: datetime, zone: Optional[tzinfo] = None) -> datetime:
    """
    Make `now` comparable with a series timestamp.

    Naive timestamps are location-local wall-clock times. An aware `now`
    against a naive series is converted to the location zone (system-local
    when unknown) and stripped; a naive `now` against an aware series is
    read as location-local time. Aware values are expressed in the series'
    own offset.
    """
    if reference.tzinfo is None:
        if now.tzinfo is None:
            return now
        return now.astimezone(zone).replace(tzinfo=None)

    if now.tzinfo is None and zone is not None:
        now = now.replace(tzinfo=zone)
    return now.astimezone(reference.tzinfo)


def resolve_time_zone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA zone for a name like 'Europe/Vienna'; None when no name is given."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {name}") from e

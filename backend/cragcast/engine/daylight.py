"""
Daylight engine.

Approximate sunrise, sunset and civil twilight from latitude, longitude and
date using a simplified solar position model (mean longitude/anomaly →
ecliptic longitude → declination → hour angle). Accurate to a few minutes,
which is plenty for deciding when climbing is practical.

Event times are computed in UTC. "Local" hours (climbing window, polar
anchors) use the supplied tz, or local mean solar time when none is given.
"""

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union

from cragcast.config import CLIMBING_START_FLOOR, CLIMBING_END_CEILING
from cragcast.engine.utils import clamp, round_half_up, round_tenth
from cragcast.models.daylight import ClimbingHours, DaylightHours

_UNIX_EPOCH_JULIAN_DAY = 2440587.5
_J2000_JULIAN_DAY = 2451545.0
_OBLIQUITY_DEG = 23.45
_CIVIL_TWILIGHT_DEG = -6.0


def solar_time_zone(longitude: float) -> timezone:
    """Fixed-offset zone for local mean solar time (4 minutes per degree)."""
    return timezone(timedelta(minutes=round_half_up(longitude * 4)))


def location_zone(longitude: Optional[float], tz: Optional[tzinfo] = None) -> Optional[tzinfo]:
    """Zone that local hours are read in: `tz`, else solar time, else unknown."""
    if tz is not None:
        return tz
    if longitude is not None:
        return solar_time_zone(longitude)
    return None


def to_iso(moment: datetime) -> str:
    """UTC ISO 8601 with milliseconds, e.g. 2025-06-21T04:43:00.000Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _local_date(when: Union[date, datetime], local_tz: tzinfo) -> date:
    if isinstance(when, datetime):
        if when.tzinfo is None:
            return when.date()  # naive: already location-local wall clock
        return when.astimezone(local_tz).date()
    return when


def solar_declination(day: date) -> float:
    """Solar declination (radians) at 00:00 UTC of the given date."""
    julian_day = (day - date(1970, 1, 1)).days + _UNIX_EPOCH_JULIAN_DAY
    n = julian_day - _J2000_JULIAN_DAY

    mean_longitude = (280.46 + 0.9856474 * n) % 360
    mean_anomaly = math.radians((357.528 + 0.9856003 * n) % 360)
    ecliptic_longitude = math.radians(
        mean_longitude
        + 1.915 * math.sin(mean_anomaly)
        + 0.02 * math.sin(2 * mean_anomaly)
    )
    return math.asin(math.sin(math.radians(_OBLIQUITY_DEG)) * math.sin(ecliptic_longitude))


def _utc_event(day: date, utc_hours: float) -> datetime:
    midnight = datetime.combine(day, time(0), tzinfo=timezone.utc)
    return midnight + timedelta(minutes=math.floor(utc_hours * 60))


def _local_hour(moment: datetime, day_start: datetime) -> int:
    """Hour of the local day, pinned to 0-23 when an event spills over."""
    hours = (moment - day_start).total_seconds() // 3600
    return int(clamp(hours, 0, 23))


def calculate_daylight_hours(
    latitude: float,
    longitude: float,
    when: Union[date, datetime],
    tz: Optional[tzinfo] = None,
) -> DaylightHours:
    """
    Compute sunrise/sunset, civil twilight and practical climbing hours.

    Args:
        latitude, longitude: Decimal degrees (east positive)
        when: Date (or instant) of interest
        tz: Location time zone; defaults to local mean solar time

    Returns:
        DaylightHours. Polar day gives a 00:00-23:59:59.999 day, polar night
        collapses sunrise and sunset onto local noon; neither raises.
    """
    local_tz = tz or solar_time_zone(longitude)
    day = _local_date(when, local_tz)
    day_start = datetime.combine(day, time(0), tzinfo=local_tz)

    declination = solar_declination(day)
    lat_rad = math.radians(latitude)
    cos_h = -math.tan(lat_rad) * math.tan(declination)

    if cos_h < -1:
        # Polar day: sun never sets
        sunrise = civil_dawn = day_start
        sunset = civil_dusk = day_start.replace(hour=23, minute=59, second=59, microsecond=999000)
    elif cos_h > 1:
        # Polar night: sun never rises
        sunrise = sunset = civil_dawn = civil_dusk = day_start.replace(hour=12)
    else:
        hour_angle = math.degrees(math.acos(cos_h))
        sunrise = _utc_event(day, 12 - hour_angle / 15 - longitude / 15)
        sunset = _utc_event(day, 12 + hour_angle / 15 - longitude / 15)

        cos_h_civil = (
            math.sin(math.radians(_CIVIL_TWILIGHT_DEG))
            / (math.cos(lat_rad) * math.cos(declination))
            - math.tan(lat_rad) * math.tan(declination)
        )
        civil_angle = math.degrees(math.acos(clamp(cos_h_civil, -1, 1)))
        civil_dawn = _utc_event(day, 12 - civil_angle / 15 - longitude / 15)
        civil_dusk = _utc_event(day, 12 + civil_angle / 15 - longitude / 15)

    # Practical hours: an hour after first light, never before 5am or after 9pm
    climbing_start = max(CLIMBING_START_FLOOR, _local_hour(civil_dawn, day_start) + 1)
    climbing_end = min(CLIMBING_END_CEILING, _local_hour(civil_dusk, day_start))

    total_hours = (sunset - sunrise).total_seconds() / 3600

    return DaylightHours(
        sunrise=to_iso(sunrise),
        sunset=to_iso(sunset),
        civil_dawn=to_iso(civil_dawn),
        civil_dusk=to_iso(civil_dusk),
        climbing_start=climbing_start,
        climbing_end=climbing_end,
        total_daylight_hours=round_tenth(total_hours),
    )


def is_climbing_hour(hour: int, climbing_hours: ClimbingHours) -> bool:
    """True if a local hour of day falls inside the (inclusive) window."""
    return climbing_hours.start <= hour <= climbing_hours.end

"""
Pydantic models for daylight and climbing-hour calculations.
"""

from typing import Optional

from pydantic import BaseModel

from cragcast.config import ClimbingTimeContext


class DaylightHours(BaseModel):
    """Approximate solar events for one date and location."""

    sunrise: str     # ISO 8601, UTC
    sunset: str
    civil_dawn: str  # sun 6° below horizon, first usable light
    civil_dusk: str  # sun 6° below horizon, last usable light
    climbing_start: int  # local hour of day (0-23)
    climbing_end: int
    total_daylight_hours: float


class ClimbingHours(BaseModel):
    """Inclusive local-hour window considered sensible for climbing."""

    start: int
    end: int


class TimeContextData(BaseModel):
    """Daylight summary plus the climbing window for a time context."""

    context: ClimbingTimeContext
    sunrise_iso: str
    sunset_iso: str
    climbing_start_hour: int
    climbing_end_hour: int
    total_daylight_hours: float
    context_note: Optional[str] = None

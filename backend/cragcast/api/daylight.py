"""
API routes for daylight hours and climbing time context.
"""

from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from cragcast.engine.daylight import calculate_daylight_hours
from cragcast.engine.time_context import detect_time_context, get_time_context_data
from cragcast.engine.utils import resolve_time_zone
from cragcast.models.daylight import DaylightHours, TimeContextData

router = APIRouter(prefix="/api/v1", tags=["daylight"])


@router.get("/daylight", response_model=DaylightHours)
def daylight(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    date: Optional[date_type] = Query(None, description="Defaults to today"),
    tz: Optional[str] = Query(None, description="IANA time zone; defaults to solar time"),
):
    """Sunrise, sunset, civil twilight and practical climbing hours."""
    try:
        zone = resolve_time_zone(tz)
        return calculate_daylight_hours(latitude, longitude, date or date_type.today(), zone)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/time-context", response_model=TimeContextData)
def time_context(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    date: Optional[date_type] = Query(None, description="Defaults to today"),
    max_temp: Optional[float] = Query(None, description="Peak temperature of the day (°C)"),
    query: Optional[str] = Query(None, description="Free-text hint, e.g. 'after work'"),
    tz: Optional[str] = Query(None, description="IANA time zone; defaults to solar time"),
):
    """Recommended climbing window for the day's time context."""
    day = date or date_type.today()
    try:
        hours = calculate_daylight_hours(latitude, longitude, day, resolve_time_zone(tz))
        context = detect_time_context(max_temp, latitude, day.month, query)
        return get_time_context_data(hours, context, max_temp)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

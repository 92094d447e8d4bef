"""
Pydantic models for climbing conditions input/output.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cragcast.config import RockType, FrictionRating
from cragcast.models.daylight import TimeContextData


class RockProfile(BaseModel):
    """Static friction thresholds for one rock type."""

    model_config = ConfigDict(frozen=True)

    rock_type: RockType
    optimal_temp: tuple[float, float]      # °C (min, max)
    optimal_humidity: tuple[float, float]  # % (min, max)
    max_humidity: float                    # %
    drying_hours: float                    # nominal hours to dry after rain


class WeatherSample(BaseModel):
    """A single weather reading: the current observation or one forecast hour."""

    time: Optional[datetime] = None  # required for hourly entries
    temp_c: float
    humidity: float = Field(gt=0, le=100)  # % relative humidity
    wind_kph: float = Field(0.0, ge=0)
    precip_mm: float = Field(0.0, ge=0)
    weather_code: Optional[int] = None  # WMO interpretation code


class WeatherForecast(BaseModel):
    """Current conditions plus an optional hourly series."""

    current: WeatherSample
    hourly: Optional[list[WeatherSample]] = None


class FrictionAssessment(BaseModel):
    """Raw output of the friction scorer for one sample."""

    score: float  # clamped to [1, 5], not rounded
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    is_dry: bool
    dew_point_spread: float
    drying_time_hours: Optional[float] = None


class HourlyCondition(BaseModel):
    """Friction forecast for one hour."""

    time: datetime
    temp_c: float
    humidity: float
    wind_kph: float
    precip_mm: float
    weather_code: Optional[int] = None
    weather_description: Optional[str] = None

    friction_score: int  # 1-5
    rating: FrictionRating
    is_optimal: bool
    is_dry: bool
    warnings: list[str] = Field(default_factory=list)


class OptimalWindow(BaseModel):
    """A run of consecutive optimal hours within one calendar day."""

    start_time: datetime
    end_time: datetime  # end of the last included hour
    avg_friction_score: float
    rating: FrictionRating
    hour_count: int


class PrecipitationContext(BaseModel):
    """Precipitation totals (mm) around the evaluation instant."""

    last_24h: float
    last_48h: float
    next_24h: float


class ConditionsInput(BaseModel):
    """Input for a full conditions computation."""

    forecast: WeatherForecast
    rock_type: str = RockType.UNKNOWN.value  # unrecognized names use the "unknown" profile
    recent_precip_mm: float = Field(0.0, ge=0)  # antecedent rainfall, caller-computed
    include_night_hours: bool = False

    # Daylight-aware features
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    max_daily_temp: Optional[float] = None
    query: Optional[str] = None  # free-text hint ("early start", "after work", ...)
    tz: Optional[str] = None  # IANA zone, e.g. "Europe/Vienna"; defaults to solar time

    drying_multiplier: float = Field(1.0, gt=0)  # extra drying penalty scaling (shade, aspect)

    # Evaluation instant; defaults to the current time
    now: Optional[datetime] = None


class ConditionsResult(BaseModel):
    """Result of a conditions computation."""

    friction_rating: int  # rounded 1-5
    rating: FrictionRating
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    is_dry: bool
    drying_time_hours: Optional[int] = None
    dew_point_spread: float

    hourly_conditions: Optional[list[HourlyCondition]] = None
    optimal_windows: Optional[list[OptimalWindow]] = None
    precipitation_context: Optional[PrecipitationContext] = None
    optimal_time: Optional[datetime] = None
    time_context: Optional[TimeContextData] = None


class DewPointOutput(BaseModel):
    """Dew point and condensation margin for one reading."""

    temp_c: float
    humidity: float
    dew_point_c: float
    dew_point_spread: float

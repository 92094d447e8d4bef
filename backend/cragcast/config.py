"""
Cragcast configuration and constants.
"""

from enum import Enum
from typing import Optional


class RockType(str, Enum):
    GRANITE = "granite"
    SANDSTONE = "sandstone"
    LIMESTONE = "limestone"
    BASALT = "basalt"
    GNEISS = "gneiss"
    QUARTZITE = "quartzite"
    UNKNOWN = "unknown"


class FrictionRating(str, Enum):
    NOPE = "Nope"
    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    GREAT = "Great"


class ClimbingTimeContext(str, Enum):
    NORMAL = "normal"            # Daylight window, nudged by peak temperature
    ALPINE_START = "alpine"      # Early start to beat the heat
    WINTER_SHORT = "winter"      # Short winter days, 9am-4pm at most
    DAWN_PATROL = "dawn"         # Morning emphasis
    EVENING_SESSION = "evening"  # Summer after-work sessions


# Friction score scale
NEUTRAL_SCORE = 3.0
MIN_SCORE = 1.0
MAX_SCORE = 5.0

# Score floor for each rating, checked top-down (first match wins)
RATING_THRESHOLDS: list[tuple[float, FrictionRating]] = [
    (4.5, FrictionRating.GREAT),
    (3.5, FrictionRating.GOOD),
    (2.5, FrictionRating.FAIR),
    (1.5, FrictionRating.POOR),
]

# Hours at or above this integer score are "optimal"
OPTIMAL_SCORE = 4
MIN_WINDOW_HOURS = 2

# Cap applied while rock is actively getting rained on
WET_SCORE_CAP = 1.5

# Recent precipitation (mm) from which the rock is treated as damp
RECENT_PRECIP_THRESHOLD_MM = 1.0

# Hourly filtering
NEAR_TERM_HOURS = 3
FALLBACK_HOURS = 12
ANTECEDENT_PRECIP_HOURS = 24

# Practical climbing day bounds (local hour of day)
CLIMBING_START_FLOOR = 5
CLIMBING_END_CEILING = 21

# Free-text hints that steer the time context (case-insensitive)
ALPINE_HINT_PATTERN = r"early|dawn|sunrise|alpine start"
EVENING_HINT_PATTERN = r"evening|sunset|after work"
MORNING_HINT_PATTERN = r"morning|first light"

WINTER_MONTHS = (11, 12, 1)
EVENING_MONTHS = (6, 7, 8, 9)
WINTER_MIN_ABS_LATITUDE = 40.0
ALPINE_MAX_TEMP = 30.0

# Identifiers returned to the caller for translation
CONTEXT_NOTES: dict[ClimbingTimeContext, Optional[str]] = {
    ClimbingTimeContext.ALPINE_START: "earlyStartRecommended",
    ClimbingTimeContext.WINTER_SHORT: "limitedDaylight",
    ClimbingTimeContext.DAWN_PATROL: "morningConditionsBest",
    ClimbingTimeContext.EVENING_SESSION: "eveningSession",
    ClimbingTimeContext.NORMAL: None,
}

# CORS — allow local frontend dev servers
CORS_ORIGINS = [
    "http://localhost:5173",  # Vite default
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]

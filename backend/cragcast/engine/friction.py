"""
Friction scoring engine.

Scores one weather sample on a 1-5 friction scale for a given rock type.
Starts from a neutral 3 and applies additive adjustments:

  Temperature   in optimal band +1.5, too warm −1.5, colder than band +1.0
  Dew point     spread ≤1 −2, ≤2 −1.5, ≤3 −0.8, >5 +0.5
  Humidity      in optimal band +0.5, above max (dew point OK) −0.5,
                dry air on granite/gneiss +0.3
  Wetness       raining now caps the score at 1.5; recent rain subtracts
                the drying penalty (0-2)
  Wind          >40 km/h −0.5, >25 km/h −0.3

The final score is clamped to [1, 5]. `rating_for_score` is the single
score → label mapping used for hours, windows and the headline verdict.
"""

from cragcast.config import (
    FrictionRating,
    RockType,
    RATING_THRESHOLDS,
    NEUTRAL_SCORE,
    MIN_SCORE,
    MAX_SCORE,
    WET_SCORE_CAP,
    RECENT_PRECIP_THRESHOLD_MM,
)
from cragcast.engine.dew_point import calculate_dew_point_spread
from cragcast.engine.drying import calculate_drying_penalty, estimate_drying_hours
from cragcast.engine.rock_profiles import (
    ROCK_PROFILES,
    FAST_DRYING_ROCKS,
    resolve_rock_type,
)
from cragcast.engine.utils import clamp, round_half_up
from cragcast.models.conditions import FrictionAssessment, WeatherSample


def rating_for_score(score: float) -> FrictionRating:
    """Map a friction score (rounded or not) to its rating label."""
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return FrictionRating.NOPE


def round_friction_score(score: float) -> int:
    """Integer friction score in [1, 5]."""
    return int(clamp(round_half_up(score), MIN_SCORE, MAX_SCORE))


def _num(value: float) -> str:
    """Render a reading the way it appears in messages: 8 not 8.0."""
    return f"{value:g}"


def score_friction(
    sample: WeatherSample,
    rock_type: RockType = RockType.UNKNOWN,
    recent_precip_mm: float = 0.0,
    drying_multiplier: float = 1.0,
) -> FrictionAssessment:
    """
    Score friction for one weather sample.

    Args:
        sample: Current observation or one forecast hour
        rock_type: Rock type; unrecognized types use the 'unknown' profile
        recent_precip_mm: Antecedent rainfall before this sample (mm). Rain
            during the sample itself is read from `sample.precip_mm`.
        drying_multiplier: Extra scaling for the drying penalty

    Returns:
        FrictionAssessment with the clamped (unrounded) score, reasons,
        warnings, dryness flag, dew point spread and drying time estimate.
    """
    rock = resolve_rock_type(rock_type)
    profile = ROCK_PROFILES[rock]
    temp_min, temp_max = profile.optimal_temp
    humidity_min, humidity_max = profile.optimal_humidity

    temp_c = sample.temp_c
    humidity = sample.humidity
    wind_kph = sample.wind_kph

    score = NEUTRAL_SCORE
    reasons: list[str] = []
    warnings: list[str] = []

    # --- Temperature ---
    if temp_min <= temp_c <= temp_max:
        score += 1.5
        reasons.append(f"Perfect temperature ({_num(temp_c)}°C)")
    elif temp_c > temp_max:
        score -= 1.5
        warnings.append(f"Too warm for {rock.value} ({_num(temp_c)}°C)")
        reasons.append("Temperature too high - fingers may slip")
    else:
        # Cold helps friction on every rock type, even below the band
        score += 1.0
        reasons.append(f"Cold temperatures aid friction ({_num(temp_c)}°C)")

    # --- Dew point spread (condensation) ---
    spread = calculate_dew_point_spread(temp_c, humidity)
    if spread <= 1:
        score -= 2.0
        warnings.append(f"Very high condensation risk (dew point spread {_num(spread)}°C)")
    elif spread <= 2:
        score -= 1.5
        warnings.append(f"High condensation risk (dew point spread {_num(spread)}°C)")
    elif spread <= 3:
        score -= 0.8
        reasons.append(f"Some condensation risk (dew point spread {_num(spread)}°C)")
    elif spread > 5:
        score += 0.5
        reasons.append("Low condensation risk")

    # --- Humidity (secondary to dew point) ---
    if humidity_min <= humidity <= humidity_max:
        score += 0.5
        reasons.append(f"Ideal humidity ({_num(humidity)}%)")
    elif humidity > profile.max_humidity and spread > 3:
        score -= 0.5
        warnings.append(f"High humidity ({_num(humidity)}%) - rock can be slippery")
    elif humidity < humidity_min and rock in FAST_DRYING_ROCKS:
        score += 0.3
        reasons.append(f"Low humidity aids friction on {rock.value}")

    # --- Wetness ---
    currently_wet = sample.precip_mm > 0
    recently_wet = recent_precip_mm >= RECENT_PRECIP_THRESHOLD_MM
    drying_time_hours = None

    if currently_wet:
        score = min(score, WET_SCORE_CAP)
        drying_time_hours = estimate_drying_hours(rock, temp_c, humidity, currently_wet=True)
        if rock == RockType.SANDSTONE:
            warnings.append(
                "Rock is currently wet - dangerous to climb (sandstone becomes weak when wet)"
            )
        else:
            warnings.append("Rock is currently wet - slippery conditions")
    elif recently_wet:
        score -= calculate_drying_penalty(
            recent_precip_mm, rock, temp_c, humidity, wind_kph, drying_multiplier
        )
        drying_time_hours = estimate_drying_hours(rock, temp_c, humidity, currently_wet=False)
        warnings.append(
            f"Recent precipitation ({recent_precip_mm:.1f}mm) - "
            f"will dry in ~{round_half_up(drying_time_hours)}h"
        )

    # --- Wind ---
    if wind_kph > 40:
        score -= 0.5
        warnings.append(f"Very high winds ({_num(wind_kph)} km/h) - danger of being blown off")
    elif wind_kph > 25:
        score -= 0.3
        warnings.append(f"High wind ({_num(wind_kph)} km/h)")

    return FrictionAssessment(
        score=clamp(score, MIN_SCORE, MAX_SCORE),
        reasons=reasons,
        warnings=warnings,
        is_dry=not currently_wet and not recently_wet,
        dew_point_spread=spread,
        drying_time_hours=drying_time_hours,
    )

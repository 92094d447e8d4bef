"""
Tests for the conditions engine: headline verdict, hourly forecast,
windows, precipitation context and time context combined.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from cragcast.config import ClimbingTimeContext, FrictionRating, RockType
from cragcast.engine.conditions import (
    compute_conditions,
    compute_conditions_from_input,
    find_optimal_time,
)
from cragcast.models.conditions import ConditionsInput, WeatherForecast, WeatherSample


START = datetime(2025, 5, 10, 8, 0)
NOW = datetime(2025, 5, 10, 7, 0)

# Limestone readings with known hourly scores
GREAT5 = dict(temp_c=10.0, humidity=50.0)  # 5.5 → 5
GOOD4 = dict(temp_c=20.0, humidity=85.0)   # 3.7 → 4
POOR2 = dict(temp_c=30.0, humidity=40.0)   # 2.0 → 2


def reading(temp_c=10.0, humidity=50.0, wind_kph=5.0, precip_mm=0.0, time=None):
    return WeatherSample(time=time, temp_c=temp_c, humidity=humidity, wind_kph=wind_kph, precip_mm=precip_mm)


def forecast(current, readings=None, start=START):
    hourly = None
    if readings is not None:
        hourly = [reading(time=start + timedelta(hours=i), **r) for i, r in enumerate(readings)]
    return WeatherForecast(current=current, hourly=hourly)


# ---------------------------------------------------------------------------
# Headline verdict
# ---------------------------------------------------------------------------

class TestHeadline:
    def test_great_granite(self):
        result = compute_conditions(forecast(reading(8.0, 35.0)), RockType.GRANITE, now=NOW)
        assert result.friction_rating == 5
        assert result.rating == FrictionRating.GREAT
        assert result.is_dry is True
        assert result.drying_time_hours is None
        assert result.dew_point_spread == 14.5
        assert "Perfect temperature (8°C)" in result.reasons

    def test_raining_on_sandstone(self):
        result = compute_conditions(
            forecast(reading(12.0, 90.0, precip_mm=2.0)), RockType.SANDSTONE, now=NOW
        )
        assert result.friction_rating == 2
        assert result.rating == FrictionRating.POOR
        assert result.is_dry is False
        assert result.drying_time_hours == 36
        assert "Will be ready to climb in ~36 hours" in result.reasons

    def test_recent_rain_drying_time_rounded(self):
        result = compute_conditions(
            forecast(reading(10.0, 50.0)), RockType.GRANITE, recent_precip_mm=3.0, now=NOW
        )
        assert result.drying_time_hours == 2
        assert result.friction_rating == 5
        assert "Will be ready to climb in ~2 hours" in result.reasons

    def test_no_series_leaves_hourly_fields_empty(self):
        result = compute_conditions(forecast(reading()), RockType.GRANITE, now=NOW)
        assert result.hourly_conditions is None
        assert result.optimal_windows is None
        assert result.precipitation_context is None
        assert result.optimal_time is None
        assert result.time_context is None

    def test_empty_series_treated_as_absent(self):
        result = compute_conditions(forecast(reading(), []), RockType.GRANITE, now=NOW)
        assert result.hourly_conditions is None
        assert result.optimal_windows is None

    def test_unknown_rock_name_falls_back(self):
        fc = forecast(reading(14.0, 62.0))
        assert compute_conditions(fc, "schist", now=NOW) == compute_conditions(fc, RockType.UNKNOWN, now=NOW)

    def test_rock_name_case_insensitive(self):
        fc = forecast(reading(14.0, 62.0))
        assert compute_conditions(fc, "Granite", now=NOW) == compute_conditions(fc, RockType.GRANITE, now=NOW)

    def test_defaults_to_current_time(self):
        result = compute_conditions(forecast(reading()))
        assert 1 <= result.friction_rating <= 5


# ---------------------------------------------------------------------------
# Hourly forecast, windows and optimal time
# ---------------------------------------------------------------------------

class TestHourly:
    def setup_method(self):
        fc = forecast(reading(**GREAT5), [GREAT5, GREAT5, GOOD4, POOR2, GREAT5, GOOD4])
        self.result = compute_conditions(
            fc, RockType.LIMESTONE, include_night_hours=True, now=NOW
        )

    def test_hourly_scores(self):
        assert [h.friction_score for h in self.result.hourly_conditions] == [5, 5, 4, 2, 5, 4]

    def test_windows(self):
        first, second = self.result.optimal_windows
        assert first.start_time == START
        assert first.end_time == START + timedelta(hours=3)
        assert first.avg_friction_score == 4.7
        assert first.rating == FrictionRating.GREAT
        assert second.start_time == START + timedelta(hours=4)
        assert second.hour_count == 2
        assert second.avg_friction_score == 4.5

    def test_optimal_time_is_first_best_hour(self):
        assert self.result.optimal_time == START

    def test_precipitation_context(self):
        ctx = self.result.precipitation_context
        assert (ctx.last_24h, ctx.last_48h, ctx.next_24h) == (0.0, 0.0, 0.0)

    def test_optimal_time_requires_optimal_score(self):
        fc = forecast(reading(**POOR2), [POOR2, POOR2, GOOD4])
        result = compute_conditions(fc, RockType.LIMESTONE, include_night_hours=True, now=NOW)
        assert result.optimal_time == START + timedelta(hours=2)

        fc = forecast(reading(**POOR2), [POOR2, POOR2])
        result = compute_conditions(fc, RockType.LIMESTONE, include_night_hours=True, now=NOW)
        assert result.optimal_time is None
        assert result.optimal_windows == []

    def test_find_optimal_time_empty(self):
        assert find_optimal_time([]) is None

    def test_idempotent(self):
        fc = forecast(reading(**GREAT5), [GREAT5, GOOD4, POOR2])
        first = compute_conditions(fc, RockType.LIMESTONE, now=NOW, latitude=46.0, longitude=8.0)
        second = compute_conditions(fc, RockType.LIMESTONE, now=NOW, latitude=46.0, longitude=8.0)
        assert first == second

    def test_rain_in_series_feeds_following_hours(self):
        fc = forecast(reading(**GREAT5), [dict(GREAT5, precip_mm=5.0), GREAT5])
        result = compute_conditions(fc, RockType.LIMESTONE, include_night_hours=True, now=NOW)
        wet, drying = result.hourly_conditions
        assert wet.friction_score == 2
        assert drying.friction_score == 5
        assert drying.is_dry is False
        assert result.precipitation_context.next_24h == 5.0


# ---------------------------------------------------------------------------
# Time context
# ---------------------------------------------------------------------------

class TestTimeContext:
    EQUINOX_NOON = datetime(2025, 3, 20, 12, 0)

    def test_normal_context_at_equator(self):
        result = compute_conditions(
            forecast(reading(15.0, 50.0)), RockType.GRANITE,
            latitude=0.0, longitude=0.0, now=self.EQUINOX_NOON,
        )
        ctx = result.time_context
        assert ctx.context == ClimbingTimeContext.NORMAL
        assert (ctx.climbing_start_hour, ctx.climbing_end_hour) == (6, 18)
        assert ctx.sunrise_iso == "2025-03-20T06:00:00.000Z"
        assert ctx.total_daylight_hours == 12.0
        assert ctx.context_note is None

    def test_hot_day_alpine_start(self):
        result = compute_conditions(
            forecast(reading(15.0, 50.0)), RockType.GRANITE,
            latitude=0.0, longitude=0.0, max_daily_temp=32.0, now=self.EQUINOX_NOON,
        )
        ctx = result.time_context
        assert ctx.context == ClimbingTimeContext.ALPINE_START
        assert (ctx.climbing_start_hour, ctx.climbing_end_hour) == (4, 16)
        assert ctx.context_note == "earlyStartRecommended"

    def test_max_temp_derived_from_series(self):
        """Today's hourly peak of 31°C triggers an alpine start."""
        fc = forecast(
            reading(15.0, 50.0),
            [dict(temp_c=t, humidity=40.0) for t in (18.0, 25.0, 31.0, 28.0)],
            start=datetime(2025, 3, 20, 10, 0),
        )
        result = compute_conditions(fc, RockType.GRANITE, latitude=0.0, longitude=0.0, now=self.EQUINOX_NOON)
        assert result.time_context.context == ClimbingTimeContext.ALPINE_START
        # The same context drives the hourly filter: window 4-16 plus ±3h of now
        assert [h.time.hour for h in result.hourly_conditions] == [10, 11, 12, 13]

    def test_winter_query_ignored_in_high_latitude_winter(self):
        result = compute_conditions(
            forecast(reading(2.0, 60.0)), RockType.GNEISS,
            latitude=47.0, longitude=11.0, query="morning", now=datetime(2025, 12, 15, 9, 0),
        )
        assert result.time_context.context == ClimbingTimeContext.WINTER_SHORT
        assert result.time_context.context_note == "limitedDaylight"

    def test_location_required(self):
        result = compute_conditions(forecast(reading()), latitude=47.0, now=NOW)
        assert result.time_context is None


# ---------------------------------------------------------------------------
# Location time zone and filtered series
# ---------------------------------------------------------------------------

JST = timezone(timedelta(hours=9))


class TestLocationTimeZone:
    def test_aware_now_with_naive_series_read_in_location_zone(self):
        """Tokyo wall-clock series, rain at 10:00, now 12:00 JST: the rain is past."""
        fc = forecast(
            reading(**GREAT5),
            [dict(GREAT5, precip_mm=5.0), GREAT5, GREAT5, GREAT5],
            start=datetime(2025, 5, 10, 10, 0),
        )
        result = compute_conditions(
            fc, RockType.LIMESTONE, include_night_hours=True, tz=JST,
            now=datetime(2025, 5, 10, 12, 0, tzinfo=JST),
        )
        ctx = result.precipitation_context
        assert ctx.last_24h == 5.0
        assert ctx.next_24h == 0.0

    def test_aware_utc_series_filtered_in_local_hours(self):
        """A Tokyo day stamped in UTC keeps 06:00-18:00 JST as one window."""
        day_start = datetime(2025, 3, 20, 0, 0, tzinfo=JST).astimezone(timezone.utc)
        fc = forecast(reading(10.0, 50.0), [dict(temp_c=10.0, humidity=50.0)] * 24, start=day_start)
        result = compute_conditions(
            fc, RockType.GRANITE, latitude=35.7, longitude=139.7, tz=JST,
            now=datetime(2025, 3, 20, 12, 0, tzinfo=JST),
        )
        assert [h.time.astimezone(JST).hour for h in result.hourly_conditions] == list(range(6, 19))

        (window,) = result.optimal_windows
        assert window.start_time == datetime(2025, 3, 20, 6, 0, tzinfo=JST)
        assert window.hour_count == 13
        assert window.end_time - window.start_time == timedelta(hours=13)

    def test_windows_do_not_bridge_filtered_hours(self):
        """Near-term hours 0-4 and the 6-18 window stay separate."""
        fc = forecast(
            reading(10.0, 50.0), [dict(temp_c=10.0, humidity=50.0)] * 24,
            start=datetime(2025, 3, 20, 0, 0),
        )
        result = compute_conditions(
            fc, RockType.GRANITE, latitude=0.0, longitude=0.0,
            now=datetime(2025, 3, 20, 1, 0),
        )
        windows = result.optimal_windows
        assert [(w.start_time.hour, w.hour_count) for w in windows] == [(0, 5), (6, 13)]
        for w in windows:
            assert w.end_time - w.start_time == timedelta(hours=w.hour_count)


# ---------------------------------------------------------------------------
# Request model entry point
# ---------------------------------------------------------------------------

class TestFromInput:
    def test_matches_keyword_call(self):
        data = ConditionsInput(
            forecast=forecast(reading(**GREAT5), [GREAT5, GOOD4]),
            rock_type="limestone",
            recent_precip_mm=1.2,
            include_night_hours=True,
            now=NOW,
        )
        expected = compute_conditions(
            data.forecast, RockType.LIMESTONE, recent_precip_mm=1.2,
            include_night_hours=True, now=NOW,
        )
        assert compute_conditions_from_input(data) == expected

    def test_missing_hourly_timestamp_raises(self):
        data = ConditionsInput(
            forecast=WeatherForecast(current=reading(), hourly=[reading()]),
            now=NOW,
        )
        with pytest.raises(ValueError):
            compute_conditions_from_input(data)

    def test_time_zone_and_drying_multiplier_passed_through(self):
        fc = forecast(reading(10.0, 50.0), [GREAT5] * 3)
        data = ConditionsInput(
            forecast=fc,
            rock_type="granite",
            recent_precip_mm=3.0,
            tz="Asia/Tokyo",
            drying_multiplier=1.5,
            latitude=35.7,
            longitude=139.7,
            now=NOW,
        )
        expected = compute_conditions(
            fc, RockType.GRANITE, recent_precip_mm=3.0, latitude=35.7, longitude=139.7,
            now=NOW, tz=ZoneInfo("Asia/Tokyo"), drying_multiplier=1.5,
        )
        assert compute_conditions_from_input(data) == expected

    def test_unknown_time_zone_raises(self):
        data = ConditionsInput(forecast=forecast(reading()), tz="Mars/Olympus_Mons", now=NOW)
        with pytest.raises(ValueError, match="Unknown time zone"):
            compute_conditions_from_input(data)

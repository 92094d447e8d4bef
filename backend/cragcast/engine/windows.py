"""
Optimal climbing windows.

A window is a run of at least MIN_WINDOW_HOURS consecutive hours scoring
OPTIMAL_SCORE or better. Runs are cut wherever the series skips an hour
(e.g. night hours filtered out) and at local calendar-day boundaries, so a
window never spans midnight.
"""

from datetime import timedelta, tzinfo
from typing import Optional

from cragcast.config import OPTIMAL_SCORE, MIN_WINDOW_HOURS
from cragcast.engine.friction import rating_for_score
from cragcast.engine.utils import round_tenth, to_local
from cragcast.models.conditions import HourlyCondition, OptimalWindow

_ONE_HOUR = timedelta(hours=1)


def _close_window(run: list[HourlyCondition], windows: list[OptimalWindow]) -> None:
    if len(run) < MIN_WINDOW_HOURS:
        return
    avg_score = round_tenth(sum(h.friction_score for h in run) / len(run))
    windows.append(OptimalWindow(
        start_time=run[0].time,
        end_time=run[-1].time + _ONE_HOUR,
        avg_friction_score=avg_score,
        rating=rating_for_score(avg_score),
        hour_count=len(run),
    ))


def find_optimal_windows(
    conditions: list[HourlyCondition],
    zone: Optional[tzinfo] = None,
) -> list[OptimalWindow]:
    """
    Merge consecutive optimal hours into same-day windows, in order.

    Args:
        conditions: Hourly forecast in chronological order
        zone: Location time zone deciding where a day ends for aware
            timestamps; naive timestamps are used as-is
    """
    windows: list[OptimalWindow] = []
    run: list[HourlyCondition] = []

    for hour in conditions:
        if hour.friction_score < OPTIMAL_SCORE:
            _close_window(run, windows)
            run = []
            continue

        if run:
            previous = run[-1]
            contiguous = hour.time - previous.time == _ONE_HOUR
            same_day = to_local(hour.time, zone).date() == to_local(previous.time, zone).date()
            if not (contiguous and same_day):
                _close_window(run, windows)
                run = []
        run.append(hour)

    _close_window(run, windows)
    return windows

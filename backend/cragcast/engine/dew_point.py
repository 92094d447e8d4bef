"""
Dew point and dew point spread (condensation risk on the rock surface).

Magnus-Tetens approximation:
    α  = a·T / (b + T) + ln(RH / 100)
    Td = b·α / (a − α)
with a = 17.27, b = 237.7 °C. Valid roughly for 0-60 °C and 1-100 % RH,
which covers any climbable day.
"""

import math

from cragcast.engine.utils import round_tenth

_MAGNUS_A = 17.27
_MAGNUS_B = 237.7  # °C


def calculate_dew_point(temp_c: float, humidity: float) -> float:
    """Dew point (°C) for air temperature (°C) and relative humidity (%)."""
    if humidity <= 0:
        raise ValueError("Relative humidity must be greater than 0")

    alpha = (_MAGNUS_A * temp_c) / (_MAGNUS_B + temp_c) + math.log(humidity / 100.0)
    return (_MAGNUS_B * alpha) / (_MAGNUS_A - alpha)


def calculate_dew_point_spread(temp_c: float, humidity: float) -> float:
    """
    Temperature minus dew point, rounded to 0.1 °C.

    The smaller the spread, the closer the air is to saturation and the more
    likely the rock is to feel damp.
    """
    return round_tenth(temp_c - calculate_dew_point(temp_c, humidity))

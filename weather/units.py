"""Numeric helpers shared by the weather providers."""

import math
from typing import Optional

COMPASS_DIRECTIONS = [
    'N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW',
]

SECTOR_WIDTH = 360 / len(COMPASS_DIRECTIONS)  # 22.5°


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a display would: 2.5 -> 3, -2.5 -> -2.

    Python's round() uses banker's rounding, which makes 0.5 readings
    flicker between neighbours on screen.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def ratio_to_percent(ratio: Optional[float]) -> int:
    """Convert a 0-1 ratio to a 0-100 integer percentage."""
    if ratio is None:
        return 0
    return clamp_percent(ratio * 100)


def clamp_percent(value: Optional[float]) -> int:
    if value is None:
        return 0
    return max(0, min(100, round_int(value)))


def normalize_bearing(bearing: Optional[float]) -> int:
    """Whole degrees in 0-359."""
    if bearing is None:
        return 0
    return round_int(bearing) % 360


def bearing_to_direction(bearing: Optional[float]) -> str:
    """Convert a wind bearing in degrees to a 16-point compass direction.

    Sectors are 22.5° wide and centred on each point, so 11.25° already
    counts as NNE and 359° wraps back to N.
    """
    if bearing is None:
        return COMPASS_DIRECTIONS[0]
    index = math.floor(bearing / SECTOR_WIDTH + 0.5) % len(COMPASS_DIRECTIONS)
    return COMPASS_DIRECTIONS[index]

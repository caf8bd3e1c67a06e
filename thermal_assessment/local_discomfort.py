"""
Local thermal discomfort (ISO 7730:2025 §6).

Draught rate, vertical air temperature difference, floor temperature and
radiant asymmetry, each mapped onto the comfort categories A-D.
"""

from collections.abc import Iterable

from .models import ComfortCategory, FloorTemperatureVerdict
from .tables import (
    DR_CATEGORY_LIMITS,
    DRAUGHT_THRESHOLD_VELOCITY,
    FLOOR_TEMPERATURE_COMFORT_RANGE,
    FLOOR_TEMPERATURE_RANGE,
    RADIANT_ASYMMETRY_LIMITS,
    VERTICAL_GRADIENT_LIMITS,
)

_CATEGORIES = (ComfortCategory.A, ComfortCategory.B, ComfortCategory.C)


def _categorize(value: float, limits: tuple[float, float, float],
                inclusive: bool) -> ComfortCategory:
    for category, limit in zip(_CATEGORIES, limits):
        if value < limit or (inclusive and value == limit):
            return category
    return ComfortCategory.D


def compute_dr(ta: float, va: float, tu: float) -> float:
    """
    Draught rate DR [%] (ISO 7730:2025 equation 6).

    Valid for ta 20-26 °C, va 0.05-0.5 m/s and Tu 0-70 %.

    Args:
        ta: Local air temperature [°C]
        va: Local mean air velocity [m/s]
        tu: Turbulence intensity [%]
    """
    if va <= DRAUGHT_THRESHOLD_VELOCITY:
        return 0.0
    return (34.0 - ta) * (va - DRAUGHT_THRESHOLD_VELOCITY) ** 0.62 * (0.37 * va * tu + 3.14)


def get_dr_category(dr: float) -> ComfortCategory:
    return _categorize(dr, DR_CATEGORY_LIMITS, inclusive=True)


def get_vertical_gradient_category(diff: float) -> ComfortCategory:
    """Category of the head-to-ankle air temperature difference [K]."""
    return _categorize(diff, VERTICAL_GRADIENT_LIMITS, inclusive=False)


def get_floor_temperature_verdict(
        t_floor: float) -> tuple[FloorTemperatureVerdict, ComfortCategory]:
    """Verdict and category for a (mean) floor temperature [°C]."""
    low, high = FLOOR_TEMPERATURE_RANGE
    if t_floor < low:
        return FloorTemperatureVerdict.LOW, ComfortCategory.D
    if t_floor > high:
        return FloorTemperatureVerdict.HIGH, ComfortCategory.D
    comfort_low, comfort_high = FLOOR_TEMPERATURE_COMFORT_RANGE
    if comfort_low <= t_floor <= comfort_high:
        return FloorTemperatureVerdict.OK, ComfortCategory.A
    return FloorTemperatureVerdict.OK, ComfortCategory.B


def get_radiant_asymmetry_category(kind: str, asymmetry: float) -> ComfortCategory:
    """
    Category for a radiant temperature asymmetry [K].

    Args:
        kind: One of "warm_ceiling", "cold_wall" or "warm_window"
        asymmetry: Radiant temperature asymmetry Δt_pr [K]

    Raises:
        KeyError: If kind is not a known asymmetry source
    """
    return _categorize(asymmetry, RADIANT_ASYMMETRY_LIMITS[kind], inclusive=False)


def worst_category(categories: Iterable[ComfortCategory | None]) -> ComfortCategory | None:
    """Least favourable category, ignoring missing ones."""
    present = [c for c in categories if c is not None]
    if not present:
        return None
    return max(present, key=lambda c: c.rank)

"""Psychrometric helpers shared by the comfort and stress models."""

import math

from .tables import KELVIN_OFFSET


def vapour_pressure(ta: float, rh: float) -> float:
    """
    Partial water vapour pressure p_a [Pa] (Tetens approximation).

    Args:
        ta: Air temperature [°C]
        rh: Relative humidity [%]
    """
    p_sat = 610.8 * math.exp((17.27 * ta) / (ta + 237.3))
    return (rh / 100.0) * p_sat


def mean_radiant_from_globe(tg: float, ta: float, va: float) -> float:
    """
    Mean radiant temperature [°C] from a standard black globe (ISO 7726).

    Valid for the ø 150 mm globe with emissivity 0.95 under forced convection.

    Args:
        tg: Globe temperature [°C]
        ta: Air temperature [°C]
        va: Air velocity [m/s]
    """
    va_eff = max(va, 0.001)
    tg_k4 = (tg + KELVIN_OFFSET) ** 4
    convective = 2.5e8 * va_eff ** 0.6 * (tg - ta)
    # Radicand floored at zero so extreme inputs cannot take a negative root.
    # A floor of 1e10 would clamp every result below about 43 °C (316 K).
    return max(tg_k4 + convective, 0.0) ** 0.25 - KELVIN_OFFSET

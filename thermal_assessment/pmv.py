"""
Fanger PMV/PPD comfort model (ISO 7730:2025).

The clothing surface temperature is found by a bounded fixed-point iteration;
PMV then follows from the heat balance of equation (1) and PPD from equation (2).
"""

import logging
import math

from .models import ComfortCategory, VerdictColor
from .tables import (
    CLO_TO_M2KW,
    KELVIN_OFFSET,
    PMV_CATEGORY_LIMITS,
    PMV_MAX_ITERATIONS,
    PMV_TOLERANCE,
    RESTING_HEAT_LOAD,
)

_LOGGER = logging.getLogger(__name__)

# Radiative exchange coefficient: emissivity × effective radiation area × σ
RADIATION_COEFFICIENT = 3.96e-8

PMV_CATEGORY_LABELS = {
    ComfortCategory.A: "Category A - High comfort level (|PMV| <= 0.5)",
    ComfortCategory.B: "Category B - Normal comfort level (|PMV| <= 0.7)",
    ComfortCategory.C: "Category C - Acceptable comfort level (|PMV| <= 1.0)",
    ComfortCategory.D: "Category D - Outside the comfort range (|PMV| > 1.0)",
}

PMV_CATEGORY_COLORS = {
    ComfortCategory.A: VerdictColor.EMERALD,
    ComfortCategory.B: VerdictColor.AMBER,
    ComfortCategory.C: VerdictColor.ORANGE,
    ComfortCategory.D: VerdictColor.RED,
}


def clothing_area_factor(icl_si: float) -> float:
    """Clothing area factor f_cl for insulation in m²·K/W."""
    if icl_si <= 0.078:
        return 1.0 + 1.29 * icl_si
    return 1.05 + 0.645 * icl_si


def convective_coefficient(tcl: float, ta: float, var: float) -> float:
    """Dominant of natural and forced convection h_c [W/(m²·K)]."""
    h_natural = 2.38 * abs(tcl - ta) ** 0.25
    h_forced = 12.1 * math.sqrt(max(var, 0.001))
    return max(h_natural, h_forced)


def _radiation_coefficient(tcl: float, tr: float) -> float:
    # Secant of the fourth-power law: h_r·(tcl - tr) == 3.96e-8·(Tcl⁴ - Tr⁴)
    tcl_k = tcl + KELVIN_OFFSET
    tr_k = tr + KELVIN_OFFSET
    return RADIATION_COEFFICIENT * (tcl_k ** 2 + tr_k ** 2) * (tcl_k + tr_k)


def solve_clothing_temperature(heat_load: float, icl_si: float, fcl: float,
                               ta: float, tr: float, var: float) -> float:
    """
    Solve the clothing surface temperature t_cl [°C].

    Successive substitution on
        t_cl = 35.7 - 0.028·(M-W) - I_cl·f_cl·[h_r·(t_cl-t_r) + h_c·(t_cl-t_a)]
    with h_r and h_c taken from the previous iterate. Stops when two iterates
    differ by less than PMV_TOLERANCE or after PMV_MAX_ITERATIONS steps.
    """
    tcl = ta + 0.5 * (35.5 - ta)
    skin_term = 35.7 - 0.028 * heat_load

    for _ in range(PMV_MAX_ITERATIONS):
        hc = convective_coefficient(tcl, ta, var)
        hr = _radiation_coefficient(tcl, tr)
        num = skin_term + (hr * tr + hc * ta) * icl_si * fcl
        den = 1.0 + icl_si * fcl * (hr + hc)
        tcl_new = num / den
        if abs(tcl_new - tcl) < PMV_TOLERANCE:
            return tcl_new
        tcl = tcl_new

    _LOGGER.warning("Clothing temperature did not converge within %d iterations "
                    "(ta=%.1f, tr=%.1f, var=%.2f)", PMV_MAX_ITERATIONS, ta, tr, var)
    return tcl


def compute_pmv(m: float, w: float, icl: float, ta: float, tr: float,
                var: float, pa: float) -> float:
    """
    Calculate the Predicted Mean Vote (ISO 7730:2025 equation 1).

    Args:
        m: Metabolic rate [W/m²]
        w: External mechanical work [W/m²] (usually 0)
        icl: Clothing insulation [clo]
        ta: Air temperature [°C]
        tr: Mean radiant temperature [°C]
        var: Relative air velocity [m/s]
        pa: Partial water vapour pressure [Pa]

    Returns:
        PMV on the seven-point sensation scale. Values beyond ±3 are returned
        as computed.
    """
    icl_si = icl * CLO_TO_M2KW
    fcl = clothing_area_factor(icl_si)
    hl = m - w

    tcl = solve_clothing_temperature(hl, icl_si, fcl, ta, tr, var)
    hc = convective_coefficient(tcl, ta, var)

    radiation = RADIATION_COEFFICIENT * fcl * (
        (tcl + KELVIN_OFFSET) ** 4 - (tr + KELVIN_OFFSET) ** 4)
    convection = fcl * hc * (tcl - ta)

    load = (hl
            - 3.05e-3 * (5733.0 - 6.99 * hl - pa)            # skin diffusion
            - 0.42 * (hl - RESTING_HEAT_LOAD)                # sweat regulation
            - 1.7e-5 * m * (5867.0 - pa)                     # latent respiration
            - 0.0014 * m * (34.0 - ta)                       # dry respiration
            - radiation
            - convection)

    return (0.303 * math.exp(-0.036 * m) + 0.028) * load


def compute_ppd(pmv: float) -> float:
    """Predicted Percentage Dissatisfied [%] (ISO 7730:2025 equation 2)."""
    return 100.0 - 95.0 * math.exp(-0.03353 * pmv ** 4 - 0.2179 * pmv ** 2)


def get_pmv_category(pmv: float) -> ComfortCategory:
    """Comfort category per ISO 7730:2025 Table 1."""
    magnitude = abs(pmv)
    limit_a, limit_b, limit_c = PMV_CATEGORY_LIMITS
    if magnitude <= limit_a:
        return ComfortCategory.A
    if magnitude <= limit_b:
        return ComfortCategory.B
    if magnitude <= limit_c:
        return ComfortCategory.C
    return ComfortCategory.D

"""
Required clothing insulation IREQ (ISO 11079:2007, simplified analytical form).

For the detailed calculation see the iterative method of ISO 11079:2007 Annex A.
"""

from dataclasses import dataclass

from .models import IREQVerdict, VerdictColor
from .tables import (
    CLO_TO_M2KW,
    IREQ_CRITICAL_DLIM,
    IREQ_MIN_DENOMINATOR,
    IREQ_UNBOUNDED,
    RESTING_HEAT_LOAD,
)

IREQ_VERDICT_LABELS = {
    IREQVerdict.COMFORTABLE: "Comfortable - clothing sufficient for thermal neutrality",
    IREQVerdict.COOL: "Cold stress - clothing insufficient for thermal neutrality",
    IREQVerdict.DANGER: "Dangerous - clothing insufficient for thermal balance",
}

IREQ_VERDICT_COLORS = {
    IREQVerdict.COMFORTABLE: VerdictColor.EMERALD,
    IREQVerdict.COOL: VerdictColor.AMBER,
    IREQVerdict.DANGER: VerdictColor.RED,
}


@dataclass(frozen=True)
class IREQResult:
    ireq_neutral: float  # clo
    ireq_min: float      # clo


def _required_insulation(t_skin: float, to: float, net_load: float) -> float:
    denominator = CLO_TO_M2KW * net_load
    if denominator <= IREQ_MIN_DENOMINATOR:
        return IREQ_UNBOUNDED
    return (t_skin - to) / denominator


def compute_ireq(ta: float, tr: float, va: float, pa: float,
                 m: float, w: float) -> IREQResult:
    """
    Calculate IREQneutral and IREQmin.

    Args:
        ta: Air temperature [°C]
        tr: Mean radiant temperature [°C]
        va: Air velocity [m/s]
        pa: Partial water vapour pressure [Pa]
        m: Metabolic rate [W/m²]
        w: External mechanical work [W/m²]

    Returns:
        IREQResult in clo. A vanishing net heat load yields IREQ_UNBOUNDED.
        Both values are floored at 0 and IREQmin never exceeds IREQneutral.
    """
    heat_load = m - w
    activity = max(heat_load - RESTING_HEAT_LOAD, 0.0)

    e_res = 0.0023 * m * (44.0 - pa / 100.0)
    c_res = 0.0014 * m * (34.0 - ta)

    tsk_neutral = 36.8 - 0.0558 * activity
    tsk_min = 35.7 - 0.0285 * activity

    hc = max(2.38 * abs(tsk_neutral - ta) ** 0.25, 3.5 + 5.2 * va)
    hr = 0.72  # cold environment approximation
    to = (hc * ta + hr * tr) / (hc + hr)

    e_sw_neutral = max(0.0, 0.42 * (heat_load - RESTING_HEAT_LOAD))

    ireq_neutral = _required_insulation(
        tsk_neutral, to, heat_load - e_sw_neutral - e_res - c_res)
    ireq_min = _required_insulation(tsk_min, to, heat_load - e_res - c_res)

    return IREQResult(
        ireq_neutral=max(0.0, ireq_neutral),
        ireq_min=max(0.0, min(ireq_min, ireq_neutral)),
    )


def compute_ireq_dlim(ireq_min: float, ireq_neutral: float, ireq_available: float,
                      work_hours_per_day: float) -> int | None:
    """
    Estimate the exposure time limit [min] for insufficient clothing (ISO 11079 §7.3).

    Returns None when the available insulation covers thermal neutrality,
    IREQ_CRITICAL_DLIM when it does not even reach IREQmin, and otherwise the
    working day scaled by where the available insulation lies between IREQmin
    and IREQneutral.
    """
    if ireq_available >= ireq_neutral:
        return None
    if ireq_available < ireq_min:
        return IREQ_CRITICAL_DLIM
    fraction = (ireq_available - ireq_min) / (ireq_neutral - ireq_min)
    return round(fraction * work_hours_per_day * 60.0)


def get_ireq_verdict(ireq_min: float, ireq_neutral: float,
                     ireq_available: float) -> IREQVerdict:
    if ireq_available >= ireq_neutral:
        return IREQVerdict.COMFORTABLE
    if ireq_available >= ireq_min:
        return IREQVerdict.COOL
    return IREQVerdict.DANGER

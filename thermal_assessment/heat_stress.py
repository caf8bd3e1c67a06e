"""
Heat stress assessment.

- WBGT index and reference value (ISO 7243:2017)
- Simplified Predicted Heat Strain estimate following the structure of
  ISO 7933:2023. This is a single-pass approximation, not the iterative model
  of ISO 7933 Annex C, and its output is not a certified PHS result.
"""

from dataclasses import dataclass
import math

from .models import PHSVerdict, VerdictColor, WBGTVerdict
from .tables import (
    CLO_TO_M2KW,
    PHS_BODY_MASS,
    PHS_BODY_SPECIFIC_HEAT,
    PHS_BODY_SURFACE,
    PHS_CORE_TEMPERATURE_RISE,
    PHS_DANGER_DLIM,
    PHS_MIN_DLIM,
    PHS_MIN_EVAPORATION,
    PHS_SWEAT_CONVERSION,
    PHS_SWEAT_EFFICIENCY,
    PHS_SWMAX_ACCLIMATIZED,
    PHS_SWMAX_UNACCLIMATIZED,
    WBGT_ACCEPTABLE_MARGIN,
    WBGT_CAUTION_MARGIN,
)

PHS_NOTE = ("Simplified estimate following the ISO 7933:2023 structure; "
            "not a certified PHS result. Use the full iterative model of "
            "ISO 7933 Annex C for a definitive exposure time limit.")

WBGT_VERDICT_LABELS = {
    WBGTVerdict.ACCEPTABLE: "Acceptable - WBGT below the reference value",
    WBGTVerdict.CAUTION: "Caution - WBGT close to the reference value",
    WBGTVerdict.EXCEEDS: "Reference value exceeded - PHS analysis required",
}

WBGT_VERDICT_COLORS = {
    WBGTVerdict.ACCEPTABLE: VerdictColor.EMERALD,
    WBGTVerdict.CAUTION: VerdictColor.AMBER,
    WBGTVerdict.EXCEEDS: VerdictColor.RED,
}

PHS_VERDICT_LABELS = {
    PHSVerdict.ACCEPTABLE: "Acceptable - sweat rate within capacity",
    PHSVerdict.LIMITED: "Limited exposure - exposure time limit applies",
    PHSVerdict.DANGER: "Dangerous - immediate risk of heat illness",
}

PHS_VERDICT_COLORS = {
    PHSVerdict.ACCEPTABLE: VerdictColor.EMERALD,
    PHSVerdict.LIMITED: VerdictColor.ORANGE,
    PHSVerdict.DANGER: VerdictColor.RED,
}


def compute_wbgt(t_nw: float, t_g: float, t_a: float, solar_load: bool) -> float:
    """
    Wet Bulb Globe Temperature [°C] (ISO 7243:2017 §6.2).

    Args:
        t_nw: Natural wet bulb temperature [°C]
        t_g: Globe temperature [°C]
        t_a: Air temperature [°C], only used under solar load
        solar_load: Whether the workplace is exposed to solar radiation
    """
    if solar_load:
        return 0.7 * t_nw + 0.2 * t_g + 0.1 * t_a
    return 0.7 * t_nw + 0.3 * t_g


def compute_wbgt_ref(m: float, acclimatized: bool) -> float:
    """
    Reference WBGT [°C] from the continuous formula of ISO 7243:2017 Table A.1.

    Args:
        m: Metabolic rate [W/m²]
        acclimatized: Whether the workers are acclimatized to heat
    """
    if acclimatized:
        return 56.7 - 11.5 * math.log10(m)
    return 59.9 - 14.1 * math.log10(m)


def get_wbgt_verdict(wbgt: float, wbgt_ref: float) -> WBGTVerdict:
    diff = wbgt - wbgt_ref
    if diff <= WBGT_ACCEPTABLE_MARGIN:
        return WBGTVerdict.ACCEPTABLE
    if diff <= WBGT_CAUTION_MARGIN:
        return WBGTVerdict.CAUTION
    return WBGTVerdict.EXCEEDS


@dataclass(frozen=True)
class PHSResult:
    """
    Outcome of the simplified PHS estimate.

    Attributes:
        sw_req: Required sweat rate [g/h]
        sw_max: Maximum sweat rate [g/h]
        dlim_min: Exposure time limit [min], None when no limit was derived
        verdict: Acceptable, limited or danger
    """
    sw_req: int
    sw_max: int
    dlim_min: int | None
    verdict: PHSVerdict


def compute_phs(ta: float, tr: float, va: float, pa: float, m: float, w: float,
                icl: float, acclimatized: bool) -> PHSResult:
    """
    Estimate required and maximum sweat rate and the exposure time limit.

    Args:
        ta: Air temperature [°C]
        tr: Mean radiant temperature [°C]
        va: Air velocity [m/s]
        pa: Partial water vapour pressure [Pa]
        m: Metabolic rate [W/m²]
        w: External mechanical work [W/m²]
        icl: Clothing insulation [clo]
        acclimatized: Acclimatized workers have a higher maximum sweat rate

    Returns:
        PHSResult. When the required sweat rate exceeds capacity but the
        environment could still evaporate the required heat, no time limit is
        derived and the verdict stays LIMITED.
    """
    heat_load = m - w
    sw_max = PHS_SWMAX_ACCLIMATIZED if acclimatized else PHS_SWMAX_UNACCLIMATIZED

    va_eff = max(va, 0.1)
    hc = max(3.0 * va_eff ** 0.5, 8.7 * va_eff ** 0.6)
    hr = 4.7

    to = (hc * ta + hr * tr) / (hc + hr)

    # Sensible exchange C + R through clothing
    fcl = 1.0 + 0.31 * icl
    dry_exchange = (35.0 - to) / (CLO_TO_M2KW * icl + fcl / (hc + hr))

    e_req = max(0.0, heat_load - dry_exchange)
    if e_req < PHS_MIN_EVAPORATION:
        return PHSResult(sw_req=0, sw_max=sw_max, dlim_min=None,
                         verdict=PHSVerdict.ACCEPTABLE)

    e_max = max(0.0, 16.7 * (hc / fcl) * (56.0 - pa / 100.0))

    sw_req = round(e_req / PHS_SWEAT_EFFICIENCY * PHS_SWEAT_CONVERSION * PHS_BODY_SURFACE)
    if sw_req <= sw_max:
        return PHSResult(sw_req=sw_req, sw_max=sw_max, dlim_min=None,
                         verdict=PHSVerdict.ACCEPTABLE)

    dlim_min = None
    if e_max < e_req:
        excess_heat = e_req - e_max
        heat_capacity = PHS_BODY_SPECIFIC_HEAT * PHS_BODY_MASS / PHS_BODY_SURFACE
        dlim_min = max(PHS_MIN_DLIM,
                       round(heat_capacity * PHS_CORE_TEMPERATURE_RISE / (excess_heat * 60.0)))

    if dlim_min is not None and dlim_min < PHS_DANGER_DLIM:
        verdict = PHSVerdict.DANGER
    else:
        verdict = PHSVerdict.LIMITED
    return PHSResult(sw_req=sw_req, sw_max=sw_max, dlim_min=dlim_min, verdict=verdict)

"""
Per-group aggregation of the thermal environment models.

Statistics are always computed fresh from the full set of groups and
measurements; nothing is cached between calls and groups never share state.
"""

from collections.abc import Callable, Sequence
import logging
from typing import Any

import numpy as np

from .cold_stress import (
    IREQ_VERDICT_COLORS,
    IREQ_VERDICT_LABELS,
    compute_ireq,
    compute_ireq_dlim,
    get_ireq_verdict,
)
from .heat_stress import (
    PHS_NOTE,
    PHS_VERDICT_COLORS,
    PHS_VERDICT_LABELS,
    WBGT_VERDICT_COLORS,
    WBGT_VERDICT_LABELS,
    compute_phs,
    compute_wbgt,
    compute_wbgt_ref,
    get_wbgt_verdict,
)
from .local_discomfort import (
    compute_dr,
    get_dr_category,
    get_floor_temperature_verdict,
    get_radiant_asymmetry_category,
    get_vertical_gradient_category,
    worst_category,
)
from .models import ExposureGroup, Measurement, Statistics
from .pmv import (
    PMV_CATEGORY_COLORS,
    PMV_CATEGORY_LABELS,
    compute_pmv,
    compute_ppd,
    get_pmv_category,
)
from .psychrometrics import mean_radiant_from_globe, vapour_pressure
from .tables import (
    DEFAULT_TURBULENCE_INTENSITY,
    DEFAULT_VAPOUR_PRESSURE,
    METABOLIC_CLASSES,
)

_LOGGER = logging.getLogger(__name__)

# Scenario results are partial Statistics field mappings, None when not computable
ScenarioResult = dict[str, Any] | None

# Radiant asymmetry sources: (measurement attribute, statistics field, limits key)
_RADIANT_ASYMMETRY_SOURCES = (
    ("radiant_asymmetry_warm_ceiling", "rad_asymmetry_warm_ceiling", "warm_ceiling"),
    ("radiant_asymmetry_cold_wall", "rad_asymmetry_cold_wall", "cold_wall"),
    ("radiant_asymmetry_warm_window", "rad_asymmetry_warm_window", "warm_window"),
)


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values))


def get_metabolic_rate(group: ExposureGroup) -> float:
    """Metabolic rate [W/m²]: the explicit override, else the class rate."""
    if group.metabolic_rate_override:
        return group.metabolic_rate_override
    return METABOLIC_CLASSES[group.metabolic_class].rate


def resolve_radiant_temperature(measurement: Measurement) -> float | None:
    """Measured mean radiant temperature, else derived from the globe reading."""
    if measurement.mean_radiant_temperature is not None:
        return measurement.mean_radiant_temperature
    if measurement.globe_temperature is not None:
        return mean_radiant_from_globe(measurement.globe_temperature,
                                       measurement.air_temperature,
                                       measurement.air_velocity)
    return None


def _mean_conditions(measurements: Sequence[Measurement]) -> tuple[float, float, float, float]:
    """Group means of (ta, tr, va, pa); tr falls back to ta per measurement."""
    ta = _mean([m.air_temperature for m in measurements])
    tr_values = []
    for m in measurements:
        tr = resolve_radiant_temperature(m)
        tr_values.append(m.air_temperature if tr is None else tr)
    tr = _mean(tr_values)
    va = _mean([m.air_velocity for m in measurements])

    rh_values = [m.relative_humidity for m in measurements if m.relative_humidity is not None]
    pa = vapour_pressure(ta, _mean(rh_values)) if rh_values else DEFAULT_VAPOUR_PRESSURE
    return ta, tr, va, pa


def _wbgt_values(measurements: Sequence[Measurement]) -> list[float]:
    return [
        compute_wbgt(m.natural_wet_bulb_temperature, m.globe_temperature,
                     m.air_temperature, m.solar_load)
        for m in measurements
        if m.natural_wet_bulb_temperature is not None and m.globe_temperature is not None
    ]


def _comfort_scenario(group: ExposureGroup, measurements: Sequence[Measurement],
                      m_rate: float) -> ScenarioResult:
    pmv_values = []
    for m in measurements:
        tr = resolve_radiant_temperature(m)
        if tr is None:
            _LOGGER.debug("Measurement %s has no radiant temperature, skipped for PMV", m.id)
            continue
        if m.relative_humidity is not None:
            pa = vapour_pressure(m.air_temperature, m.relative_humidity)
        else:
            pa = DEFAULT_VAPOUR_PRESSURE
        pmv_values.append(compute_pmv(m_rate, 0.0, group.clothing_insulation,
                                      m.air_temperature, tr, m.air_velocity, pa))

    if not pmv_values:
        return None

    # Comfort votes average linearly
    avg_pmv = _mean(pmv_values)
    category = get_pmv_category(avg_pmv)
    return {
        "pmv": round(avg_pmv, 2),
        "ppd": round(compute_ppd(avg_pmv)),
        "pmv_category": category,
        "pmv_category_label": PMV_CATEGORY_LABELS[category],
        "pmv_color": PMV_CATEGORY_COLORS[category],
        "pmv_per_measurement": [round(v, 2) for v in pmv_values],
    }


def _wbgt_scenario(group: ExposureGroup, measurements: Sequence[Measurement],
                   m_rate: float) -> ScenarioResult:
    wbgt_values = _wbgt_values(measurements)
    if not wbgt_values:
        return None

    avg_wbgt = _mean(wbgt_values)
    wbgt_ref = compute_wbgt_ref(m_rate, group.acclimatized)
    cav = group.clothing_adjustment or 0.0
    wbgt_eff = avg_wbgt + cav

    verdict = get_wbgt_verdict(wbgt_eff, wbgt_ref)
    return {
        "wbgt": round(avg_wbgt, 1),
        "wbgt_ref": round(wbgt_ref, 1),
        "wbgt_cav": cav,
        "wbgt_eff": round(wbgt_eff, 1),
        "wbgt_verdict": verdict,
        "wbgt_verdict_label": WBGT_VERDICT_LABELS[verdict],
        "wbgt_verdict_color": WBGT_VERDICT_COLORS[verdict],
    }


def _phs_scenario(group: ExposureGroup, measurements: Sequence[Measurement],
                  m_rate: float) -> ScenarioResult:
    # PHS follows up on a WBGT assessment
    if not _wbgt_values(measurements):
        return None

    ta, tr, va, pa = _mean_conditions(measurements)
    phs = compute_phs(ta, tr, va, pa, m_rate, 0.0,
                      group.clothing_insulation, group.acclimatized)
    return {
        "phs_sw_req": phs.sw_req,
        "phs_sw_max": phs.sw_max,
        "phs_dlim_min": phs.dlim_min,
        "phs_verdict": phs.verdict,
        "phs_verdict_label": PHS_VERDICT_LABELS[phs.verdict],
        "phs_verdict_color": PHS_VERDICT_COLORS[phs.verdict],
        "phs_note": PHS_NOTE,
    }


def _ireq_scenario(group: ExposureGroup, measurements: Sequence[Measurement],
                   m_rate: float) -> ScenarioResult:
    ta, tr, va, pa = _mean_conditions(measurements)
    ireq = compute_ireq(ta, tr, va, pa, m_rate, 0.0)
    available = group.clothing_insulation
    dlim = compute_ireq_dlim(ireq.ireq_min, ireq.ireq_neutral, available,
                             group.work_hours_per_day)
    verdict = get_ireq_verdict(ireq.ireq_min, ireq.ireq_neutral, available)
    return {
        "ireq_neutral": round(ireq.ireq_neutral, 2),
        "ireq_min": round(ireq.ireq_min, 2),
        "ireq_available": available,
        "ireq_dlim_min": dlim,
        "ireq_verdict": verdict,
        "ireq_verdict_label": IREQ_VERDICT_LABELS[verdict],
        "ireq_verdict_color": IREQ_VERDICT_COLORS[verdict],
    }


def _local_scenario(group: ExposureGroup, measurements: Sequence[Measurement],
                    m_rate: float) -> ScenarioResult:
    result: dict[str, Any] = {}

    tu = group.turbulence_intensity
    if tu is None:
        tu = DEFAULT_TURBULENCE_INTENSITY
    dr_values = [compute_dr(m.air_temperature, m.air_velocity, tu) for m in measurements]
    if dr_values:
        avg_dr = _mean(dr_values)
        result["dr"] = round(avg_dr)
        result["dr_category"] = get_dr_category(avg_dr)

    vertical_diffs = [
        m.head_air_temperature - m.ankle_air_temperature
        for m in measurements
        if m.head_air_temperature is not None and m.ankle_air_temperature is not None
    ]
    if vertical_diffs:
        avg_diff = _mean(vertical_diffs)
        result["vertical_temp_diff"] = round(avg_diff, 1)
        result["vertical_temp_category"] = get_vertical_gradient_category(avg_diff)

    floor_temps = [m.floor_temperature for m in measurements if m.floor_temperature is not None]
    if floor_temps:
        avg_floor = _mean(floor_temps)
        verdict, category = get_floor_temperature_verdict(avg_floor)
        result["floor_temperature"] = round(avg_floor, 1)
        result["floor_temp_verdict"] = verdict
        result["floor_temp_category"] = category

    for attribute, field_name, kind in _RADIANT_ASYMMETRY_SOURCES:
        readings = [getattr(m, attribute) for m in measurements
                    if getattr(m, attribute) is not None]
        if readings:
            avg_asymmetry = _mean(readings)
            result[field_name] = round(avg_asymmetry, 1)
            result[f"{field_name}_category"] = get_radiant_asymmetry_category(kind, avg_asymmetry)

    worst = worst_category(value for key, value in result.items() if key.endswith("category"))
    if worst is not None:
        result["local_worst_category"] = worst
    return result or None


_SCENARIOS: tuple[tuple[str, Callable[..., ScenarioResult]], ...] = (
    ("comfort", _comfort_scenario),
    ("wbgt", _wbgt_scenario),
    ("phs", _phs_scenario),
    ("ireq", _ireq_scenario),
    ("local", _local_scenario),
)


def _valid_measurements(group: ExposureGroup,
                        measurements: Sequence[Measurement]) -> list[Measurement]:
    return [m for m in measurements if m.group_id == group.id and not m.excluded]


def compute_group_statistics(group: ExposureGroup,
                             measurements: Sequence[Measurement]) -> Statistics:
    """
    Compute the statistics record for one exposure group.

    Only non-excluded measurements of the group are used. With none left the
    record carries just the group id and n = 0. Each scenario is computed
    independently; a scenario that lacks inputs, or fails numerically, leaves
    its fields unset without affecting the others.
    """
    valid = _valid_measurements(group, measurements)
    stats = Statistics(group_id=group.id, n=len(valid))
    if not valid:
        _LOGGER.debug("Group %s has no valid measurements", group.id)
        return stats

    m_rate = get_metabolic_rate(group)
    _LOGGER.debug("Group %s: %d valid measurements, M = %.1f W/m²",
                  group.id, len(valid), m_rate)

    for name, scenario in _SCENARIOS:
        try:
            fields = scenario(group, valid, m_rate)
        except (ArithmeticError, ValueError, TypeError):
            _LOGGER.exception("Error computing %s statistics for group %s", name, group.id)
            continue
        if fields is None:
            _LOGGER.debug("Group %s: %s not computable", group.id, name)
            continue
        for key, value in fields.items():
            setattr(stats, key, value)

    return stats


def compute_all_statistics(groups: Sequence[ExposureGroup],
                           measurements: Sequence[Measurement]) -> list[Statistics]:
    """
    Compute one Statistics record per exposure group, in input order.

    Args:
        groups: All exposure groups of the investigation
        measurements: All measurements, linked to groups by group_id

    Returns:
        List of Statistics, always freshly computed. A group that cannot be
        computed at all gets a record with only its id and n.
    """
    results = []
    for group in groups:
        try:
            results.append(compute_group_statistics(group, measurements))
        except (ArithmeticError, ValueError, TypeError, KeyError):
            _LOGGER.exception("Error computing statistics for group %s", group.id)
            results.append(Statistics(group_id=group.id,
                                      n=len(_valid_measurements(group, measurements))))
    return results

"""Data model for exposure groups, measurements and their computed statistics."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from .tables import MetabolicClass


class ComfortCategory(Enum):
    """ISO 7730 comfort category, shared by PMV and local discomfort."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def rank(self) -> int:
        return "ABCD".index(self.value)


class VerdictColor(Enum):
    EMERALD = "emerald"
    AMBER = "amber"
    ORANGE = "orange"
    RED = "red"


class WBGTVerdict(Enum):
    ACCEPTABLE = "acceptable"
    CAUTION = "caution"
    EXCEEDS = "exceeds"    # deeper analysis (PHS) mandatory


class PHSVerdict(Enum):
    ACCEPTABLE = "acceptable"
    LIMITED = "limited"
    DANGER = "danger"


class IREQVerdict(Enum):
    COMFORTABLE = "comfortable"
    COOL = "cool"
    DANGER = "danger"


class FloorTemperatureVerdict(Enum):
    OK = "ok"
    LOW = "low"
    HIGH = "high"


@dataclass(frozen=True)
class ExposureGroup:
    """
    A set of workers with comparable thermal exposure.

    Attributes:
        metabolic_rate_override: Explicit metabolic rate [W/m²]; takes precedence
                                 over the class rate when set to a non-zero value.
        clothing_insulation: Available clothing insulation [clo]
        turbulence_intensity: Turbulence intensity [%] for draught assessment
        clothing_adjustment: ISO 7243 clothing adjustment value (CAV) [°C]
    """
    id: str
    name: str
    metabolic_class: MetabolicClass
    clothing_insulation: float
    work_hours_per_day: float
    worker_count: int = 1
    metabolic_rate_override: float | None = None
    clothing_description: str | None = None
    acclimatized: bool = False
    turbulence_intensity: float | None = None
    clothing_adjustment: float | None = None
    description: str | None = None
    job_title: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Measurement:
    """One sampling round for one exposure group. Temperatures in °C."""
    id: str
    group_id: str
    air_temperature: float
    air_velocity: float                      # relative air velocity [m/s]
    relative_humidity: float | None = None   # [%]
    globe_temperature: float | None = None
    mean_radiant_temperature: float | None = None
    natural_wet_bulb_temperature: float | None = None
    solar_load: bool = False

    # Local thermal comfort (ISO 7730 §6)
    ankle_air_temperature: float | None = None
    head_air_temperature: float | None = None
    floor_temperature: float | None = None
    radiant_asymmetry_warm_ceiling: float | None = None  # K
    radiant_asymmetry_cold_wall: float | None = None
    radiant_asymmetry_warm_window: float | None = None

    excluded: bool = False
    exclusion_reason: str | None = None
    date: str | None = None
    start_time: str | None = None
    measurement_round: int | None = None
    notes: str | None = None


# Fields that are serialised as null once their scenario has been computed:
# a computed "no time limit" differs from "not computable".
_NULLABLE_WHEN_PRESENT = {
    "phs_dlim_min": "phs_verdict",
    "ireq_dlim_min": "ireq_verdict",
}


@dataclass
class Statistics:
    """
    Derived indices and verdicts for one exposure group.

    Every derived field is None when it could not be computed. Records are
    always recomputed from the current measurements, never cached.
    """
    group_id: str
    n: int

    # PMV/PPD (ISO 7730)
    pmv: float | None = None
    ppd: int | None = None
    pmv_category: ComfortCategory | None = None
    pmv_category_label: str | None = None
    pmv_color: VerdictColor | None = None
    pmv_per_measurement: list[float] | None = None

    # WBGT (ISO 7243)
    wbgt: float | None = None
    wbgt_eff: float | None = None
    wbgt_ref: float | None = None
    wbgt_cav: float | None = None
    wbgt_verdict: WBGTVerdict | None = None
    wbgt_verdict_label: str | None = None
    wbgt_verdict_color: VerdictColor | None = None

    # Simplified PHS (ISO 7933 structure)
    phs_sw_req: int | None = None
    phs_sw_max: int | None = None
    phs_dlim_min: int | None = None
    phs_verdict: PHSVerdict | None = None
    phs_verdict_label: str | None = None
    phs_verdict_color: VerdictColor | None = None
    phs_note: str | None = None

    # IREQ (ISO 11079)
    ireq_neutral: float | None = None
    ireq_min: float | None = None
    ireq_available: float | None = None
    ireq_dlim_min: int | None = None
    ireq_verdict: IREQVerdict | None = None
    ireq_verdict_label: str | None = None
    ireq_verdict_color: VerdictColor | None = None

    # Local discomfort (ISO 7730 §6)
    dr: int | None = None
    dr_category: ComfortCategory | None = None
    vertical_temp_diff: float | None = None
    vertical_temp_category: ComfortCategory | None = None
    floor_temperature: float | None = None
    floor_temp_verdict: FloorTemperatureVerdict | None = None
    floor_temp_category: ComfortCategory | None = None
    rad_asymmetry_warm_ceiling: float | None = None
    rad_asymmetry_warm_ceiling_category: ComfortCategory | None = None
    rad_asymmetry_cold_wall: float | None = None
    rad_asymmetry_cold_wall_category: ComfortCategory | None = None
    rad_asymmetry_warm_window: float | None = None
    rad_asymmetry_warm_window_category: ComfortCategory | None = None
    local_worst_category: ComfortCategory | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain values, leaving out every field that is absent."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                scenario_field = _NULLABLE_WHEN_PRESENT.get(f.name)
                if scenario_field is None or getattr(self, scenario_field) is None:
                    continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value
        return result


class SurveyRecommendation(Enum):
    COMFORT_MEASUREMENT = "comfort-measurement"   # PMV/PPD measurement advised
    HEAT_MEASUREMENT = "heat-measurement"         # WBGT measurement required
    COLD_MEASUREMENT = "cold-measurement"         # IREQ calculation advised
    FULL_INVESTIGATION = "full-investigation"
    NOT_REQUIRED = "not-required"
    OVERRIDDEN = "overridden"


@dataclass
class PresurveyResult:
    """Outcome of the pre-survey scoring."""
    recommendation: SurveyRecommendation
    effective_recommendation: SurveyRecommendation
    heat_score: float
    cold_score: float
    comfort_score: float
    signals: list[str] = field(default_factory=list)


class SurveyAnswer(Enum):
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Presurvey:
    """
    Answers to the pre-survey that precedes measurements.

    Attributes:
        responses: Answer per question id (QC1-QC15)
        estimated_temperature: Estimated workplace temperature [°C]
        recommendation_override: Manually chosen recommendation, replaces
                                 the computed one as the effective result
    """
    responses: dict[str, SurveyAnswer] = field(default_factory=dict)
    estimated_temperature: float | None = None
    complaints_reported: bool = False
    complaints_description: str | None = None
    recommendation_override: SurveyRecommendation | None = None

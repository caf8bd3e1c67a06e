"""
Thermal environment risk assessment engine.

Turns raw climate measurements per exposure group into comfort and heat/cold
stress indices and verdicts:

- PMV/PPD:  ISO 7730:2025
- WBGT:     ISO 7243:2017
- PHS:      ISO 7933:2023 (simplified estimate)
- IREQ:     ISO 11079:2007 (simplified)
- Local:    ISO 7730:2025 §6 (draught, vertical Δt, floor temperature, radiant asymmetry)
"""

from .aggregation import (
    compute_all_statistics,
    compute_group_statistics,
    get_metabolic_rate,
    resolve_radiant_temperature,
)
from .cold_stress import IREQResult, compute_ireq, compute_ireq_dlim, get_ireq_verdict
from .heat_stress import (
    PHSResult,
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
from .models import (
    ComfortCategory,
    ExposureGroup,
    FloorTemperatureVerdict,
    IREQVerdict,
    Measurement,
    PHSVerdict,
    Presurvey,
    PresurveyResult,
    Statistics,
    SurveyAnswer,
    SurveyRecommendation,
    VerdictColor,
    WBGTVerdict,
)
from .pmv import compute_pmv, compute_ppd, get_pmv_category
from .presurvey import score_presurvey
from .psychrometrics import mean_radiant_from_globe, vapour_pressure
from .schema import load_investigation
from .tables import CAV_VALUES, CLOTHING_PRESETS, METABOLIC_CLASSES, MetabolicClass

__all__ = [
    "CAV_VALUES",
    "CLOTHING_PRESETS",
    "METABOLIC_CLASSES",
    "ComfortCategory",
    "ExposureGroup",
    "FloorTemperatureVerdict",
    "IREQResult",
    "IREQVerdict",
    "Measurement",
    "MetabolicClass",
    "PHSResult",
    "PHSVerdict",
    "Presurvey",
    "PresurveyResult",
    "Statistics",
    "SurveyAnswer",
    "SurveyRecommendation",
    "VerdictColor",
    "WBGTVerdict",
    "compute_all_statistics",
    "compute_dr",
    "compute_group_statistics",
    "compute_ireq",
    "compute_ireq_dlim",
    "compute_phs",
    "compute_pmv",
    "compute_ppd",
    "compute_wbgt",
    "compute_wbgt_ref",
    "get_dr_category",
    "get_floor_temperature_verdict",
    "get_ireq_verdict",
    "get_metabolic_rate",
    "get_pmv_category",
    "get_radiant_asymmetry_category",
    "get_vertical_gradient_category",
    "get_wbgt_verdict",
    "load_investigation",
    "mean_radiant_from_globe",
    "resolve_radiant_temperature",
    "score_presurvey",
    "vapour_pressure",
    "worst_category",
]

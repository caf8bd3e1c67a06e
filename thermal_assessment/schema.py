"""
Input schemas for investigation documents.

Documents are JSON-like dicts with "groups", "measurements" and an optional
"pre_survey". Keys may be given in snake_case or in the camelCase / symbol
form used by the data entry wizard (bgId, t_a, v_ar, RH, ...).
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import voluptuous as vol

from .models import (
    ExposureGroup,
    Measurement,
    Presurvey,
    SurveyAnswer,
    SurveyRecommendation,
)
from .tables import MetabolicClass

_LOGGER = logging.getLogger(__name__)

GROUP_KEY_ALIASES = {
    "workerCount": "worker_count",
    "metabolicClass": "metabolic_class",
    "metabolicRateOverride": "metabolic_rate_override",
    "clothingInsulation": "clothing_insulation",
    "clothingDescription": "clothing_description",
    "workHoursPerDay": "work_hours_per_day",
    "turbulenceIntensity": "turbulence_intensity",
    "clothingAdjustment": "clothing_adjustment",
    "cav": "clothing_adjustment",
    "jobTitle": "job_title",
}

MEASUREMENT_KEY_ALIASES = {
    "bgId": "group_id",
    "t_a": "air_temperature",
    "t_g": "globe_temperature",
    "t_r": "mean_radiant_temperature",
    "t_nw": "natural_wet_bulb_temperature",
    "v_ar": "air_velocity",
    "RH": "relative_humidity",
    "solarLoad": "solar_load",
    "t_a_ankle": "ankle_air_temperature",
    "t_a_head": "head_air_temperature",
    "t_floor": "floor_temperature",
    "radAsymmetryWarmCeiling": "radiant_asymmetry_warm_ceiling",
    "radAsymmetryColdWall": "radiant_asymmetry_cold_wall",
    "radAsymmetryWarmWindow": "radiant_asymmetry_warm_window",
    "exclusionReason": "exclusion_reason",
    "startTime": "start_time",
    "measurementRound": "measurement_round",
}

PRESURVEY_KEY_ALIASES = {
    "estimatedTemp": "estimated_temperature",
    "complaintsReported": "complaints_reported",
    "complaintsDescription": "complaints_description",
    "recommendationOverride": "recommendation_override",
}


def _rename_keys(aliases: dict[str, str]) -> Callable[[Any], Any]:
    """Validator that maps aliased keys onto their snake_case names."""
    def rename(value: Any) -> Any:
        if not isinstance(value, dict):
            raise vol.Invalid("expected a mapping")
        return {aliases.get(key, key): item for key, item in value.items()}
    return rename


def _number(**bounds: float) -> Any:
    return vol.All(vol.Coerce(float), vol.Range(**bounds)) if bounds else vol.Coerce(float)


def _optional(validator: Any) -> Any:
    return vol.Any(None, validator)


_TEXT = _optional(vol.Coerce(str))

GROUP_SCHEMA = vol.All(_rename_keys(GROUP_KEY_ALIASES), vol.Schema(
    {
        vol.Required("id"): vol.Coerce(str),
        vol.Optional("name", default=""): vol.Coerce(str),
        vol.Optional("worker_count", default=1): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Required("metabolic_class"): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=4), vol.Coerce(MetabolicClass)),
        vol.Optional("metabolic_rate_override", default=None): _optional(_number(min=0)),
        vol.Required("clothing_insulation"): _number(min=0),
        vol.Optional("clothing_description", default=None): _TEXT,
        vol.Required("work_hours_per_day"): _number(min=0, max=24),
        vol.Optional("acclimatized", default=False): _optional(vol.Boolean()),
        vol.Optional("turbulence_intensity", default=None): _optional(_number(min=0, max=100)),
        vol.Optional("clothing_adjustment", default=None): _optional(_number()),
        vol.Optional("description", default=None): _TEXT,
        vol.Optional("job_title", default=None): _TEXT,
        vol.Optional("notes", default=None): _TEXT,
    },
    extra=vol.REMOVE_EXTRA,
))

MEASUREMENT_SCHEMA = vol.All(_rename_keys(MEASUREMENT_KEY_ALIASES), vol.Schema(
    {
        vol.Required("id"): vol.Coerce(str),
        vol.Required("group_id"): vol.Coerce(str),
        vol.Required("air_temperature"): _number(),
        vol.Required("air_velocity"): _number(min=0),
        vol.Optional("relative_humidity", default=None): _optional(_number(min=0, max=100)),
        vol.Optional("globe_temperature", default=None): _optional(_number()),
        vol.Optional("mean_radiant_temperature", default=None): _optional(_number()),
        vol.Optional("natural_wet_bulb_temperature", default=None): _optional(_number()),
        vol.Optional("solar_load", default=False): _optional(vol.Boolean()),
        vol.Optional("ankle_air_temperature", default=None): _optional(_number()),
        vol.Optional("head_air_temperature", default=None): _optional(_number()),
        vol.Optional("floor_temperature", default=None): _optional(_number()),
        vol.Optional("radiant_asymmetry_warm_ceiling", default=None): _optional(_number()),
        vol.Optional("radiant_asymmetry_cold_wall", default=None): _optional(_number()),
        vol.Optional("radiant_asymmetry_warm_window", default=None): _optional(_number()),
        vol.Optional("excluded", default=False): _optional(vol.Boolean()),
        vol.Optional("exclusion_reason", default=None): _TEXT,
        vol.Optional("date", default=None): _TEXT,
        vol.Optional("start_time", default=None): _TEXT,
        vol.Optional("measurement_round", default=None): _optional(vol.Coerce(int)),
        vol.Optional("notes", default=None): _TEXT,
    },
    extra=vol.REMOVE_EXTRA,
))

PRESURVEY_SCHEMA = vol.All(_rename_keys(PRESURVEY_KEY_ALIASES), vol.Schema(
    {
        # Answers arrive either bare ("yes") or wrapped ({"answer": "yes", "notes": ...})
        vol.Optional("responses", default=dict): {
            vol.Coerce(str): vol.Any(
                vol.Coerce(SurveyAnswer),
                vol.All(vol.Schema({vol.Optional("answer"): _optional(vol.Coerce(SurveyAnswer))},
                                   extra=vol.REMOVE_EXTRA),
                        lambda wrapped: wrapped.get("answer")),
                None,
            ),
        },
        vol.Optional("estimated_temperature", default=None): _optional(_number()),
        vol.Optional("complaints_reported", default=False): _optional(vol.Boolean()),
        vol.Optional("complaints_description", default=None): _TEXT,
        vol.Optional("recommendation_override", default=None): _optional(
            vol.Coerce(SurveyRecommendation)),
    },
    extra=vol.REMOVE_EXTRA,
))

INVESTIGATION_SCHEMA = vol.All(
    _rename_keys({"bgs": "groups", "preSurvey": "pre_survey"}),
    vol.Schema(
        {
            vol.Required("groups"): [GROUP_SCHEMA],
            vol.Optional("measurements", default=list): [MEASUREMENT_SCHEMA],
            vol.Optional("pre_survey", default=None): _optional(PRESURVEY_SCHEMA),
        },
        extra=vol.REMOVE_EXTRA,
    ),
)


def _format_error(error: vol.Invalid) -> str:
    path = ".".join(str(part) for part in error.path) or "<document>"
    return f"[{path}] {error.msg}"


def _validate(schema: Any, data: Any, what: str) -> Any:
    try:
        return schema(data)
    except vol.MultipleInvalid as err:
        error_msgs = [_format_error(e) for e in err.errors]
        raise ValueError(f"Invalid {what}:\n" + "\n".join(error_msgs)) from err
    except vol.Invalid as err:
        raise ValueError(f"Invalid {what}:\n{_format_error(err)}") from err


def _without_nones(values: dict[str, Any], *keys: str) -> dict[str, Any]:
    # Boolean flags given as null fall back to the dataclass default
    return {k: v for k, v in values.items() if not (k in keys and v is None)}


def _group_from(values: dict[str, Any]) -> ExposureGroup:
    return ExposureGroup(**_without_nones(values, "acclimatized"))


def _measurement_from(values: dict[str, Any]) -> Measurement:
    return Measurement(**_without_nones(values, "solar_load", "excluded"))


def _presurvey_from(values: dict[str, Any]) -> Presurvey:
    values = dict(values)
    values["responses"] = {k: v for k, v in values["responses"].items() if v is not None}
    return Presurvey(**_without_nones(values, "complaints_reported"))


def build_group(data: dict[str, Any]) -> ExposureGroup:
    """Validate one exposure group mapping and build the dataclass."""
    return _group_from(_validate(GROUP_SCHEMA, data, "exposure group"))


def build_measurement(data: dict[str, Any]) -> Measurement:
    """Validate one measurement mapping and build the dataclass."""
    return _measurement_from(_validate(MEASUREMENT_SCHEMA, data, "measurement"))


def build_presurvey(data: dict[str, Any]) -> Presurvey:
    return _presurvey_from(_validate(PRESURVEY_SCHEMA, data, "pre-survey"))


def load_investigation(
        document: dict[str, Any]) -> tuple[list[ExposureGroup], list[Measurement], Presurvey | None]:
    """
    Validate an investigation document and build its data model objects.

    Args:
        document: Mapping with "groups" (or "bgs"), "measurements" and an
                  optional "pre_survey" (or "preSurvey")

    Returns:
        Tuple of (groups, measurements, pre-survey or None)

    Raises:
        ValueError: If the document does not match the schema; the message
                    lists every invalid path
    """
    values = _validate(INVESTIGATION_SCHEMA, document, "investigation")

    groups = [_group_from(g) for g in values["groups"]]
    measurements = [_measurement_from(m) for m in values["measurements"]]
    presurvey = None
    if values["pre_survey"] is not None:
        presurvey = _presurvey_from(values["pre_survey"])

    group_ids = {g.id for g in groups}
    orphans = [m.id for m in measurements if m.group_id not in group_ids]
    if orphans:
        _LOGGER.warning("Measurements without a known exposure group are ignored: %s",
                        ", ".join(orphans))

    return groups, measurements, presurvey

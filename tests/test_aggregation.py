"""Tests for the per-group statistics orchestrator."""

import logging

import pytest

from thermal_assessment import (
    ComfortCategory,
    IREQVerdict,
    MetabolicClass,
    PHSVerdict,
    VerdictColor,
    WBGTVerdict,
    compute_all_statistics,
    compute_group_statistics,
    compute_pmv,
    get_metabolic_rate,
    mean_radiant_from_globe,
    resolve_radiant_temperature,
)
from thermal_assessment.pmv import PMV_CATEGORY_LABELS
from thermal_assessment.heat_stress import PHS_NOTE

from .factories import make_group, make_measurement


class TestMetabolicRate:

    def test_class_rate(self):
        assert get_metabolic_rate(make_group(metabolic_class=MetabolicClass.MODERATE)) == 300.0

    def test_override_wins(self):
        group = make_group(metabolic_class=MetabolicClass.MODERATE, metabolic_rate_override=250.0)
        assert get_metabolic_rate(group) == 250.0

    def test_zero_override_means_class_rate(self):
        group = make_group(metabolic_class=MetabolicClass.HIGH, metabolic_rate_override=0.0)
        assert get_metabolic_rate(group) == 415.0


class TestRadiantTemperature:

    def test_measured_value_preferred(self):
        m = make_measurement(mean_radiant_temperature=25.0, globe_temperature=30.0)
        assert resolve_radiant_temperature(m) == 25.0

    def test_derived_from_globe(self):
        m = make_measurement(mean_radiant_temperature=None, globe_temperature=30.0,
                             air_temperature=25.0, air_velocity=0.2)
        assert resolve_radiant_temperature(m) == mean_radiant_from_globe(30.0, 25.0, 0.2)

    def test_unknown(self):
        assert resolve_radiant_temperature(make_measurement(mean_radiant_temperature=None)) is None


class TestEmptyGroups:

    def test_no_measurements(self):
        stats = compute_group_statistics(make_group("g"), [])
        assert stats.n == 0
        assert stats.to_dict() == {"group_id": "g", "n": 0}

    def test_only_excluded_measurements(self):
        measurements = [make_measurement("m-1", excluded=True, exclusion_reason="door open"),
                        make_measurement("m-2", excluded=True)]
        stats = compute_group_statistics(make_group(), measurements)
        assert stats.to_dict() == {"group_id": "bg-1", "n": 0}

    def test_measurements_of_other_groups_ignored(self):
        stats = compute_group_statistics(make_group("a"), [make_measurement(group_id="b")])
        assert stats.n == 0


class TestComfortScenario:

    def test_heavy_work_in_warm_room(self):
        """
        Class 2, 0.5 clo, 28 °C, 0.1 m/s, 50 % RH.

        The ISO 7730 heat balance gives PMV of about +4.9 here, beyond the
        seven-point scale, so no upper bound is asserted.
        """
        group = make_group(metabolic_class=MetabolicClass.MODERATE, clothing_insulation=0.5)
        measurements = [make_measurement(f"m-{i}", air_temperature=28.0, mean_radiant_temperature=28.0,
                                         air_velocity=0.1, relative_humidity=50.0)
                        for i in range(3)]
        stats = compute_group_statistics(group, measurements)
        assert stats.n == 3
        assert stats.pmv > 0
        assert 5 <= stats.ppd <= 100
        assert stats.pmv_category in (ComfortCategory.B, ComfortCategory.C, ComfortCategory.D)
        assert stats.pmv_category_label == PMV_CATEGORY_LABELS[stats.pmv_category]
        assert stats.pmv_per_measurement == [stats.pmv] * 3

    def test_neutral_office(self):
        group = make_group(metabolic_class=MetabolicClass.RESTING, metabolic_rate_override=70.0,
                           clothing_insulation=1.0)
        stats = compute_group_statistics(group, [make_measurement()])
        assert abs(stats.pmv) <= 0.7
        assert stats.pmv_color in (VerdictColor.EMERALD, VerdictColor.AMBER)

    def test_average_over_measurements(self):
        measurements = [make_measurement("m-1", air_temperature=20.0, mean_radiant_temperature=20.0),
                        make_measurement("m-2", air_temperature=24.0, mean_radiant_temperature=24.0)]
        stats = compute_group_statistics(make_group(), measurements)
        first, second = stats.pmv_per_measurement
        assert first < second
        assert stats.pmv == pytest.approx((first + second) / 2, abs=0.01)

    def test_missing_humidity_uses_default_vapour_pressure(self):
        group = make_group()
        stats = compute_group_statistics(group, [make_measurement(relative_humidity=None)])
        expected = compute_pmv(180.0, 0.0, 0.5, 22.0, 22.0, 0.1, 1333.0)
        assert stats.pmv == round(expected, 2)

    def test_measurement_without_radiant_data_skipped(self):
        measurements = [make_measurement("m-1"),
                        make_measurement("m-2", mean_radiant_temperature=None)]
        stats = compute_group_statistics(make_group(), measurements)
        assert stats.n == 2
        assert len(stats.pmv_per_measurement) == 1

    def test_no_radiant_data_at_all(self):
        stats = compute_group_statistics(make_group(), [make_measurement(mean_radiant_temperature=None)])
        assert stats.pmv is None
        assert "pmv" not in stats.to_dict()
        assert stats.ireq_verdict is not None


class TestWBGTScenario:

    def _stats(self, t_nw, **group_overrides):
        group = make_group(metabolic_class=MetabolicClass.MODERATE, **group_overrides)
        measurement = make_measurement(air_temperature=25.0, globe_temperature=30.0,
                                       mean_radiant_temperature=None,
                                       natural_wet_bulb_temperature=t_nw)
        return compute_group_statistics(group, [measurement])

    def test_acceptable(self):
        stats = self._stats(18.0)
        assert stats.wbgt == 21.6
        assert stats.wbgt_ref == 25.0
        assert stats.wbgt_cav == 0.0
        assert stats.wbgt_eff == 21.6
        assert stats.wbgt_verdict == WBGTVerdict.ACCEPTABLE
        assert stats.wbgt_verdict_color == VerdictColor.EMERALD

    def test_exceeds(self):
        stats = self._stats(25.0)
        assert stats.wbgt == 26.5
        assert stats.wbgt_verdict == WBGTVerdict.EXCEEDS

    def test_clothing_adjustment_raises_effective_wbgt(self):
        stats = self._stats(18.0, clothing_adjustment=3.0)
        assert stats.wbgt == 21.6
        assert stats.wbgt_cav == 3.0
        assert stats.wbgt_eff == 24.6
        assert stats.wbgt_verdict == WBGTVerdict.CAUTION

    def test_phs_follows_wbgt(self):
        stats = self._stats(18.0)
        assert stats.phs_verdict in tuple(PHSVerdict)
        assert stats.phs_sw_max == 400
        assert stats.phs_note == PHS_NOTE

    def test_skipped_without_wet_bulb(self):
        stats = compute_group_statistics(make_group(), [make_measurement(globe_temperature=30.0)])
        data = stats.to_dict()
        assert "wbgt" not in data
        assert "wbgt_verdict" not in data
        assert "phs_verdict" not in data
        assert "phs_dlim_min" not in data
        assert stats.pmv is not None


class TestIREQScenario:

    def test_cold_store(self):
        group = make_group(metabolic_class=MetabolicClass.LOW, clothing_insulation=1.0)
        measurement = make_measurement(air_temperature=-10.0, mean_radiant_temperature=-10.0,
                                       air_velocity=0.5, relative_humidity=80.0)
        stats = compute_group_statistics(group, [measurement])
        assert stats.ireq_available == 1.0
        assert stats.ireq_min <= stats.ireq_neutral
        assert stats.ireq_verdict in (IREQVerdict.COOL, IREQVerdict.DANGER)
        assert stats.ireq_dlim_min is not None

    def test_no_limit_serialised_as_null(self):
        stats = compute_group_statistics(make_group(clothing_insulation=1.0), [make_measurement()])
        assert stats.ireq_verdict == IREQVerdict.COMFORTABLE
        data = stats.to_dict()
        assert "ireq_dlim_min" in data
        assert data["ireq_dlim_min"] is None
        assert data["ireq_verdict"] == "comfortable"


class TestLocalScenario:

    def test_draught_with_default_turbulence(self):
        measurement = make_measurement(air_temperature=22.0, air_velocity=0.3)
        stats = compute_group_statistics(make_group(), [measurement])
        assert stats.dr == 39
        assert stats.dr_category == ComfortCategory.D
        assert stats.local_worst_category == ComfortCategory.D

    def test_group_turbulence_used(self):
        measurement = make_measurement(air_temperature=22.0, air_velocity=0.3)
        stats = compute_group_statistics(make_group(turbulence_intensity=0.0), [measurement])
        assert stats.dr < 39

    def test_local_readings(self):
        measurements = [
            make_measurement("m-1", air_velocity=0.05, ankle_air_temperature=21.0,
                             head_air_temperature=23.5, floor_temperature=23.0,
                             radiant_asymmetry_cold_wall=12.0),
            make_measurement("m-2", air_velocity=0.05, ankle_air_temperature=21.0,
                             head_air_temperature=23.5, floor_temperature=25.0),
        ]
        stats = compute_group_statistics(make_group(), measurements)
        assert stats.dr == 0
        assert stats.dr_category == ComfortCategory.A
        assert stats.vertical_temp_diff == 2.5
        assert stats.vertical_temp_category == ComfortCategory.B
        assert stats.floor_temperature == 24.0
        assert stats.floor_temp_category == ComfortCategory.A
        assert stats.rad_asymmetry_cold_wall == 12.0
        assert stats.rad_asymmetry_cold_wall_category == ComfortCategory.B
        assert stats.rad_asymmetry_warm_ceiling is None
        assert stats.local_worst_category == ComfortCategory.B


class TestComputeAllStatistics:

    def test_order_and_isolation(self):
        groups = [make_group("b"), make_group("a"), make_group("c")]
        measurements = [make_measurement("m-1", group_id="a", air_temperature=20.0),
                        make_measurement("m-2", group_id="b", air_temperature=26.0)]
        stats = compute_all_statistics(groups, measurements)
        assert [s.group_id for s in stats] == ["b", "a", "c"]
        assert [s.n for s in stats] == [1, 1, 0]
        assert stats[0].pmv > stats[1].pmv
        assert stats[2].to_dict() == {"group_id": "c", "n": 0}

    def test_idempotent(self):
        groups = [make_group("a"), make_group("b", metabolic_class=MetabolicClass.HIGH)]
        measurements = [make_measurement("m-1", group_id="a"),
                        make_measurement("m-2", group_id="b", natural_wet_bulb_temperature=20.0,
                                         globe_temperature=30.0)]
        first = compute_all_statistics(groups, measurements)
        second = compute_all_statistics(groups, measurements)
        assert first == second
        assert [s.to_dict() for s in first] == [s.to_dict() for s in second]

    def test_failing_scenario_leaves_others(self, caplog):
        """A negative metabolic rate breaks the WBGT reference only."""
        group = make_group(metabolic_rate_override=-50.0)
        measurement = make_measurement(natural_wet_bulb_temperature=20.0, globe_temperature=30.0)
        with caplog.at_level(logging.ERROR):
            stats = compute_all_statistics([group], [measurement])[0]
        assert stats.wbgt is None
        assert stats.pmv is not None
        assert stats.ireq_verdict is not None
        assert "wbgt" in caplog.text

    def test_unknown_metabolic_class_does_not_stop_other_groups(self, caplog):
        groups = [make_group("good"), make_group("bad", metabolic_class=7)]
        measurements = [make_measurement("m-1", group_id="good"),
                        make_measurement("m-2", group_id="bad")]
        with caplog.at_level(logging.ERROR):
            good, bad = compute_all_statistics(groups, measurements)
        assert good.pmv is not None
        assert bad.to_dict() == {"group_id": "bad", "n": 1}
        assert "group bad" in caplog.text

    def test_missing_velocity_does_not_stop_other_groups(self, caplog):
        groups = [make_group("good"), make_group("bad")]
        measurements = [make_measurement("m-1", group_id="good"),
                        make_measurement("m-2", group_id="bad", air_velocity=None)]
        with caplog.at_level(logging.ERROR):
            good, bad = compute_all_statistics(groups, measurements)
        assert good.pmv is not None
        assert good.dr_category is not None
        assert bad.n == 1
        assert bad.pmv is None
        assert bad.dr is None

"""Tests for the PMV/PPD comfort model."""

import pytest
from pythermalcomfort.models import pmv_ppd_iso

from thermal_assessment import (
    ComfortCategory,
    compute_pmv,
    compute_ppd,
    get_pmv_category,
    vapour_pressure,
)
from thermal_assessment.pmv import clothing_area_factor, solve_clothing_temperature

MET = 58.15


class TestComputePMV:

    @pytest.mark.parametrize("tdb, tr, vr, rh, met, clo", [
        (22.0, 22.0, 0.1, 50.0, 1.2, 0.5),
        (26.0, 28.0, 0.2, 60.0, 1.4, 0.7),
        (18.0, 18.0, 0.15, 40.0, 1.6, 1.0),
        (27.0, 27.0, 0.1, 50.0, 1.1, 0.0),
    ])
    def test_matches_pythermalcomfort(self, tdb, tr, vr, rh, met, clo):
        """The in-house solver agrees with an independent ISO 7730 implementation."""
        reference = pmv_ppd_iso(tdb=tdb, tr=tr, vr=vr, rh=rh, met=met, clo=clo,
                                wme=0.0, limit_inputs=False)
        pmv = compute_pmv(met * MET, 0.0, clo, tdb, tr, vr, vapour_pressure(tdb, rh))
        assert pmv == pytest.approx(float(reference.pmv), abs=0.05)

    def test_warmer_environment_gives_higher_pmv(self):
        pa = vapour_pressure(22.0, 50.0)
        cool = compute_pmv(70.0, 0.0, 0.5, 20.0, 20.0, 0.1, pa)
        warm = compute_pmv(70.0, 0.0, 0.5, 26.0, 26.0, 0.1, pa)
        assert warm > cool

    def test_heavy_work_in_warm_climate_is_warm(self):
        """M = 300 W/m², 0.5 clo, 28 °C: far on the warm side of the scale."""
        pmv = compute_pmv(300.0, 0.0, 0.5, 28.0, 28.0, 0.1, vapour_pressure(28.0, 50.0))
        assert pmv > 1.0
        assert get_pmv_category(pmv) == ComfortCategory.D

    def test_high_insulation_converges(self, caplog):
        pmv = compute_pmv(70.0, 0.0, 3.0, -5.0, -5.0, 0.5, 300.0)
        assert pmv == pmv  # not NaN
        assert "did not converge" not in caplog.text


class TestClothingTemperature:

    def test_clothing_area_factor_branches(self):
        assert clothing_area_factor(0.0) == 1.0
        assert clothing_area_factor(0.078) == pytest.approx(1.0 + 1.29 * 0.078)
        assert clothing_area_factor(0.155) == pytest.approx(1.05 + 0.645 * 0.155)

    def test_clothing_temperature_between_air_and_skin(self):
        icl = 1.0 * 0.155
        tcl = solve_clothing_temperature(70.0, icl, clothing_area_factor(icl), 20.0, 20.0, 0.1)
        assert 20.0 < tcl < 35.7


class TestComputePPD:

    def test_minimum_at_neutral(self):
        assert compute_ppd(0.0) == pytest.approx(5.0)

    def test_symmetric(self):
        assert compute_ppd(1.2) == pytest.approx(compute_ppd(-1.2))

    def test_bounds(self):
        for pmv in (-3.0, -0.5, 0.5, 3.0, 5.0):
            assert 5.0 <= compute_ppd(pmv) <= 100.0

    def test_reference_values(self):
        """PMV ±0.5 gives about 10 % dissatisfied, ±1 about 26 %."""
        assert compute_ppd(0.5) == pytest.approx(10.2, abs=0.1)
        assert compute_ppd(1.0) == pytest.approx(26.1, abs=0.1)


class TestPMVCategory:

    @pytest.mark.parametrize("pmv, expected", [
        (0.0, ComfortCategory.A),
        (0.5, ComfortCategory.A),
        (0.51, ComfortCategory.B),
        (0.7, ComfortCategory.B),
        (0.71, ComfortCategory.C),
        (1.0, ComfortCategory.C),
        (1.01, ComfortCategory.D),
    ])
    def test_limits_are_inclusive(self, pmv, expected):
        assert get_pmv_category(pmv) == expected

    def test_sign_does_not_matter(self):
        for pmv in (0.3, 0.6, 0.9, 2.0):
            assert get_pmv_category(pmv) == get_pmv_category(-pmv)

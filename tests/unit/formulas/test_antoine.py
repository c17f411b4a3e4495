import math
import pytest
from thermal_lab.formulas.antoine import (AntoineCoefficients, solve_antoine_for_temperature,
                                          solve_antoine_for_pressure)
from thermal_lab.constants import UNITS

WATER = AntoineCoefficients(A=8.07131, B=1730.63, C=233.426, t_min=1, t_max=100)

def test_water_boils_at_100_at_sea_level():
    result = solve_antoine_for_temperature(101325, WATER)
    assert math.isclose(result.temperature, 100.0, abs_tol=0.05)
    assert not result.is_extrapolated
    assert result.verified_range == (1, 100)

@pytest.mark.parametrize("temperature", [10, 35.5, 60, 99])
def test_round_trip(temperature):
    pressure = solve_antoine_for_pressure(temperature, WATER)
    result = solve_antoine_for_temperature(pressure, WATER)
    assert math.isclose(result.temperature, temperature, abs_tol=0.5)

def test_pressure_is_monotonic():
    pressures = [solve_antoine_for_pressure(t, WATER) for t in range(0, 101, 10)]
    assert all(p2 > p1 for p1, p2 in zip(pressures, pressures[1:]))

def test_extrapolation_is_flagged_not_clamped():
    # 2 atm is above the verified range of the water coefficients
    result = solve_antoine_for_temperature(2 * 101325, WATER)
    assert result.is_extrapolated
    assert result.temperature > 100.5

def test_tolerance_band():
    pressure = solve_antoine_for_pressure(100.4, WATER)
    assert not solve_antoine_for_temperature(pressure, WATER).is_extrapolated

def test_open_verified_range():
    coeffs = AntoineCoefficients(A=8.07131, B=1730.63, C=233.426)
    result = solve_antoine_for_temperature(5 * 101325, coeffs)
    assert not result.is_extrapolated
    assert result.verified_range == (None, None)

def test_missing_coefficients():
    assert solve_antoine_for_temperature(101325, None) is None
    assert solve_antoine_for_pressure(20, AntoineCoefficients(A=0, B=1730.63, C=233.426)) is None

def test_singular_denominator():
    # log10(P_mmHg) == A
    pressure = 10 ** WATER.A * UNITS.mmHg
    assert solve_antoine_for_temperature(pressure, WATER) is None

@pytest.mark.parametrize("mmhg", [133.322387415, 133.3224])
def test_near_singular_pressure_has_no_solution(mmhg):
    # A slightly different mmHg conversion leaves a tiny denominator and a result below absolute zero
    pressure = 10 ** WATER.A * mmhg
    assert solve_antoine_for_temperature(pressure, WATER) is None

def test_from_dict():
    coeffs = AntoineCoefficients.from_dict({"A": 7.02447, "B": 1161.0, "C": 224.0, "TminC": -13, "TmaxC": 55})
    assert coeffs.t_min == -13 and coeffs.t_max == 55
    assert AntoineCoefficients.from_dict(None) is None

# tests/unit/components/test_boiling_point.py
import pytest, math
from dataclasses import replace
from thermal_lab import calculate_boiling_point, calculate_boiling_point_at_pressure, FluidProperties, OptionalValue
from thermal_lab.components.boiling_point import calculate_molality

def test_water_at_sea_level(water_props):
    result = calculate_boiling_point(0, water_props)
    assert result.method == "antoine"
    assert math.isclose(result.temperature, 100, abs_tol=0.01)
    assert result.is_extrapolated is False
    assert result.verified_range == (1, 100)
    assert result.elevation == 0

def test_water_at_altitude(water_props):
    # ~79.5 kPa at 2000 m
    result = calculate_boiling_point(2000, water_props)
    assert 93.0 < result.temperature < 94.0
    assert result.temperature < calculate_boiling_point(1000, water_props).temperature

def test_lapse_rate_fallback(water_no_antoine_props):
    result = calculate_boiling_point(1500, water_no_antoine_props)
    assert result.method == "lapse_rate"
    assert math.isclose(result.temperature, 95.0)
    assert result.verified_range == (None, None)

def test_custom_lapse_rate(water_no_antoine_props):
    props = replace(water_no_antoine_props, altitude_lapse_rate=OptionalValue.of(0.002))
    assert math.isclose(calculate_boiling_point(1000, props).temperature, 98.0)

def test_at_pressure_without_antoine(water_no_antoine_props):
    result = calculate_boiling_point_at_pressure(101325, water_no_antoine_props)
    assert math.isclose(result.temperature, 100.0)
    # Lower pressure maps to a higher ISA altitude
    assert calculate_boiling_point_at_pressure(80000, water_no_antoine_props).temperature < 100.0

def test_extrapolated_above_verified_range(water_props):
    result = calculate_boiling_point_at_pressure(2 * 101325, water_props)
    assert result.temperature > 115
    assert result.is_extrapolated

def test_invalid_pressure_is_sea_level(water_props):
    assert math.isclose(calculate_boiling_point_at_pressure(-5, water_props).temperature,
                        calculate_boiling_point(0, water_props).temperature)

def test_no_boiling_point():
    assert calculate_boiling_point(0, FluidProperties(substance_id='mystery', specific_heat=1.0)) is None
    assert calculate_boiling_point(0, None) is None

def test_saltwater_elevation(saltwater_props):
    molality = calculate_molality(saltwater_props, mass=1.0, residue_mass=0.1)
    assert math.isclose(molality, 0.1 * 1000 / 58.44 / 0.9)
    result = calculate_boiling_point(0, saltwater_props, mass=1.0, residue_mass=0.1)
    assert math.isclose(result.elevation, 1.85, abs_tol=0.02)
    assert math.isclose(result.temperature, result.base_boiling_point + result.elevation)

def test_elevation_grows_as_solution_concentrates(saltwater_props):
    diluted = calculate_boiling_point(0, saltwater_props, mass=1.0, residue_mass=0.1)
    concentrated = calculate_boiling_point(0, saltwater_props, mass=0.5, residue_mass=0.1)
    assert concentrated.temperature > diluted.temperature

def test_static_molality_wins(water_props):
    props = replace(water_props, van_hoff_factor=1.0, molality=OptionalValue.of(1.0))
    result = calculate_boiling_point(0, props, mass=1.0, residue_mass=0.5)
    assert math.isclose(result.elevation, 0.513, abs_tol=0.005)

def test_no_elevation_without_solute(water_props):
    assert calculate_boiling_point(0, water_props, mass=1.0, residue_mass=0.1).elevation == 0

def test_fixed_elevation_of_older_records(water_props):
    props = replace(water_props, boiling_point_elevation=OptionalValue.of(2.0))
    result = calculate_boiling_point(0, props, mass=1.0)
    assert result.elevation == 2.0
    assert math.isclose(result.temperature, result.base_boiling_point + 2.0)

def test_computed_elevation_wins_over_fixed_one(saltwater_props):
    props = replace(saltwater_props, boiling_point_elevation=OptionalValue.of(5.0))
    result = calculate_boiling_point(0, props, mass=1.0, residue_mass=0.1)
    assert math.isclose(result.elevation, 1.85, abs_tol=0.02)

def test_fixed_elevation_from_record():
    props = FluidProperties.from_dict({"id": "syrup", "specificHeat": 3.5, "boilingPointSeaLevel": 100,
                                       "heatOfVaporization": 2257, "boilingPointElevation": 3.0})
    assert calculate_boiling_point(0, props).elevation == 3.0

import math
from thermal_lab.formulas.mass_transfer import (air_kinematic_viscosity, calculate_schmidt_number,
                                                calculate_sherwood_number, calculate_mass_transfer_coefficient,
                                                calculate_evaporation_mass, calculate_evaporative_cooling,
                                                calculate_partial_pressure, estimate_surface_area)

def test_air_viscosity():
    assert math.isclose(air_kinematic_viscosity(273.15), 1.327e-5)
    assert math.isclose(air_kinematic_viscosity(293.15), 1.40e-5, rel_tol=0.02)

def test_schmidt_fallback():
    assert calculate_schmidt_number(1.5e-5, 0) == 1.0

def test_sherwood_regimes():
    assert calculate_sherwood_number(0) == 0.1
    assert math.isclose(calculate_sherwood_number(1e6), 0.54 * 1e6 ** 0.25)
    assert math.isclose(calculate_sherwood_number(1e8), 0.15 * 1e8 ** 0.333)

def test_mass_transfer_coefficient_acetone():
    result = calculate_mass_transfer_coefficient(20, 0.2, 1.04e-5, 58.08, 0.243)
    assert result.rayleigh > 1e7
    assert math.isclose(result.mass_transfer_coeff, result.sherwood * 1.04e-5 / 0.2)

def test_evaporation_never_negative():
    # Bulk partial pressure above saturation: no condensation
    assert calculate_evaporation_mass(0.004, 2000, 3000, 293.15, 0.0314, 0.018, 1.0) == 0
    assert calculate_evaporation_mass(0.004, 2000, 0, 293.15, 0.0314, 0.018, 1.0) > 0

def test_evaporative_cooling():
    assert math.isclose(calculate_evaporative_cooling(0.001, 1.0, 2257, 4.186), -2257 / 4186)
    assert calculate_evaporative_cooling(0.001, 0, 2257, 4.186) == 0

def test_helpers():
    assert math.isclose(calculate_partial_pressure({'H2O': 0.01}, 'H2O', 101325), 1013.25)
    assert calculate_partial_pressure({}, 'H2O', 101325) == 0
    assert math.isclose(estimate_surface_area(), math.pi * 0.01)

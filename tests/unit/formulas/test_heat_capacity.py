import math
import pytest
from thermal_lab.formulas.heat_capacity import (calculate_heat_energy, calculate_temp_change, calculate_heating_time,
                                                SPECIFIC_HEAT_VALUES)

def test_heat_energy_water():
    # 1 kg of water by 1°C
    assert math.isclose(calculate_heat_energy(1.0, 4.186, 1.0), 4186, abs_tol=1e-6)
    assert math.isclose(calculate_heat_energy(1.0, 4.186, 80.0), 334880, abs_tol=1e-3)

def test_heat_energy_is_linear():
    base = calculate_heat_energy(0.5, 4.186, 10)
    assert math.isclose(calculate_heat_energy(1.0, 4.186, 10), 2 * base)
    assert math.isclose(calculate_heat_energy(0.5, 4.186, 20), 2 * base)
    assert math.isclose(calculate_heat_energy(0.5, 4.186, -10), -base)

def test_temp_change_inverse():
    energy = calculate_heat_energy(2.0, 2.13, 15.0)
    assert math.isclose(calculate_temp_change(2.0, 2.13, energy), 15.0)

@pytest.mark.parametrize("mass, specific_heat", [(0, 4.186), (-1, 4.186), (1, 0), (1, -2), (float('nan'), 4.186), (1, None)])
def test_invalid_inputs_are_no_op(mass, specific_heat):
    assert calculate_temp_change(mass, specific_heat, 1000) == 0
    assert calculate_heat_energy(mass, specific_heat, 10) == 0

def test_heating_time():
    assert math.isclose(calculate_heating_time(1.0, 4.186, 20, 100, 1700), 334880 / 1700)
    assert calculate_heating_time(1.0, 4.186, 20, 100, 0) == math.inf

def test_reference_table():
    # Same energy heats copper about ten times more than water
    energy = 10000
    dT_water = calculate_temp_change(1.0, SPECIFIC_HEAT_VALUES['water'], energy)
    dT_copper = calculate_temp_change(1.0, SPECIFIC_HEAT_VALUES['copper'], energy)
    assert math.isclose(dT_copper / dT_water, 4.186 / 0.385)

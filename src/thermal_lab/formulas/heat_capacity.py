# src/thermal_lab/formulas/heat_capacity.py
"""
Sensible heat, Q = m·c·ΔT.

Specific heats are expressed in J/(g·°C), as substance records carry them, so masses
given in kg are converted to grams before use.
"""
import math
from thermal_lab.helpers import is_positive

SPECIFIC_HEAT_VALUES = {
    'water': 4.186,
    'ice': 2.09,
    'steam': 2.01,
    'ethanol': 2.44,
    'methanol': 2.53,
    'acetone': 2.13,
    'glycerol': 2.43,
    'ammonia_liquid': 4.70,
    'aluminum': 0.897,
    'copper': 0.385,
    'iron': 0.449,
    'air': 1.006,
}


def calculate_heat_energy(mass: float, specific_heat: float, temp_change: float) -> float:
    """
    Energy [J] needed to change the temperature of a mass by temp_change.

    Parameters
    ----------
    mass : float
        Mass [kg]
    specific_heat : float
        Specific heat capacity [J/(g·°C)]
    temp_change : float
        Temperature change [°C], negative for cooling

    Returns
    -------
    float
        Energy [J], positive if heat is added. Zero for invalid mass or specific heat
    """
    if not is_positive(mass) or not is_positive(specific_heat) or not math.isfinite(temp_change):
        return 0.0
    return mass * 1000 * specific_heat * temp_change


def calculate_temp_change(mass: float, specific_heat: float, energy: float) -> float:
    # ΔT = Q / (m·c)
    if not is_positive(mass) or not is_positive(specific_heat) or not math.isfinite(energy):
        return 0.0
    return energy / (mass * 1000 * specific_heat)


def calculate_heating_time(mass: float, specific_heat: float, temp_start: float, temp_end: float, power: float) -> float:
    """Time [s] a heater of given power [W] needs to bring the mass from temp_start to temp_end"""
    if not is_positive(power):
        return math.inf
    return abs(calculate_heat_energy(mass, specific_heat, temp_end - temp_start)) / power

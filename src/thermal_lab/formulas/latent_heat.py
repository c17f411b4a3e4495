# src/thermal_lab/formulas/latent_heat.py
"""
Phase change energy at constant temperature, Q = m·L.
Latent heats are in kJ/kg as found in substance records.
"""
from thermal_lab.helpers import is_positive

LATENT_HEAT_VALUES = {
    # Heat of vaporization [kJ/kg]
    'vaporization': {
        'water': 2257,
        'ethanol': 838,
        'methanol': 1100,
        'acetone': 518,
        'ammonia': 1369,
        'benzene': 394,
        'mercury': 295,
    },
    # Heat of fusion [kJ/kg]
    'fusion': {
        'water': 334,
        'ethanol': 108,
        'ammonia': 332,
        'benzene': 127,
        'mercury': 11.3,
    },
}


def calculate_vaporization_energy(mass: float, heat_of_vaporization: float) -> float:
    return mass * heat_of_vaporization * 1000


def calculate_vaporized_mass(energy: float, heat_of_vaporization: float) -> float:
    """Mass [kg] vaporized by the given energy [J]. Zero if the latent heat is not positive"""
    if not is_positive(heat_of_vaporization):
        return 0.0
    return energy / (heat_of_vaporization * 1000)


def calculate_fusion_energy(mass: float, heat_of_fusion: float) -> float:
    return mass * heat_of_fusion * 1000


def calculate_melted_mass(energy: float, heat_of_fusion: float) -> float:
    if not is_positive(heat_of_fusion):
        return 0.0
    return energy / (heat_of_fusion * 1000)

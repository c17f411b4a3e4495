# src/thermal_lab/formulas/ebullioscopy.py
"""
Boiling point elevation of solutions, ΔTb = i · Kb · b.

Kb is not a constant: it follows Kb = R·Tb²·M / ΔHvap and is evaluated at the actual
boiling temperature of the solvent, which moves with altitude.
"""
from thermal_lab.constants import THERMO, WATER
from thermal_lab.helpers import is_finite, is_positive

# Reference values at the normal boiling point: bp [°C], Kb [°C·kg/mol], M [g/mol], ΔHvap [kJ/mol]
STANDARD_KB_VALUES = {
    'water': {'bp': 100.0, 'Kb': 0.512, 'molar_mass': 18.015, 'heat_of_vap': 40.66},
    'ethanol': {'bp': 78.37, 'Kb': 1.22, 'molar_mass': 46.07, 'heat_of_vap': 38.56},
    'benzene': {'bp': 80.1, 'Kb': 2.53, 'molar_mass': 78.11, 'heat_of_vap': 30.72},
    'chloroform': {'bp': 61.2, 'Kb': 3.63, 'molar_mass': 119.38, 'heat_of_vap': 29.24},
}

COMMON_SOLUTES = {
    'NaCl': {'molar_mass': 58.44, 'van_hoff_factor': 1.9},
    'KCl': {'molar_mass': 74.55, 'van_hoff_factor': 1.85},
    'CaCl2': {'molar_mass': 110.98, 'van_hoff_factor': 2.7},
    'sucrose': {'molar_mass': 342.3, 'van_hoff_factor': 1.0},
    'glucose': {'molar_mass': 180.16, 'van_hoff_factor': 1.0},
}


def calculate_dynamic_kb(boiling_temp: float, solvent_molar_mass: float = WATER.molar_mass,
                         heat_of_vap_molar: float = WATER.heat_of_vap_molar) -> float:
    """
    Ebullioscopic constant at the given boiling temperature.

    Parameters
    ----------
    boiling_temp : float
        Boiling temperature of the pure solvent [°C]
    solvent_molar_mass : float
        [g/mol]
    heat_of_vap_molar : float
        Molar enthalpy of vaporization [kJ/mol]

    Returns
    -------
    float
        Kb [°C·kg/mol], 0 for invalid inputs
    """
    if not is_finite(boiling_temp) or not is_positive(solvent_molar_mass) or not is_positive(heat_of_vap_molar):
        return 0.0
    T_b = boiling_temp + THERMO.zero_celsius
    return THERMO.R_univ * T_b ** 2 * (solvent_molar_mass / 1000) / (heat_of_vap_molar * 1000)


def calculate_boiling_point_elevation(van_hoff_factor: float, kb: float, molality: float) -> float:
    if not (is_finite(van_hoff_factor) and is_finite(kb) and is_finite(molality)):
        return 0.0
    return van_hoff_factor * kb * molality


def mass_percent_to_molality(mass_percent: float, solute_molar_mass: float) -> float:
    """Molality [mol/kg] of a solution with the given solute mass percent"""
    if not is_finite(mass_percent) or not is_positive(solute_molar_mass) or not 0 <= mass_percent < 100:
        return 0.0
    # Per 100 g of solution
    solvent_kg = (100 - mass_percent) / 1000
    return mass_percent / solute_molar_mass / solvent_kg

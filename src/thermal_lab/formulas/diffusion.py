# src/thermal_lab/formulas/diffusion.py
"""
Binary gas diffusion coefficients, Fuller-Schettler-Giddings correlation:

    D_AB = 0.00143 · T^1.75 / (P · √M_AB · (Σv_A^⅓ + Σv_B^⅓)²)     [cm²/s]

with T in K, P in atm and M_AB = 2 / (1/M_A + 1/M_B) in g/mol.
"""
from __future__ import annotations
from typing import Mapping, Optional
from thermal_lab.constants import AIR, UNITS, THERMO
from thermal_lab.helpers import is_positive

# Atomic and structural diffusion volumes (Fuller, 1966)
ATOMIC_DIFFUSION_VOLUMES = {
    'C': 15.9,
    'H': 2.31,
    'O': 6.11,
    'N': 4.54,
    'F': 14.7,
    'Cl': 21.0,
    'Br': 21.9,
    'I': 29.8,
    'S': 22.9,
    'aromatic_ring': -18.3,
}


def calculate_diffusion_volume_sum(atom_counts: Mapping[str, float],
                                   volumes: Mapping[str, float] = ATOMIC_DIFFUSION_VOLUMES) -> Optional[float]:
    """
    Σv of a molecule from its atom counts, e.g. {"C": 3, "H": 6, "O": 1} for acetone.
    Returns None when a volume is unknown for any atom.
    """
    if not atom_counts:
        return None
    total = 0.0
    for symbol, count in atom_counts.items():
        if symbol not in volumes:
            return None
        total += count * volumes[symbol]
    return total


def calculate_diffusion_coefficient(temperature_K: float, pressure_atm: float, molar_mass_A: float,
                                    diffusion_volume_A: float, molar_mass_B: float = AIR.molar_mass,
                                    diffusion_volume_B: float = AIR.diffusion_volume) -> float:
    if not all(is_positive(x) for x in (temperature_K, pressure_atm, molar_mass_A, molar_mass_B,
                                         diffusion_volume_A, diffusion_volume_B)):
        return 0.0
    M_AB = 2 / (1 / molar_mass_A + 1 / molar_mass_B)
    volumes = (diffusion_volume_A ** (1 / 3) + diffusion_volume_B ** (1 / 3)) ** 2
    return 0.00143 * temperature_K ** 1.75 / (pressure_atm * M_AB ** 0.5 * volumes)


def calculate_diffusion_in_air(temperature: float, pressure: float, molar_mass: float, diffusion_volume_sum: float) -> float:
    """
    Diffusion coefficient of a vapor in air [m²/s]

    Parameters
    ----------
    temperature : float
        [°C]
    pressure : float
        [Pa]
    molar_mass : float
        Molar mass of the vapor [g/mol]
    diffusion_volume_sum : float
        Σv of the vapor molecule [-]
    """
    D_cm2 = calculate_diffusion_coefficient(temperature + THERMO.zero_celsius, pressure / UNITS.atm,
                                            molar_mass, diffusion_volume_sum)
    return D_cm2 * 1e-4

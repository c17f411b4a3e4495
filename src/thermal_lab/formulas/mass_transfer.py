# src/thermal_lab/formulas/mass_transfer.py
"""
Natural convection mass transfer from a horizontal liquid surface.

The vapor leaving the surface changes the density of the air above it, which drives
a buoyant boundary layer. The Sherwood number follows from the Rayleigh number
(Ra = Gr·Sc) with the usual plate correlations, and the mass transfer coefficient
is k_m = Sh·D / L. Net evaporation is driven by the difference between the saturation
concentration at the surface and the bulk concentration in the room. Condensation is
not modeled, so evaporation is never negative.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from thermal_lab.constants import AIR, THERMO
from thermal_lab.helpers import is_positive

GRAVITY = 9.81  # [m/s²]
TURBULENT_RAYLEIGH = 1e7


@dataclass(frozen=True)
class MassTransferResult:
    mass_transfer_coeff: float  # [m/s]
    sherwood: float
    rayleigh: float
    schmidt: float
    grashof: float


def air_kinematic_viscosity(temperature_K: float) -> float:
    # Sutherland's law
    return AIR.nu_ref * (temperature_K / AIR.T_ref) ** 1.5 * (AIR.T_ref + AIR.sutherland) / (temperature_K + AIR.sutherland)


def calculate_schmidt_number(kinematic_viscosity: float, diffusion_coeff: float) -> float:
    if diffusion_coeff <= 0:
        return 1.0
    return kinematic_viscosity / diffusion_coeff


def calculate_grashof_number(g: float, length: float, kinematic_viscosity: float, density_ratio: float) -> float:
    return g * length ** 3 * abs(density_ratio) / kinematic_viscosity ** 2


def calculate_density_ratio_term(molar_mass_vapor: float, vapor_mole_fraction: float,
                                 molar_mass_air: float = AIR.molar_mass) -> float:
    # Δρ/ρ of the air-vapor mixture at the surface
    return (1 - molar_mass_vapor / molar_mass_air) * vapor_mole_fraction


def calculate_rayleigh_number(grashof: float, schmidt: float) -> float:
    return grashof * schmidt


def calculate_sherwood_number(rayleigh: float) -> float:
    if rayleigh <= 0:
        return 0.1  # stagnant air
    if rayleigh < TURBULENT_RAYLEIGH:
        return 0.54 * rayleigh ** 0.25
    return 0.15 * rayleigh ** 0.333


def calculate_mass_transfer_coefficient(temperature: float, characteristic_length: float, diffusion_coeff: float,
                                        molar_mass_vapor: float, saturation_mole_fraction: float) -> MassTransferResult:
    """
    Mass transfer coefficient over the liquid surface

    Parameters
    ----------
    temperature : float
        Film temperature [°C]
    characteristic_length : float
        Characteristic length of the surface [m], the vessel diameter for a pot
    diffusion_coeff : float
        Diffusion coefficient of the vapor in air [m²/s]
    molar_mass_vapor : float
        [g/mol]
    saturation_mole_fraction : float
        Vapor mole fraction at the surface, p_sat / p_ambient [-]
    """
    nu = air_kinematic_viscosity(temperature + THERMO.zero_celsius)
    Sc = calculate_schmidt_number(nu, diffusion_coeff)
    Gr = calculate_grashof_number(GRAVITY, characteristic_length, nu,
                                  calculate_density_ratio_term(molar_mass_vapor, saturation_mole_fraction))
    Ra = calculate_rayleigh_number(Gr, Sc)
    Sh = calculate_sherwood_number(Ra)
    k_m = Sh * diffusion_coeff / characteristic_length if is_positive(characteristic_length) else 0.0
    return MassTransferResult(k_m, Sh, Ra, Sc, Gr)


def calculate_evaporation_mass(mass_transfer_coeff: float, saturation_pressure: float, partial_pressure: float,
                               temperature_K: float, surface_area: float, molar_mass: float, dt: float) -> float:
    """Evaporated mass [kg] over dt [s]. molar_mass in kg/mol, pressures in Pa"""
    if not is_positive(temperature_K):
        return 0.0
    c_sat = saturation_pressure / (THERMO.R_univ * temperature_K)
    c_bulk = partial_pressure / (THERMO.R_univ * temperature_K)
    delta_c = max(0.0, c_sat - c_bulk)
    return max(0.0, mass_transfer_coeff * delta_c * molar_mass * surface_area * dt)


def calculate_evaporative_cooling(evaporated_mass: float, remaining_mass: float, latent_heat: float, specific_heat: float) -> float:
    # ΔT [°C] of the remaining liquid. Latent heat in kJ/kg, specific heat in J/(g·°C)
    if not is_positive(remaining_mass) or not is_positive(specific_heat):
        return 0.0
    return -(evaporated_mass * latent_heat * 1000) / (remaining_mass * 1000 * specific_heat)


def calculate_partial_pressure(composition: dict, species: str, total_pressure: float) -> float:
    return composition.get(species, 0.0) * total_pressure


def estimate_surface_area(diameter: float = 0.2) -> float:
    return math.pi * (diameter / 2) ** 2

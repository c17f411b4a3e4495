# src/thermal_lab/constants/fluids.py
from __future__ import annotations
from dataclasses import dataclass
from .base import FrozenNamespace

@dataclass(frozen=True)
class Water(FrozenNamespace):
    # Reference at the normal boiling point
    cp: float = 4.186             # specific heat [J·g⁻¹·K⁻¹]
    latent_heat_vap: float = 2257.0    # [kJ·kg⁻¹]
    latent_heat_fus: float = 334.0     # [kJ·kg⁻¹]
    molar_mass: float = 18.015         # [g·mol⁻¹]
    heat_of_vap_molar: float = 40.66   # [kJ·mol⁻¹]

@dataclass(frozen=True)
class Air(FrozenNamespace):
    # Dry air, ~20°C, 1 atm
    rho: float = 1.2              # [kg·m⁻³]
    cp: float = 1.006             # [J·g⁻¹·K⁻¹]
    molar_mass: float = 28.97     # [g·mol⁻¹]
    diffusion_volume: float = 19.7     # Fuller (1966) Σv for air [-]
    # Sutherland's law, kinematic viscosity
    nu_ref: float = 1.327e-5      # [m²·s⁻¹] at T_ref
    T_ref: float = 273.15         # [K]
    sutherland: float = 110.4     # [K]

WATER = Water()
AIR = Air()

# src/thermal_lab/constants/thermo.py
from __future__ import annotations
from dataclasses import dataclass
from scipy import constants as sc
from .base import FrozenNamespace

@dataclass(frozen=True)
class Thermo(FrozenNamespace):
    R_univ: float = sc.R                 # Universal gas constant [J·mol⁻¹·K⁻¹]
    g: float = sc.g                      # Standard gravity [m·s⁻²]
    zero_celsius: float = sc.zero_Celsius  # [K]

@dataclass(frozen=True)
class Units(FrozenNamespace):
    atm: float = sc.atm                  # [Pa]
    mmHg: float = sc.mmHg                # [Pa], 133.322 Pa
    cfm_to_m3_per_hour: float = 1.699    # 1 ft³/min in m³/h
    ppm: float = 1e6                     # volume fraction -> ppm

THERMO = Thermo()
UNITS = Units()

# src/thermal_lab/constants/atmosphere.py
from __future__ import annotations
from dataclasses import dataclass
from scipy import constants as sc
from .base import FrozenNamespace

@dataclass(frozen=True)
class ISAtmosphere(FrozenNamespace):
    # ICAO standard atmosphere, troposphere layer
    T0: float = 288.15            # sea level temperature [K]
    L: float = 0.0065             # temperature lapse rate [K·m⁻¹]
    P0: float = 101325.0          # sea level pressure [Pa]
    M: float = 0.0289644          # molar mass of dry air [kg·mol⁻¹]
    g: float = sc.g               # [m·s⁻²]
    R: float = 8.31447            # [J·mol⁻¹·K⁻¹], ICAO value
    tropopause_altitude: float = 11000.0   # [m]
    tropopause_temperature: float = 216.65 # [K]

    @property
    def exponent(self) -> float:
        # (g·M)/(R·L) ≈ 5.2559
        return self.g * self.M / (self.R * self.L)

@dataclass(frozen=True)
class BoilingDefaults(FrozenNamespace):
    lapse_rate: float = 1 / 300   # boiling point drop [°C·m⁻¹], linear fallback
    antoine_tolerance: float = 0.5     # [°C] band around the verified range

ISA = ISAtmosphere()
BOILING = BoilingDefaults()

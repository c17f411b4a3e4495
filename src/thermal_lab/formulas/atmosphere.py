# src/thermal_lab/formulas/atmosphere.py
"""
ISA barometric formula for the troposphere:

    P(h) = P0 · (1 - L·h / T0) ^ (g·M / (R·L))

The formula is used above 11 km as well. Only past the altitude where the lapse
rate would bring the temperature to 0 K is the pressure at 11 km returned. Every function takes
the atmosphere constants as an optional argument, so that a non-standard day can be
described with constants.override(ISA, P0=..., T0=...).
"""
import math
from thermal_lab.constants import ISA
from thermal_lab.constants.atmosphere import ISAtmosphere
from thermal_lab.helpers import is_finite


def calculate_pressure_isa(altitude: float, isa: ISAtmosphere = ISA) -> float:
    """Ambient pressure [Pa] at altitude [m]. A non-finite altitude is treated as sea level"""
    if not is_finite(altitude):
        altitude = 0.0
    temperature = isa.T0 - isa.L * altitude
    if temperature <= 0:
        temperature = isa.T0 - isa.L * isa.tropopause_altitude
    return isa.P0 * (temperature / isa.T0) ** isa.exponent


def calculate_temperature_isa(altitude: float, isa: ISAtmosphere = ISA) -> float:
    """Standard air temperature [°C] at altitude [m]"""
    if not is_finite(altitude):
        altitude = 0.0
    temperature = max(isa.T0 - isa.L * altitude, isa.tropopause_temperature)
    return temperature - 273.15


def calculate_altitude_from_pressure(pressure: float, isa: ISAtmosphere = ISA) -> float:
    # Inverse of the barometric formula, 0 at or above sea-level pressure
    if not is_finite(pressure):
        return 0.0
    if pressure >= isa.P0:
        return 0.0
    if pressure <= 0:
        return math.inf
    return isa.T0 / isa.L * (1 - (pressure / isa.P0) ** (1 / isa.exponent))

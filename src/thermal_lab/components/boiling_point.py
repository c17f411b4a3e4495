# src/thermal_lab/components/boiling_point.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from thermal_lab.constants import BOILING, ISA, WATER
from thermal_lab.formulas.antoine import solve_antoine_for_temperature
from thermal_lab.formulas.atmosphere import calculate_pressure_isa, calculate_altitude_from_pressure
from thermal_lab.formulas.ebullioscopy import calculate_dynamic_kb, calculate_boiling_point_elevation
from thermal_lab.helpers import is_finite, is_positive

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoilingPointResult:
    temperature: float              # boiling point including the elevation [°C]
    is_extrapolated: bool
    verified_range: Tuple[Optional[float], Optional[float]]
    base_boiling_point: float       # pure solvent [°C]
    elevation: float                # [°C]
    method: str                     # "antoine" or "lapse_rate"


def calculate_molality(props, mass: float | None = None, residue_mass: float = 0.0) -> Optional[float]:
    """
    Molality [mol/kg] of the dissolved residue.

    A static molality on the substance record wins. Otherwise it is derived from the
    residue (solute) mass and the remaining solvent mass, which requires the solute
    molar mass.
    """
    if props.molality:
        return props.molality.resolve(0.0)
    if mass is None or not is_positive(residue_mass) or not is_positive(props.solute_molar_mass):
        return None
    solvent_mass = mass - residue_mass
    if not is_positive(solvent_mass):
        return None
    return (residue_mass * 1000 / props.solute_molar_mass) / solvent_mass


def calculate_elevation(base_boiling_point: float, props, mass: float | None = None, residue_mass: float = 0.0) -> float:
    # i·Kb·b, with Kb evaluated at the actual boiling point of the pure solvent
    molality = calculate_molality(props, mass, residue_mass)
    if not is_finite(props.van_hoff_factor) or molality is None:
        # Fixed elevation of older substance records
        legacy = props.boiling_point_elevation.resolve(0.0)
        return legacy if is_finite(legacy) else 0.0
    molar_mass = props.molar_mass if is_positive(props.molar_mass) else WATER.molar_mass
    if is_positive(props.latent_heat_vap):
        heat_of_vap_molar = props.latent_heat_vap * molar_mass / 1000    # kJ/kg -> kJ/mol
    else:
        heat_of_vap_molar = WATER.heat_of_vap_molar
    kb = calculate_dynamic_kb(base_boiling_point, molar_mass, heat_of_vap_molar)
    return calculate_boiling_point_elevation(props.van_hoff_factor, kb, molality)


def _from_antoine(pressure: float, props, mass, residue_mass) -> Optional[BoilingPointResult]:
    if props.antoine is None:
        return None
    result = solve_antoine_for_temperature(pressure, props.antoine)
    if result is None or not is_finite(result.temperature):
        return None
    elevation = calculate_elevation(result.temperature, props, mass, residue_mass)
    return BoilingPointResult(result.temperature + elevation, result.is_extrapolated, result.verified_range,
                              result.temperature, elevation, "antoine")


def _from_lapse_rate(altitude: float, props, mass, residue_mass) -> BoilingPointResult:
    _LOGGER.debug("No usable Antoine coefficients for %s, falling back to the linear lapse rate", props.substance_id)
    lapse_rate = props.altitude_lapse_rate.resolve(BOILING.lapse_rate)
    base = props.boiling_point_sea_level - altitude * lapse_rate
    elevation = calculate_elevation(base, props, mass, residue_mass)
    return BoilingPointResult(base + elevation, False, (None, None), base, elevation, "lapse_rate")


def calculate_boiling_point(altitude: float, props, *, mass: float | None = None,
                            residue_mass: float = 0.0) -> Optional[BoilingPointResult]:
    """
    Boiling point of a fluid at the given altitude.

    The Antoine equation is solved at the ISA pressure of the altitude when the substance has
    coefficients, otherwise the sea-level boiling point is lowered linearly with altitude.

    Parameters
    ----------
    altitude : float
        Altitude [m]. A non-finite value is treated as sea level
    props : FluidProperties
        Substance record
    mass : float, optional
        Total liquid mass [kg], used with residue_mass to derive the solution molality
    residue_mass : float, optional
        Dissolved non-volatile mass [kg]

    Returns
    -------
    BoilingPointResult or None
        None if the substance has no finite sea-level boiling point
    """
    if props is None or not is_finite(props.boiling_point_sea_level):
        return None
    if not is_finite(altitude):
        altitude = 0.0
    result = _from_antoine(calculate_pressure_isa(altitude), props, mass, residue_mass)
    return result if result is not None else _from_lapse_rate(altitude, props, mass, residue_mass)


def calculate_boiling_point_at_pressure(pressure: float, props, *, mass: float | None = None,
                                        residue_mass: float = 0.0) -> Optional[BoilingPointResult]:
    """Same as calculate_boiling_point for an explicit ambient pressure [Pa]. Invalid pressures are treated as sea level"""
    if props is None or not is_finite(props.boiling_point_sea_level):
        return None
    if not is_positive(pressure):
        pressure = ISA.P0
    result = _from_antoine(pressure, props, mass, residue_mass)
    if result is not None:
        return result
    return _from_lapse_rate(calculate_altitude_from_pressure(pressure), props, mass, residue_mass)

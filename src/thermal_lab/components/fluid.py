# src/thermal_lab/components/fluid.py
"""
Fluid thermal state machine: advances the temperature and mass of the liquid in a vessel
over one time step, given the heater power.

Heat raises the temperature until the boiling point, the rest of the energy turns liquid
into vapor at constant temperature. Without heat the liquid relaxes toward ambient
following Newton's law. Below boiling, volatile substances keep evaporating into the room
and cool down while doing so, possibly below ambient.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace, field
from enum import Enum
from typing import Mapping, Optional, Tuple
from thermal_lab.core.options import OptionalValue
from thermal_lab.formulas.antoine import AntoineCoefficients, solve_antoine_for_pressure
from thermal_lab.formulas.atmosphere import calculate_pressure_isa
from thermal_lab.formulas.diffusion import calculate_diffusion_in_air
from thermal_lab.formulas.heat_capacity import calculate_heat_energy, calculate_temp_change, calculate_heating_time
from thermal_lab.formulas.latent_heat import calculate_vaporized_mass, calculate_vaporization_energy
from thermal_lab.formulas.mass_transfer import (calculate_mass_transfer_coefficient, calculate_evaporation_mass,
                                                calculate_evaporative_cooling, calculate_partial_pressure,
                                                estimate_surface_area)
from thermal_lab.formulas.newton_cooling import (CONVECTIVE_HEAT_TRANSFER, calculate_effective_cooling_coeff,
                                                 apply_cooling_step)
from thermal_lab.components.boiling_point import (calculate_boiling_point,
                                                  calculate_boiling_point_at_pressure)
from thermal_lab.helpers import ConfigurationError, is_finite, is_positive, C2K

_LOGGER = logging.getLogger(__name__)

DEFAULT_VESSEL_DIAMETER = 0.2       # [m]
AMBIENT_EQUILIBRIUM_BAND = 0.01     # [°C]

_SUBSCRIPT_DIGITS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")
# Substances whose vapor is a different species than their id suggests
ATMOSPHERE_KEY_FALLBACKS = {
    "saltwater-3pct": "H2O",
    "saltwater-10pct": "H2O",
    "saltwater-26pct": "H2O",
}


def normalize_formula(formula: Optional[str]) -> Optional[str]:
    """Chemical formula with Unicode subscript digits replaced by ASCII ones, e.g. C₃H₆O -> C3H6O"""
    if formula is None:
        return None
    return formula.translate(_SUBSCRIPT_DIGITS).strip()


def get_atmosphere_key(substance_id: str, formula: Optional[str] = None) -> str:
    # Species name of the vapor in the room composition
    normalized = normalize_formula(formula)
    if normalized:
        return normalized
    return ATMOSPHERE_KEY_FALLBACKS.get(substance_id, substance_id)


class FluidPhase(Enum):
    IDLE = "idle"
    HEATING = "heating"
    BOILING = "boiling"
    COOLING = "cooling"


@dataclass(frozen=True)
class FluidProperties:
    """
    Substance record of the liquid in the vessel.

    Parameters
    ----------
    substance_id : str
        Identifier of the substance, e.g. "water"
    specific_heat : float
        Specific heat of the liquid [J/(g·°C)]
    atmosphere_key : str, optional
        Name of the vapor species in the room composition, e.g. "H2O". Subscript digits are normalized.
        Defaults to the id, except for saltwater solutions whose vapor is H2O
    latent_heat_vap, latent_heat_fus : float, optional
        Heats of vaporization and fusion [kJ/kg]
    boiling_point_sea_level, melting_point : float, optional
        [°C]
    altitude_lapse_rate : OptionalValue
        Boiling point drop per meter of altitude [°C/m], used when no Antoine coefficients are available
    antoine : AntoineCoefficients, optional
    density : float, optional
        [kg/l]
    cooling_coefficient : OptionalValue
        Convective transfer h·A of the vessel [W/°C]
    non_volatile_fraction : float
        Mass fraction that never evaporates (dissolved solids), between 0 and 1
    molar_mass : float, optional
        [g/mol]
    diffusion_volume_sum : float, optional
        Fuller diffusion volume of the molecule
    van_hoff_factor, solute_molar_mass : float, optional
        Dissociation factor and molar mass [g/mol] of the dissolved solute
    molality : OptionalValue
        Static solution molality [mol/kg], overrides the value derived from the residue
    boiling_point_elevation : OptionalValue
        Fixed boiling point elevation [°C], used when the elevation cannot be computed from the solution
    """
    substance_id: str
    specific_heat: float
    atmosphere_key: Optional[str] = None
    latent_heat_vap: Optional[float] = None
    latent_heat_fus: Optional[float] = None
    boiling_point_sea_level: Optional[float] = None
    melting_point: Optional[float] = None
    altitude_lapse_rate: OptionalValue = field(default_factory=OptionalValue.absent)
    antoine: Optional[AntoineCoefficients] = None
    density: Optional[float] = None
    cooling_coefficient: OptionalValue = field(default_factory=OptionalValue.absent)
    non_volatile_fraction: float = 0.0
    molar_mass: Optional[float] = None
    diffusion_volume_sum: Optional[float] = None
    van_hoff_factor: Optional[float] = None
    solute_molar_mass: Optional[float] = None
    molality: OptionalValue = field(default_factory=OptionalValue.absent)
    boiling_point_elevation: OptionalValue = field(default_factory=OptionalValue.absent)

    def __post_init__(self):
        if not 0 <= self.non_volatile_fraction <= 1:
            raise ConfigurationError(f'The non volatile mass fraction of {self.substance_id} should be between 0 and 1, {self.non_volatile_fraction} was provided. Please check it')
        if self.molar_mass is not None and self.molar_mass <= 0:
            raise ConfigurationError(f'The molar mass of {self.substance_id} should be positive, {self.molar_mass} was provided')
        object.__setattr__(self, "atmosphere_key", get_atmosphere_key(self.substance_id, self.atmosphere_key))

    @classmethod
    def from_dict(cls, data: Mapping) -> "FluidProperties":
        """Build from a parsed substance record (camelCase keys)"""
        return cls(
            substance_id=data.get("id", data.get("name", "unknown")),
            specific_heat=data.get("specificHeat"),
            atmosphere_key=data.get("atmosphereKey") or data.get("chemicalFormula", data.get("formula")),
            latent_heat_vap=data.get("heatOfVaporization"),
            latent_heat_fus=data.get("heatOfFusion"),
            boiling_point_sea_level=data.get("boilingPointSeaLevel"),
            melting_point=data.get("meltingPoint"),
            altitude_lapse_rate=OptionalValue.from_raw(data.get("altitudeLapseRate")),
            antoine=AntoineCoefficients.from_dict(data.get("antoineCoefficients")),
            density=data.get("density"),
            cooling_coefficient=OptionalValue.from_raw(data.get("convectiveHeatTransfer")),
            non_volatile_fraction=data.get("nonVolatileMassFraction") or 0.0,
            molar_mass=data.get("molarMass"),
            diffusion_volume_sum=data.get("diffusionVolumeSum"),
            van_hoff_factor=data.get("vanHoffFactor"),
            solute_molar_mass=data.get("soluteMolarMass"),
            molality=OptionalValue.from_raw(data.get("molality")),
            boiling_point_elevation=OptionalValue.from_raw(data.get("boilingPointElevation")),
        )

    @property
    def is_valid(self) -> bool:
        return is_positive(self.specific_heat)

    @property
    def can_boil(self) -> bool:
        return is_finite(self.boiling_point_sea_level) and is_positive(self.latent_heat_vap)

    @property
    def can_freeze(self) -> bool:
        return is_finite(self.melting_point) and is_positive(self.latent_heat_fus)

    @property
    def can_evaporate(self) -> bool:
        return (self.antoine is not None and self.antoine.is_complete and is_positive(self.molar_mass)
                and is_positive(self.diffusion_volume_sum) and is_positive(self.latent_heat_vap))


@dataclass(frozen=True)
class FluidState:
    mass: float                 # [kg], liquid including the dissolved residue
    temperature: float          # [°C]
    altitude: float = 0.0       # [m]
    residue_mass: float = 0.0   # [kg]
    vessel_diameter: float = DEFAULT_VESSEL_DIAMETER   # [m]

    def __post_init__(self):
        if self.mass < 0 or self.residue_mass < 0:
            raise ConfigurationError(f'Fluid mass and residue mass should not be negative, got mass={self.mass} and residue_mass={self.residue_mass}')
        if self.residue_mass > self.mass:
            raise ConfigurationError(f'The residue mass ({self.residue_mass} kg) cannot exceed the fluid mass ({self.mass} kg)')

    @classmethod
    def create(cls, mass: float, temperature: float, altitude: float = 0.0, props: FluidProperties | None = None,
               vessel_diameter: float = DEFAULT_VESSEL_DIAMETER) -> "FluidState":
        # The residue follows from the non volatile fraction of the substance
        residue = mass * props.non_volatile_fraction if props is not None else 0.0
        return cls(mass=mass, temperature=temperature, altitude=altitude, residue_mass=residue,
                   vessel_diameter=vessel_diameter)

    @property
    def evaporable_mass(self) -> float:
        return max(0.0, self.mass - self.residue_mass)


@dataclass(frozen=True)
class FluidStepResult:
    state: FluidState
    phase: FluidPhase = FluidPhase.IDLE
    boiled_mass: float = 0.0            # [kg] vapor from boiling
    evaporated_mass: float = 0.0        # [kg] vapor from evaporation below boiling
    energy_to_vaporization: float = 0.0  # [J]
    surplus_energy: float = 0.0          # [J] heat left once all evaporable liquid boiled off
    is_boiling: bool = False
    is_evaporating: bool = False
    is_extrapolated: bool = False
    verified_range: Tuple[Optional[float], Optional[float]] = (None, None)
    boiling_point: Optional[float] = None
    props_valid: bool = True
    all_evaporated: bool = False

    @property
    def vapor_mass(self) -> float:
        return self.boiled_mass + self.evaporated_mass


def _apply_heat_energy(mass: float, temperature: float, energy: float, boiling_point: Optional[float],
                       props: FluidProperties) -> Tuple[float, float, float]:
    """
    Split the heater energy [J] between sensible heat and vaporization.
    Returns the new temperature, the energy that went into vaporization and the vaporized mass
    """
    temp_change = calculate_temp_change(mass, props.specific_heat, energy)
    if boiling_point is None or temperature + temp_change < boiling_point:
        return temperature + temp_change, 0.0, 0.0
    energy_to_boiling = calculate_heat_energy(mass, props.specific_heat, max(0.0, boiling_point - temperature))
    energy_to_vaporization = energy - energy_to_boiling
    return boiling_point, energy_to_vaporization, calculate_vaporized_mass(energy_to_vaporization, props.latent_heat_vap)


def _evaporate(state: FluidState, temperature: float, mass: float, dt: float, props: FluidProperties,
               ambient_pressure: float, room_composition: Mapping[str, float]) -> Tuple[float, float]:
    """Mass evaporated below boiling over dt and the resulting temperature change of the remaining liquid"""
    saturation_pressure = solve_antoine_for_pressure(temperature, props.antoine)
    if not is_positive(saturation_pressure) or not is_positive(ambient_pressure):
        return 0.0, 0.0
    diffusion_coeff = calculate_diffusion_in_air(temperature, ambient_pressure, props.molar_mass, props.diffusion_volume_sum)
    mass_transfer = calculate_mass_transfer_coefficient(temperature, state.vessel_diameter, diffusion_coeff,
                                                        props.molar_mass, min(1.0, saturation_pressure / ambient_pressure))
    evaporated = calculate_evaporation_mass(
        mass_transfer.mass_transfer_coeff, saturation_pressure,
        calculate_partial_pressure(room_composition, props.atmosphere_key, ambient_pressure),
        C2K(temperature), estimate_surface_area(state.vessel_diameter), props.molar_mass / 1000, dt)
    evaporated = min(evaporated, max(0.0, mass - state.residue_mass))
    return evaporated, calculate_evaporative_cooling(evaporated, mass - evaporated, props.latent_heat_vap, props.specific_heat)


def fluid_step(state: FluidState, heater_watts: float, dt: float, props: FluidProperties | None,
               ambient_temp: float = 20.0, *, ambient_pressure: float | None = None,
               room_composition: Mapping[str, float] | None = None) -> FluidStepResult:
    """
    Advance the fluid by one time step.

    Parameters
    ----------
    state : FluidState
        Current state of the liquid
    heater_watts : float
        Heater power delivered to the liquid [W]. Zero or negative means the heater is off
    dt : float
        Time step [s]
    props : FluidProperties
        Substance record. When missing or invalid the state is returned unchanged
    ambient_temp : float, optional
        Temperature of the surrounding air [°C]. Defaults to 20°C
    ambient_pressure : float, optional
        Ambient pressure [Pa]. If not provided, the ISA pressure at the state altitude is used
    room_composition : Mapping[str, float], optional
        Mole fractions of the surrounding air, used for the partial pressure of the vapor

    Returns
    -------
    FluidStepResult
        New state and the vapor released during the step
    """
    if props is None or not props.is_valid:
        _LOGGER.debug("Fluid step skipped: invalid or missing fluid properties")
        return FluidStepResult(state=state, props_valid=False)
    if state.mass <= 0 or state.evaporable_mass <= 0:
        return FluidStepResult(state=state, all_evaporated=True)
    if not is_finite(ambient_temp):
        ambient_temp = 20.0

    if ambient_pressure is not None:
        bp_result = calculate_boiling_point_at_pressure(ambient_pressure, props, mass=state.mass, residue_mass=state.residue_mass)
    else:
        bp_result = calculate_boiling_point(state.altitude, props, mass=state.mass, residue_mass=state.residue_mass)
    boiling_point = bp_result.temperature if bp_result is not None else None
    can_boil = props.can_boil and is_finite(boiling_point)

    temperature = state.temperature
    energy_to_vaporization, vaporized = 0.0, 0.0
    heater_on = is_positive(heater_watts)
    if heater_on:
        temperature, energy_to_vaporization, vaporized = _apply_heat_energy(
            state.mass, temperature, heater_watts * dt, boiling_point if can_boil else None, props)
    elif abs(temperature - ambient_temp) > AMBIENT_EQUILIBRIUM_BAND:
        convective = props.cooling_coefficient.resolve(CONVECTIVE_HEAT_TRANSFER['pot_in_still_air'])
        cooling_coeff = calculate_effective_cooling_coeff(convective, state.mass, props.specific_heat)
        temperature = apply_cooling_step(temperature, ambient_temp, cooling_coeff, dt)

    boiled = min(vaporized, state.evaporable_mass) if can_boil else 0.0
    mass = state.residue_mass if boiled >= state.evaporable_mass > 0 else max(state.mass - boiled, state.residue_mass)
    surplus_energy = 0.0
    if boiled < vaporized:
        # Only the residue is left, the rest of the heat is not absorbed by the liquid
        surplus_energy = energy_to_vaporization - calculate_vaporization_energy(boiled, props.latent_heat_vap)
        _LOGGER.debug("All evaporable liquid boiled off, %.1f J of heater energy unused", surplus_energy)
    is_boiling = can_boil and temperature >= boiling_point and boiled > 0

    evaporated = 0.0
    if not is_boiling and props.can_evaporate and mass > state.residue_mass:
        pressure = ambient_pressure if ambient_pressure is not None else calculate_pressure_isa(state.altitude)
        evaporated, temp_change = _evaporate(state, temperature, mass, dt, props, pressure, room_composition or {})
        if evaporated > 0:
            mass = state.residue_mass if evaporated >= mass - state.residue_mass else max(mass - evaporated, state.residue_mass)
            temperature += temp_change

    if is_boiling:
        phase = FluidPhase.BOILING
    elif heater_on:
        phase = FluidPhase.HEATING
    elif abs(state.temperature - ambient_temp) > AMBIENT_EQUILIBRIUM_BAND:
        phase = FluidPhase.COOLING
    else:
        phase = FluidPhase.IDLE

    new_state = replace(state, mass=mass, temperature=temperature)
    return FluidStepResult(
        state=new_state,
        phase=phase,
        boiled_mass=boiled,
        evaporated_mass=evaporated,
        energy_to_vaporization=energy_to_vaporization,
        surplus_energy=surplus_energy,
        is_boiling=is_boiling,
        is_evaporating=evaporated > 0,
        is_extrapolated=bp_result.is_extrapolated if bp_result is not None else False,
        verified_range=bp_result.verified_range if bp_result is not None else (None, None),
        boiling_point=boiling_point,
        all_evaporated=new_state.evaporable_mass <= 0,
    )


def calculate_expected_boil_time(state: FluidState, props: FluidProperties, heater_watts: float, *,
                                 ambient_pressure: float | None = None) -> Optional[float]:
    """
    Time [s] the heater needs to bring the liquid to its boiling point, ignoring losses.
    None when the fluid cannot boil, the heater is off or the liquid is already boiling
    """
    if props is None or not props.is_valid or not props.can_boil or state.mass <= 0 or not is_positive(heater_watts):
        return None
    if ambient_pressure is not None:
        bp_result = calculate_boiling_point_at_pressure(ambient_pressure, props, mass=state.mass, residue_mass=state.residue_mass)
    else:
        bp_result = calculate_boiling_point(state.altitude, props, mass=state.mass, residue_mass=state.residue_mass)
    if bp_result is None or state.temperature >= bp_result.temperature:
        return None
    time = calculate_heating_time(state.mass, props.specific_heat, state.temperature, bp_result.temperature, heater_watts)
    return time if math.isfinite(time) else None

# src/thermal_lab/components/room.py
"""
Room environment controller: temperature, pressure and gas composition of the room
holding the experiment.

The room state is immutable. room_step chains, for one tick, the waste heat of the burner,
the AC thermal loop, the vapor coming from the vessel, the air handler composition loop,
exposure tracking, the pressure leak and the composition alerts. Operator actions go
through the set_* functions, which are the only places where a controller state is reset.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Tuple
from thermal_lab.constants import ISA, THERMO
from thermal_lab.controllers.ac_unit import AcUnitConfig, apply_ac_effect, IDLE_WATTS
from thermal_lab.controllers.air_handler import AirHandlerConfig, apply_air_handler_effect, MODE_OFF, MODE_AUTO
from thermal_lab.core.options import OptionalValue
from thermal_lab.formulas.atmosphere import calculate_pressure_isa
from thermal_lab.formulas.gas_exchange import STANDARD_ATMOSPHERES
from thermal_lab.formulas.pid import PidState
from thermal_lab.helpers import ConfigurationError, UnknownModeError, C2K, is_positive
from thermal_lab.sensors.exposure import Alert, ExposureEvent, track_exposure, check_composition_alerts

PRESSURE_MODES = ('sealevel', 'custom', 'location')
BURNER_WASTE_FRACTION = 0.1         # share of the burner power heating the room
BASELINE_CFM = 150.0                # airflow at which the AC works at its nominal rate
MAX_AIRFLOW_EFFECTIVENESS = 1.5
COMPOSITION_LOG_INTERVAL = 10.0     # [s] of simulated time
COMPOSITION_LOG_LENGTH = 100
HEAT_LOG_LENGTH = 1000


@dataclass(frozen=True)
class RoomConfig:
    """
    Room holding the experiment

    Parameters
    ----------
    volume : float, optional
        Air volume [m³]. Defaults to 30 m³
    heat_capacity : float, optional
        Heat capacity of the room used for external heat [J/°C]. Defaults to 36 kJ/°C
    leak_rate : float, optional
        Maximum pressure equalisation rate toward ambient [Pa/s]. 0 means a sealed room. Defaults to 10 Pa/s
    initial_temperature : float, optional
        [°C]. Defaults to 20°C
    pressure_mode : str, optional
        "sealevel" (101325 Pa), "custom" (custom_pressure) or "location" (ISA pressure at the altitude)
    custom_pressure : OptionalValue
        Initial pressure [Pa] for the "custom" mode
    atmosphere : Mapping[str, float], optional
        Initial and target composition. Defaults to the earth atmosphere
    default_air_handler_mode : str, optional
        Air handler mode at start. Defaults to "off"
    """
    volume: float = 30.0
    heat_capacity: float = 36000.0
    leak_rate: float = 10.0
    initial_temperature: float = 20.0
    pressure_mode: str = 'location'
    custom_pressure: OptionalValue = field(default_factory=OptionalValue.absent)
    atmosphere: Mapping[str, float] = field(default_factory=lambda: dict(STANDARD_ATMOSPHERES['earth']))
    default_air_handler_mode: str = MODE_OFF

    def __post_init__(self):
        if not is_positive(self.volume):
            raise ConfigurationError(f'The room volume should be positive, {self.volume} was provided')
        if not is_positive(self.heat_capacity):
            raise ConfigurationError(f'The room heat capacity should be positive, {self.heat_capacity} was provided')
        if self.leak_rate < 0:
            raise ConfigurationError(f'The room leak rate should not be negative, {self.leak_rate} was provided')
        if self.pressure_mode not in PRESSURE_MODES:
            raise ConfigurationError(f'Unknown pressure mode "{self.pressure_mode}". Allowed values are {PRESSURE_MODES}')
        if any(fraction < 0 for fraction in self.atmosphere.values()):
            raise ConfigurationError('Atmosphere fractions should not be negative')

    @classmethod
    def from_dict(cls, data: Mapping) -> "RoomConfig":
        room = data.get("room", {})
        return cls(
            volume=room.get("volumeM3") or 30.0,
            heat_capacity=room.get("heatCapacityJPerC") or 36000.0,
            leak_rate=room.get("leakRatePaPerSecond", 10.0),
            initial_temperature=room.get("initialTempC", 20.0),
            pressure_mode=data.get("pressureMode", 'location'),
            custom_pressure=OptionalValue.from_raw(room.get("initialPressurePa")),
            atmosphere=dict(data.get("atmosphere") or STANDARD_ATMOSPHERES['earth']),
            default_air_handler_mode=data.get("defaults", {}).get("airHandlerMode", MODE_OFF),
        )

    def initial_pressure(self, altitude: float = 0.0) -> float:
        if self.pressure_mode == 'sealevel':
            return ISA.P0
        if self.pressure_mode == 'custom':
            pressure = self.custom_pressure.resolve(ISA.P0)
            return pressure if is_positive(pressure) else ISA.P0
        return calculate_pressure_isa(altitude)


@dataclass(frozen=True)
class EnergyTotals:
    ac_heating: float = 0.0         # [J]
    ac_cooling: float = 0.0         # [J]
    air_handler: float = 0.0        # [J] fan electricity
    burner_waste: float = 0.0       # [J] burner heat lost to the room


@dataclass(frozen=True)
class HeatLogEntry:
    time: float
    source: str
    watts: float


@dataclass(frozen=True)
class CompositionLogEntry:
    time: float
    composition: Dict[str, float]


@dataclass(frozen=True)
class CombinedAirflow:
    total_cfm: float = 0.0
    total_m3_per_hour: float = 0.0
    ac_cfm: float = 0.0
    ac_m3_per_hour: float = 0.0
    air_handler_cfm: float = 0.0
    air_handler_m3_per_hour: float = 0.0


@dataclass(frozen=True)
class VaporInput:
    species: str            # key in the room composition
    mass: float             # [kg]
    molar_mass: float       # [g/mol]


@dataclass(frozen=True)
class RoomState:
    volume: float
    heat_capacity: float
    leak_rate: float
    temperature: float
    pressure: float
    ambient_pressure: float
    composition: Dict[str, float]
    target_composition: Dict[str, float]
    initial_composition: Dict[str, float]
    initial_temperature: float
    initial_pressure: float
    ac_enabled: bool = False
    ac_setpoint: float = 20.0
    ac_pid_state: PidState = PidState()
    ac_heat_output: float = 0.0
    ac_status: str = "Off"
    air_handler_mode: str = MODE_OFF
    air_handler_pid_state: PidState = PidState()
    air_handler_flow: float = 0.0           # [m³/h]
    scrubber_activity: float = 0.0          # [0, 1]
    air_handler_status: str = "Off"
    airflow: CombinedAirflow = CombinedAirflow()
    energy_totals: EnergyTotals = EnergyTotals()
    exposure_events: Tuple[ExposureEvent, ...] = ()
    alerts: Tuple[Alert, ...] = ()
    heat_log: Tuple[HeatLogEntry, ...] = ()
    composition_log: Tuple[CompositionLogEntry, ...] = ()
    elapsed_s: float = 0.0


def create_room_state(config: RoomConfig, altitude: float = 0.0) -> RoomState:
    pressure = config.initial_pressure(altitude)
    return RoomState(
        volume=config.volume,
        heat_capacity=config.heat_capacity,
        leak_rate=config.leak_rate,
        temperature=config.initial_temperature,
        pressure=pressure,
        ambient_pressure=pressure,
        composition=dict(config.atmosphere),
        target_composition=dict(config.atmosphere),
        initial_composition=dict(config.atmosphere),
        initial_temperature=config.initial_temperature,
        initial_pressure=pressure,
        ac_setpoint=config.initial_temperature,
        air_handler_mode=config.default_air_handler_mode,
    )


def set_ac_enabled(state: RoomState, enabled: bool) -> RoomState:
    # Switching the unit on or off restarts its controller
    return replace(state, ac_enabled=enabled, ac_pid_state=PidState(), ac_heat_output=0.0,
                   ac_status="Idle" if enabled else "Off")


def set_ac_setpoint(state: RoomState, setpoint: float) -> RoomState:
    return replace(state, ac_setpoint=setpoint)


def set_air_handler_mode(state: RoomState, mode: str, config: AirHandlerConfig | None = None) -> RoomState:
    """Change the air handler mode. With a config the mode is checked against the modes it defines"""
    if config is not None and mode not in config.modes:
        raise UnknownModeError(f'Unknown air handler mode "{mode}". Available modes are {config.modes}')
    return replace(state, air_handler_mode=mode, air_handler_pid_state=PidState())


def add_vapor_to_room(state: RoomState, species: str, mass: float, molar_mass: float) -> RoomState:
    """
    Inject vapor in the room, treated as a closed ideal gas system: the composition is diluted by
    the added moles and the pressure rises accordingly.

    Parameters
    ----------
    species : str
        Key of the vapor in the composition
    mass : float
        Vapor mass [kg]
    molar_mass : float
        [g/mol]
    """
    if not is_positive(mass) or not is_positive(molar_mass):
        return state
    moles_added = mass / (molar_mass / 1000)
    temperature = C2K(state.temperature)
    total_moles = state.pressure * state.volume / (THERMO.R_univ * temperature)
    scale = total_moles / (total_moles + moles_added)
    composition = {s: fraction * scale for s, fraction in state.composition.items()}
    composition[species] = composition.get(species, 0.0) + moles_added / (total_moles + moles_added)
    pressure = (total_moles + moles_added) * THERMO.R_univ * temperature / state.volume
    return replace(state, composition=composition, pressure=pressure)


def _append_heat_log(heat_log: Tuple[HeatLogEntry, ...], time: float, source: str, watts: float) -> Tuple[HeatLogEntry, ...]:
    # A new entry only when the source changes
    if heat_log and heat_log[-1].source == source:
        return heat_log
    return (heat_log + (HeatLogEntry(time, source, watts),))[-HEAT_LOG_LENGTH:]


def apply_heat_to_room(state: RoomState, watts: float, dt: float, source: str = 'unknown') -> RoomState:
    if watts == 0:
        return state
    return replace(state,
                   temperature=state.temperature + watts * dt / state.heat_capacity,
                   heat_log=_append_heat_log(state.heat_log, state.elapsed_s, source, watts))


def apply_pressure_leak(state: RoomState, dt: float) -> RoomState:
    # Rate limited equalisation toward the ambient pressure
    difference = state.pressure - state.ambient_pressure
    change = math.copysign(min(abs(difference), state.leak_rate * dt), difference)
    return replace(state, pressure=state.pressure - change)


def calculate_combined_airflow(ac_config: AcUnitConfig | None, air_handler_config: AirHandlerConfig | None,
                               air_handler_mode: str, *, ac_enabled: bool = True,
                               auto_flow_percent: float = 0.0) -> CombinedAirflow:
    """
    Airflow moved in the room: the AC fan when the AC is enabled, plus the air handler share of
    its maximum flow. In "auto" the share is the one set by the controller, auto_flow_percent.
    """
    # A unit without a rated fan flow moves the baseline airflow
    ac_cfm = (ac_config.base_cfm or BASELINE_CFM) if ac_config is not None and ac_enabled else 0.0
    ac_m3h = ac_config.base_m3_per_hour if ac_config is not None and ac_enabled else 0.0
    ah_cfm = ah_m3h = 0.0
    if air_handler_config is not None and air_handler_mode != MODE_OFF:
        if air_handler_mode == MODE_AUTO:
            percent = auto_flow_percent
        else:
            percent = air_handler_config.flow_percent(air_handler_mode)
        ah_cfm = air_handler_config.max_flow_cfm * percent / 100
        ah_m3h = air_handler_config.max_flow_m3_per_hour * percent / 100
    return CombinedAirflow(ac_cfm + ah_cfm, ac_m3h + ah_m3h, ac_cfm, ac_m3h, ah_cfm, ah_m3h)


def room_step(state: RoomState, ac_config: AcUnitConfig | None, air_handler_config: AirHandlerConfig | None,
              dt: float, *, external_heat_watts: float = 0.0, vapor_input: VaporInput | None = None) -> RoomState:
    """
    Advance the room by one tick.

    Parameters
    ----------
    state : RoomState
        Current room state
    ac_config : AcUnitConfig
        AC of the room, None if the room has no AC
    air_handler_config : AirHandlerConfig
        Air handler of the room, None if the room has no air handler
    dt : float
        Time step [s]
    external_heat_watts : float, optional
        Burner power [W]. A fixed share of it heats the room
    vapor_input : VaporInput, optional
        Vapor released by the vessel during the tick

    Returns
    -------
    RoomState
        New state, with alerts, exposure events and energy totals of the tick
    """
    airflow = calculate_combined_airflow(ac_config, air_handler_config, state.air_handler_mode,
                                         ac_enabled=state.ac_enabled,
                                         auto_flow_percent=state.scrubber_activity * 100)
    totals = state.energy_totals

    if external_heat_watts > 0:
        waste_watts = external_heat_watts * BURNER_WASTE_FRACTION
        state = apply_heat_to_room(state, waste_watts, dt, 'burner_waste')
        totals = replace(totals, burner_waste=totals.burner_waste + waste_watts * dt)

    if state.ac_enabled and ac_config is not None:
        effectiveness = min(MAX_AIRFLOW_EFFECTIVENESS, airflow.total_cfm / BASELINE_CFM)
        ac = apply_ac_effect(state.temperature, state.ac_setpoint, ac_config, state.ac_pid_state,
                             dt * effectiveness, state.volume)
        ac_joules = abs(ac.heat_output_watts) * dt
        if ac.heat_output_watts > 0:
            totals = replace(totals, ac_heating=totals.ac_heating + ac_joules)
        elif ac.heat_output_watts < 0:
            totals = replace(totals, ac_cooling=totals.ac_cooling + ac_joules)
        heat_log = state.heat_log
        if abs(ac.heat_output_watts) > IDLE_WATTS:
            source = 'ac_heating' if ac.heat_output_watts > 0 else 'ac_cooling'
            heat_log = _append_heat_log(heat_log, state.elapsed_s, source, ac.heat_output_watts)
        state = replace(state, temperature=ac.new_temp, ac_pid_state=ac.updated_pid_state,
                        ac_heat_output=ac.heat_output_watts, ac_status=ac.status_text, heat_log=heat_log)
    else:
        state = replace(state, ac_heat_output=0.0, ac_status="Off" if not state.ac_enabled else "No AC")

    if vapor_input is not None:
        state = add_vapor_to_room(state, vapor_input.species, vapor_input.mass, vapor_input.molar_mass)

    ah = apply_air_handler_effect(state.composition, state.target_composition, air_handler_config,
                                  state.air_handler_pid_state, dt, state.volume, mode=state.air_handler_mode,
                                  base_flow_m3_per_hour=airflow.ac_m3_per_hour)
    if air_handler_config is not None:
        fan_watts = air_handler_config.max_flow_cfm * ah.flow_percent / 100 * air_handler_config.fan_watts_per_cfm
        totals = replace(totals, air_handler=totals.air_handler + fan_watts * dt)
    elapsed = state.elapsed_s + dt
    state = replace(state, composition=ah.new_composition, air_handler_pid_state=ah.updated_pid_state,
                    air_handler_flow=ah.flow_rate_m3_per_hour, scrubber_activity=ah.flow_percent / 100,
                    air_handler_status=ah.status_text, airflow=airflow, energy_totals=totals, elapsed_s=elapsed)

    filtration, exposure_mode = {}, MODE_OFF
    if air_handler_config is not None and state.air_handler_mode in air_handler_config.modes:
        # Unknown modes filter nothing
        filtration = air_handler_config.filtration_efficiency.resolve({})
        exposure_mode = state.air_handler_mode
    state = replace(state, exposure_events=track_exposure(state.exposure_events, state.composition, filtration,
                                                          exposure_mode, dt, elapsed))
    state = apply_pressure_leak(state, dt)

    composition_log = state.composition_log
    last_time = composition_log[-1].time if composition_log else 0.0
    if elapsed - last_time >= COMPOSITION_LOG_INTERVAL:
        entry = CompositionLogEntry(elapsed, dict(state.composition))
        composition_log = (composition_log + (entry,))[-COMPOSITION_LOG_LENGTH:]
    return replace(state, alerts=check_composition_alerts(state.composition), composition_log=composition_log)


def get_room_summary(state: RoomState) -> dict:
    """Rounded values for display"""
    return {
        'temperature': round(state.temperature, 1),
        'pressure': round(state.pressure),
        'pressure_kpa': round(state.pressure / 1000, 1),
        'humidity_percent': round(state.composition.get('H2O', 0.0) * 100, 1),
        'o2_percent': round(state.composition.get('O2', 0.0) * 100, 1),
        'co2_percent': round(state.composition.get('CO2', 0.0) * 100, 2),
        'alerts': state.alerts,
        'ac_enabled': state.ac_enabled,
        'ac_setpoint': state.ac_setpoint,
        'ac_heat_output': round(state.ac_heat_output),
        'ac_status': state.ac_status,
        'air_handler_mode': state.air_handler_mode,
        'air_handler_status': state.air_handler_status,
        'scrubber_activity': state.scrubber_activity,
        'elapsed_s': state.elapsed_s,
    }

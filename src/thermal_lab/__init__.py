# Re-export a stable public API
from .sim.config import SimulationConfig
from .sim.simulator import Simulator
from .sim.results import SimulationResults
from .components.fluid import FluidProperties, FluidState, FluidPhase, FluidStepResult, fluid_step, calculate_expected_boil_time
from .components.boiling_point import BoilingPointResult, calculate_boiling_point, calculate_boiling_point_at_pressure
from .components.room import (RoomConfig, RoomState, EnergyTotals, VaporInput, create_room_state, room_step,
                              set_ac_enabled, set_ac_setpoint, set_air_handler_mode, add_vapor_to_room,
                              apply_heat_to_room, apply_pressure_leak, calculate_combined_airflow, get_room_summary)
from .controllers.ac_unit import AcUnitConfig, AcEffectResult, apply_ac_effect
from .controllers.air_handler import AirHandlerConfig, AirHandlerEffectResult, apply_air_handler_effect
from .sensors.exposure import TOXIC_THRESHOLDS, ExposureSeverity, ExposureEvent, Alert, classify_exposure, track_exposure, check_composition_alerts
from .formulas.antoine import AntoineCoefficients
from .formulas.pid import PidState, PidGains, PID_PRESETS
from .core.options import OptionalValue
from .helpers import ConfigurationError, UnknownModeError

__all__ = [
    "SimulationConfig", "Simulator", "SimulationResults",
    "FluidProperties", "FluidState", "FluidPhase", "FluidStepResult", "fluid_step", "calculate_expected_boil_time",
    "BoilingPointResult", "calculate_boiling_point", "calculate_boiling_point_at_pressure",
    "RoomConfig", "RoomState", "EnergyTotals", "VaporInput", "create_room_state", "room_step",
    "set_ac_enabled", "set_ac_setpoint", "set_air_handler_mode", "add_vapor_to_room",
    "apply_heat_to_room", "apply_pressure_leak", "calculate_combined_airflow", "get_room_summary",
    "AcUnitConfig", "AcEffectResult", "apply_ac_effect",
    "AirHandlerConfig", "AirHandlerEffectResult", "apply_air_handler_effect",
    "TOXIC_THRESHOLDS", "ExposureSeverity", "ExposureEvent", "Alert", "classify_exposure", "track_exposure", "check_composition_alerts",
    "AntoineCoefficients", "PidState", "PidGains", "PID_PRESETS", "OptionalValue",
    "ConfigurationError", "UnknownModeError",
]

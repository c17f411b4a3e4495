# thermal_lab/sim/simulator.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from thermal_lab.components.fluid import FluidProperties, FluidState, FluidStepResult, fluid_step
from thermal_lab.components.room import RoomState, VaporInput, room_step
from thermal_lab.controllers.ac_unit import AcUnitConfig
from thermal_lab.controllers.air_handler import AirHandlerConfig
from thermal_lab.core.registry import SignalRegistry
from thermal_lab.helpers import is_positive
from .config import SimulationConfig
from .state import SimulationState
from thermal_lab.sim.simulation_data import SimulationData
from thermal_lab.sim.results import SimulationResults

_LOGGER = logging.getLogger(__name__)

HeaterSchedule = Union[float, Callable[[float], float]]

FLUID = "fluid"
ROOM = "room"


@dataclass
class Simulator:
    """
    Runs the fluid and the room together at a fixed cadence.

    At every tick the heater power is read from the schedule, the fluid is advanced in the air of the
    room, and the room receives the burner waste heat and the vapor released by the fluid. Without a
    room the fluid sees the ambient temperature of the config and the ISA pressure at its altitude.
    """
    fluid_props: FluidProperties
    fluid_state: FluidState
    cfg: SimulationConfig
    room_state: Optional[RoomState] = None
    ac_config: Optional[AcUnitConfig] = None
    air_handler_config: Optional[AirHandlerConfig] = None
    heater_schedule: HeaterSchedule = 0.0

    def __post_init__(self):
        self.signal_registry = SignalRegistry()
        for name in ("temperature", "mass", "boiling_point", "vapor_mass", "heater_power", "is_boiling"):
            self.signal_registry.register(FLUID, name)
        if self.room_state is not None:
            for name in ("temperature", "pressure", "ac_power", "air_handler_flow"):
                self.signal_registry.register(ROOM, name)
            for species in self._tracked_species():
                self.signal_registry.register(ROOM, species)

    def _tracked_species(self):
        species = list(self.room_state.composition)
        if self.fluid_props is not None and self.fluid_props.atmosphere_key not in species:
            species.append(self.fluid_props.atmosphere_key)
        return species

    def heater_watts(self, time: float) -> float:
        if callable(self.heater_schedule):
            return self.heater_schedule(time)
        return self.heater_schedule

    def run(self) -> SimulationResults:
        self.state = SimulationState()
        self.state.init_time_vector(self.cfg)

        sim_data = SimulationData()
        sim_data.create_empty_dataset(self.state.time_vector, self.signal_registry)

        fluid, room = self.fluid_state, self.room_state
        _LOGGER.debug("Simulation started: %d steps of %.3f s", len(self.state.time_vector), self.state.time_step)
        for _ in self.state.time_vector:
            fluid, room, result, heater = self._step(fluid, room)
            self._save_simulation_data(sim_data, result, room, heater)
            self.state.time += self.state.time_step
            self.state.time_id += 1
        _LOGGER.debug("Simulation finished at t=%.1f s", self.state.time)

        return SimulationResults(sim_data,
                                 self.state.time_step,
                                 self.state.time_vector,
                                 self.signal_registry,
                                 final_fluid_state=fluid,
                                 final_room_state=room)

    def _step(self, fluid: FluidState, room: Optional[RoomState]):
        dt = self.state.time_step
        heater = self.heater_watts(self.state.time)
        if room is not None:
            result = fluid_step(fluid, heater, dt, self.fluid_props, room.temperature,
                                ambient_pressure=room.pressure, room_composition=room.composition)
            vapor = None
            if result.vapor_mass > 0 and is_positive(self.fluid_props.molar_mass):
                vapor = VaporInput(self.fluid_props.atmosphere_key, result.vapor_mass, self.fluid_props.molar_mass)
            room = room_step(room, self.ac_config, self.air_handler_config, dt,
                             external_heat_watts=heater, vapor_input=vapor)
        else:
            result = fluid_step(fluid, heater, dt, self.fluid_props, self.cfg.ambient_temp)
        return result.state, room, result, heater

    def _save_simulation_data(self, sim_data: SimulationData, result: FluidStepResult, room: Optional[RoomState], heater: float):
        time_id = self.state.time_id
        reg = self.signal_registry
        values = {
            (FLUID, "temperature"): result.state.temperature,
            (FLUID, "mass"): result.state.mass,
            (FLUID, "boiling_point"): result.boiling_point if result.boiling_point is not None else float("nan"),
            (FLUID, "vapor_mass"): result.vapor_mass,
            (FLUID, "heater_power"): heater,
            (FLUID, "is_boiling"): float(result.is_boiling),
        }
        if room is not None:
            values.update({
                (ROOM, "temperature"): room.temperature,
                (ROOM, "pressure"): room.pressure,
                (ROOM, "ac_power"): room.ac_heat_output,
                (ROOM, "air_handler_flow"): room.air_handler_flow,
            })
            for species in self._tracked_species():
                values[(ROOM, species)] = room.composition.get(species, 0.0)
        for (main_key, secondary_key), value in values.items():
            sim_data.signals[time_id, reg.col_index(main_key, secondary_key)] = value

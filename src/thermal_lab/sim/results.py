from thermal_lab.sim.simulation_data import SimulationData
from thermal_lab.core.registry import SignalRegistry
from dataclasses import dataclass
from typing import Any, Optional
import numpy as np

@dataclass
class SimulationResults:
    data: SimulationData
    time_step: float
    time_vector: np.ndarray
    signal_registry: SignalRegistry
    final_fluid_state: Any = None
    final_room_state: Any = None

    def to_dataframe(self, main_key: Optional[str] = None):
        """Recorded signals indexed by simulated time [s]. main_key selects the "fluid" or "room" columns"""
        return self.data.to_dataframe(self.time_vector, self.signal_registry, main_key)

    def get_signal(self, main_key: str, secondary_key: str) -> np.ndarray:
        return self.data.signals[:, self.signal_registry.col_index(main_key, secondary_key)]

    def _get_cumulated_result(self, main_key: str, secondary_key: str, scaling_factor: float = 1):
        return np.nansum(self.get_signal(main_key, secondary_key)) * self.time_step * scaling_factor

    def _get_cumulated_result_with_sign(self, main_key: str, secondary_key: str, sign: str, scaling_factor: float = 1):
        values = self.get_signal(main_key, secondary_key)
        match sign:
            case 'only positive':
                return np.nansum(values[values >= 0.0]) * self.time_step * scaling_factor
            case 'only negative':
                return -np.nansum(values[values <= 0.0]) * self.time_step * scaling_factor

    def get_cumulated_energy(self, main_key: str, secondary_key: str, unit: str = "J", sign: str = "net"):
        """Integral over the simulated time of a recorded power signal [W]"""
        match unit:
            case "J":
                scaling_factor = 1
            case "kJ":
                scaling_factor = 1 / 1_000
            case "Wh":
                scaling_factor = 1 / 3_600
            case "kWh":
                scaling_factor = 1 / 3_600_000
            case _:
                raise ValueError(unit)

        match sign:
            case "net":
                return self._get_cumulated_result(main_key, secondary_key, scaling_factor)
            case "only positive" | "only negative":
                return self._get_cumulated_result_with_sign(main_key, secondary_key, sign, scaling_factor)
            case _:
                raise ValueError(sign)

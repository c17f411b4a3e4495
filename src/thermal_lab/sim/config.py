# thermal_lab/sim/config.py
from dataclasses import dataclass
from thermal_lab.helpers import ConfigurationError, is_positive

@dataclass(frozen=True)
class SimulationConfig:
    time_step_s: float = 0.1        # host tick, seconds
    duration_s: float = 600.0       # simulated seconds
    time_multiplier: float = 1.0    # simulated seconds per host second
    ambient_temp: float = 20.0      # °C, used when no room is simulated

    def __post_init__(self):
        if not is_positive(self.time_step_s) or not is_positive(self.time_multiplier):
            raise ConfigurationError(f'Time step and time multiplier should be positive, got {self.time_step_s} and {self.time_multiplier}')
        if self.duration_s < 0:
            raise ConfigurationError(f'The simulation duration should not be negative, {self.duration_s} was provided')

    @property
    def dt(self) -> float:
        # Simulated seconds advanced at each tick
        return self.time_step_s * self.time_multiplier

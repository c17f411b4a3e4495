from thermal_lab.sim.config import SimulationConfig
from dataclasses import dataclass
import numpy as np

@dataclass
class SimulationState:
    time: float = 0.0           # simulated seconds
    time_id: int = 0
    time_vector: np.ndarray | None = None
    time_step: float = 0.0

    def init_time_vector(self, cfg: SimulationConfig) -> None:
        self.time = 0.0
        self.time_id = 0
        self.time_step = cfg.dt
        n_steps = int(np.ceil(cfg.duration_s / cfg.dt - 1e-9))
        # Time at the end of each tick
        self.time_vector = np.arange(1, n_steps + 1) * cfg.dt

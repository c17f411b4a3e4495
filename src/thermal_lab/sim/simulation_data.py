from dataclasses import dataclass
from typing import Optional
import numpy as np
import pandas as pd
from thermal_lab.core.registry import SignalRegistry

@dataclass
class SimulationData:
    signals: np.ndarray = None

    def create_empty_dataset(self, time_vector, signal_registry: SignalRegistry):
        # NaN marks a tick that was never recorded
        self.signals = np.full((len(time_vector), len(signal_registry)), np.nan, dtype=np.float64)

    def to_dataframe(self, time_vector, signal_registry: SignalRegistry, main_key: Optional[str] = None):
        keys = signal_registry.keys(main_key)
        columns = [signal_registry.col_index(key.main_key, key.secondary_key) for key in keys]
        return pd.DataFrame(self.signals[:, columns], columns=[key.column_name for key in keys],
                            index=pd.Index(time_vector, name='time'))

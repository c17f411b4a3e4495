from dataclasses import dataclass, field
from typing import Dict, List, Optional

@dataclass(frozen=True)
class SignalKey:
    main_key: str           # "fluid" or "room"
    secondary_key: str      # e.g. "temperature", "H2O"

    @property
    def column_name(self) -> str:
        return f'{self.main_key}:{self.secondary_key}'

@dataclass
class SignalRegistry:
    # Insertion order gives the column order of the recorded arrays
    _columns: Dict[SignalKey, int] = field(default_factory=dict)

    def register(self, main_key: str, secondary_key: str) -> int:
        """Column of the signal, allocated on first registration"""
        return self._columns.setdefault(SignalKey(main_key, secondary_key), len(self._columns))

    def col_index(self, main_key: str, secondary_key: str) -> int:
        return self._columns[SignalKey(main_key, secondary_key)]

    def keys(self, main_key: Optional[str] = None) -> List[SignalKey]:
        return [key for key in self._columns if main_key is None or key.main_key == main_key]

    def column_names(self, main_key: Optional[str] = None) -> List[str]:
        return [key.column_name for key in self.keys(main_key)]

    def __len__(self):
        return len(self._columns)

# src/thermal_lab/constants/__init__.py
from .thermo import THERMO, UNITS
from .fluids import WATER, AIR
from .atmosphere import ISA, BOILING
from .base import override

__all__ = ["THERMO", "UNITS", "WATER", "AIR", "ISA", "BOILING", "override"]

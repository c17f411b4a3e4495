# src/thermal_lab/formulas/antoine.py
"""
Antoine equation, log10(P) = A - B / (C + T), with P in mmHg and T in °C.

A liquid boils when its vapor pressure equals the ambient pressure, so the inverse
form gives the boiling point at a given pressure. The verified range [t_min, t_max]
of a coefficient set is empirical, not a hard limit: results outside it are returned
as computed and only flagged as extrapolated.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple
from thermal_lab.constants import UNITS, BOILING, THERMO
from thermal_lab.helpers import is_finite

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AntoineCoefficients:
    A: float
    B: float
    C: float
    t_min: Optional[float] = None   # [°C]
    t_max: Optional[float] = None   # [°C]

    @classmethod
    def from_dict(cls, data: dict | None) -> Optional["AntoineCoefficients"]:
        """Build from a substance record, e.g. {"A": 8.07131, "B": 1730.63, "C": 233.426, "TminC": 1, "TmaxC": 100}"""
        if not data:
            return None
        return cls(
            A=data.get("A"),
            B=data.get("B"),
            C=data.get("C"),
            t_min=data.get("TminC", data.get("t_min")),
            t_max=data.get("TmaxC", data.get("t_max")),
        )

    @property
    def is_complete(self) -> bool:
        return all(is_finite(x) and x != 0 for x in (self.A, self.B, self.C))


@dataclass(frozen=True)
class AntoineResult:
    temperature: float                                       # [°C]
    is_extrapolated: bool
    verified_range: Tuple[Optional[float], Optional[float]]  # (min, max) [°C], None for an open bound


def solve_antoine_for_temperature(pressure: float, coeffs: AntoineCoefficients | None) -> Optional[AntoineResult]:
    """
    Temperature at which the vapor pressure equals the given pressure.

    Parameters
    ----------
    pressure : float
        Pressure [Pa]
    coeffs : AntoineCoefficients
        Coefficient set of the substance, in mmHg / °C

    Returns
    -------
    AntoineResult or None
        None when the coefficients are missing, the equation is singular at this pressure or the
        solution lies below absolute zero
    """
    if coeffs is None or not coeffs.is_complete or not pressure > 0:
        return None
    log_pressure = math.log10(pressure / UNITS.mmHg)
    if math.isclose(log_pressure, coeffs.A, rel_tol=1e-9, abs_tol=1e-12):
        return None
    temperature = coeffs.B / (coeffs.A - log_pressure) - coeffs.C
    if temperature <= -THERMO.zero_celsius:
        # Pressure too close to 10^A mmHg, no physical solution
        return None
    t_min = coeffs.t_min if is_finite(coeffs.t_min) else None
    t_max = coeffs.t_max if is_finite(coeffs.t_max) else None
    below = t_min is not None and temperature < t_min - BOILING.antoine_tolerance
    above = t_max is not None and temperature > t_max + BOILING.antoine_tolerance
    if below or above:
        _LOGGER.debug("Antoine result %.2f °C outside verified range [%s, %s]", temperature, t_min, t_max)
    return AntoineResult(temperature, below or above, (t_min, t_max))


def solve_antoine_for_pressure(temperature: float, coeffs: AntoineCoefficients | None) -> Optional[float]:
    # Vapor pressure [Pa] at the given temperature [°C]
    if coeffs is None or not coeffs.is_complete:
        return None
    denominator = coeffs.C + temperature
    if abs(denominator) < 1e-10:
        return None
    return 10 ** (coeffs.A - coeffs.B / denominator) * UNITS.mmHg

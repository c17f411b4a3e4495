# src/thermal_lab/formulas/newton_cooling.py
"""
Newton's law of cooling, dT/dt = -k·(T - T_amb).

The coefficient k is not an arbitrary constant: it follows from the convective
transfer of the vessel and the thermal mass of its content, k = (h·A) / (m·c).
"""
import math
from thermal_lab.helpers import is_positive

# h·A [W/°C] for typical vessels
CONVECTIVE_HEAT_TRANSFER = {
    'pot_in_still_air': 0.3,
    'pot_with_lid': 0.15,
    'cup_in_still_air': 0.1,
    'large_stockpot': 0.5,
    'pot_with_fan': 0.8,
}

FALLBACK_COOLING_COEFF = 0.0015  # [1/s]


def calculate_effective_cooling_coeff(convective_heat_transfer: float, mass: float, specific_heat: float) -> float:
    """
    Effective cooling coefficient k [1/s]

    Parameters
    ----------
    convective_heat_transfer : float
        h·A [W/°C] of the vessel
    mass : float
        Mass of the fluid [kg]
    specific_heat : float
        Specific heat [J/(g·°C)]
    """
    thermal_mass = mass * specific_heat * 1000 if is_positive(mass) and is_positive(specific_heat) else 0.0
    if thermal_mass <= 0:
        return FALLBACK_COOLING_COEFF
    return convective_heat_transfer / thermal_mass


def apply_cooling_step(current_temp: float, ambient_temp: float, cooling_coeff: float, dt: float) -> float:
    # A non-positive or non-finite step leaves the temperature unchanged
    if not is_positive(dt) or not math.isfinite(cooling_coeff) or not math.isfinite(ambient_temp):
        return current_temp
    temp_difference = current_temp - ambient_temp
    new_temp = current_temp - cooling_coeff * temp_difference * dt
    # Never overshoot past ambient
    if temp_difference > 0:
        new_temp = max(new_temp, ambient_temp)
    elif temp_difference < 0:
        new_temp = min(new_temp, ambient_temp)
    return new_temp


def temperature_at_time(initial_temp: float, ambient_temp: float, cooling_coeff: float, time: float) -> float:
    # T(t) = T_amb + (T0 - T_amb)·exp(-k·t)
    return ambient_temp + (initial_temp - ambient_temp) * math.exp(-cooling_coeff * time)


def time_to_cool(initial_temp: float, target_temp: float, ambient_temp: float, cooling_coeff: float) -> float:
    """
    Time [s] for the exponential decay to bring initial_temp to target_temp.

    Returns math.inf when the target cannot be reached: it lies on the other side of
    ambient, it equals ambient (reached only asymptotically), or k is not positive.
    Returns 0 when the target is already reached.
    """
    initial_diff = initial_temp - ambient_temp
    target_diff = target_temp - ambient_temp
    if initial_diff * target_diff < 0:
        return math.inf
    if abs(target_diff) >= abs(initial_diff):
        return 0.0
    if target_diff == 0 or cooling_coeff <= 0:
        return math.inf
    return -math.log(target_diff / initial_diff) / cooling_coeff

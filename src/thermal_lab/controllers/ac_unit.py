# src/thermal_lab/controllers/ac_unit.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional
from thermal_lab.constants import AIR
from thermal_lab.formulas.heat_capacity import calculate_temp_change
from thermal_lab.formulas.pid import PidGains, PidState, PID_PRESETS, calculate_pid_output, apply_deadband
from thermal_lab.helpers import ConfigurationError, clamp, is_positive

IDLE_WATTS = 10.0


@dataclass(frozen=True)
class AcUnitConfig:
    """
    Heating/cooling unit controlling the room temperature

    Parameters
    ----------
    cooling_max_watts : float
        Maximum cooling power [W]
    heating_max_watts : float
        Maximum heating power [W]
    deadband : float, optional
        Half width [°C] of the band around the setpoint where the unit stays idle. Defaults to 0.5°C
    response_time : float, optional
        Time constant [s] of the first order lag between the commanded and the delivered power. Defaults to 5 s
    pid_gains : PidGains, optional
        Defaults to the "balanced" preset
    max_rate_of_change : float, optional
        Maximum room temperature change the unit can cause [°C/s]. Defaults to 1°C/s
    base_cfm, base_m3_per_hour : float, optional
        Airflow moved by the unit fan when enabled
    """
    cooling_max_watts: float
    heating_max_watts: float
    deadband: float = 0.5
    response_time: float = 5.0
    pid_gains: PidGains = field(default_factory=lambda: PID_PRESETS['balanced'])
    max_rate_of_change: float = 1.0
    base_cfm: float = 150.0
    base_m3_per_hour: float = 255.0

    def __post_init__(self):
        if self.cooling_max_watts < 0 or self.heating_max_watts < 0:
            raise ConfigurationError(f'The maximum AC powers should not be negative, got cooling={self.cooling_max_watts} W and heating={self.heating_max_watts} W')
        if not is_positive(self.response_time):
            raise ConfigurationError(f'The AC response time should be positive, {self.response_time} was provided')
        if self.deadband < 0 or self.max_rate_of_change < 0:
            raise ConfigurationError('The AC deadband and maximum rate of change should not be negative')

    @classmethod
    def from_dict(cls, data: Mapping) -> "AcUnitConfig":
        thermal = data.get("thermalCharacteristics", {})
        airflow = data.get("airflowCharacteristics", {})
        return cls(
            cooling_max_watts=thermal.get("coolingMaxWatts", 0.0),
            heating_max_watts=thermal.get("heatingMaxWatts", 0.0),
            deadband=thermal.get("deadbandDegrees", 0.5),
            response_time=thermal.get("responseTimeSeconds") or 5.0,
            pid_gains=PidGains.from_dict(data.get("pidTuning"), PID_PRESETS['balanced']),
            max_rate_of_change=data.get("constraints", {}).get("maxRateOfChangePerSec") or 1.0,
            base_cfm=airflow.get("baseCFM") or 150.0,
            base_m3_per_hour=airflow.get("baseM3PerHour", 255.0),
        )


@dataclass(frozen=True)
class AcEffectResult:
    new_temp: float
    power_percent: int
    heat_output_watts: float        # positive when heating, negative when cooling
    updated_pid_state: PidState     # last_output holds the delivered watts
    status_text: str


def calculate_room_air_mass(room_volume: float) -> float:
    return room_volume * AIR.rho


def get_ac_status(heat_output_watts: float, power_percent: int) -> str:
    if abs(heat_output_watts) < IDLE_WATTS:
        return "Idle"
    mode = "Heating" if heat_output_watts > 0 else "Cooling"
    return f"{mode} {power_percent}%"


def apply_ac_effect(room_temp: float, setpoint: float, ac_config: Optional[AcUnitConfig], pid_state: PidState,
                    dt: float, room_volume: float = 30.0) -> AcEffectResult:
    """
    One update of the AC loop: PID on the temperature error, deadband, choice of heating or cooling
    from the sign of the output, first order lag toward the previously delivered power, and conversion
    of the energy into a temperature change of the room air.

    Parameters
    ----------
    room_temp : float
        Current room temperature [°C]
    setpoint : float
        Target room temperature [°C]
    ac_config : AcUnitConfig
        If None the room is returned unchanged
    pid_state : PidState
        State returned by the previous update
    dt : float
        Time step [s]
    room_volume : float, optional
        [m³], the heated or cooled mass is the air in the room. Defaults to 30 m³
    """
    if ac_config is None:
        return AcEffectResult(room_temp, 0, 0.0, pid_state, "No AC")
    pid = calculate_pid_output(setpoint, room_temp, pid_state, ac_config.pid_gains, dt)
    output = apply_deadband(pid.output, pid.error, ac_config.deadband)
    if output > 0:
        commanded_watts = output * ac_config.heating_max_watts
    elif output < 0:
        commanded_watts = output * ac_config.cooling_max_watts
    else:
        commanded_watts = 0.0
    response_factor = min(1.0, dt / ac_config.response_time) if dt > 0 else 0.0
    heat_output_watts = commanded_watts * response_factor + (1 - response_factor) * pid_state.last_output
    temp_change = calculate_temp_change(calculate_room_air_mass(room_volume), AIR.cp, heat_output_watts * dt)
    max_change = ac_config.max_rate_of_change * dt
    temp_change = clamp(temp_change, -max_change, max_change)
    max_watts = max(ac_config.cooling_max_watts, ac_config.heating_max_watts)
    power_percent = round(abs(heat_output_watts) / max_watts * 100) if max_watts > 0 else 0
    return AcEffectResult(
        new_temp=room_temp + temp_change,
        power_percent=power_percent,
        heat_output_watts=heat_output_watts,
        updated_pid_state=replace(pid.state, last_output=heat_output_watts),
        status_text=get_ac_status(heat_output_watts, power_percent),
    )

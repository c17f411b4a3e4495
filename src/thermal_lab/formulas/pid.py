# src/thermal_lab/formulas/pid.py
"""
Discrete PID controller with integral anti-windup and a deadband.

The controller state is a plain value: every call takes the previous PidState and
returns the updated one, the caller owns where it is stored.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from thermal_lab.helpers import clamp


@dataclass(frozen=True)
class PidState:
    integral: float = 0.0
    previous_error: float = 0.0
    last_output: float = 0.0      # last command sent to the actuator


@dataclass(frozen=True)
class PidGains:
    kp: float = 50.0
    ki: float = 2.0
    kd: float = 10.0
    integral_windup_limit: float = 100.0

    @classmethod
    def from_dict(cls, data: Optional[dict], default: Optional["PidGains"] = None) -> "PidGains":
        """Accepts {"Kp": .., "Ki": .., "Kd": .., "integralWindupLimit": ..}, missing keys take the default gains"""
        default = default or cls()
        if not data:
            return default
        return cls(
            kp=data.get("Kp", default.kp),
            ki=data.get("Ki", default.ki),
            kd=data.get("Kd", default.kd),
            integral_windup_limit=data.get("integralWindupLimit", default.integral_windup_limit),
        )


PID_PRESETS = {
    'conservative': PidGains(kp=30, ki=1, kd=15, integral_windup_limit=50),
    'balanced': PidGains(kp=50, ki=2, kd=10, integral_windup_limit=100),
    'aggressive': PidGains(kp=80, ki=4, kd=5, integral_windup_limit=150),
    'critically_damped': PidGains(kp=40, ki=1, kd=20, integral_windup_limit=80),
}


@dataclass(frozen=True)
class PidResult:
    output: float       # normalised to [-1, 1]
    error: float
    p_term: float
    i_term: float
    d_term: float
    state: PidState


def calculate_pid_output(setpoint: float, measured: float, state: PidState, gains: PidGains, dt: float) -> PidResult:
    """
    One controller update

    Parameters
    ----------
    setpoint : float
        Target value of the controlled variable
    measured : float
        Current value of the controlled variable
    state : PidState
        State returned by the previous update
    gains : PidGains
        Controller gains. The sum of the three terms is divided by 100 before clamping
    dt : float
        Time since the previous update [s]
    """
    error = setpoint - measured
    p_term = error * gains.kp
    integral = clamp(state.integral + error * dt, -gains.integral_windup_limit, gains.integral_windup_limit)
    i_term = integral * gains.ki
    d_term = (error - state.previous_error) / dt * gains.kd if dt > 0 else 0.0
    output = clamp((p_term + i_term + d_term) / 100, -1.0, 1.0)
    return PidResult(output, error, p_term, i_term, d_term,
                     PidState(integral=integral, previous_error=error, last_output=output))


def apply_deadband(output: float, error: float, deadband: float) -> float:
    if abs(error) < deadband:
        return 0.0
    return output

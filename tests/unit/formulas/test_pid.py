import math
from thermal_lab.formulas.pid import PidState, PidGains, PID_PRESETS, calculate_pid_output, apply_deadband

def test_proportional_only():
    result = calculate_pid_output(25, 20, PidState(), PidGains(kp=10, ki=0, kd=0), 1.0)
    assert math.isclose(result.output, 0.5)
    assert result.error == 5
    assert result.state.previous_error == 5

def test_output_is_clamped():
    result = calculate_pid_output(100, 0, PidState(), PID_PRESETS['aggressive'], 1.0)
    assert result.output == 1.0
    result = calculate_pid_output(0, 100, PidState(), PID_PRESETS['aggressive'], 1.0)
    assert result.output == -1.0

def test_integral_windup_is_clamped():
    gains = PID_PRESETS['balanced']
    state = PidState()
    for _ in range(100):
        state = calculate_pid_output(30, 20, state, gains, 1.0).state
    assert state.integral == gains.integral_windup_limit

def test_derivative_needs_positive_dt():
    result = calculate_pid_output(25, 20, PidState(), PidGains(kp=0, ki=0, kd=10), 0.0)
    assert result.d_term == 0

def test_deadband():
    assert apply_deadband(0.3, 0.2, 0.5) == 0
    assert apply_deadband(0.3, 0.6, 0.5) == 0.3

def test_gains_from_dict():
    gains = PidGains.from_dict({"Kp": 30, "integralWindupLimit": 20})
    assert gains.kp == 30 and gains.ki == 2 and gains.integral_windup_limit == 20
    assert PidGains.from_dict(None, PID_PRESETS['conservative']) == PID_PRESETS['conservative']

# tests/unit/controllers/test_air_handler.py
import pytest, math
from thermal_lab import AirHandlerConfig, PidState, ConfigurationError, apply_air_handler_effect
from thermal_lab.controllers.air_handler import calculate_contamination_level, get_auto_status
from thermal_lab.formulas.gas_exchange import STANDARD_ATMOSPHERES

EARTH = STANDARD_ATMOSPHERES['earth']

@pytest.fixture
def contaminated():
    composition = dict(EARTH)
    composition['NH3'] = 0.01
    return composition

def test_no_air_handler(contaminated):
    result = apply_air_handler_effect(contaminated, EARTH, None, PidState(), 1.0, 30.0)
    assert result.new_composition == contaminated
    assert result.status_text == "No Air Handler"

def test_off(air_handler_config, contaminated):
    result = apply_air_handler_effect(contaminated, EARTH, air_handler_config, PidState(), 1.0, 30.0, mode="off")
    assert result.new_composition == contaminated
    assert result.flow_rate_m3_per_hour == 0
    assert result.status_text == "Off"

def test_unknown_mode_is_off(air_handler_config, contaminated):
    result = apply_air_handler_effect(contaminated, EARTH, air_handler_config, PidState(), 1.0, 30.0, mode="turbo")
    assert result.status_text == "Off"
    assert result.new_composition == contaminated

def test_named_mode_with_base_flow(air_handler_config, contaminated):
    result = apply_air_handler_effect(contaminated, EARTH, air_handler_config, PidState(), 1.0, 30.0,
                                      mode="high", base_flow_m3_per_hour=255)
    assert result.flow_rate_m3_per_hour == 510
    assert result.flow_percent == 100
    assert math.isclose(result.ach_per_hour, 17)
    assert result.status_text == "High (510 m³/h)"
    assert result.new_composition['NH3'] < 0.01
    assert result.changes['NH3'] < 0

def test_filtration_efficiency_speeds_removal(air_handler_config):
    composition = dict(EARTH, NH3=0.01, CH4=0.01)
    result = apply_air_handler_effect(composition, EARTH, air_handler_config, PidState(), 1.0, 30.0, mode="medium")
    # NH3 is filtered at 95 %, CH4 at the default 80 %
    assert result.new_composition['NH3'] < result.new_composition['CH4']

def test_auto_standby_with_clean_air(air_handler_config):
    result = apply_air_handler_effect(EARTH, EARTH, air_handler_config, PidState(), 1.0, 30.0)
    assert result.flow_rate_m3_per_hour == 0
    assert result.status_text == "Standby"

def test_auto_reacts_to_contamination(air_handler_config, contaminated):
    result = apply_air_handler_effect(contaminated, EARTH, air_handler_config, PidState(), 1.0, 30.0)
    assert result.flow_rate_m3_per_hour > 0
    assert result.status_text == "Low"
    assert result.new_composition['NH3'] < 0.01
    assert result.updated_pid_state != PidState()

def test_contamination_level():
    assert math.isclose(calculate_contamination_level({'NH3': 0.01}, {}), 0.1)
    assert calculate_contamination_level(EARTH, EARTH) == 0

def test_auto_status():
    assert get_auto_status(0.01) == "Standby"
    assert get_auto_status(0.5) == "Medium"
    assert get_auto_status(0.9) == "High"

def test_config_validation():
    with pytest.raises(ConfigurationError):
        AirHandlerConfig(operating_modes={'auto': 50})
    with pytest.raises(ConfigurationError):
        AirHandlerConfig(operating_modes={'boost': 150})

def test_config_from_dict():
    config = AirHandlerConfig.from_dict({
        "flowCharacteristics": {"maxFlowRateM3PerHour": 400},
        "filtrationEfficiency": {"NH3": 0.99},
        "operatingModes": {"off": {"flowPercent": 0}, "quiet": {"flowPercent": 15}},
    })
    assert config.max_flow_m3_per_hour == 400
    assert config.efficiency('NH3') == 0.99
    assert config.efficiency('CO2') is None
    assert config.modes == ['off', 'auto', 'quiet']
    assert config.flow_percent('quiet') == 15

# tests/unit/sim/test_simulator.py
import pytest, math
import numpy as np
from dataclasses import replace
from thermal_lab import SimulationConfig, Simulator, FluidState, ConfigurationError, create_room_state, set_ac_enabled
from thermal_lab.core.registry import SignalRegistry

def test_config():
    assert SimulationConfig(time_step_s=0.5, time_multiplier=4).dt == 2.0
    with pytest.raises(ConfigurationError):
        SimulationConfig(time_step_s=0)
    with pytest.raises(ConfigurationError):
        SimulationConfig(duration_s=-1)

def test_signal_registry():
    registry = SignalRegistry()
    assert registry.register('fluid', 'temperature') == 0
    assert registry.register('fluid', 'mass') == 1
    assert registry.register('fluid', 'temperature') == 0
    assert len(registry) == 2
    assert registry.column_names() == ['fluid:temperature', 'fluid:mass']
    registry.register('room', 'O2')
    assert registry.column_names('room') == ['room:O2']
    assert registry.col_index('room', 'O2') == 2

def test_fluid_only(water_props):
    sim = Simulator(water_props, FluidState(1.0, 20.0), SimulationConfig(time_step_s=1.0, duration_s=300), heater_schedule=1700)
    results = sim.run()
    df = results.to_dataframe()
    assert df.shape == (300, 6)
    assert df.index[-1] == 300
    assert list(df.columns) == ['fluid:temperature', 'fluid:mass', 'fluid:boiling_point', 'fluid:vapor_mass',
                                'fluid:heater_power', 'fluid:is_boiling']
    assert df['fluid:is_boiling'].iloc[-1] == 1
    assert df['fluid:is_boiling'].iloc[0] == 0
    assert math.isclose(results.get_cumulated_energy('fluid', 'heater_power'), 1700 * 300)
    assert math.isclose(results.get_cumulated_energy('fluid', 'heater_power', unit='kWh'), 1700 * 300 / 3.6e6)
    assert results.final_fluid_state.mass < 1.0
    assert results.final_room_state is None

def test_vapor_matches_mass_loss(water_props):
    results = Simulator(water_props, FluidState(1.0, 20.0), SimulationConfig(time_step_s=1.0, duration_s=300),
                        heater_schedule=1700).run()
    vapor = np.nansum(results.get_signal('fluid', 'vapor_mass'))
    assert math.isclose(vapor, 1.0 - results.final_fluid_state.mass, abs_tol=1e-9)

def test_time_multiplier(water_props):
    cfg = SimulationConfig(time_step_s=0.5, duration_s=60, time_multiplier=2)
    results = Simulator(water_props, FluidState(1.0, 20.0), cfg).run()
    assert len(results.time_vector) == 60
    assert results.time_step == 1.0

def test_heater_schedule(water_props):
    sim = Simulator(water_props, FluidState(1.0, 20.0), SimulationConfig(time_step_s=1.0, duration_s=200),
                    heater_schedule=lambda t: 1700 if t < 100 else 0)
    results = sim.run()
    assert math.isclose(results.get_cumulated_energy('fluid', 'heater_power'), 1700 * 100)
    assert sim.heater_watts(150) == 0

def test_room_signals(acetone_props, room_config, ac_config):
    room = set_ac_enabled(create_room_state(room_config), True)
    sim = Simulator(acetone_props, FluidState(0.5, 20.0), SimulationConfig(time_step_s=1.0, duration_s=60),
                    room_state=room, ac_config=ac_config)
    df = sim.run().to_dataframe()
    for column in ('room:temperature', 'room:pressure', 'room:ac_power', 'room:air_handler_flow', 'room:H2O', 'room:C3H6O'):
        assert column in df.columns
    assert df['room:C3H6O'].iloc[-1] > 0
    assert not df.isna().any().any()
    assert all(column.startswith('room:') for column in sim.run().to_dataframe('room').columns)

def test_cumulated_energy_by_sign(water_props, room_config, ac_config):
    room = set_ac_enabled(create_room_state(room_config), True)
    room = replace(room, temperature=25.0)
    results = Simulator(water_props, FluidState(1.0, 20.0), SimulationConfig(time_step_s=1.0, duration_s=120),
                        room_state=room, ac_config=ac_config).run()
    cooling = results.get_cumulated_energy('room', 'ac_power', sign='only negative')
    heating = results.get_cumulated_energy('room', 'ac_power', sign='only positive')
    assert cooling > 0
    assert heating == 0
    assert math.isclose(results.get_cumulated_energy('room', 'ac_power'), -cooling)
    with pytest.raises(ValueError):
        results.get_cumulated_energy('room', 'ac_power', unit='cal')

# tests/unit/sensors/test_exposure.py
import pytest, math
from thermal_lab import ExposureSeverity, classify_exposure, track_exposure, check_composition_alerts
from thermal_lab.formulas.gas_exchange import STANDARD_ATMOSPHERES

def test_classify_exposure():
    assert classify_exposure('NH3', 20) is ExposureSeverity.SAFE
    assert classify_exposure('NH3', 25) is ExposureSeverity.SAFE
    assert classify_exposure('NH3', 40) is ExposureSeverity.WARNING
    assert classify_exposure('NH3', 100) is ExposureSeverity.DANGER
    assert classify_exposure('NH3', 400) is ExposureSeverity.CRITICAL
    assert classify_exposure('Xe', 1e6) is ExposureSeverity.SAFE

def test_event_lifecycle():
    events = track_exposure((), {'C3H6O': 600e-6}, {}, "off", 1.0, 1.0)
    assert len(events) == 1
    event = events[0]
    assert event.name == 'Acetone'
    assert event.start_time == 0.0
    assert event.severity is ExposureSeverity.DANGER
    assert event.active

    events = track_exposure(events, {'C3H6O': 3000e-6}, {}, "off", 1.0, 2.0)
    assert len(events) == 1
    assert events[0].duration_s == 2.0
    assert math.isclose(events[0].peak_ppm, 3000)
    assert events[0].severity is ExposureSeverity.CRITICAL

    # Peak is kept when the concentration drops
    events = track_exposure(events, {'C3H6O': 300e-6}, {}, "off", 1.0, 3.0)
    assert math.isclose(events[0].peak_ppm, 3000)
    assert events[0].severity is ExposureSeverity.WARNING

    events = track_exposure(events, {'C3H6O': 100e-6}, {}, "off", 1.0, 4.0)
    assert not events[0].active

    events = track_exposure(events, {'C3H6O': 600e-6}, {}, "off", 1.0, 5.0)
    assert len(events) == 2
    assert events[1].start_time == 4.0

def test_protection():
    filtration = {'NH3': 0.95, 'C3H6O': 0.3}
    composition = {'NH3': 100e-6, 'C3H6O': 600e-6}
    events = {e.species: e for e in track_exposure((), composition, filtration, "auto", 1.0, 1.0)}
    assert events['NH3'].is_protected
    assert not events['C3H6O'].is_protected
    events = track_exposure((), composition, filtration, "off", 1.0, 1.0)
    assert not any(e.is_protected for e in events)

def test_no_events_in_clean_air():
    assert track_exposure((), STANDARD_ATMOSPHERES['earth'], {}, "auto", 1.0, 1.0) == ()

def test_composition_alerts():
    assert check_composition_alerts(STANDARD_ATMOSPHERES['earth']) == ()
    alerts = check_composition_alerts({'O2': 0.15, 'CO2': 0.02, 'NH3': 0.003})
    by_species = {a.species: a.severity for a in alerts}
    assert by_species == {'O2': 'critical', 'CO2': 'warning', 'NH3': 'critical'}
    assert check_composition_alerts({'O2': 0.19})[0].severity == 'warning'

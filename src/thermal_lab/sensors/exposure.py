# src/thermal_lab/sensors/exposure.py
"""
Exposure and alert monitor. Reads the room composition after the physical update and
derives exposure events for toxic species and composition alerts. It never changes the
physical state.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional, Tuple
from thermal_lab.constants import UNITS


class ExposureSeverity(Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ToxicThreshold:
    name: str
    safe_ppm: float
    warning_ppm: float
    danger_ppm: float
    consequences: Mapping[ExposureSeverity, str]


TOXIC_THRESHOLDS = {
    'NH3': ToxicThreshold(
        name='Ammonia', safe_ppm=25, warning_ppm=50, danger_ppm=300,   # OSHA PEL 25 ppm, IDLH 300 ppm
        consequences={
            ExposureSeverity.WARNING: 'Eye and respiratory irritation. Headache developing.',
            ExposureSeverity.DANGER: 'Severe respiratory distress! Immediate evacuation required.',
            ExposureSeverity.CRITICAL: 'Life-threatening exposure. Pulmonary edema risk.',
        }),
    'C3H6O': ToxicThreshold(
        name='Acetone', safe_ppm=250, warning_ppm=500, danger_ppm=2500,   # OSHA PEL 250 ppm, IDLH 2500 ppm
        consequences={
            ExposureSeverity.WARNING: 'Mild dizziness and headache. Eyes watering.',
            ExposureSeverity.DANGER: 'Significant CNS depression. Confusion and weakness.',
            ExposureSeverity.CRITICAL: 'Loss of consciousness possible. Evacuate immediately.',
        }),
    'C2H5OH': ToxicThreshold(
        name='Ethanol', safe_ppm=1000, warning_ppm=2000, danger_ppm=3300,   # OSHA PEL 1000 ppm, IDLH 3300 ppm
        consequences={
            ExposureSeverity.WARNING: 'Feeling lightheaded. Sweet smell noticeable.',
            ExposureSeverity.DANGER: 'Intoxication symptoms. Impaired judgment.',
            ExposureSeverity.CRITICAL: 'Severe intoxication. Risk of unconsciousness.',
        }),
    'CH4': ToxicThreshold(
        name='Methane', safe_ppm=10000, warning_ppm=50000, danger_ppm=150000,   # asphyxiant, LEL 5 %, UEL 15 %
        consequences={
            ExposureSeverity.WARNING: 'Oxygen being displaced. Ventilate immediately.',
            ExposureSeverity.DANGER: 'EXPLOSIVE ATMOSPHERE! No sparks or flames!',
            ExposureSeverity.CRITICAL: 'Asphyxiation risk. Explosive mixture present.',
        }),
}

PROTECTION_EFFICIENCY = 0.5


@dataclass(frozen=True)
class ExposureEvent:
    species: str
    name: str
    start_time: float       # simulated time [s]
    duration_s: float
    peak_ppm: float
    severity: ExposureSeverity
    consequence: str
    is_protected: bool
    active: bool = True


@dataclass(frozen=True)
class Alert:
    severity: str           # "warning" or "critical"
    species: str
    message: str


def classify_exposure(species: str, ppm: float) -> ExposureSeverity:
    threshold = TOXIC_THRESHOLDS.get(species)
    if threshold is None or ppm <= threshold.safe_ppm:
        return ExposureSeverity.SAFE
    if ppm > threshold.danger_ppm:
        return ExposureSeverity.CRITICAL
    if ppm > threshold.warning_ppm:
        return ExposureSeverity.DANGER
    return ExposureSeverity.WARNING


def _find_active(events, species) -> Optional[int]:
    for idx, event in enumerate(events):
        if event.species == species and event.active:
            return idx
    return None


def track_exposure(events: Tuple[ExposureEvent, ...], composition: Mapping[str, float],
                   filtration: Mapping[str, float] | None, air_handler_mode: str, dt: float,
                   elapsed: float) -> Tuple[ExposureEvent, ...]:
    """
    Update the exposure events with the composition of the current tick.

    A species above its safe level extends its active event (duration, peak, severity) or opens a
    new one. A species back at or below the safe level closes its active event, so a later excursion
    is recorded as a separate event. The exposure counts as protected when the air handler runs and
    filters the species with more than 50 % efficiency.

    Parameters
    ----------
    events : tuple of ExposureEvent
        Events so far
    composition : Mapping[str, float]
        Mole fractions of the room
    filtration : Mapping[str, float]
        Filtration efficiency per species of the air handler
    air_handler_mode : str
        Current mode of the air handler
    dt : float
        Time step [s]
    elapsed : float
        Simulated time at the end of the tick [s]
    """
    filtration = filtration or {}
    events = list(events)
    for species, threshold in TOXIC_THRESHOLDS.items():
        ppm = composition.get(species, 0.0) * UNITS.ppm
        severity = classify_exposure(species, ppm)
        idx = _find_active(events, species)
        if severity is ExposureSeverity.SAFE:
            if idx is not None:
                events[idx] = replace(events[idx], active=False)
            continue
        is_protected = filtration.get(species, 0.0) > PROTECTION_EFFICIENCY and air_handler_mode != "off"
        consequence = threshold.consequences[severity]
        if idx is None:
            events.append(ExposureEvent(species, threshold.name, elapsed - dt, dt, ppm, severity, consequence, is_protected))
        else:
            event = events[idx]
            events[idx] = replace(event, duration_s=event.duration_s + dt, peak_ppm=max(event.peak_ppm, ppm),
                                  severity=severity, consequence=consequence, is_protected=is_protected)
    return tuple(events)


def check_composition_alerts(composition: Mapping[str, float]) -> Tuple[Alert, ...]:
    alerts = []
    o2 = composition.get('O2', 0.0)
    if o2 < 0.16:
        alerts.append(Alert('critical', 'O2', 'Oxygen depletion - dangerous!'))
    elif o2 < 0.195:
        alerts.append(Alert('warning', 'O2', 'Low oxygen'))

    co2 = composition.get('CO2', 0.0)
    if co2 > 0.03:
        alerts.append(Alert('critical', 'CO2', 'Dangerous CO₂ levels!'))
    elif co2 > 0.01:
        alerts.append(Alert('warning', 'CO2', 'High CO₂'))

    nh3 = composition.get('NH3', 0.0)
    if nh3 > 0.0025:
        alerts.append(Alert('critical', 'NH3', 'Toxic: Ammonia detected!'))
    elif nh3 > 0.001:
        alerts.append(Alert('warning', 'NH3', 'Ammonia vapors present'))

    ethanol = composition.get('C2H5OH', 0.0)
    if ethanol > 0.03:
        alerts.append(Alert('critical', 'C2H5OH', 'Flammable: Ethanol vapors!'))
    elif ethanol > 0.01:
        alerts.append(Alert('warning', 'C2H5OH', 'Ethanol vapors present'))

    if composition.get('toxic_generic', 0.0) > 0.001:
        alerts.append(Alert('critical', 'toxic', 'Toxic vapors detected!'))
    return tuple(alerts)

# src/thermal_lab/controllers/air_handler.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from thermal_lab.core.options import OptionalValue
from thermal_lab.formulas.gas_exchange import calculate_exchange_fraction, exchange_composition, calculate_ach
from thermal_lab.formulas.pid import PidGains, PidState, calculate_pid_output
from thermal_lab.helpers import ConfigurationError, clamp

_LOGGER = logging.getLogger(__name__)

MODE_OFF = "off"
MODE_AUTO = "auto"
MIN_FLOW_FRACTION = 0.05

AUTO_PID_GAINS = PidGains(kp=100, ki=5, kd=10, integral_windup_limit=50)

# Weight of the deviation of each species in the contamination level
CONTAMINANT_WEIGHTS = {
    'NH3': 10,
    'H2S': 10,
    'CO': 8,
    'Cl2': 10,
    'CO2': 3,
    'H2O': 1,
    'N2': 0.5,
    'O2': 2,
    'Ar': 0.1,
}
DEFAULT_CONTAMINANT_WEIGHT = 1.0


@dataclass(frozen=True)
class AirHandlerConfig:
    """
    Ventilation unit restoring the room composition toward a target atmosphere

    Parameters
    ----------
    max_flow_m3_per_hour : float, optional
        Flow rate at 100 % [m³/h]. Defaults to 255 m³/h
    max_flow_cfm : float, optional
        Same flow rate in CFM, used for the fan power. Defaults to 150 CFM
    filtration_efficiency : OptionalValue
        Mapping species -> exchange efficiency in [0, 1]. Species without an entry use 80 %
    operating_modes : dict, optional
        Mapping mode name -> flow percent of the maximum flow
    pid_gains : PidGains, optional
        Gains of the automatic mode
    fan_watts_per_cfm : float, optional
        Electric fan power per CFM of flow [W/CFM]
    """
    max_flow_m3_per_hour: float = 255.0
    max_flow_cfm: float = 150.0
    filtration_efficiency: OptionalValue = field(default_factory=OptionalValue.absent)
    operating_modes: Dict[str, float] = field(default_factory=lambda: {'low': 25.0, 'medium': 50.0, 'high': 100.0})
    pid_gains: PidGains = AUTO_PID_GAINS
    fan_watts_per_cfm: float = 0.5

    def __post_init__(self):
        if self.max_flow_m3_per_hour < 0 or self.max_flow_cfm < 0:
            raise ConfigurationError('The air handler maximum flow should not be negative')
        for species, efficiency in self.filtration_efficiency.resolve({}).items():
            if not 0 <= efficiency <= 1:
                raise ConfigurationError(f'The filtration efficiency for {species} should be between 0 and 1, {efficiency} was provided. Please check it')
        for mode, percent in self.operating_modes.items():
            if mode in (MODE_OFF, MODE_AUTO):
                raise ConfigurationError(f'"{mode}" is a reserved air handler mode and cannot be redefined')
            if not 0 <= percent <= 100:
                raise ConfigurationError(f'The flow percent of mode "{mode}" should be between 0 and 100, {percent} was provided')

    @classmethod
    def from_dict(cls, data: Mapping) -> "AirHandlerConfig":
        flow = data.get("flowCharacteristics", {})
        modes = {name: mode.get("flowPercent", 0.0) for name, mode in data.get("operatingModes", {}).items()
                 if name not in (MODE_OFF, MODE_AUTO)}
        return cls(
            max_flow_m3_per_hour=flow.get("maxFlowRateM3PerHour") or 255.0,
            max_flow_cfm=flow.get("maxFlowRateCFM") or 150.0,
            filtration_efficiency=OptionalValue.from_raw(data.get("filtrationEfficiency")),
            operating_modes=modes or {'low': 25.0, 'medium': 50.0, 'high': 100.0},
            pid_gains=PidGains.from_dict(data.get("pidTuning"), AUTO_PID_GAINS),
            fan_watts_per_cfm=data.get("fanWattsPerCFM", 0.5),
        )

    @property
    def modes(self):
        return [MODE_OFF, MODE_AUTO] + list(self.operating_modes)

    def flow_percent(self, mode: str) -> float:
        """Flow percent of a named mode, 0 for off and unknown modes"""
        return self.operating_modes.get(mode, 0.0)

    def efficiency(self, species: str) -> Optional[float]:
        return self.filtration_efficiency.resolve({}).get(species)


@dataclass(frozen=True)
class AirHandlerEffectResult:
    new_composition: Dict[str, float]
    changes: Dict[str, float]
    updated_pid_state: PidState
    flow_rate_m3_per_hour: float
    ach_per_hour: float
    flow_percent: int
    status_text: str


def calculate_contamination_level(composition: Mapping[str, float], target: Mapping[str, float]) -> float:
    # Weighted sum of the absolute deviations from the target composition
    level = 0.0
    for species in set(composition) | set(target):
        deviation = abs(composition.get(species, 0.0) - target.get(species, 0.0))
        level += deviation * CONTAMINANT_WEIGHTS.get(species, DEFAULT_CONTAMINANT_WEIGHT)
    return level


def get_auto_status(flow_fraction: float) -> str:
    if flow_fraction < MIN_FLOW_FRACTION:
        return "Standby"
    if flow_fraction < 0.3:
        return "Low"
    if flow_fraction < 0.7:
        return "Medium"
    return "High"


def apply_air_handler_effect(composition: Mapping[str, float], target: Mapping[str, float],
                             config: Optional[AirHandlerConfig], pid_state: PidState, dt: float, room_volume: float,
                             mode: str = MODE_AUTO, base_flow_m3_per_hour: float = 0.0) -> AirHandlerEffectResult:
    """
    One update of the air handler.

    In "off" nothing is exchanged. A named mode runs the fan at the flow percent of that mode.
    In "auto" a PID on the contamination level sets the flow, which is cut to zero below 5 %.
    The flow moved by other equipment (base_flow_m3_per_hour) adds to the air handler flow
    whenever the handler runs.

    Parameters
    ----------
    composition : Mapping[str, float]
        Current mole fractions of the room
    target : Mapping[str, float]
        Composition the handler restores, usually the initial atmosphere of the room
    config : AirHandlerConfig
        If None the composition is returned unchanged
    pid_state : PidState
        State of the automatic mode loop, returned unchanged in the other modes
    dt : float
        Time step [s]
    room_volume : float
        [m³]
    mode : str, optional
        "off", "auto" or one of the named modes of the config. Unknown modes are treated as "off"
    base_flow_m3_per_hour : float, optional
        Flow of other equipment circulating room air through the handler [m³/h]
    """
    if config is None:
        return AirHandlerEffectResult(dict(composition), {}, pid_state, 0.0, 0.0, 0, "No Air Handler")
    if mode != MODE_OFF and mode not in config.modes:
        _LOGGER.debug('Unknown air handler mode "%s", treated as off', mode)
        mode = MODE_OFF
    if mode == MODE_OFF:
        return AirHandlerEffectResult(dict(composition), {}, pid_state, 0.0, 0.0, 0, "Off")

    updated_pid_state = pid_state
    if mode == MODE_AUTO:
        pid = calculate_pid_output(0.0, calculate_contamination_level(composition, target), pid_state,
                                   config.pid_gains, dt)
        updated_pid_state = pid.state
        flow_fraction = clamp(abs(pid.output), 0.0, 1.0)
        if flow_fraction < MIN_FLOW_FRACTION:
            flow_fraction = 0.0
    else:
        flow_fraction = config.flow_percent(mode) / 100

    handler_flow = flow_fraction * config.max_flow_m3_per_hour
    flow_rate = handler_flow + max(0.0, base_flow_m3_per_hour) if handler_flow > 0 else 0.0
    fraction = calculate_exchange_fraction(flow_rate, room_volume, dt)
    new_composition, changes = exchange_composition(composition, target, fraction, config.filtration_efficiency.resolve({}))
    if mode == MODE_AUTO:
        status = get_auto_status(flow_fraction)
    else:
        status = f'{mode.capitalize()} ({round(flow_rate)} m³/h)'
    return AirHandlerEffectResult(
        new_composition=new_composition,
        changes=changes,
        updated_pid_state=updated_pid_state,
        flow_rate_m3_per_hour=flow_rate,
        ach_per_hour=calculate_ach(flow_rate, room_volume),
        flow_percent=round(flow_fraction * 100),
        status_text=status,
    )

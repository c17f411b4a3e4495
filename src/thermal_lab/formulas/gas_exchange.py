# src/thermal_lab/formulas/gas_exchange.py
"""
Air exchange between a room and a target (supply) atmosphere.

Each tick a fraction Q·dt/V of the room air is replaced, and every species moves toward
its target fraction by that share times the filtration efficiency for the species:

    C_new = C + (C_target - C) · fraction · efficiency
"""
from __future__ import annotations
from typing import Dict, Mapping, Tuple
from thermal_lab.constants import UNITS
from thermal_lab.helpers import is_positive

DEFAULT_EXCHANGE_EFFICIENCY = 0.8

STANDARD_ATMOSPHERES = {
    'earth': {
        'N2': 0.7808,
        'O2': 0.2095,
        'Ar': 0.0093,
        'CO2': 0.0004,
        'H2O': 0.01,    # ~40 % relative humidity at 20°C
    },
    'mars': {
        'CO2': 0.9532,
        'N2': 0.027,
        'Ar': 0.016,
        'O2': 0.0013,
        'CO': 0.0007,
    },
    'clean_room': {
        'N2': 0.7808,
        'O2': 0.2095,
        'Ar': 0.0093,
        'CO2': 0.0004,
        'H2O': 0.005,
    },
}


def calculate_exchange_fraction(flow_rate_m3_per_hour: float, room_volume: float, dt: float) -> float:
    if not is_positive(flow_rate_m3_per_hour) or not is_positive(room_volume) or not is_positive(dt):
        return 0.0
    return min(1.0, flow_rate_m3_per_hour / 3600 * dt / room_volume)


def exchange_species(current: float, target: float, fraction: float, efficiency: float = 1.0) -> Tuple[float, float]:
    """Returns the new fraction of the species and the change applied"""
    change = (target - current) * fraction * efficiency
    return current + change, change


def exchange_composition(composition: Mapping[str, float], target: Mapping[str, float], fraction: float,
                         efficiencies: Mapping[str, float] | None = None) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Move every species of the room toward the target composition.

    Parameters
    ----------
    composition : Mapping[str, float]
        Current mole fractions of the room
    target : Mapping[str, float]
        Mole fractions of the supply air. Species missing on either side count as 0
    fraction : float
        Share of the room air exchanged this tick, see calculate_exchange_fraction
    efficiencies : Mapping[str, float], optional
        Per-species efficiency, species without an entry use DEFAULT_EXCHANGE_EFFICIENCY

    Returns
    -------
    (new_composition, changes)
        The new composition is rescaled so that the fraction sum equals the sum before the exchange
    """
    efficiencies = efficiencies or {}
    new_composition, changes = {}, {}
    for species in list(composition) + [s for s in target if s not in composition]:
        new_composition[species], changes[species] = exchange_species(
            composition.get(species, 0.0), target.get(species, 0.0), fraction,
            efficiencies.get(species, DEFAULT_EXCHANGE_EFFICIENCY))
    pre_sum, post_sum = sum(composition.values()), sum(new_composition.values())
    if pre_sum > 0 and post_sum > 0:
        scale = pre_sum / post_sum
        new_composition = {species: value * scale for species, value in new_composition.items()}
    return new_composition, changes


def calculate_ach(flow_rate_m3_per_hour: float, room_volume: float) -> float:
    # Air changes per hour
    if not is_positive(room_volume):
        return 0.0
    return flow_rate_m3_per_hour / room_volume


def cfm_to_m3_per_hour(cfm: float) -> float:
    return cfm * UNITS.cfm_to_m3_per_hour


def m3_per_hour_to_cfm(flow_rate_m3_per_hour: float) -> float:
    return flow_rate_m3_per_hour / UNITS.cfm_to_m3_per_hour

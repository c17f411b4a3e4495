# src/thermal_lab/constants/base.py
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Dict, Iterator, TypeVar
from thermal_lab.helpers import ConfigurationError

N = TypeVar("N", bound="FrozenNamespace")


@dataclass(frozen=True)
class FrozenNamespace:
    """Immutable set of physical constants, one float per field."""

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@contextmanager
def override(namespace: N, **updates: float) -> Iterator[N]:
    """
    Variant of a constant namespace for the duration of a block. The module-level
    instances are never modified, so the variant is passed explicitly where it is needed.
    Usage:
        with override(ISA, P0=99000.0) as isa:
            calculate_pressure_isa(500, isa)
    """
    unknown = sorted(set(updates) - set(namespace.as_dict()))
    if unknown:
        raise ConfigurationError(f'{type(namespace).__name__} has no constant named {", ".join(unknown)}')
    yield replace(namespace, **updates)

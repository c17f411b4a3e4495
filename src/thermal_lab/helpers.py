import math


def C2K(T):
    return T + 273.15


def is_positive(value) -> bool:
    """True for a finite number strictly greater than zero"""
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class ConfigurationError(ValueError):
    pass

class UnknownModeError(ConfigurationError):
    pass

"""Rounding helpers shared by the calculators."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to the nearest value, sending .5 away from negative infinity.

    Targets shown to users were historically rounded this way, which differs
    from Python's banker's rounding on exact halves.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round half-up to an integer."""
    return int(round_half_up(value))

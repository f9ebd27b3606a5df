# fashion_inventory/utils/math_utils.py
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence
import numpy as np

from fashion_inventory.exceptions import CalculationError

def round_half_up(value: float, places: int = 2) -> float:
    """Round a value half-up to a number of decimal places.

    Args:
        value: Value to round
        places: Number of decimal places

    Returns:
        Rounded value
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))

def ceil_int(value: float) -> int:
    """Round a value up to the next integer."""
    return int(math.ceil(value))

def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """Calculate weighted average.

    Args:
        values: List of values
        weights: List of weights

    Returns:
        Weighted average
    """
    if len(values) != len(weights):
        raise CalculationError("Length of values and weights must be the same")

    if not values:
        return 0.0

    if sum(weights) == 0:
        return sum(values) / len(values)

    return float(np.dot(values, weights) / np.sum(weights))

def mean_value(values: List[float]) -> float:
    """Arithmetic mean, 0.0 for an empty list."""
    if not values:
        return 0.0
    return float(np.mean(values))

def max_value(values: List[float]) -> float:
    """Maximum value, 0.0 for an empty list."""
    if not values:
        return 0.0
    return float(np.max(values))

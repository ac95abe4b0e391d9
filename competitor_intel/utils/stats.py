"""
Small numeric helpers shared by the analyzers.

All helpers return neutral values for degenerate input (empty sequences,
zero variance) instead of raising.
"""

import math
from typing import Sequence


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_stddev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def pearson_correlation(xs: Sequence[float], ys: Sequence[float], min_samples: int = 3) -> float:
    """Pearson r of two paired samples; 0.0 when undefined."""
    n = min(len(xs), len(ys))
    if n < min_samples:
        return 0.0

    avg_x = mean(xs[:n])
    avg_y = mean(ys[:n])
    numerator = 0.0
    sum_sq_x = 0.0
    sum_sq_y = 0.0
    for x, y in zip(xs[:n], ys[:n]):
        dx = x - avg_x
        dy = y - avg_y
        numerator += dx * dy
        sum_sq_x += dx * dx
        sum_sq_y += dy * dy

    denominator = math.sqrt(sum_sq_x * sum_sq_y)
    if denominator == 0:
        return 0.0
    return clamp(numerator / denominator, -1.0, 1.0)

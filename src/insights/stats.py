"""Numeric primitives shared by the pattern, correlation, and summary stages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from src.insights.base import SymptomLog


@dataclass(frozen=True)
class Trend:
    slope: float
    intercept: float


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Compute the Pearson product-moment coefficient of two series.

    Args:
        x: First variable.
        y: Second variable, paired with ``x`` by position.

    Returns:
        r in [-1.0, 1.0].  0.0 when the series differ in length, have fewer
        than two points, or either series has zero variance.
    """
    n = len(x)
    if n != len(y) or n < 2:
        return 0.0

    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y))
    sum_x2 = sum(xi * xi for xi in x)
    sum_y2 = sum(yi * yi for yi in y)

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if variance_product <= 0:
        return 0.0

    r = numerator / math.sqrt(variance_product)
    # Float error can push a perfect correlation a hair past ±1
    return max(-1.0, min(1.0, r))


def linear_trend(values: Sequence[float]) -> Trend:
    """Least-squares line through ``(index, value)`` points.

    The index is the position in the sequence, so gaps between logged dates
    carry no weight.  Callers must pass at least two values.
    """
    n = len(values)
    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_x2 = sum(i * i for i in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return Trend(slope=slope, intercept=intercept)


def average_severity(logs: Iterable[SymptomLog]) -> float:
    """Flat mean over every individual (symptom, severity) observation."""
    total = 0
    count = 0
    for log in logs:
        for severity in log.symptoms.values():
            total += severity
            count += 1
    return total / count if count else 0.0


def round_half_away(value: float) -> int:
    """Round to the nearest integer with exact halves going away from zero.

    ``round()`` sends halves to the even neighbour (62.5 -> 62); displayed
    percentages use 62.5 -> 63 and -62.5 -> -63.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))

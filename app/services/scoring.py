"""
Weighted Rating Calculator

Reduces a set of rated categories to one score:

    score = sum(rating * weight) / sum(weight)

rounded half-up to one decimal place. A zero weight sum (including an empty
category list) yields 0.0 instead of a division error. Ratings outside the
nominal 1-5 range are accepted as-is so bad input stays visible.

The same reduction with every weight set to 1 gives the plain averages used
across evaluations (per intern, per category name, per company).
"""

import math
from typing import Any, Iterable, Mapping, Tuple

import numpy as np


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a human reads a scorecard: 4.45 -> 4.5, 2.5 -> 3."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _rating_and_weight(category: Any) -> Tuple[float, float]:
    if isinstance(category, Mapping):
        return float(category["rating"]), float(category.get("weight", 0))
    return float(category.rating), float(category.weight)


def weighted_score(categories: Iterable[Any]) -> float:
    """
    Compute the weighted rating of an evaluation's categories.

    Args:
        categories: objects or dicts exposing ``rating`` and ``weight``

    Returns:
        Weighted mean rounded to one decimal, or 0.0 when the weights sum to zero
    """
    pairs = [_rating_and_weight(c) for c in categories]
    if not pairs:
        return 0.0

    ratings = np.array([p[0] for p in pairs], dtype=float)
    weights = np.array([p[1] for p in pairs], dtype=float)

    total_weight = weights.sum()
    if total_weight == 0:
        return 0.0

    return round_half_up(float(np.dot(ratings, weights) / total_weight), 1)


def average(values: Iterable[float]) -> float:
    """Unweighted mean, rounded to one decimal. Empty input gives 0.0."""
    return weighted_score({"rating": v, "weight": 1.0} for v in values)

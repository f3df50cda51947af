"""
Mathematical utilities for similarity calculations and profile weighting.
"""

import math
from datetime import datetime, timezone
from typing import Optional, Sequence

import numpy as np
from sklearn.preprocessing import normalize

SECONDS_PER_DAY = 60 * 60 * 24


def cosine_similarity(vector_a: np.ndarray, vector_b: np.ndarray) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when the vectors differ in length or either has zero norm.
    Identical non-zero vectors give exactly 1.0; otherwise the result is
    clipped to [-1, 1] to absorb floating point error.
    """
    vector_a = np.asarray(vector_a, dtype=float)
    vector_b = np.asarray(vector_b, dtype=float)
    if vector_a.shape != vector_b.shape:
        return 0.0

    if not vector_a.any() or not vector_b.any():
        return 0.0

    if np.array_equal(vector_a, vector_b):
        return 1.0

    unit_a, unit_b = normalize(np.vstack([vector_a, vector_b]), norm='l2')
    return float(np.clip(unit_a @ unit_b, -1.0, 1.0))


def normalize_vector(vector: np.ndarray) -> np.ndarray:
    """L2-normalise a vector. Zero vectors are returned unchanged."""
    vector = np.asarray(vector, dtype=float)
    if not vector.any():
        return vector
    return normalize(vector.reshape(1, -1), norm='l2')[0]


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they can be compared with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_between(earlier: datetime, later: Optional[datetime] = None) -> float:
    """Fractional days from ``earlier`` to ``later`` (default: now)."""
    if later is None:
        later = datetime.now(timezone.utc)
    return (as_utc(later) - as_utc(earlier)).total_seconds() / SECONDS_PER_DAY


def calculate_time_decay(timestamp: datetime,
                         now: Optional[datetime] = None,
                         time_constant_days: float = 30.0) -> float:
    """
    Exponential decay factor for an interaction.

    decay = exp(-days_since / time_constant_days), where events in the
    future (clock skew) count as happening now and decay to 1.0.

    Args:
        timestamp: When the interaction happened
        now: Reference time, defaults to the current UTC time
        time_constant_days: Decay time constant in days

    Returns:
        Decay factor in (0, 1]
    """
    days_since = max(0.0, days_between(timestamp, now))
    return math.exp(-days_since / time_constant_days)


def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted mean; 0.0 for empty or mismatched input or zero total weight."""
    if len(values) != len(weights) or len(values) == 0:
        return 0.0

    weights = np.asarray(weights, dtype=float)
    total_weight = weights.sum()
    if total_weight == 0:
        return 0.0

    return float(np.dot(np.asarray(values, dtype=float), weights) / total_weight)

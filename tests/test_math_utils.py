import math
from datetime import datetime, timedelta

import numpy as np
import pytest

from newsrec.math_utils import (
    calculate_time_decay,
    cosine_similarity,
    days_between,
    normalize_vector,
    weighted_average,
)


class TestCosineSimilarity:

    def test_identical_vectors_are_exactly_one(self):
        v = np.array([0.3, -1.2, 4.0])
        assert cosine_similarity(v, v) == 1.0
        assert cosine_similarity(v, v.copy()) == 1.0

    def test_parallel_vectors(self):
        v = np.array([0.3, -1.2, 4.0])
        assert cosine_similarity(v, v * 3) == pytest.approx(1.0)

    def test_orthogonal_and_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 2.0]) == pytest.approx(0.0)
        assert cosine_similarity([1.0, 2.0], [-2.0, -4.0]) == pytest.approx(-1.0)

    def test_zero_vector_is_zero(self):
        zero = np.zeros(3)
        assert cosine_similarity(zero, [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], zero) == 0.0
        assert cosine_similarity(zero, zero) == 0.0

    def test_length_mismatch_is_zero(self):
        assert cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0

    def test_empty_vectors(self):
        assert cosine_similarity(np.zeros(0), np.zeros(0)) == 0.0

    def test_bounds_on_random_vectors(self):
        rng = np.random.default_rng(42)
        for _ in range(200):
            a = rng.normal(size=16)
            b = rng.normal(size=16)
            assert -1.0 <= cosine_similarity(a, b) <= 1.0
            assert -1.0 <= cosine_similarity(a, a * 1e-8) <= 1.0

    def test_magnitude_independent(self):
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([2.0, 0.5, 1.0])
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(a * 10, b))


def test_normalize_vector():
    unit = normalize_vector(np.array([3.0, 4.0]))
    np.testing.assert_allclose(unit, [0.6, 0.8])
    np.testing.assert_array_equal(normalize_vector(np.zeros(2)), np.zeros(2))
    assert normalize_vector(np.zeros(0)).shape == (0,)
    assert normalize_vector([1.0, 1.0, 1.0, 1.0]).tolist() == pytest.approx([0.5] * 4)


class TestTimeDecay:

    def test_now_has_no_decay(self, now):
        assert calculate_time_decay(now, now) == 1.0

    def test_thirty_days_decays_by_e(self, now):
        decay = calculate_time_decay(now - timedelta(days=30), now)
        assert decay == pytest.approx(math.exp(-1))

    def test_future_events_do_not_amplify(self, now):
        assert calculate_time_decay(now + timedelta(days=3), now) == 1.0

    def test_older_events_decay_more(self, now):
        newer = calculate_time_decay(now - timedelta(hours=2), now)
        older = calculate_time_decay(now - timedelta(hours=3), now)
        assert older < newer

    def test_custom_time_constant(self, now):
        decay = calculate_time_decay(now - timedelta(days=10), now, time_constant_days=10)
        assert decay == pytest.approx(math.exp(-1))

    def test_naive_timestamps_are_utc(self, now):
        naive = datetime(2026, 10, 18, 12, 0)
        assert days_between(naive, now) == pytest.approx(1.0)


class TestWeightedAverage:

    def test_weighted_mean(self):
        assert weighted_average([1.0, 3.0], [1.0, 3.0]) == pytest.approx(2.5)

    def test_degenerate_inputs(self):
        assert weighted_average([], []) == 0.0
        assert weighted_average([1.0, 2.0], [1.0]) == 0.0
        assert weighted_average([1.0, 2.0], [0.0, 0.0]) == 0.0

import math

import pytest
import numpy as np

from crossval.distributions import Discrete, DiscreteUniform, Uniform, LogUniform, Normal
from crossval.utils.exceptions import ValidationError, BoundsError


class TestDiscrete:

    def test_degenerate_probabilities(self):
        d = Discrete(['a', 'b'], [0.0, 1.0])
        assert set(d.sample(rng=0, n=1000)) == {'b'}

    def test_frequencies_follow_probabilities(self):
        d = Discrete([1, 2], [0.25, 0.75])
        draws = np.array(d.sample(rng=1, n=4000))
        assert abs((draws == 2).mean() - 0.75) < 0.05

    def test_length_mismatch(self):
        with pytest.raises(ValidationError, match="do not match"):
            Discrete([1, 2, 3], [0.5, 0.5])

    @pytest.mark.parametrize("probs", [[0.5, 0.6], [1.5, -0.5]])
    def test_invalid_probabilities(self, probs):
        with pytest.raises(ValidationError, match="invalid probabilities"):
            Discrete([1, 2], probs)

    def test_index_bounds(self):
        d = Discrete(['x', 'y', 'z'], [0.2, 0.3, 0.5])
        assert d.lowerbound == 0
        assert d.upperbound == 2
        assert d[1] == 'y'


class TestDiscreteUniform:

    def test_samples_from_values(self):
        d = DiscreteUniform([10, 20, 30])
        assert set(d.sample(rng=0, n=300)) == {10, 20, 30}

    def test_single_sample_is_value(self):
        assert DiscreteUniform(['only']).sample(rng=5) == 'only'

    def test_empty_values(self):
        with pytest.raises(ValidationError):
            DiscreteUniform([])

    def test_neighbors_stay_within_step(self):
        d = DiscreteUniform([10, 20, 30, 40, 50])
        assert set(d.neighbors(0, 10, 1, n=200)) == {10, 20}
        assert set(d.neighbors(0, 30, 1, n=200)) == {20, 30, 40}

    def test_neighbor_index_clamped(self):
        d = DiscreteUniform(list(range(5)))
        rng = np.random.default_rng(2)
        draws = {d.neighbor_index(rng, 4, 3) for _ in range(200)}
        assert draws == {1, 2, 3, 4}

    def test_unknown_value(self):
        with pytest.raises(BoundsError):
            DiscreteUniform([1, 2]).neighbors(0, 99, 1)

    def test_index_out_of_range(self):
        with pytest.raises(BoundsError):
            DiscreteUniform([1, 2]).neighbor_index(0, 5, 1)


class TestContinuous:

    def test_uniform_range(self):
        draws = Uniform(2.0, 3.0).sample(rng=0, n=500)
        assert all(2.0 <= x < 3.0 for x in draws)

    def test_uniform_invalid_bounds(self):
        with pytest.raises(ValidationError):
            Uniform(5, 3)

    def test_uniform_neighbors_clamped(self):
        u = Uniform(0.0, 1.0)
        draws = u.neighbors(0, 0.95, 0.2, n=300)
        assert all(0.75 <= x <= 1.0 for x in draws)

    def test_uniform_neighbors_outside(self):
        with pytest.raises(BoundsError):
            Uniform(0.0, 1.0).neighbors(0, 2.0, 0.1)

    def test_loguniform_range(self):
        draws = LogUniform(1e-3, 1e2).sample(rng=4, n=500)
        assert all(1e-3 <= x <= 1e2 for x in draws)
        # log-uniform: roughly a fifth of the draws per decade
        assert 0.1 < np.mean([x < 1e-2 for x in draws]) < 0.3

    def test_loguniform_requires_positive(self):
        with pytest.raises(ValidationError):
            LogUniform(0.0, 1.0)

    def test_dtype(self):
        assert isinstance(Uniform(0, 10, dtype=np.float32).sample(rng=0), np.float32)

    def test_normal_unbounded(self):
        n = Normal(0.0, 1.0)
        assert n.lowerbound == -math.inf
        assert n.upperbound == math.inf
        draws = n.neighbors(3, 100.0, 0.5, n=100)
        assert all(99.5 <= x <= 100.5 for x in draws)

    def test_normal_moments(self):
        draws = np.array(Normal(5.0, 2.0).sample(rng=9, n=5000))
        assert abs(draws.mean() - 5.0) < 0.15
        assert abs(draws.std() - 2.0) < 0.15

    def test_normal_invalid_std(self):
        with pytest.raises(ValidationError):
            Normal(0.0, 0.0)

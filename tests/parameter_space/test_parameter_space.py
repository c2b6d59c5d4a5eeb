import pytest

from crossval.distributions import DiscreteUniform, Discrete, Uniform
from crossval.parameter_space import FiniteSpace, InfiniteSpace, space
from crossval.utils.exceptions import ValidationError, BoundsError


@pytest.fixture
def grid():
    return space(a=DiscreteUniform(['a1', 'a2']), b=DiscreteUniform(['b1', 'b2', 'b3']))


def test_all_discrete_is_finite(grid):
    assert isinstance(grid, FiniteSpace)
    assert grid.shape == (2, 3)
    assert len(grid) == 6


def test_continuous_is_infinite():
    sp = space(a=DiscreteUniform([1, 2]), b=Uniform(0.0, 1.0))
    assert isinstance(sp, InfiniteSpace)
    assert not hasattr(sp, '__len__')


def test_enumeration_first_variable_fastest(grid):
    assert grid[0] == {'a': 'a1', 'b': 'b1'}
    assert grid[1] == {'a': 'a2', 'b': 'b1'}
    assert grid[2] == {'a': 'a1', 'b': 'b2'}

    combos = [(p['a'], p['b']) for p in grid]
    assert len(combos) == 6
    assert len(set(combos)) == 6


def test_multi_index_access(grid):
    assert grid.at(1, 2) == {'a': 'a2', 'b': 'b3'}
    assert grid[[0, 5]] == [{'a': 'a1', 'b': 'b1'}, {'a': 'a2', 'b': 'b3'}]


def test_out_of_range(grid):
    with pytest.raises(BoundsError):
        grid[6]
    with pytest.raises(BoundsError):
        grid.at(2, 0)


def test_empty_space_counts_zero():
    sp = space()
    assert len(sp) == 0
    assert list(sp) == []


def test_sample_draws_every_variable():
    sp = space(a=Discrete([1, 2], [0.0, 1.0]), b=Uniform(0.0, 1.0))
    draws = sp.sample(rng=0, n=20)
    assert len(draws) == 20
    assert all(d['a'] == 2 and 0.0 <= d['b'] < 1.0 for d in draws)
    assert set(sp.sample(rng=0)) == {'a', 'b'}


def test_neighbors_step_forms():
    sp = space(a=DiscreteUniform(list(range(10))), b=Uniform(0.0, 10.0))
    at = {'a': 5, 'b': 5.0}

    by_name = sp.neighbors(0, at, {'a': 1, 'b': 0.5}, n=50)
    assert all(4 <= p['a'] <= 6 and 4.5 <= p['b'] <= 5.5 for p in by_name)

    by_order = sp.neighbors(0, at, [0, 2.0])
    assert by_order['a'] == 5
    assert 3.0 <= by_order['b'] <= 7.0

    scalar = sp.neighbors(0, at, 1, n=10)
    assert all(4 <= p['a'] <= 6 for p in scalar)


def test_neighbors_step_count_mismatch():
    sp = space(a=DiscreteUniform([1, 2]))
    with pytest.raises(ValidationError):
        sp.neighbors(0, {'a': 1}, [1, 1])


def test_rejects_non_distributions():
    with pytest.raises(ValidationError):
        FiniteSpace({'a': [1, 2, 3]})

import pytest
import numpy as np
import pandas as pd
from collections import namedtuple

from crossval.observation_indexing import nobs, getobs
from crossval.utils.exceptions import ValidationError

Dataset = namedtuple("Dataset", ["X", "y"])


def test_nobs_array_likes():
    assert nobs(np.zeros((7, 3))) == 7
    assert nobs(pd.DataFrame({'a': range(5)})) == 5
    assert nobs(pd.Series(range(4))) == 4
    assert nobs(range(1, 11)) == 10
    assert nobs([1, 2, 3]) == 3


def test_nobs_collections_share_count():
    X, y = np.zeros((6, 2)), np.zeros(6)
    assert nobs((X, y)) == 6
    assert nobs({'X': X, 'y': y}) == 6
    assert nobs(Dataset(X, y)) == 6


def test_nobs_mismatched_collection():
    with pytest.raises(ValidationError, match="same number of observations"):
        nobs((np.zeros(5), np.zeros(4)))


def test_getobs_slices_leading_axis():
    X = np.arange(12).reshape(6, 2)
    np.testing.assert_array_equal(getobs(X, [0, 2]), [[0, 1], [4, 5]])

    df = pd.DataFrame({'a': range(6)})
    assert getobs(df, [5, 1])['a'].tolist() == [5, 1]


def test_getobs_preserves_container_kind():
    X, y = np.arange(10).reshape(5, 2), np.arange(5)

    tup = getobs((X, y), [1, 3])
    assert isinstance(tup, tuple)
    assert tup[1].tolist() == [1, 3]

    named = getobs(Dataset(X, y), [0])
    assert isinstance(named, Dataset)
    assert named.y.tolist() == [0]

    mapping = getobs({'X': X, 'y': y}, [4])
    assert set(mapping) == {'X', 'y'}
    assert mapping['X'].tolist() == [[8, 9]]


def test_getobs_range_materialises_list():
    assert getobs(range(1, 11), range(4)) == [1, 2, 3, 4]

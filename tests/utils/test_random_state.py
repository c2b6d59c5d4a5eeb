import pytest
import numpy as np

from crossval.utils.random_state import resolve_rng


def test_seed_builds_generator():
    assert resolve_rng(3).random() == np.random.default_rng(3).random()


def test_generator_passes_through():
    rng = np.random.default_rng(0)
    assert resolve_rng(rng) is rng


def test_none_builds_fresh_generator():
    assert isinstance(resolve_rng(None), np.random.Generator)


@pytest.mark.parametrize("bad", [True, 1.5, "seed"])
def test_rejects_other_types(bad):
    with pytest.raises(TypeError):
        resolve_rng(bad)

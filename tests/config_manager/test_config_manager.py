import pytest
import json
import numpy as np

from crossval.budget_allocation import AllocationMode
from crossval.config_manager import ConfigurationManager
from crossval.search_engine import ParallelMap
from crossval.utils.exceptions import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    """Writes a valid configuration file."""
    path = tmp_path / "config.json"
    content = {
        "search": {"mode": "constant", "rate": 4, "maximize": True},
        "execution": {"n_jobs": 2, "backend": "threading", "seed": 7},
        "logging": {"level": "DEBUG", "log_to_file": True}
    }
    path.write_text(json.dumps(content))
    return path


def test_load_from_file(config_file):
    config = ConfigurationManager(str(config_file)).load_and_validate()
    assert config['search']['mode'] == "constant"
    assert config['execution']['seed'] == 7
    # defaults fill the gaps
    assert config['search']['temp'] == 1.0
    assert config['logging']['log_dir'] == "logs"


def test_defaults_without_config():
    config = ConfigurationManager().load_and_validate()
    assert config['search']['mode'] == "geometric"
    assert config['execution']['n_jobs'] == 1
    assert 'rate' not in config['search']


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="File not found"):
        ConfigurationManager(str(tmp_path / "nope.json")).load_and_validate()


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        ConfigurationManager(str(path)).load_and_validate()


@pytest.mark.parametrize("config", [
    {"search": {"unknown": 1}},
    {"search": {"rate": "fast"}},
    {"execution": {"n_jobs": 1.5}},
    {"plotting": {}},
])
def test_schema_violations(config):
    with pytest.raises(ConfigurationError, match="Schema validation failed"):
        ConfigurationManager(config=config).load_and_validate()


@pytest.mark.parametrize("config, message", [
    ({"search": {"mode": "linear"}}, "search.mode"),
    ({"search": {"rate": 1}}, "search.rate"),
    ({"search": {"temp": -0.5}}, "search.temp"),
    ({"search": {"n": 0}}, "search.n"),
    ({"execution": {"n_jobs": 0}}, "n_jobs"),
    ({"execution": {"seed": -1}}, "seed"),
    ({"logging": {"level": "LOUD"}}, "logging.level"),
])
def test_logic_violations(config, message):
    with pytest.raises(ConfigurationError, match=message):
        ConfigurationManager(config=config).load_and_validate()


def test_search_options_sha(config_file):
    options = ConfigurationManager(str(config_file)).search_options("sha")
    assert options['mode'] is AllocationMode.CONSTANT
    assert options['rate'] == 4
    assert options['maximize'] is True
    assert isinstance(options['dispatcher'], ParallelMap)
    assert options['dispatcher'].n_jobs == 2
    assert 'rng' not in options


def test_search_options_default_rates():
    cm = ConfigurationManager(config={})
    assert cm.search_options("hyperband")['rate'] == 3
    assert cm.search_options("shafit")['rate'] == 2
    assert set(cm.search_options("brute")) == {'dispatcher', 'maximize'}


def test_seeded_generator(config_file):
    cm = ConfigurationManager(str(config_file))
    first = cm.search_options("sasha")['rng'].random()
    second = cm.rng().random()
    assert first == second == np.random.default_rng(7).random()


def test_unknown_algorithm():
    with pytest.raises(ConfigurationError, match="Unknown search algorithm"):
        ConfigurationManager().search_options("annealing")

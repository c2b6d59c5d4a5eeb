import copy
import json
import os
import logging
import jsonschema
from typing import Dict, Any, Optional

import numpy as np

from crossval.budget_allocation import AllocationMode
from crossval.search_engine import ParallelMap
from crossval.utils.exceptions import ConfigurationError
from crossval.utils import constants


CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "search": {
            "type": "object",
            "properties": {
                "mode": {"type": "string"},
                "rate": {"type": "number"},
                "maximize": {"type": "boolean"},
                "temp": {"type": "number"},
                "n": {"type": "integer"},
            },
            "additionalProperties": False,
        },
        "execution": {
            "type": "object",
            "properties": {
                "n_jobs": {"type": "integer"},
                "backend": {"type": ["string", "null"]},
                "seed": {"type": ["integer", "null"]},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string"},
                "log_to_console": {"type": "boolean"},
                "log_to_file": {"type": "boolean"},
                "colorful_console": {"type": "boolean"},
                "log_dir": {"type": "string"},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "search": {
        "mode": constants.GEOMETRIC,
        "maximize": False,
        "temp": constants.DEFAULT_SASHA_TEMP,
        "n": constants.DEFAULT_HC_NEIGHBORS,
    },
    "execution": {
        "n_jobs": constants.DEFAULT_N_JOBS,
        "backend": None,
        "seed": None,
    },
    "logging": {
        "level": "INFO",
        "log_to_console": True,
        "log_to_file": False,
        "colorful_console": True,
        "log_dir": constants.LOG_DIR,
    },
}

# Keyword arguments each search function accepts from the 'search' section.
SEARCH_OPTIONS = {
    "validate": [],
    "brute": ["maximize"],
    "brutefit": ["maximize"],
    "hc": ["maximize", "n"],
    "hcfit": ["maximize", "n"],
    "sha": ["maximize", "mode", "rate"],
    "shafit": ["maximize", "mode", "rate"],
    "hyperband": ["maximize", "rate"],
    "hyperbandfit": ["maximize", "rate"],
    "sasha": ["maximize", "temp"],
    "sashafit": ["maximize", "temp"],
}

RANDOMIZED = {"hc", "hcfit", "hyperband", "hyperbandfit", "sasha", "sashafit"}


class ConfigurationManager:
    """
    Manages search configuration loading, validation, and access.

    A configuration comes from a JSON file or a dict, is validated against
    ``CONFIG_SCHEMA`` and a set of logical rules, and is completed with
    defaults. Helpers turn it into search keyword arguments, a dispatcher and
    a seeded random generator.
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config_path (str): Path to a JSON configuration file.
            config (dict): In-memory configuration, used when no path is given.
        """
        self.config_path = config_path
        self.raw_config = config
        self.config: Dict[str, Any] = {}
        self.logger = logging.getLogger(__name__)

    def load_and_validate(self) -> Dict[str, Any]:
        """
        Loads config, validates schema and logic, applies defaults.

        Returns:
            Dict[str, Any]: The fully validated configuration.

        Raises:
            ConfigurationError: If any validation step fails.
        """
        # 1. Load
        if self.config_path is not None:
            loaded = self._load_json(self.config_path)
        else:
            loaded = copy.deepcopy(self.raw_config or {})

        # 2. Structural Validation (Schema)
        self._validate_schema(loaded)

        # 3. Defaults
        self.config = self._apply_defaults(loaded)

        # 4. Logical Validation (Bounds)
        self._validate_logic()

        return self.config

    def search_options(self, algorithm: str) -> Dict[str, Any]:
        """
        Keyword arguments for the search function named ``algorithm``.

        Includes the dispatcher, and a seeded generator for randomised searches.
        """
        if algorithm not in SEARCH_OPTIONS:
            raise ConfigurationError(f"Unknown search algorithm: {algorithm}. Available: {list(SEARCH_OPTIONS)}")
        config = self._loaded()
        search = config["search"]

        options: Dict[str, Any] = {"dispatcher": self.dispatcher()}
        for key in SEARCH_OPTIONS[algorithm]:
            if key == "rate":
                default = constants.DEFAULT_HYPERBAND_RATE if algorithm.startswith("hyperband") else constants.DEFAULT_SHA_RATE
                options["rate"] = search.get("rate", default)
            elif key == "mode":
                options["mode"] = AllocationMode(search["mode"])
            else:
                options[key] = search[key]
        if algorithm in RANDOMIZED:
            options["rng"] = self.rng()
        return options

    def dispatcher(self) -> ParallelMap:
        execution = self._loaded()["execution"]
        return ParallelMap(n_jobs=execution["n_jobs"], backend=execution["backend"])

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self._loaded()["execution"]["seed"])

    def _loaded(self) -> Dict[str, Any]:
        if not self.config:
            self.load_and_validate()
        return self.config

    def _load_json(self, path: str) -> Dict[str, Any]:
        """Safely load a JSON file."""
        if not os.path.exists(path):
            raise ConfigurationError(f"File not found: {path}")
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {str(e)}")

    def _validate_schema(self, config: Dict[str, Any]) -> None:
        """Validate config structure against the JSON schema."""
        try:
            jsonschema.validate(instance=config, schema=CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            raise ConfigurationError(f"Schema validation failed: {e.message}")

    @staticmethod
    def _apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for section, values in config.items():
            merged[section].update(values)
        return merged

    def _validate_logic(self) -> None:
        """Logical validation of bounds."""
        # --- Search Section ---
        search = self.config['search']
        if search['mode'] not in constants.ALLOCATION_MODES:
            raise ConfigurationError(
                f"search.mode must be one of {constants.ALLOCATION_MODES}, got '{search['mode']}'"
            )
        if 'rate' in search and search['rate'] <= 1:
            raise ConfigurationError(f"search.rate must be > 1, got {search['rate']}")
        if search['temp'] < 0:
            raise ConfigurationError(f"search.temp must be >= 0, got {search['temp']}")
        if search['n'] < 1:
            raise ConfigurationError(f"search.n must be >= 1, got {search['n']}")

        # --- Execution Section ---
        execution = self.config['execution']
        n_jobs = execution['n_jobs']
        if n_jobs == 0 or n_jobs < -1:
            raise ConfigurationError(f"execution.n_jobs must be -1 (all cores) or a positive integer, got {n_jobs}")
        if execution['seed'] is not None and execution['seed'] < 0:
            raise ConfigurationError("execution.seed must be non-negative.")

        # --- Logging Section ---
        level = self.config['logging']['level'].upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ConfigurationError(f"logging.level is not a logging level: {level}")

        self.logger.debug(f"Configuration validated: {self.config}")

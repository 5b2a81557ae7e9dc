# tests/conftest.py
import copy
import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from fuzzy_engine import rule_base
from fuzzy_engine.engine import FuzzyInferenceEngine
from utils.logger import LOGGER_NAMES



@pytest.fixture
def engine():
    """Engine built from the compiled-in rule base."""
    return FuzzyInferenceEngine()


@pytest.fixture
def default_config():
    """A deep copy of the compiled-in configuration, safe to mutate."""
    return copy.deepcopy(rule_base.default_config())


@pytest.fixture
def zero_degrees():
    """Every input label of the default rule base at degree 0.0."""
    def _builder(**overrides):
        degrees = {
            domain: {label: 0.0 for label in labels}
            for domain, labels in rule_base.MEMBERSHIP_FUNCTIONS.items()
        }
        for key, value in overrides.items():
            domain, label = key.split("__")
            degrees[domain][label] = value
        return degrees

    return _builder


@pytest.fixture(autouse=True)
def _restore_loggers():
    """setup_logging() detaches loggers from the root; undo that per test."""
    yield
    import matplotlib.pyplot as plt

    plt.close("all")
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()
        log.propagate = True
        log.setLevel(logging.NOTSET)

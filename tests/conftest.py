"""Shared fixtures for progression tests."""

import pytest

from fluentflow.progression import ModuleCatalog, ProgressionEngine
from fluentflow.schemas import LearningModule


@pytest.fixture
def scenario_modules():
    """Two units: a1 -> a2 -> b1."""
    return [
        LearningModule(id="a1", unit=1, prerequisites=[], name="Basic Vocabulary"),
        LearningModule(id="a2", unit=1, prerequisites=["a1"], name="Basic Grammar"),
        LearningModule(id="b1", unit=2, prerequisites=["a2"], name="Family Vocabulary"),
    ]


@pytest.fixture
def scenario_catalog(scenario_modules):
    return ModuleCatalog(scenario_modules)


@pytest.fixture
def engine(scenario_catalog):
    engine = ProgressionEngine()
    engine.initialize(scenario_catalog, [])
    return engine

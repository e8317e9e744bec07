"""Shared test fixtures."""

import pytest

from ability_manager import AbilityManager, AbilityRegistry


@pytest.fixture
def registry():
    return AbilityRegistry()


@pytest.fixture
def abilities(registry):
    return AbilityManager(registry=registry)

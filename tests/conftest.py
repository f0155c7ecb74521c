# tests/conftest.py
"""Shared test fixtures and Hypothesis configuration.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Sample types (well-behaved and deliberately broken) live in
tests/fixtures/sample_types.py.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from contractcheck.core.config import DEFAULT_SETTINGS, ContractCheckSettings, use_settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def default_settings() -> Iterator[ContractCheckSettings]:
    """Run the test under default settings regardless of the environment."""
    with use_settings(DEFAULT_SETTINGS) as active:
        yield active


@pytest.fixture
def consistent_ordering_settings() -> Iterator[ContractCheckSettings]:
    """Settings that make ordering consistency with == mandatory."""
    configured = ContractCheckSettings(ordering={"consistent_with_equals": True})
    with use_settings(configured) as active:
        yield active


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Tests that configure logging must not leak configuration."""
    package = logging.getLogger("contractcheck")
    handlers, level, propagate = package.handlers[:], package.level, package.propagate
    yield
    structlog.reset_defaults()
    package.handlers = handlers
    package.setLevel(level)
    package.propagate = propagate

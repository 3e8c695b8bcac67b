# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- collector: CollectorInPort to wire onto a node's output and inspect emits
- failures: list fed by an error_handler, for asserting routed failures
- isolated_locks: fresh PathLockRegistry so tests never share writer locks

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from flowline.contracts import NodeFailure
from flowline.core.locks import PathLockRegistry
from flowline.core.ports import CollectorInPort

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def collector() -> CollectorInPort:
    """Collecting InPort for asserting what a node emitted."""
    return CollectorInPort()


@pytest.fixture
def failures() -> list[NodeFailure]:
    """Sink for an error_handler: pass failures.append to a node."""
    return []


@pytest.fixture
def isolated_locks() -> PathLockRegistry:
    """Private lock registry, independent of the process-wide default."""
    return PathLockRegistry()

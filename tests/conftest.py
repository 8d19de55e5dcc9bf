"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from smart_table.core.config import TableSettings
from smart_table.directives.manager import DirectiveManager
from smart_table.engine.table import SmartTable, smart_table


@pytest.fixture
def records() -> list[dict[str, Any]]:
    """Five records {n: 1} .. {n: 5}."""
    return [{"n": i} for i in range(1, 6)]


@pytest.fixture
def people() -> list[dict[str, Any]]:
    return [
        {"name": "Ada Lovelace", "age": 36, "active": True, "address": {"city": "London"}},
        {"name": "Grace Hopper", "age": 85, "active": False, "address": {"city": "New York"}},
        {"name": "Alan Turing", "age": 41, "active": True, "address": {"city": "Wilmslow"}},
        {"name": "Edsger Dijkstra", "age": 72, "active": False, "address": {"city": "Nuenen"}},
        {"name": "Barbara Liskov", "age": 84, "active": True},
    ]


@pytest.fixture
def fast_settings() -> TableSettings:
    """No processing delay, so awaiting an exec task is enough to see its events."""
    return TableSettings(processing_delay_ms=0)


@pytest.fixture
def table(records: list[dict[str, Any]], fast_settings: TableSettings) -> SmartTable:
    return smart_table(data=records, settings=fast_settings)


@pytest.fixture
def directive_manager() -> DirectiveManager:
    """Directive manager with builtin directives registered."""
    manager = DirectiveManager()
    manager.register_builtin_directives()
    return manager


# =============================================================================
# Hypothesis Configuration
# =============================================================================

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

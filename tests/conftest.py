"""Pytest configuration and fixtures for taskgraph tests."""

import pytest

from factories import make_edge, make_task
from taskgraph.common.config import AnalysisSettings
from taskgraph.schemas.dependency import DependencyEdge
from taskgraph.schemas.task import Task


# =============================================================================
# Sample Graph Fixtures
# =============================================================================


@pytest.fixture
def chain_tasks() -> list[Task]:
    """A(2h) -> B(3h) -> C(1h)."""
    return [make_task("A", 2), make_task("B", 3), make_task("C", 1)]


@pytest.fixture
def chain_edges() -> list[DependencyEdge]:
    """Blocking edges A -> B -> C."""
    return [make_edge("A", "B"), make_edge("B", "C")]


@pytest.fixture
def branching_edges() -> list[DependencyEdge]:
    """Blocking edges A -> B -> C and A -> D."""
    return [make_edge("A", "B"), make_edge("B", "C"), make_edge("A", "D")]


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    """Default analysis settings, independent of the environment."""
    return AnalysisSettings(
        default_duration_hours=1.0,
        summary_limit=5,
        strict_cycle_check=True,
    )

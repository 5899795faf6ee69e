"""Pydantic schemas for dependency analysis results."""

from pydantic import BaseModel, ConfigDict, Field


class CriticalPathNode(BaseModel):
    """Schedule values computed for one task."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    task_title: str
    project_id: str
    earliest_start: float
    earliest_finish: float
    latest_start: float
    latest_finish: float
    slack: float
    is_critical: bool
    duration_hours: float


class EdgeRef(BaseModel):
    """A (predecessor, successor) pair identifying a dependency."""

    model_config = ConfigDict(frozen=True)

    pred: str
    succ: str


class SuggestedRemoval(BaseModel):
    """An edge whose removal breaks the reported cycle."""

    model_config = ConfigDict(frozen=True)

    remove_edge: EdgeRef
    reason: str


class CircularDependencyResult(BaseModel):
    """Result of cycle detection.

    At most one witness cycle is reported even when the graph holds
    several; callers re-check after breaking it.
    """

    model_config = ConfigDict(frozen=True)

    has_cycle: bool
    cycle_task_ids: list[str] = Field(default_factory=list)
    suggested_alternatives: list[SuggestedRemoval] = Field(default_factory=list)


class DownstreamImpact(BaseModel):
    """A task reachable from the analysed task over blocking edges."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    task_title: str
    project_id: str
    depth: int = Field(ge=1)  # 1 = direct successor
    affected_milestone_ids: list[str] = Field(default_factory=list)


class CriticalPathSummary(BaseModel):
    """Dashboard-level overview of a snapshot's critical path."""

    has_cycle: bool
    cycle_task_ids: list[str]
    critical_task_count: int
    top_critical_tasks: list[CriticalPathNode]
    project_finish: float

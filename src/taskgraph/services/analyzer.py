"""Dependency analysis over one snapshot of tasks and edges.

Wraps the pure graph functions for callers that ask several questions
about the same snapshot: results are computed on first use and kept
for the lifetime of the analyzer. A new snapshot needs a new analyzer.
"""

import time
from collections.abc import Iterable
from functools import cached_property

from taskgraph.common.config import AnalysisSettings, get_settings
from taskgraph.common.exceptions import CircularDependencyError, TaskNotFoundError
from taskgraph.common.logging import LoggerMixin
from taskgraph.common.metrics import ANALYSIS_DURATION, ANALYSIS_RUNS, CRITICAL_TASKS, CYCLES_DETECTED
from taskgraph.graph.adjacency import successors_by_type
from taskgraph.graph.critical_path import (
    compute_critical_path,
    get_critical_path_task_ids,
    project_finish_time,
)
from taskgraph.graph.cycles import detect_circular_dependencies, would_create_cycle
from taskgraph.graph.impact import MilestoneLookup, get_downstream_impact, milestone_lookup_from_tasks
from taskgraph.schemas.analysis import (
    CircularDependencyResult,
    CriticalPathNode,
    CriticalPathSummary,
    DownstreamImpact,
)
from taskgraph.schemas.dependency import DependencyEdge, DependencyType
from taskgraph.schemas.task import Task


class DependencyAnalyzer(LoggerMixin):
    """Critical path and dependency insights for a task snapshot.

    Answers:
    - Does the snapshot contain a circular dependency?
    - Which tasks are on the critical path, and with how much slack?
    - What sits downstream of a task?
    - Would a proposed dependency introduce a cycle?
    """

    def __init__(
        self,
        tasks: Iterable[Task],
        edges: Iterable[DependencyEdge],
        settings: AnalysisSettings | None = None,
        milestone_lookup: MilestoneLookup | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            tasks: Tasks in the snapshot.
            edges: Dependency edges in the snapshot.
            settings: Analysis settings.
            milestone_lookup: Maps a task id to its milestone ids. Defaults
                to the tasks' own ``milestone_id`` links.
        """
        if settings is None:
            settings = get_settings().analysis

        self._settings = settings
        self._tasks = tuple(tasks)
        self._edges = tuple(edges)
        self._milestone_lookup = milestone_lookup or milestone_lookup_from_tasks(self._tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def edges(self) -> tuple[DependencyEdge, ...]:
        return self._edges

    @cached_property
    def task_ids(self) -> list[str]:
        """Unique task ids in snapshot order."""
        return list(dict.fromkeys(task.id for task in self._tasks))

    @cached_property
    def circular_result(self) -> CircularDependencyResult:
        """Cycle detection over the whole snapshot."""
        start = time.perf_counter()
        result = detect_circular_dependencies(self._edges, self.task_ids)
        self._record("detect_cycles", start)

        if result.has_cycle:
            CYCLES_DETECTED.inc()
            self.logger.warning(
                "Circular dependency detected",
                cycle=result.cycle_task_ids,
                cycle_length=len(result.cycle_task_ids),
            )
        return result

    @property
    def has_cycle(self) -> bool:
        return self.circular_result.has_cycle

    @cached_property
    def critical_path_nodes(self) -> list[CriticalPathNode]:
        """Schedule values for every task.

        Raises:
            CircularDependencyError: If strict cycle checking is enabled
                and the snapshot contains a cycle.
        """
        if self._settings.strict_cycle_check and self.has_cycle:
            cycle = self.circular_result.cycle_task_ids
            raise CircularDependencyError(
                "Resolve the circular dependency to compute the critical path",
                details={"cycle_task_ids": cycle},
            )

        start = time.perf_counter()
        nodes = compute_critical_path(
            self._tasks,
            self._edges,
            default_duration_hours=self._settings.default_duration_hours,
        )
        self._record("critical_path", start)

        critical_count = sum(1 for node in nodes if node.is_critical)
        CRITICAL_TASKS.set(critical_count)
        self.logger.debug(
            "Critical path computed",
            task_count=len(nodes),
            edge_count=len(self._edges),
            critical_count=critical_count,
        )
        return nodes

    @cached_property
    def critical_path_task_ids(self) -> set[str]:
        return get_critical_path_task_ids(self.critical_path_nodes)

    @cached_property
    def project_finish(self) -> float:
        """Project duration in hours."""
        return project_finish_time(self.critical_path_nodes)

    @cached_property
    def _nodes_by_id(self) -> dict[str, CriticalPathNode]:
        return {node.task_id: node for node in self.critical_path_nodes}

    def node_for(self, task_id: str) -> CriticalPathNode:
        """Get the schedule values of one task.

        Raises:
            TaskNotFoundError: If the task is not in the snapshot.
        """
        node = self._nodes_by_id.get(task_id)
        if node is None:
            raise TaskNotFoundError(f"Task not found: {task_id}", details={"task_id": task_id})
        return node

    def is_on_critical_path(self, task_id: str) -> bool:
        return task_id in self.critical_path_task_ids

    def downstream_for_task(self, task_id: str) -> list[DownstreamImpact]:
        """Tasks that a delay on ``task_id`` would push back."""
        start = time.perf_counter()
        impacted = get_downstream_impact(
            task_id,
            self._edges,
            self._tasks,
            self._milestone_lookup,
        )
        self._record("downstream_impact", start)

        self.logger.debug(
            "Downstream impact computed",
            task_id=task_id,
            impacted_count=len(impacted),
        )
        return impacted

    def would_create_cycle(self, predecessor_id: str, successor_id: str) -> bool:
        """Check a proposed blocking dependency before it is saved."""
        start = time.perf_counter()
        creates_cycle = would_create_cycle(
            self._edges,
            self.task_ids,
            predecessor_id,
            successor_id,
        )
        self._record("would_create_cycle", start)

        if creates_cycle:
            self.logger.info(
                "Proposed dependency would create a cycle",
                predecessor_id=predecessor_id,
                successor_id=successor_id,
            )
        return creates_cycle

    def dependencies_for(self, task_id: str) -> dict[DependencyType, list[str]]:
        """Tasks that ``task_id`` blocks and relates to."""
        grouped = self._successors_by_type.get(task_id)
        if grouped is None:
            return {DependencyType.BLOCKS: [], DependencyType.RELATES: []}
        return {dep_type: list(ids) for dep_type, ids in grouped.items()}

    @cached_property
    def _successors_by_type(self) -> dict[str, dict[DependencyType, list[str]]]:
        return successors_by_type(self._edges)

    def summary(self, limit: int | None = None) -> CriticalPathSummary:
        """Overview for dashboards.

        A cyclic snapshot yields no critical tasks, only the cycle.

        Args:
            limit: Number of critical tasks to list.

        Returns:
            Critical path summary.
        """
        if limit is None:
            limit = self._settings.summary_limit
        circular = self.circular_result

        if circular.has_cycle:
            return CriticalPathSummary(
                has_cycle=True,
                cycle_task_ids=circular.cycle_task_ids,
                critical_task_count=0,
                top_critical_tasks=[],
                project_finish=0.0,
            )

        critical = [node for node in self.critical_path_nodes if node.is_critical]
        return CriticalPathSummary(
            has_cycle=False,
            cycle_task_ids=[],
            critical_task_count=len(critical),
            top_critical_tasks=critical[:limit],
            project_finish=self.project_finish,
        )

    def _record(self, operation: str, start: float) -> None:
        ANALYSIS_RUNS.labels(operation=operation).inc()
        ANALYSIS_DURATION.labels(operation=operation).observe(time.perf_counter() - start)

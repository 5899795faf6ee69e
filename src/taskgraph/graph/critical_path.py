"""Critical Path Method scheduling.

Computes earliest and latest start/finish times for every task with a
forward and a backward pass over the blocking subgraph, in topological
order. Times are plain hours on an additive timeline starting at 0.

The graph must be acyclic; run cycle detection first. On cyclic input
the calculation still terminates but values for tasks on a cycle are
meaningless.
"""

from collections import deque
from collections.abc import Iterable, Sequence

from taskgraph.graph.adjacency import DependencyGraph
from taskgraph.schemas.analysis import CriticalPathNode
from taskgraph.schemas.dependency import DependencyEdge
from taskgraph.schemas.task import Task

DEFAULT_DURATION_HOURS = 1.0

# Slack within this many hours of zero counts as zero
SLACK_TOLERANCE = 1e-6


def topological_order(
    task_ids: Sequence[str],
    graph: DependencyGraph,
) -> list[str]:
    """Order tasks so every predecessor precedes its successors.

    Uses Kahn's algorithm seeded in input order. Tasks left over because
    they sit on (or behind) a cycle are appended in input order.

    Args:
        task_ids: Unique task ids, in input order.
        graph: Blocking adjacency.

    Returns:
        All of ``task_ids`` in scheduling order.
    """
    known = set(task_ids)
    in_degree = {
        task_id: sum(1 for p in graph.predecessors_of(task_id) if p in known)
        for task_id in task_ids
    }

    ready = deque(task_id for task_id in task_ids if in_degree[task_id] == 0)
    order: list[str] = []
    while ready:
        task_id = ready.popleft()
        order.append(task_id)
        for succ in graph.successors_of(task_id):
            if succ not in known:
                continue
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                ready.append(succ)

    if len(order) < len(task_ids):
        placed = set(order)
        order.extend(task_id for task_id in task_ids if task_id not in placed)

    return order


def compute_critical_path(
    tasks: Iterable[Task],
    edges: Iterable[DependencyEdge],
    default_duration_hours: float = DEFAULT_DURATION_HOURS,
) -> list[CriticalPathNode]:
    """Compute schedule values and criticality for every task.

    Only blocking edges between known tasks constrain the schedule.
    Tasks without successors finish no later than the project finish,
    so isolated tasks get slack equal to the project finish minus their
    own duration.

    Args:
        tasks: Tasks to schedule. Ids are unique; the first occurrence wins.
        edges: Dependency edges.
        default_duration_hours: Duration for unestimated tasks and the
            floor for every estimate.

    Returns:
        One node per task, in input order.
    """
    by_id: dict[str, Task] = {}
    for task in tasks:
        by_id.setdefault(task.id, task)

    task_ids = list(by_id)
    graph = DependencyGraph.from_edges(edges, blocks_only=True)
    durations = {
        task_id: task.duration(default_duration_hours)
        for task_id, task in by_id.items()
    }
    order = topological_order(task_ids, graph)

    # Forward pass
    earliest_start: dict[str, float] = {}
    earliest_finish: dict[str, float] = {}
    for task_id in order:
        pred_finishes = [
            earliest_finish.get(p, 0.0)
            for p in graph.predecessors_of(task_id)
            if p in by_id
        ]
        start = max(pred_finishes, default=0.0)
        earliest_start[task_id] = start
        earliest_finish[task_id] = start + durations[task_id]

    project_finish = max(earliest_finish.values(), default=0.0)

    # Backward pass; None marks a task not yet scheduled
    latest_start: dict[str, float | None] = dict.fromkeys(task_ids)
    latest_finish: dict[str, float] = {}
    for task_id in reversed(order):
        succ_starts = [
            latest_start[s]
            for s in graph.successors_of(task_id)
            if s in by_id and latest_start[s] is not None
        ]
        finish = min(succ_starts, default=project_finish)
        latest_finish[task_id] = finish
        latest_start[task_id] = finish - durations[task_id]

    nodes = []
    for task_id in task_ids:
        task = by_id[task_id]
        slack = latest_start[task_id] - earliest_start[task_id]
        if abs(slack) < SLACK_TOLERANCE:
            slack = 0.0
        nodes.append(CriticalPathNode(
            task_id=task.id,
            task_title=task.title,
            project_id=task.project_id,
            earliest_start=earliest_start[task_id],
            earliest_finish=earliest_finish[task_id],
            latest_start=latest_start[task_id],
            latest_finish=latest_finish[task_id],
            slack=slack,
            is_critical=slack <= 0,
            duration_hours=durations[task_id],
        ))

    return nodes


def get_critical_path_task_ids(nodes: Iterable[CriticalPathNode]) -> set[str]:
    """Ids of the tasks on the critical path."""
    return {node.task_id for node in nodes if node.is_critical}


def project_finish_time(nodes: Iterable[CriticalPathNode]) -> float:
    """Latest earliest-finish across all nodes, 0 when empty."""
    return max((node.earliest_finish for node in nodes), default=0.0)

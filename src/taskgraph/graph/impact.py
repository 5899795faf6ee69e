"""Downstream impact analysis for task dependencies.

Finds every task that a delay on a given task would push back, by
walking blocking edges depth-first from its direct successors.
"""

from collections.abc import Callable, Iterable

from taskgraph.graph.adjacency import build_successor_map
from taskgraph.schemas.analysis import DownstreamImpact
from taskgraph.schemas.dependency import DependencyEdge
from taskgraph.schemas.task import Task

MilestoneLookup = Callable[[str], list[str]]


def _no_milestones(task_id: str) -> list[str]:
    return []


def get_downstream_impact(
    task_id: str,
    edges: Iterable[DependencyEdge],
    tasks: Iterable[Task],
    milestone_lookup: MilestoneLookup | None = None,
) -> list[DownstreamImpact]:
    """List the tasks downstream of a task.

    Each task is reported once, at the depth of the first path the
    depth-first walk explores; that is not necessarily the shortest
    path. Ids missing from ``tasks`` are walked through but not
    reported. The start task is never reported.

    Args:
        task_id: Task whose successors to walk.
        edges: Dependency edges. Non-blocking edges are ignored.
        tasks: Known tasks, used for titles and project ids.
        milestone_lookup: Maps a task id to the milestone ids it feeds.

    Returns:
        Impacted tasks in visit order.
    """
    lookup = milestone_lookup or _no_milestones
    by_id = {task.id: task for task in tasks}
    successors = build_successor_map(edges, blocks_only=True)

    visited = {task_id}
    impacted: list[DownstreamImpact] = []

    # Reversed pushes keep visit order equal to a recursive walk
    pending = [(succ, 1) for succ in reversed(successors.get(task_id, []))]
    while pending:
        current, depth = pending.pop()
        if current in visited:
            continue
        visited.add(current)

        task = by_id.get(current)
        if task is not None:
            impacted.append(DownstreamImpact(
                task_id=task.id,
                task_title=task.title,
                project_id=task.project_id,
                depth=depth,
                affected_milestone_ids=list(lookup(task.id)),
            ))

        pending.extend(
            (succ, depth + 1) for succ in reversed(successors.get(current, []))
        )

    return impacted


def milestone_lookup_from_tasks(tasks: Iterable[Task]) -> MilestoneLookup:
    """Build a milestone lookup from the tasks' own milestone links.

    Args:
        tasks: Tasks, some carrying a ``milestone_id``.

    Returns:
        Function mapping a task id to its milestone ids (empty if none).
    """
    milestones: dict[str, list[str]] = {}
    for task in tasks:
        if task.milestone_id is None:
            continue
        linked = milestones.setdefault(task.id, [])
        if task.milestone_id not in linked:
            linked.append(task.milestone_id)

    def lookup(task_id: str) -> list[str]:
        return list(milestones.get(task_id, []))

    return lookup

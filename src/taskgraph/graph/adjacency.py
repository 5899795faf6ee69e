"""Adjacency maps for the task dependency graph.

Turns a flat list of dependency edges into successor and predecessor
maps keyed by task id. Duplicate pairs collapse to a single entry and
neighbour lists keep first-seen edge order.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from taskgraph.schemas.dependency import DependencyEdge, DependencyType


def build_successor_map(
    edges: Iterable[DependencyEdge],
    blocks_only: bool = True,
) -> dict[str, list[str]]:
    """Map each predecessor task id to its successor task ids.

    Args:
        edges: Dependency edges.
        blocks_only: Only consider blocking edges.

    Returns:
        Predecessor id -> successor ids, without duplicates.
    """
    successors: dict[str, list[str]] = {}
    for edge in edges:
        if blocks_only and not edge.is_blocking:
            continue
        targets = successors.setdefault(edge.predecessor_task_id, [])
        if edge.successor_task_id not in targets:
            targets.append(edge.successor_task_id)
    return successors


def build_predecessor_map(
    edges: Iterable[DependencyEdge],
    blocks_only: bool = True,
) -> dict[str, list[str]]:
    """Map each successor task id to its predecessor task ids.

    Args:
        edges: Dependency edges.
        blocks_only: Only consider blocking edges.

    Returns:
        Successor id -> predecessor ids, without duplicates.
    """
    predecessors: dict[str, list[str]] = {}
    for edge in edges:
        if blocks_only and not edge.is_blocking:
            continue
        sources = predecessors.setdefault(edge.successor_task_id, [])
        if edge.predecessor_task_id not in sources:
            sources.append(edge.predecessor_task_id)
    return predecessors


@dataclass
class DependencyGraph:
    """Forward and backward adjacency built from one edge list."""

    successors: dict[str, list[str]] = field(default_factory=dict)
    predecessors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[DependencyEdge],
        blocks_only: bool = True,
    ) -> "DependencyGraph":
        """Build both adjacency maps from the same edges."""
        edges = list(edges)
        return cls(
            successors=build_successor_map(edges, blocks_only),
            predecessors=build_predecessor_map(edges, blocks_only),
        )

    def successors_of(self, task_id: str) -> list[str]:
        return self.successors.get(task_id, [])

    def predecessors_of(self, task_id: str) -> list[str]:
        return self.predecessors.get(task_id, [])


def successors_by_type(
    edges: Iterable[DependencyEdge],
) -> dict[str, dict[DependencyType, list[str]]]:
    """Group each predecessor's successors by dependency type.

    Used to list what a task blocks and what it merely relates to.

    Returns:
        Predecessor id -> {BLOCKS: [...], RELATES: [...]}.
    """
    grouped: dict[str, dict[DependencyType, list[str]]] = {}
    for edge in edges:
        entry = grouped.setdefault(
            edge.predecessor_task_id,
            {DependencyType.BLOCKS: [], DependencyType.RELATES: []},
        )
        targets = entry[edge.type]
        if edge.successor_task_id not in targets:
            targets.append(edge.successor_task_id)
    return grouped

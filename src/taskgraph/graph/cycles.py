"""Circular dependency detection.

Runs a white/gray/black depth-first search over the blocking subgraph
and reports the first cycle it meets. Only one witness cycle is
reported per call; callers re-check after breaking it.
"""

from collections.abc import Iterable, Iterator

from taskgraph.graph.adjacency import build_successor_map
from taskgraph.schemas.analysis import CircularDependencyResult, EdgeRef, SuggestedRemoval
from taskgraph.schemas.dependency import DependencyEdge, DependencyType

CANDIDATE_EDGE_ID = "candidate"


def find_cycle(
    task_ids: Iterable[str],
    successors: dict[str, list[str]],
) -> list[str]:
    """Find one cycle among the given tasks.

    Roots are tried in the order ``task_ids`` yields them. Successors
    outside ``task_ids`` are ignored.

    Args:
        task_ids: Task ids to consider.
        successors: Predecessor id -> successor ids.

    Returns:
        Task ids forming the cycle, starting with the task the search
        reached first, or an empty list when the graph is acyclic.
    """
    ordered = list(dict.fromkeys(task_ids))
    universe = set(ordered)
    visited: set[str] = set()
    on_stack: set[str] = set()
    parent: dict[str, str] = {}

    for root in ordered:
        if root in visited:
            continue

        visited.add(root)
        on_stack.add(root)
        frames: list[tuple[str, Iterator[str]]] = [(root, iter(successors.get(root, [])))]

        while frames:
            node, pending = frames[-1]
            descended = False

            for succ in pending:
                if succ not in universe:
                    continue
                if succ not in visited:
                    parent[succ] = node
                    visited.add(succ)
                    on_stack.add(succ)
                    frames.append((succ, iter(successors.get(succ, []))))
                    descended = True
                    break
                if succ in on_stack:
                    return _materialize_cycle(succ, node, parent)

            if not descended:
                frames.pop()
                on_stack.discard(node)

    return []


def _materialize_cycle(entry: str, tail: str, parent: dict[str, str]) -> list[str]:
    """Walk parents from ``tail`` back to ``entry`` and return the loop in edge order."""
    chain: list[str] = []
    current = tail
    while current != entry:
        chain.append(current)
        current = parent[current]
    chain.reverse()
    return [entry, *chain]


def detect_circular_dependencies(
    edges: Iterable[DependencyEdge],
    task_ids: Iterable[str],
) -> CircularDependencyResult:
    """Detect a circular dependency among blocking edges.

    Args:
        edges: Dependency edges. Non-blocking edges are ignored.
        task_ids: Task ids to consider; edges touching other ids are ignored.

    Returns:
        Detection result with the witness cycle and one suggested edge
        removal per edge along it.
    """
    successors = build_successor_map(edges, blocks_only=True)
    cycle = find_cycle(task_ids, successors)
    if not cycle:
        return CircularDependencyResult(has_cycle=False)

    path = " → ".join(cycle)
    suggestions = [
        SuggestedRemoval(
            remove_edge=EdgeRef(pred=pred, succ=cycle[(i + 1) % len(cycle)]),
            reason=f"Removing this dependency breaks the cycle: {path}",
        )
        for i, pred in enumerate(cycle)
    ]

    return CircularDependencyResult(
        has_cycle=True,
        cycle_task_ids=cycle,
        suggested_alternatives=suggestions,
    )


def would_create_cycle(
    edges: Iterable[DependencyEdge],
    task_ids: Iterable[str],
    predecessor_id: str,
    successor_id: str,
) -> bool:
    """Check whether adding a blocking edge would create a cycle.

    Re-runs detection on the existing edges plus the candidate, so an
    already-cyclic graph also answers True.

    Args:
        edges: Existing dependency edges.
        task_ids: Task ids to consider.
        predecessor_id: Proposed blocking task.
        successor_id: Proposed blocked task.

    Returns:
        True if the extended graph contains a cycle.
    """
    candidate = DependencyEdge(
        id=CANDIDATE_EDGE_ID,
        predecessor_task_id=predecessor_id,
        successor_task_id=successor_id,
        type=DependencyType.BLOCKS,
    )
    return detect_circular_dependencies([*edges, candidate], task_ids).has_cycle

"""Graph algorithms - adjacency, cycle detection, critical path, downstream impact.

All functions are pure: they rebuild their adjacency from the supplied
edges on every call and return new result records.
"""

from taskgraph.graph.adjacency import (
    DependencyGraph,
    build_predecessor_map,
    build_successor_map,
    successors_by_type,
)
from taskgraph.graph.critical_path import (
    compute_critical_path,
    get_critical_path_task_ids,
    project_finish_time,
    topological_order,
)
from taskgraph.graph.cycles import detect_circular_dependencies, find_cycle, would_create_cycle
from taskgraph.graph.impact import MilestoneLookup, get_downstream_impact, milestone_lookup_from_tasks

__all__ = [
    # Adjacency
    "DependencyGraph",
    "build_successor_map",
    "build_predecessor_map",
    "successors_by_type",
    # Cycles
    "find_cycle",
    "detect_circular_dependencies",
    "would_create_cycle",
    # Critical path
    "topological_order",
    "compute_critical_path",
    "get_critical_path_task_ids",
    "project_finish_time",
    # Impact
    "MilestoneLookup",
    "get_downstream_impact",
    "milestone_lookup_from_tasks",
]

"""Unit tests for circular dependency detection."""

import pytest

from factories import closes_loop, make_edge
from taskgraph.graph.cycles import detect_circular_dependencies, find_cycle, would_create_cycle
from taskgraph.schemas.analysis import EdgeRef
from taskgraph.schemas.dependency import DependencyType


@pytest.mark.unit
class TestFindCycle:
    """Test cases for find_cycle."""

    def test_empty_graph(self):
        """Test no tasks means no cycle."""
        assert find_cycle([], {}) == []

    def test_acyclic(self):
        """Test a DAG has no cycle."""
        successors = {"A": ["B", "C"], "B": ["D"], "C": ["D"]}
        assert find_cycle(["A", "B", "C", "D"], successors) == []

    def test_three_cycle_starts_with_first_reached(self):
        """Test the cycle is ordered along its edges from the entry task."""
        successors = {"A": ["B"], "B": ["C"], "C": ["A"]}
        assert find_cycle(["A", "B", "C"], successors) == ["A", "B", "C"]

    def test_cycle_behind_prefix(self):
        """Test a cycle reached through a non-cyclic task excludes that task."""
        successors = {"X": ["A"], "A": ["B"], "B": ["A"]}
        assert find_cycle(["X", "A", "B"], successors) == ["A", "B"]

    def test_self_loop(self):
        """Test a task blocking itself is a cycle of one."""
        assert find_cycle(["X"], {"X": ["X"]}) == ["X"]

    def test_successors_outside_universe_ignored(self):
        """Test edges leaving the considered set cannot close a cycle."""
        successors = {"A": ["B"], "B": ["A"]}
        assert find_cycle(["A"], successors) == []

    def test_long_chain_does_not_recurse(self):
        """Test deep graphs are searched without hitting recursion limits."""
        ids = [f"T{i}" for i in range(5000)]
        successors = {ids[i]: [ids[i + 1]] for i in range(len(ids) - 1)}
        successors[ids[-1]] = [ids[0]]

        cycle = find_cycle(ids, successors)

        assert len(cycle) == 5000
        assert cycle[0] == "T0"


@pytest.mark.unit
class TestDetectCircularDependencies:
    """Test cases for detect_circular_dependencies."""

    def test_no_cycle(self, chain_edges):
        """Test an acyclic chain reports nothing."""
        result = detect_circular_dependencies(chain_edges, ["A", "B", "C"])

        assert result.has_cycle is False
        assert result.cycle_task_ids == []
        assert result.suggested_alternatives == []

    def test_empty_inputs(self):
        """Test empty inputs report no cycle."""
        result = detect_circular_dependencies([], set())
        assert result.has_cycle is False

    def test_back_edge_detected(self, chain_edges):
        """Test closing the chain reports a cycle that walks real edges."""
        edges = [*chain_edges, make_edge("C", "A")]
        result = detect_circular_dependencies(edges, ["A", "B", "C"])

        assert result.has_cycle is True
        assert sorted(result.cycle_task_ids) == ["A", "B", "C"]
        assert closes_loop(result.cycle_task_ids, edges)

    def test_cycle_found_with_set_universe(self, chain_edges):
        """Test any iteration order of the universe still finds a valid loop."""
        edges = [*chain_edges, make_edge("C", "A")]
        result = detect_circular_dependencies(edges, {"A", "B", "C"})

        assert result.has_cycle is True
        assert closes_loop(result.cycle_task_ids, edges)

    def test_one_suggestion_per_cycle_edge(self, chain_edges):
        """Test every edge of the cycle is offered for removal."""
        edges = [*chain_edges, make_edge("C", "A")]
        result = detect_circular_dependencies(edges, ["A", "B", "C"])

        assert [s.remove_edge for s in result.suggested_alternatives] == [
            EdgeRef(pred="A", succ="B"),
            EdgeRef(pred="B", succ="C"),
            EdgeRef(pred="C", succ="A"),
        ]
        for suggestion in result.suggested_alternatives:
            assert suggestion.reason == "Removing this dependency breaks the cycle: A → B → C"

    def test_self_loop(self):
        """Test a self-dependency is reported as a cycle of one."""
        result = detect_circular_dependencies([make_edge("X", "X")], ["X"])

        assert result.has_cycle is True
        assert result.cycle_task_ids == ["X"]
        assert result.suggested_alternatives[0].remove_edge == EdgeRef(pred="X", succ="X")

    def test_relates_edges_do_not_form_cycles(self, chain_edges):
        """Test a relates edge closing the chain is not a cycle."""
        edges = [*chain_edges, make_edge("C", "A", DependencyType.RELATES)]
        result = detect_circular_dependencies(edges, ["A", "B", "C"])

        assert result.has_cycle is False

    def test_edges_to_unknown_tasks_ignored(self):
        """Test a cycle through a task outside the universe is ignored."""
        edges = [make_edge("A", "Z"), make_edge("Z", "A")]
        result = detect_circular_dependencies(edges, ["A", "B"])

        assert result.has_cycle is False

    def test_isolated_tasks_never_reported(self):
        """Test unrelated tasks stay out of the witness cycle."""
        edges = [make_edge("A", "B"), make_edge("B", "A")]
        result = detect_circular_dependencies(edges, ["Q", "A", "B", "R"])

        assert result.cycle_task_ids == ["A", "B"]

    def test_only_one_cycle_reported(self):
        """Test independent cycles are reported one at a time."""
        edges = [
            make_edge("A", "B"), make_edge("B", "A"),
            make_edge("C", "D"), make_edge("D", "C"),
        ]
        result = detect_circular_dependencies(edges, ["A", "B", "C", "D"])

        assert result.cycle_task_ids == ["A", "B"]

        remaining = [e for e in edges if e.pair != ("B", "A")]
        second = detect_circular_dependencies(remaining, ["A", "B", "C", "D"])
        assert second.cycle_task_ids == ["C", "D"]

    def test_idempotent(self, chain_edges):
        """Test repeated calls give identical results."""
        edges = [*chain_edges, make_edge("C", "A")]

        first = detect_circular_dependencies(edges, ["A", "B", "C"])
        second = detect_circular_dependencies(edges, ["A", "B", "C"])

        assert first == second


@pytest.mark.unit
class TestWouldCreateCycle:
    """Test cases for would_create_cycle."""

    def test_closing_edge_creates_cycle(self, chain_edges):
        """Test C -> A on A -> B -> C would create a cycle."""
        assert would_create_cycle(chain_edges, {"A", "B", "C", "D"}, "C", "A") is True

    def test_edge_to_unconnected_task_is_safe(self, chain_edges):
        """Test C -> D on A -> B -> C is fine."""
        assert would_create_cycle(chain_edges, {"A", "B", "C", "D"}, "C", "D") is False

    def test_self_dependency_creates_cycle(self):
        """Test a task cannot block itself."""
        assert would_create_cycle([], {"A"}, "A", "A") is True

    def test_candidate_with_unknown_task_ignored(self, chain_edges):
        """Test candidates touching unknown tasks never create a cycle."""
        assert would_create_cycle(chain_edges, {"A", "B", "C"}, "C", "Z") is False

    def test_relates_path_does_not_count(self):
        """Test an existing relates edge does not make the candidate cyclic."""
        edges = [make_edge("A", "B", DependencyType.RELATES)]
        assert would_create_cycle(edges, {"A", "B"}, "B", "A") is False

    def test_does_not_modify_edges(self, chain_edges):
        """Test the caller's edge list is left untouched."""
        before = list(chain_edges)
        would_create_cycle(chain_edges, {"A", "B", "C"}, "C", "A")
        assert chain_edges == before

"""Unit tests for monpos.graph module."""

import pytest

from monpos.graph import MonitorGraph, build_graph, compute_order, is_connected
from monpos.models import CycleError, DisconnectedError, EmptyConfigError, MalformedDirectiveError, UnknownMonitorError

from .conftest import make_config


class TestMonitorGraph:
    """Tests for the MonitorGraph structure."""

    def test_vertices_keep_insertion_order(self):
        graph = MonitorGraph()
        for name in ("c", "a", "b"):
            graph.add_vertex(name)
        graph.add_vertex("a")

        assert graph.vertices == ["c", "a", "b"]
        assert len(graph) == 3
        assert "a" in graph
        assert "z" not in graph

    def test_edges(self):
        graph = MonitorGraph()
        for name in ("A", "B", "C"):
            graph.add_vertex(name)
        graph.add_edge("A", "B")
        graph.add_edge("A", "C")

        assert graph.children("A") == ["B", "C"]
        assert graph.edges() == [("A", "B"), ("A", "C")]

    def test_unknown_parent(self):
        graph = MonitorGraph()
        graph.add_vertex("A")

        with pytest.raises(UnknownMonitorError, match="unknown monitor 'Z'") as excinfo:
            graph.add_edge("Z", "A")
        assert excinfo.value.reference == "Z"
        assert excinfo.value.name == "A"

    def test_cycle_refused_at_insertion(self):
        graph = MonitorGraph()
        for name in ("A", "B", "C"):
            graph.add_vertex(name)
        graph.add_edge("A", "B")
        graph.add_edge("B", "C")

        with pytest.raises(CycleError) as excinfo:
            graph.add_edge("C", "A")
        assert excinfo.value.path == ["C", "A", "B", "C"]
        assert "C -> A -> B -> C" in str(excinfo.value)
        # the graph is left untouched
        assert graph.edges() == [("A", "B"), ("B", "C")]

    def test_self_loop(self):
        graph = MonitorGraph()
        graph.add_vertex("A")

        with pytest.raises(CycleError, match="A -> A"):
            graph.add_edge("A", "A")

    def test_find_path(self):
        graph = MonitorGraph()
        for name in ("A", "B", "C", "D"):
            graph.add_vertex(name)
        graph.add_edge("A", "B")
        graph.add_edge("B", "C")

        assert graph.find_path("A", "C") == ["A", "B", "C"]
        assert graph.find_path("C", "A") is None
        assert graph.find_path("A", "D") is None

    def test_bfs(self):
        graph = MonitorGraph()
        for name in ("A", "B", "C", "D"):
            graph.add_vertex(name)
        graph.add_edge("A", "C")
        graph.add_edge("A", "B")
        graph.add_edge("C", "D")

        assert graph.bfs("A") == ["A", "C", "B", "D"]
        assert graph.bfs("C") == ["C", "D"]

    def test_topological_sort_ties_by_name(self):
        """Unrelated monitors are sorted by name."""
        graph = MonitorGraph()
        for name in ("root", "zeta", "alpha", "mid"):
            graph.add_vertex(name)
        graph.add_edge("root", "zeta")
        graph.add_edge("root", "alpha")
        graph.add_edge("alpha", "mid")

        assert graph.topological_sort() == ["root", "alpha", "mid", "zeta"]


class TestBuildGraph:
    """Tests for build_graph."""

    def test_basic_graph(self):
        config = make_config(A=(1920, 1080), B=(1920, 1080, "right-of A", "top"))

        graph = build_graph(config)

        assert graph.vertices == ["A", "B"]
        assert graph.edges() == [("A", "B")]

    def test_unknown_monitor(self):
        config = make_config(A=(20, 20), B=(20, 20, "below Z"))

        with pytest.raises(UnknownMonitorError, match="unknown monitor"):
            build_graph(config)

    def test_two_monitor_cycle(self):
        config = make_config(A=(20, 20, "right-of B"), B=(20, 20, "left-of A"))

        with pytest.raises(CycleError, match="A -> B -> A"):
            build_graph(config)

    def test_self_reference(self):
        config = make_config(A=(20, 20, "below A"))

        with pytest.raises(CycleError):
            build_graph(config)

    def test_malformed_position(self):
        config = make_config(A=(20, 20), B=(20, 20, "below"))

        with pytest.raises(MalformedDirectiveError):
            build_graph(config)


class TestComputeOrder:
    """Tests for compute_order."""

    def test_single_monitor(self):
        assert compute_order(build_graph(make_config(A=(1920, 1080)))) == ["A"]

    def test_parent_before_child(self):
        config = make_config(
            C=(20, 20, "right-of B"),
            B=(20, 20, "right-of A"),
            A=(20, 20),
            D=(20, 20, "below A"),
        )

        order = compute_order(build_graph(config))

        assert order == ["A", "B", "C", "D"]
        for name, monitor in config.items():
            if monitor.position:
                parent = monitor.position.split()[1]
                assert order.index(parent) < order.index(name)

    def test_root_is_first(self):
        config = make_config(
            b_child=(20, 20, "above z_root"),
            a_child=(20, 20, "below z_root"),
            z_root=(20, 20),
        )

        order = compute_order(build_graph(config))

        assert order[0] == "z_root"
        assert not config[order[0]].position

    def test_two_disjoint_trees(self):
        """Each tree is fine on its own, but they're not connected."""
        config = make_config(
            A=(20, 20),
            B=(20, 20, "below A"),
            C=(20, 20),
            D=(20, 20, "left-of C"),
        )
        graph = build_graph(config)

        with pytest.raises(DisconnectedError, match="all monitors must be connected to one main monitor") as excinfo:
            compute_order(graph)
        assert excinfo.value.root == "A"
        assert excinfo.value.unreachable == ["C", "D"]
        assert not is_connected(graph, "A")

    def test_empty(self):
        with pytest.raises(EmptyConfigError):
            compute_order(MonitorGraph())

    def test_deterministic(self):
        """Same input, same order."""
        config = make_config(
            A=(20, 20),
            E=(20, 20, "below A"),
            D=(20, 20, "above A"),
            C=(20, 20, "left-of A"),
            B=(20, 20, "right-of A"),
        )

        orders = {tuple(compute_order(build_graph(config))) for _ in range(5)}

        assert orders == {("A", "B", "C", "D", "E")}

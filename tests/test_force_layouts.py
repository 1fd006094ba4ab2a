"""
Tests for force-directed layout algorithms.
"""

import math
import random

import pytest

from graph_drawing import Box, Graph, ListenableLayoutModel, MapLayoutModel, Point
from graph_drawing.force import (
    ExponentialTemperatureModel,
    FruchtermanReingoldLayout,
    IndexedFruchtermanReingoldLayout,
    KamadaKawaiLayout,
)
from graph_drawing.validation import InvalidParameterError, InvalidThetaError

FR_LAYOUTS = [FruchtermanReingoldLayout, IndexedFruchtermanReingoldLayout]

# =============================================================================
# Test Fixtures
# =============================================================================


def create_cycle(n=4):
    """Cycle v1 - v2 - ... - vn - v1."""
    return Graph.from_edges([(f"v{i}", f"v{i % n + 1}") for i in range(1, n + 1)])


def create_triangle():
    return Graph.from_edges([(0, 1), (1, 2), (2, 0)])


def create_path(n=5):
    return Graph.from_edges([(i, i + 1) for i in range(n - 1)])


def create_random_graph(n, m, seed=0):
    rng = random.Random(seed)
    graph = Graph.from_edges([], vertices=range(n))
    while len(graph.edges()) < m:
        u, v = rng.randrange(n), rng.randrange(n)
        if u != v:
            graph.add_edge(u, v)
    return graph


def create_disconnected_graph():
    return Graph.from_edges([(0, 1), (2, 3)], vertices=[4])


def distance(p, q):
    return math.hypot(p.x - q.x, p.y - q.y)


def assert_inside(model):
    area = model.drawable_area
    for _, p in model:
        assert area.contains(p)


# =============================================================================
# Fruchterman-Reingold Tests (exact and indexed)
# =============================================================================


@pytest.mark.parametrize("layout_class", FR_LAYOUTS)
class TestFruchtermanReingoldLayout:
    """Behaviour shared by the exact and the indexed driver."""

    def test_basic_layout(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 500, 500))

        result = layout_class(random_seed=1).layout(graph, model)

        assert isinstance(result, layout_class)
        assert len(model) == 3
        assert_inside(model)

    def test_optimal_distance(self, layout_class):
        graph = create_cycle(4)
        model = MapLayoutModel(Box(0, 0, 2, 2))

        layout = layout_class(normalization_factor=1.0, random_seed=17)
        assert layout.optimal_distance is None
        layout.layout(graph, model)
        assert layout.optimal_distance == pytest.approx(1.0)

    def test_four_cycle_ends_up_square(self, layout_class):
        """Opposite vertices of a 4-cycle end up on the diagonals."""
        graph = create_cycle(4)
        model = MapLayoutModel(Box(0, 0, 2, 2))

        layout_class(
            normalization_factor=1.0,
            rng=random.Random(17),
            iterations=100,
        ).layout(graph, model)

        p = {v: model.get(v) for v in graph.vertices()}
        edges = [distance(p[u], p[v]) for u, v in graph.edges()]
        diagonals = [distance(p["v1"], p["v3"]), distance(p["v2"], p["v4"])]

        assert min(diagonals) > max(edges)
        assert_inside(model)

    def test_linear_graph_spreads_out(self, layout_class):
        graph = create_path(5)
        initial = {i: Point(50 + i, 50 + i * 0.5) for i in range(5)}
        model = MapLayoutModel(Box(0, 0, 100, 100))

        layout_class(initializer=initial, iterations=50).layout(graph, model)

        assert distance(model.get(0), model.get(4)) > distance(initial[0], initial[4])

    def test_empty_graph(self, layout_class):
        events = []
        model = MapLayoutModel(Box(0, 0, 100, 100))

        layout_class(on_start=events.append, on_end=events.append).layout(Graph(), model)

        assert len(model) == 0
        assert events == []

    @pytest.mark.parametrize("iterations", [0, -3])
    def test_non_positive_iterations(self, layout_class, iterations):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.put(0, Point(1, 1))

        layout_class(iterations=iterations, random_seed=1).layout(graph, model)

        assert model.collect() == {0: Point(1, 1)}

    def test_single_vertex(self, layout_class):
        graph = Graph.from_edges([], vertices=["a"])
        model = MapLayoutModel(Box(10, 20, 100, 100))

        layout_class(initializer={}).layout(graph, model)

        # Unset initial position falls back to the area's minimum corner
        assert model.get("a") == Point(10, 20)

    def test_initializer_function(self, layout_class):
        graph = Graph.from_edges([], vertices=["a", "b"])
        model = MapLayoutModel(Box(0, 0, 100, 100))
        starts = {"a": Point(20, 50), "b": Point(80, 50)}

        layout_class(initializer=starts.get, iterations=1).layout(graph, model)

        # Repulsion pushes the two vertices apart along x
        assert model.get("a").x < 20
        assert model.get("b").x > 80
        assert model.get("a").y == pytest.approx(50)

    def test_initializer_ignores_foreign_vertices(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        initial = {0: Point(10, 10), 1: Point(90, 10), 2: Point(50, 90), "ghost": Point(5, 5)}

        layout_class(initializer=initial, iterations=10).layout(graph, model)

        assert set(model.collect()) == {0, 1, 2}

    def test_fixed_vertices(self, layout_class):
        graph = create_cycle(6)
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.put("v1", Point(50, 50))
        model.set_fixed("v1", True)

        layout_class(random_seed=3).layout(graph, model)

        assert model.get("v1") == Point(50, 50)
        assert len(model) == 6

    def test_fixed_vertex_is_not_published(self, layout_class):
        graph = create_triangle()
        base = MapLayoutModel(Box(0, 0, 100, 100))
        base.put(0, Point(30, 30))
        base.set_fixed(0, True)
        model = ListenableLayoutModel(base)
        published = []
        model.add_listener(lambda v, p: published.append(v))

        layout_class(random_seed=3, iterations=20).layout(graph, model)

        assert sorted(published) == [1, 2]

    def test_fixed_vertex_without_position_warns(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.set_fixed(0, True)

        with pytest.warns(UserWarning, match="no position"):
            layout_class(random_seed=3, iterations=5).layout(graph, model)

        assert model.get(0) is None

    def test_all_vertices_fixed(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        for i, p in enumerate([Point(1, 1), Point(2, 2), Point(3, 3)]):
            model.put(i, p)
            model.set_fixed(i, True)
        before = model.collect()

        layout_class(random_seed=3).layout(graph, model)

        assert model.collect() == before

    def test_coincident_start_does_not_raise(self, layout_class):
        graph = create_cycle(5)
        model = MapLayoutModel(Box(0, 0, 100, 100))

        layout_class(initializer=lambda v: Point(40, 40), iterations=10).layout(graph, model)

        assert all(p == Point(40, 40) for _, p in model)

    def test_self_loops_are_ignored(self, layout_class):
        graph = create_triangle()
        graph.add_edge(0, 0)
        model = MapLayoutModel(Box(0, 0, 100, 100))

        layout_class(random_seed=2, iterations=20).layout(graph, model)

        assert_inside(model)

    def test_events_fired(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        events = {"start": 0, "tick": 0, "end": 0}
        temperatures = []

        def on_tick(e):
            events["tick"] += 1
            temperatures.append(e["temperature"])

        layout_class(
            iterations=25,
            random_seed=1,
            on_start=lambda e: events.__setitem__("start", events["start"] + 1),
            on_tick=on_tick,
            on_end=lambda e: events.__setitem__("end", events["end"] + 1),
        ).layout(graph, model)

        assert events == {"start": 1, "tick": 25, "end": 1}
        assert temperatures[0] == pytest.approx(10.0)
        assert temperatures == sorted(temperatures, reverse=True)

    def test_events_via_on_method(self, layout_class):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 100, 100))
        ticks = []

        layout = layout_class(iterations=7, random_seed=1)
        assert layout.on("tick", ticks.append) is layout
        layout.layout(graph, model)

        assert [e["iteration"] for e in ticks] == list(range(7))

    def test_random_seed(self, layout_class):
        graph = create_random_graph(30, 45, seed=1)

        first = MapLayoutModel(Box(0, 0, 300, 300))
        second = MapLayoutModel(Box(0, 0, 300, 300))
        layout_class(random_seed=42, iterations=30).layout(graph, first)
        layout_class(rng=random.Random(42), iterations=30).layout(graph, second)

        assert first.collect() == second.collect()

    def test_custom_temperature_model(self, layout_class):
        graph = create_path(4)
        model = MapLayoutModel(Box(0, 0, 100, 100))
        temperatures = []

        layout_class(
            temperature_model=ExponentialTemperatureModel(start=5.0, factor=0.5),
            iterations=4,
            random_seed=1,
            on_tick=lambda e: temperatures.append(e["temperature"]),
        ).layout(graph, model)

        assert temperatures == pytest.approx([5.0, 2.5, 1.25, 0.625])

    def test_zero_temperature_freezes_vertices(self, layout_class):
        graph = create_path(4)
        model = MapLayoutModel(Box(0, 0, 100, 100))
        initial = {i: Point(10 + 20 * i, 50) for i in range(4)}

        layout_class(initializer=initial, temperature_model=lambda i, n: 0.0).layout(graph, model)

        assert model.collect() == initial

    def test_fixed_vertex_outside_area(self, layout_class):
        graph = create_path(3)
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.put(0, Point(-10, 50))
        model.set_fixed(0, True)

        layout_class(random_seed=3, iterations=5).layout(graph, model)

        assert model.get(0) == Point(-10, 50)
        for v in (1, 2):
            assert model.drawable_area.contains(model.get(v))

    def test_fixed_vertex_initialized_outside_area(self, layout_class):
        graph = create_path(3)
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.set_fixed(0, True)

        with pytest.warns(UserWarning, match="no position"):
            layout_class(
                initializer={0: Point(130, 120)}, random_seed=3, iterations=5
            ).layout(graph, model)

        assert model.get(0) is None
        for v in (1, 2):
            assert model.drawable_area.contains(model.get(v))

    def test_tall_area(self, layout_class):
        graph = create_random_graph(60, 90, seed=11)
        model = MapLayoutModel(Box(0, 0, 60, 600))

        layout_class(random_seed=2, iterations=30).layout(graph, model)

        assert len(model) == 60
        assert_inside(model)

    def test_area_offset(self, layout_class):
        graph = create_random_graph(40, 60, seed=5)
        model = MapLayoutModel(Box(-500, 250, 300, 200))

        layout_class(random_seed=9, iterations=40).layout(graph, model)

        assert len(model) == 40
        assert_inside(model)

    def test_configuration_properties(self, layout_class):
        layout = layout_class(iterations=50, normalization_factor=0.8, tolerance=1e-6)
        assert layout.iterations == 50
        assert layout.normalization_factor == 0.8
        assert layout.tolerance == 1e-6

        layout.iterations = 10
        layout.normalization_factor = 1.5
        assert layout.iterations == 10
        assert layout.normalization_factor == 1.5

    @pytest.mark.parametrize("factor", [0, -1, float("inf")])
    def test_invalid_normalization_factor(self, layout_class, factor):
        with pytest.raises(InvalidParameterError):
            layout_class(normalization_factor=factor)


# =============================================================================
# Indexed (Barnes-Hut) Fruchterman-Reingold Tests
# =============================================================================


class TestIndexedFruchtermanReingoldLayout:
    """Tests specific to the quadtree-indexed driver."""

    def test_default_theta(self):
        assert IndexedFruchtermanReingoldLayout().theta == 0.5

    @pytest.mark.parametrize("theta", [-0.5, 1.5])
    def test_invalid_theta_rejected_at_construction(self, theta):
        with pytest.raises(InvalidThetaError):
            IndexedFruchtermanReingoldLayout(theta=theta)

    def test_theta_setter(self):
        layout = IndexedFruchtermanReingoldLayout()
        layout.theta = 0.8
        assert layout.theta == 0.8
        with pytest.raises(InvalidThetaError):
            layout.theta = 1.1

    def test_theta_zero_matches_exact_layout(self):
        graph = create_random_graph(30, 40, seed=2)

        exact = MapLayoutModel(Box(0, 0, 200, 200))
        indexed = MapLayoutModel(Box(0, 0, 200, 200))
        FruchtermanReingoldLayout(random_seed=4, iterations=5).layout(graph, exact)
        IndexedFruchtermanReingoldLayout(theta=0.0, random_seed=4, iterations=5).layout(
            graph, indexed
        )

        for v, p in exact:
            q = indexed.get(v)
            assert q.x == pytest.approx(p.x, rel=1e-6, abs=1e-6)
            assert q.y == pytest.approx(p.y, rel=1e-6, abs=1e-6)

    def test_saved_comparisons(self):
        n = 200
        iterations = 20
        graph = create_random_graph(n, 300, seed=7)
        model = MapLayoutModel(Box(0, 0, 1000, 1000))

        layout = IndexedFruchtermanReingoldLayout(theta=0.5, random_seed=5, iterations=iterations)
        layout.layout(graph, model)

        assert layout.saved_comparisons > 0
        assert layout.saved_comparisons + layout.performed_comparisons == (
            iterations * n * (n - 1)
        )

    @pytest.mark.parametrize("area", [Box(0, 0, 60, 600), Box(-300, 40, 600, 60)])
    def test_saved_comparisons_on_elongated_area(self, area):
        n = 120
        iterations = 10
        graph = create_random_graph(n, 180, seed=13)
        model = MapLayoutModel(area)

        layout = IndexedFruchtermanReingoldLayout(theta=1.0, random_seed=6, iterations=iterations)
        layout.layout(graph, model)

        assert layout.saved_comparisons > 0
        assert layout.saved_comparisons + layout.performed_comparisons == (
            iterations * n * (n - 1)
        )

    def test_saved_comparisons_with_fixed_vertex_outside_area(self):
        n = 50
        graph = create_random_graph(n, 70, seed=4)
        model = MapLayoutModel(Box(0, 0, 200, 200))
        model.put(0, Point(350, -40))
        model.set_fixed(0, True)

        layout = IndexedFruchtermanReingoldLayout(random_seed=8, iterations=5)
        layout.layout(graph, model)

        assert model.get(0) == Point(350, -40)
        # Only the free vertices are queried, each against all others
        assert layout.saved_comparisons + layout.performed_comparisons == 5 * (n - 1) * (n - 1)

    def test_saved_comparisons_reset_per_run(self):
        graph = create_random_graph(100, 150, seed=7)
        model = MapLayoutModel(Box(0, 0, 500, 500))
        layout = IndexedFruchtermanReingoldLayout(random_seed=5, iterations=10)

        layout.layout(graph, model)
        first = layout.saved_comparisons + layout.performed_comparisons
        layout.layout(graph, model)
        second = layout.saved_comparisons + layout.performed_comparisons

        assert first == second == 10 * 100 * 99

    def test_theta_one_completes(self):
        graphs = [
            create_triangle(),
            create_cycle(4),
            create_disconnected_graph(),
            create_random_graph(150, 200, seed=3),
        ]
        for graph in graphs:
            model = MapLayoutModel(Box(0, 0, 100, 100))
            IndexedFruchtermanReingoldLayout(theta=1.0, random_seed=1).layout(graph, model)
            assert len(model) == len(list(graph.vertices()))
            assert_inside(model)

    def test_fixed_vertices_still_repel(self):
        graph = Graph.from_edges([], vertices=["pin", "free"])
        model = MapLayoutModel(Box(0, 0, 100, 100))
        model.put("pin", Point(50, 50))
        model.set_fixed("pin", True)

        IndexedFruchtermanReingoldLayout(
            initializer={"free": Point(55, 50)},
            iterations=1,
        ).layout(graph, model)

        assert model.get("pin") == Point(50, 50)
        assert model.get("free").x > 55


# =============================================================================
# Kamada-Kawai Tests
# =============================================================================


class TestKamadaKawaiLayout:
    """Tests for Kamada-Kawai algorithm."""

    def test_basic_layout(self):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 800, 800))

        KamadaKawaiLayout(edge_length=100, random_seed=1).layout(graph, model)

        assert len(model) == 3
        assert_inside(model)

    def test_triangle_is_equilateral(self):
        graph = create_triangle()
        model = MapLayoutModel(Box(0, 0, 800, 800))

        KamadaKawaiLayout(edge_length=100, epsilon=1e-4, random_seed=1).layout(graph, model)

        for u, v in graph.edges():
            assert distance(model.get(u), model.get(v)) == pytest.approx(100, rel=0.02)

    def test_path_is_straightened(self):
        graph = create_path(3)
        model = MapLayoutModel(Box(0, 0, 800, 800))

        KamadaKawaiLayout(edge_length=100, epsilon=1e-4, random_seed=6).layout(graph, model)

        assert distance(model.get(0), model.get(2)) == pytest.approx(200, rel=0.05)

    def test_result_is_centered(self):
        graph = create_cycle(6)
        area = Box(0, 0, 600, 400)
        model = MapLayoutModel(area)

        KamadaKawaiLayout(random_seed=2).layout(graph, model)

        xs = [p.x for _, p in model]
        ys = [p.y for _, p in model]
        assert (min(xs) + max(xs)) / 2 == pytest.approx(area.center.x)
        assert (min(ys) + max(ys)) / 2 == pytest.approx(area.center.y)

    def test_energy_decreases(self):
        import numpy as np

        graph = create_random_graph(12, 18, seed=8)
        vertices = list(graph.vertices())
        rng = random.Random(3)
        initial = {v: Point(rng.uniform(300, 500), rng.uniform(300, 500)) for v in vertices}
        model = MapLayoutModel(Box(0, 0, 800, 800))

        layout = KamadaKawaiLayout(initializer=initial, edge_length=50)
        layout.layout(graph, model)

        start_x = np.array([initial[v].x for v in vertices])
        start_y = np.array([initial[v].y for v in vertices])
        end_x = np.array([model.get(v).x for v in vertices])
        end_y = np.array([model.get(v).y for v in vertices])
        assert layout.energy(end_x, end_y) < layout.energy(start_x, start_y)

    def test_shortest_paths(self):
        import numpy as np

        vertices = ["a", "b", "c", "d"]
        dist = KamadaKawaiLayout.shortest_paths(vertices, [("a", "b"), ("b", "c")])

        assert dist[0, 2] == 2
        assert dist[2, 0] == 2
        assert dist[1, 1] == 0
        assert np.isinf(dist[0, 3])

    def test_disconnected_graph(self):
        graph = create_disconnected_graph()
        model = MapLayoutModel(Box(0, 0, 400, 400))

        KamadaKawaiLayout(random_seed=4).layout(graph, model)

        assert len(model) == 5
        assert_inside(model)

    def test_fixed_vertex(self):
        graph = create_path(4)
        model = MapLayoutModel(Box(0, 0, 400, 400))
        model.put(0, Point(10, 10))
        model.set_fixed(0, True)

        KamadaKawaiLayout(random_seed=4).layout(graph, model)

        assert model.get(0) == Point(10, 10)
        assert len(model) == 4

    def test_empty_graph(self):
        model = MapLayoutModel(Box(0, 0, 100, 100))
        KamadaKawaiLayout().layout(Graph(), model)
        assert len(model) == 0

    def test_events_fired(self):
        graph = create_path(5)
        model = MapLayoutModel(Box(0, 0, 400, 400))
        seen = []

        KamadaKawaiLayout(
            random_seed=1,
            on_start=lambda e: seen.append("start"),
            on_tick=lambda e: seen.append("tick"),
            on_end=lambda e: seen.append("end"),
        ).layout(graph, model)

        assert seen[0] == "start"
        assert seen[-1] == "end"
        assert "tick" in seen

    def test_configuration_properties(self):
        layout = KamadaKawaiLayout(strength=2.0, epsilon=0.5, edge_length=30)
        assert layout.strength == 2.0
        assert layout.epsilon == 0.5
        assert layout.edge_length == 30
        assert layout.iterations == 300

        layout.edge_length = None
        assert layout.edge_length is None

    @pytest.mark.parametrize("name", ["strength", "epsilon", "edge_length"])
    def test_invalid_parameters(self, name):
        with pytest.raises(InvalidParameterError):
            KamadaKawaiLayout(**{name: 0})

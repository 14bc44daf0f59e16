import heapq

import pytest

from graph import Graph, InvalidGraphError, VertexNotFoundError
from solver import INFINITY, EventKind, Solver


def reference_dijkstra(graph, source):
    """Plain heap-based Dijkstra to compare final distances against."""
    dist = {vid: INFINITY for vid in graph.vertices}
    dist[source] = 0
    heap = [(0, 0, source)]
    counter = 1
    while heap:
        d, _, u = heapq.heappop(heap)
        if d > dist[u]:
            continue
        for edge in graph.neighbours(u):
            nd = d + edge.weight
            if nd < dist[edge.target]:
                dist[edge.target] = nd
                heapq.heappush(heap, (nd, counter, edge.target))
                counter += 1
    return dist


def test_initial_state(sample_solver):
    assert sample_solver.state_name == "Idle"
    assert sample_solver.ticks == 0
    assert sample_solver.distance_of(1) == 0
    assert sample_solver.distance_of(4) == INFINITY
    assert sample_solver.current_vertex is None


def test_sample_final_distances_and_predecessors(sample_solver):
    sample_solver.run_to_completion()

    assert sample_solver.is_terminated()
    assert sample_solver.table.distances() == {1: 0, 2: 3, 3: 1, 4: 3, 5: 2}
    assert sample_solver.table.predecessors() == {1: None, 2: 3, 3: 1, 4: 3, 5: 1}
    assert sample_solver.table.finalized == (1, 3, 5, 2, 4)


def test_sample_takes_29_ticks(sample_solver):
    assert sample_solver.run_to_completion() == 29
    assert sample_solver.ticks == 29


def test_first_ticks_of_sample(sample_solver):
    kinds = [sample_solver.advance().kind for _ in range(7)]

    assert kinds == [
        EventKind.SELECTED,
        EventKind.CURSOR_RESET,
        EventKind.RELAXED,       # 1 → 2 (5)
        EventKind.RELAXED,       # 1 → 5 (2)
        EventKind.RELAXED,       # 1 → 3 (1)
        EventKind.FINALIZED,
        EventKind.SELECTED,
    ]
    assert sample_solver.current_vertex == 3
    assert sample_solver.distance_of(2) == 5


def test_advance_after_termination_is_noop(sample_solver):
    sample_solver.run_to_completion()
    before = sample_solver.table

    event = sample_solver.advance()

    assert event.kind is EventKind.NOOP
    assert sample_solver.ticks == 29
    assert sample_solver.table is before
    assert sample_solver.state_name == "Terminated"


def test_distances_never_increase():
    g = Graph.generate_random(num_vertices=15, edge_probability=0.4, seed=11)
    s = Solver(g, 1)
    prev_dist = s.table.distances()

    while not s.is_terminated():
        s.advance()
        dist = s.table.distances()
        for vid, d in dist.items():
            assert d <= prev_dist[vid]
        prev_dist = dist


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_each_cycle_finalizes_exactly_one_vertex(seed):
    g = Graph.generate_random(num_vertices=15, edge_probability=0.3, seed=seed)
    s = Solver(g, 1)
    selected = None
    size_at_select = None
    cycles = 0

    while not s.is_terminated():
        before = len(s.table.unvisited)
        event = s.advance()
        after = len(s.table.unvisited)

        if event.kind is EventKind.SELECTED:
            assert selected is None
            selected, size_at_select = event.current, before
        if event.kind is EventKind.FINALIZED:
            assert event.current == selected
            assert after == size_at_select - 1
            assert selected not in s.table.unvisited
            selected = None
            cycles += 1
        else:
            assert after == before

        # empty unvisited set and Terminated go together
        assert (not s.table.unvisited) == s.is_terminated()

    assert selected is None
    assert cycles == len(g)


def test_source_distance_stays_zero():
    s = Solver(Graph.generate_random(num_vertices=12, seed=5), 7)
    while not s.is_terminated():
        s.advance()
        assert s.distance_of(7) == 0
        assert s.predecessor_of(7) is None


def test_finalized_distances_are_frozen():
    s = Solver(Graph.generate_random(num_vertices=12, edge_probability=0.5, seed=9), 1)
    final = {}
    while not s.is_terminated():
        s.advance()
        for vid in s.table.finalized:
            final.setdefault(vid, s.distance_of(vid))
            assert s.distance_of(vid) == final[vid]


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("directed", [False, True])
def test_matches_reference_dijkstra(seed, directed):
    g = Graph.generate_random(num_vertices=20, edge_probability=0.3, directed=directed, seed=seed)
    s = Solver(g, 1)
    s.run_to_completion()

    assert s.table.distances() == reference_dijkstra(g, 1)


def test_complete_default_graph_terminates():
    g = Graph.generate_random(seed=2024)
    s = Solver(g, 1)
    s.run_to_completion()

    assert s.is_terminated()
    assert all(d != INFINITY for d in s.table.distances().values())


def test_disconnected_vertices_stay_infinite():
    g = Graph()
    for vid in (1, 2, 3, 4):
        g.create_vertex(vid)
    g.connect(1, 2, 3)

    s = Solver(g, 1)
    s.run_to_completion()

    assert s.table.distances() == {1: 0, 2: 3, 3: INFINITY, 4: INFINITY}
    # ties at infinity resolve in vertex order
    assert s.table.finalized == (1, 2, 3, 4)


def test_isolated_source_terminates():
    g = Graph()
    g.create_vertex(1)
    s = Solver(g, 1)

    s.advance()                      # select
    event = s.advance()              # no neighbours: finalize straight away

    assert event.kind is EventKind.FINALIZED
    assert s.is_terminated()
    assert s.ticks == 2


def test_zero_weight_edges():
    s = Solver(Graph.from_adjacency_list("1: 2(0)\n2: 3(0)"), 1)
    s.run_to_completion()
    assert s.table.distances() == {1: 0, 2: 0, 3: 0}


def test_solver_owns_a_frozen_copy(sample_graph):
    s = Solver(sample_graph, 1)

    assert s.graph is not sample_graph
    assert s.graph.frozen
    sample_graph.add_edge(1, 4, 0)
    s.run_to_completion()
    assert s.distance_of(4) == 3


def test_unknown_source_rejected(sample_graph):
    with pytest.raises(VertexNotFoundError):
        Solver(sample_graph, 42)


def test_invalid_graph_rejected():
    g = Graph()
    g.create_vertex(1)
    g.add_edge(1, 2, 1)
    with pytest.raises(InvalidGraphError):
        Solver(g, 1)


def test_reset_restores_initial_state(sample_solver):
    sample_solver.run_to_completion()
    sample_solver.reset()

    assert sample_solver.state_name == "Idle"
    assert sample_solver.ticks == 0
    assert sample_solver.table.unvisited == (1, 2, 3, 4, 5)
    assert sample_solver.run_to_completion() == 29


def test_replace_graph_with_new_source(sample_solver, line_graph):
    sample_solver.replace_graph(line_graph(2, 3), source=3)
    sample_solver.run_to_completion()

    assert sample_solver.source == 3
    assert sample_solver.table.distances() == {1: 5, 2: 3, 3: 0}


def test_run_to_completion_respects_max_ticks(sample_solver):
    assert sample_solver.run_to_completion(max_ticks=4) == 4
    assert not sample_solver.is_terminated()


def test_current_edge_tracks_cursor(sample_solver):
    sample_solver.advance()
    sample_solver.advance()

    assert sample_solver.state_name == "Visiting"
    assert sample_solver.cursor == 0
    assert sample_solver.current_edge.target == 2

    sample_solver.advance()
    assert sample_solver.current_edge.target == 5


def test_snapshot_reflects_last_tick(sample_solver):
    for _ in range(3):
        sample_solver.advance()
    snap = sample_solver.snapshot()

    assert snap.tick == 3
    assert snap.state == "Visiting"
    assert snap.current == 1
    assert snap.neighbour == 5
    assert snap.neighbour_weight == 2
    assert snap.event.kind is EventKind.RELAXED
    assert snap.pseudocode_line == 8
    assert "UPDATE" in snap.explanation


def test_snapshot_to_dict_is_json_safe(sample_solver):
    data = sample_solver.snapshot().to_dict()

    assert data["state"] == "Idle"
    assert data["event"] is None
    rows = {row["vertex"]: row for row in data["table"]}
    assert rows[1]["distance"] == 0
    assert rows[2]["distance"] is None


def test_final_snapshot_explains_termination(sample_solver):
    sample_solver.run_to_completion()
    snap = sample_solver.snapshot()

    assert snap.is_terminated
    assert snap.explanation.endswith("Done.")

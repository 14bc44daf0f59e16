import pytest

from graph import Graph, PathNotReadyError, UnreachableError, VertexNotFoundError
from solver import Solver, path_cost, reconstruct_path


def test_path_to_sample_destination(sample_solver):
    sample_solver.run_to_completion()

    assert sample_solver.reconstruct_path(4) == [3, 4]
    assert sample_solver.reconstruct_path(2) == [3, 2]
    assert sample_solver.reconstruct_path(5) == [5]


def test_path_to_source_is_empty(sample_solver):
    assert sample_solver.reconstruct_path(1) == []


def test_path_cost_matches_distance(sample_solver):
    sample_solver.run_to_completion()
    for vid in (2, 3, 4, 5):
        path = sample_solver.reconstruct_path(vid)
        assert path_cost(sample_solver.graph, 1, path) == sample_solver.distance_of(vid)


def test_path_before_destination_is_final(sample_solver):
    sample_solver.run_to_completion(max_ticks=6)
    # 2 has a tentative distance but is still unvisited
    with pytest.raises(PathNotReadyError):
        sample_solver.reconstruct_path(2)


def test_path_available_once_destination_finalized(sample_solver):
    while 3 in sample_solver.table.unvisited:
        sample_solver.advance()
    assert not sample_solver.is_terminated()
    assert sample_solver.reconstruct_path(3) == [3]


def test_unreachable_destination():
    g = Graph()
    for vid in (1, 2, 3):
        g.create_vertex(vid)
    g.connect(1, 2, 1)
    s = Solver(g, 1)
    s.run_to_completion()

    with pytest.raises(UnreachableError) as exc:
        s.reconstruct_path(3)
    assert exc.value.source == 1
    assert exc.value.destination == 3


def test_unknown_destination(sample_solver):
    with pytest.raises(VertexNotFoundError):
        reconstruct_path(sample_solver.table, 99)


def test_long_chain(line_graph):
    s = Solver(line_graph(*([1] * 30)), 1)
    s.run_to_completion()

    assert s.reconstruct_path(31) == list(range(2, 32))
    assert s.distance_of(31) == 30

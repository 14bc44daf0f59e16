import pytest

from graph import VertexNotFoundError
from solver import INFINITY, VisitationTable


def test_initial_table():
    t = VisitationTable.initial([1, 2, 3], source=2)

    assert t.distances() == {1: INFINITY, 2: 0, 3: INFINITY}
    assert t.predecessors() == {1: None, 2: None, 3: None}
    assert t.unvisited == (1, 2, 3)
    assert t.finalized == ()


def test_initial_table_unknown_source():
    with pytest.raises(VertexNotFoundError):
        VisitationTable.initial([1, 2], source=9)


def test_relax_improves_and_copies():
    t = VisitationTable.initial([1, 2], source=1)
    t2, improved = t.relax(2, 4, 1)

    assert improved
    assert t2.distance_of(2) == 4
    assert t2.predecessor_of(2) == 1
    # original untouched
    assert t.distance_of(2) == INFINITY


def test_relax_requires_strict_improvement():
    t, _ = VisitationTable.initial([1, 2, 3], source=1).relax(3, 4, 1)
    same, improved = t.relax(3, 4, 2)

    assert not improved
    assert same is t
    assert same.predecessor_of(3) == 1


def test_relax_never_touches_source():
    t = VisitationTable.initial([1, 2], source=1)
    t2, improved = t.relax(1, -1, 2)
    assert not improved
    assert t2.distance_of(1) == 0


def test_relax_unknown_vertices():
    t = VisitationTable.initial([1, 2], source=1)
    with pytest.raises(VertexNotFoundError):
        t.relax(5, 1, 1)
    with pytest.raises(VertexNotFoundError):
        t.relax(2, 1, 5)


def test_finalize_moves_vertex_and_is_idempotent():
    t = VisitationTable.initial([1, 2, 3], source=1)
    t2 = t.finalize(1)

    assert t2.unvisited == (2, 3)
    assert t2.finalized == (1,)
    assert not t2.is_unvisited(1)
    assert t2.finalize(1) is t2


def test_infinite_distance_never_beats_infinity():
    t = VisitationTable.initial([1, 2], source=1)
    _, improved = t.relax(2, INFINITY, 1)
    assert not improved

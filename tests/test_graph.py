import pytest

from graph import Edge, Graph, InvalidGraphError, Vertex, VertexNotFoundError


def test_sample_graph_adjacency_order():
    g = Graph.sample()

    assert g.vertex_ids() == [1, 2, 3, 4, 5]
    assert [e.target for e in g.neighbours(1)] == [2, 5, 3]
    assert [e.weight for e in g.neighbours(1)] == [5, 2, 1]
    assert [e.target for e in g.neighbours(5)] == [1, 4]
    assert g.edge_count() == 14


def test_connect_adds_mirrored_edges():
    g = Graph()
    g.create_vertex("a")
    g.create_vertex("b")
    g.connect("a", "b", 4)

    assert g.has_edge("a", "b")
    assert g.has_edge("b", "a")
    assert g.edge_weight("b", "a") == 4


def test_edge_weight_takes_cheapest_parallel_edge():
    g = Graph()
    g.create_vertex(1)
    g.create_vertex(2)
    g.add_edge(1, 2, 7)
    g.add_edge(1, 2, 3)

    assert g.edge_weight(1, 2) == 3


def test_edge_weight_missing_edge_raises():
    g = Graph.sample()
    with pytest.raises(VertexNotFoundError):
        g.edge_weight(1, 4)


def test_unknown_vertex_lookup_raises():
    g = Graph.sample()
    with pytest.raises(VertexNotFoundError) as exc:
        g.neighbours(99)
    assert exc.value.vertex_id == 99


def test_duplicate_vertex_rejected():
    g = Graph()
    g.create_vertex(1)
    with pytest.raises(InvalidGraphError) as exc:
        g.create_vertex(1)
    assert exc.value.reason == "duplicate"


def test_validate_dangling_edge():
    g = Graph()
    g.create_vertex(1)
    g.add_edge(1, 2, 1)

    with pytest.raises(InvalidGraphError) as exc:
        g.validate()
    assert exc.value.reason == "dangling"
    assert exc.value.detail == 2


def test_validate_negative_weight():
    g = Graph()
    g.create_vertex(1)
    g.create_vertex(2)
    g.add_edge(1, 2, -3)

    with pytest.raises(InvalidGraphError) as exc:
        g.validate()
    assert exc.value.reason == "negative"


def test_validate_rejects_non_integer_weight():
    g = Graph()
    g.create_vertex(1)
    g.create_vertex(2)
    g.add_edge(1, 2, 1.5)

    with pytest.raises(InvalidGraphError) as exc:
        g.validate()
    assert exc.value.reason == "weight"


def test_zero_weight_is_valid():
    assert Edge(target=1, weight=0).is_valid_weight()
    assert not Edge(target=1, weight=True).is_valid_weight()


def test_frozen_graph_rejects_mutation():
    g = Graph.sample().copy().freeze()

    assert g.frozen
    with pytest.raises(InvalidGraphError) as exc:
        g.add_edge(1, 4, 1)
    assert exc.value.reason == "frozen"
    assert isinstance(g.vertex(1).neighbours, tuple)


def test_copy_is_independent():
    g = Graph.sample()
    c = g.copy()
    c.add_edge(1, 4, 9)

    assert not g.has_edge(1, 4)
    assert c.has_edge(1, 4)


def test_dict_round_trip_keeps_order_and_positions():
    g = Graph.sample()
    restored = Graph.from_dict(g.to_dict())

    assert restored.vertex_ids() == g.vertex_ids()
    assert restored.vertex(2).position == g.vertex(2).position
    assert list(restored.neighbours(3)) == list(g.neighbours(3))


def test_vertex_degree():
    v = Vertex(id=1, neighbours=[Edge(2, 1), Edge(3, 4)])
    assert v.degree == 2


# ---------------------------------------------------------------------------
# Random generator
# ---------------------------------------------------------------------------
def test_generate_random_defaults_to_complete_graph():
    g = Graph.generate_random(seed=1)

    assert len(g) == 50
    for vid in g.vertex_ids():
        assert len(g.neighbours(vid)) == 49
    for _, edge in g.edges():
        assert 0 <= edge.weight <= 9
    for v in g.vertices.values():
        assert 0.0 <= v.x <= 1.0 and 0.0 <= v.y <= 1.0


def test_generate_random_is_seeded():
    a = Graph.generate_random(num_vertices=10, edge_probability=0.5, seed=7)
    b = Graph.generate_random(num_vertices=10, edge_probability=0.5, seed=7)
    assert a.to_dict() == b.to_dict()


def test_generate_random_undirected_is_symmetric():
    g = Graph.generate_random(num_vertices=8, edge_probability=0.6, seed=3)
    for src, edge in g.edges():
        assert g.has_edge(edge.target, src)
        assert g.edge_weight(edge.target, src) == edge.weight


def test_generate_random_rejects_bad_arguments():
    with pytest.raises(ValueError):
        Graph.generate_random(num_vertices=0)
    with pytest.raises(ValueError):
        Graph.generate_random(max_weight=0)


# ---------------------------------------------------------------------------
# Adjacency-list import
# ---------------------------------------------------------------------------
def test_from_adjacency_list_weights_and_ids():
    g = Graph.from_adjacency_list("""
        # demo
        1: 2(5) 3(1)
        2 -> 3(2)
    """)

    assert g.vertex_ids() == [1, 2, 3]
    assert g.edge_weight(1, 2) == 5
    assert g.edge_weight(3, 1) == 1
    assert g.edge_weight(3, 2) == 2


def test_from_adjacency_list_deduplicates_undirected_links():
    g = Graph.from_adjacency_list("a: b(3)\nb: a(3)")
    assert len(g.neighbours("a")) == 1
    assert len(g.neighbours("b")) == 1


def test_from_adjacency_list_directed():
    g = Graph.from_adjacency_list("1: 2(4)", directed=True)
    assert g.has_edge(1, 2)
    assert not g.has_edge(2, 1)


def test_from_adjacency_list_large_ids():
    g = Graph.from_adjacency_list("4294967296: 8589934592(1)")
    assert 4294967296 in g
    assert g.edge_weight(8589934592, 4294967296) == 1


@pytest.mark.parametrize("text, reason", [
    ("1: 2(x)", "weight"),
    ("1: 2(-1)", "negative"),
    ("1: 2((3)", "syntax"),
])
def test_from_adjacency_list_errors(text, reason):
    with pytest.raises(InvalidGraphError) as exc:
        Graph.from_adjacency_list(text)
    assert exc.value.reason == reason

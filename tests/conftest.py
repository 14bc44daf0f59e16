import pytest

from graph import Graph
from solver import Solver


@pytest.fixture
def sample_graph():
    # 1–2(5) 1–5(2) 1–3(1) 2–3(2) 2–4(1) 3–4(2) 4–5(1)
    return Graph.sample()


@pytest.fixture
def sample_solver(sample_graph):
    return Solver(sample_graph, 1)


@pytest.fixture
def line_graph():
    """Factory: 1 – 2 – 3 … with the given weights, undirected."""
    def build(*weights):
        g = Graph()
        for vid in range(1, len(weights) + 2):
            g.create_vertex(vid)
        for i, w in enumerate(weights, start=1):
            g.connect(i, i + 1, w)
        return g
    return build

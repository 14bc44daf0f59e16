"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Vertex, Edge
    from graph import GraphError, VertexNotFoundError, InvalidGraphError
"""

from graph.errors import (
    GraphError,
    InvalidGraphError,
    PathNotReadyError,
    UnreachableError,
    VertexNotFoundError,
)
from graph.edge   import Edge
from graph.vertex import Vertex
from graph.graph  import Graph

__all__ = [
    "Vertex",
    "Edge",
    "Graph",
    "GraphError",
    "VertexNotFoundError",
    "UnreachableError",
    "InvalidGraphError",
    "PathNotReadyError",
]

"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  The solver and the renderer
both read from this object; only the collaborator that builds it
ever writes to it.

Responsibilities:
  1. Building vertices & edges              (add / create / connect)
  2. Read-only lookup                       (vertex, neighbours, edge_weight)
  3. Validation                             (dangling edges, bad weights)
  4. Freezing                               (no mutation once a run owns it)
  5. Graph-generation factory methods       (random, sample)
  6. Import from adjacency-list text        (text → graph)
  7. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Vertices stored in a plain dict keyed by id.  Dict order is the
    graph's stable iteration order, which the solver uses to break
    distance ties deterministically.
  - Each Vertex owns its outgoing adjacency list, so neighbour queries
    are O(degree).
  - `freeze()` is one-way.  The solver freezes its own private copy,
    leaving the caller free to keep editing the original.
"""

import logging
import math
import random
import re
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from graph.edge import Edge
from graph.errors import InvalidGraphError, VertexNotFoundError
from graph.vertex import Vertex


logger = logging.getLogger(__name__)

# "2(5)" or "2"
_TOKEN_RE = re.compile(r"^(?P<target>[^()\s]+)(?:\((?P<weight>[^()]*)\))?$")


class Graph:
    """
    Attributes:
        vertices : {vertex_id: Vertex}, insertion-ordered
        frozen   : True once a run owns this graph
    """

    def __init__(self):
        self.vertices: Dict[Hashable, Vertex] = {}
        self._frozen:  bool                   = False

    # ==================================================================
    # BUILDING
    # ==================================================================
    def add_vertex(self, vertex: Vertex) -> Vertex:
        self._check_mutable()
        if vertex.id in self.vertices:
            raise InvalidGraphError(
                f"Duplicate vertex id: {vertex.id!r}", vertex_id=vertex.id, reason="duplicate"
            )
        self.vertices[vertex.id] = vertex
        return vertex

    def create_vertex(self, vertex_id: Hashable, x: float = 0.0, y: float = 0.0) -> Vertex:
        """Convenience: create + add in one call."""
        return self.add_vertex(Vertex(id=vertex_id, x=x, y=y))

    def add_edge(self, source: Hashable, target: Hashable, weight: int = 1) -> Edge:
        """Append a directed edge source → target."""
        self._check_mutable()
        edge = Edge(target=target, weight=weight)
        self.vertex(source).neighbours.append(edge)
        return edge

    def connect(self, a: Hashable, b: Hashable, weight: int = 1) -> Tuple[Edge, Edge]:
        """Undirected link = two mirrored directed edges."""
        return self.add_edge(a, b, weight), self.add_edge(b, a, weight)

    # ==================================================================
    # READ-ONLY QUERIES
    # ==================================================================
    def vertex(self, vertex_id: Hashable) -> Vertex:
        try:
            return self.vertices[vertex_id]
        except KeyError:
            raise VertexNotFoundError(
                f"Vertex not in graph: {vertex_id!r}", vertex_id=vertex_id
            ) from None

    def neighbours(self, vertex_id: Hashable) -> Tuple[Edge, ...]:
        """Outgoing edges of `vertex_id` in insertion order."""
        return tuple(self.vertex(vertex_id).neighbours)

    def edge_weight(self, source: Hashable, target: Hashable) -> int:
        """Cheapest weight among the edges source → target."""
        weights = [e.weight for e in self.neighbours(source) if e.target == target]
        if not weights:
            raise VertexNotFoundError(
                f"No edge {source!r} → {target!r}", vertex_id=target
            )
        return min(weights)

    def has_edge(self, source: Hashable, target: Hashable) -> bool:
        vertex = self.vertices.get(source)
        return vertex is not None and any(e.target == target for e in vertex.neighbours)

    def edges(self) -> Iterator[Tuple[Hashable, Edge]]:
        """Every (source_id, edge) pair, vertex by vertex."""
        for vid, vertex in self.vertices.items():
            for edge in vertex.neighbours:
                yield vid, edge

    def __contains__(self, vertex_id: Hashable) -> bool:
        return vertex_id in self.vertices

    def __len__(self) -> int:
        return len(self.vertices)

    # ==================================================================
    # VALIDATION & FREEZING
    # ==================================================================
    def validate(self) -> None:
        """Raise InvalidGraphError if any edge dangles or has a bad weight."""
        for vid, edge in self.edges():
            if edge.target not in self.vertices:
                raise InvalidGraphError(
                    f"Edge {vid!r} → {edge.target!r} points to a missing vertex",
                    vertex_id=vid, reason="dangling", detail=edge.target,
                )
            if not edge.is_valid_weight():
                raise InvalidGraphError(
                    f"Edge {vid!r} → {edge.target!r} has invalid weight {edge.weight!r} "
                    f"(non-negative integers only)",
                    vertex_id=vid, reason="negative" if _is_number(edge.weight) and edge.weight < 0 else "weight",
                    detail=edge.weight,
                )

    def freeze(self) -> "Graph":
        # tuples so nobody can append behind the graph's back either
        for v in self.vertices.values():
            v.neighbours = tuple(v.neighbours)
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "Graph":
        """Deep-enough copy: new Vertex objects and lists, shared immutable Edges."""
        g = Graph()
        for v in self.vertices.values():
            g.vertices[v.id] = Vertex(id=v.id, neighbours=list(v.neighbours), x=v.x, y=v.y)
        return g

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidGraphError("Graph is frozen for an active run", reason="frozen")

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {"vertices": [v.to_dict() for v in self.vertices.values()]}

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for vd in data.get("vertices", []):
            g.add_vertex(Vertex.from_dict(vd))
        return g

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_vertices: int = 50,
        edge_probability: float = 1.0,
        max_weight: int = 10,
        directed: bool = False,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph on vertices 1..n.
        Each pair is linked with probability `edge_probability` and an
        integer weight drawn from [0, max_weight).  With the defaults this
        is a complete graph, every vertex a neighbour of every other.
        Directed mode draws each direction independently.
        """
        if num_vertices < 1:
            raise ValueError("num_vertices must be >= 1")
        if max_weight < 1:
            raise ValueError("max_weight must be >= 1")
        rng = random.Random(seed)

        g = cls()
        ids = list(range(1, num_vertices + 1))
        for vid in ids:
            g.create_vertex(vid, x=rng.random(), y=rng.random())

        for i, a in enumerate(ids):
            others = ids if directed else ids[i + 1:]
            for b in others:
                if a == b or rng.random() >= edge_probability:
                    continue
                w = rng.randrange(max_weight)
                if directed:
                    g.add_edge(a, b, w)
                else:
                    g.connect(a, b, w)

        logger.debug("generated random graph: %d vertices, %d edges", len(g), sum(1 for _ in g.edges()))
        return g

    # ---------- Small demo graph ----------
    @classmethod
    def sample(cls) -> "Graph":
        """Five-vertex undirected demo graph, source 1."""
        g = cls()
        for vid, x, y in [(1, 0.1, 0.5), (2, 0.9, 0.85), (3, 0.6, 0.5), (4, 0.75, 0.15), (5, 0.3, 0.15)]:
            g.create_vertex(vid, x=x, y=y)
        for a, b, w in [(1, 2, 5), (1, 5, 2), (1, 3, 1), (2, 3, 2), (2, 4, 1), (3, 4, 2), (4, 5, 1)]:
            g.connect(a, b, w)
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            1: 2 3 4            → 1 connects to 2, 3, 4  (weight 1)
            1: 2(3) 3(7)        → 1–2 weight 3, 1–3 weight 7
            1 -> 2(5), 3(1)     → alternate arrow syntax, commas allowed
            # comment           → ignored

        Numeric labels become int ids (any size); others stay strings.
        Undirected links listed from both ends are added once.
        Vertices are auto-laid-out in a circle.
        """
        adjacency: Dict[Hashable, List[Tuple[Hashable, int]]] = {}

        for lineno, raw in enumerate(text.strip().splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            for sep in (":", "→", "->"):
                if sep in line:
                    head, tail = line.split(sep, 1)
                    break
            else:
                head, tail = line, ""

            src = _parse_id(head.strip())
            adjacency.setdefault(src, [])

            for token in tail.replace(",", " ").split():
                match = _TOKEN_RE.match(token)
                if not match:
                    raise InvalidGraphError(
                        f"line {lineno}: cannot parse {token!r}", vertex_id=src, reason="syntax"
                    )
                tgt = _parse_id(match.group("target"))
                w_str = match.group("weight")
                try:
                    w = int(w_str) if w_str is not None else 1
                except ValueError:
                    raise InvalidGraphError(
                        f"line {lineno}: weight {w_str!r} is not an integer",
                        vertex_id=src, reason="weight", detail=w_str,
                    ) from None
                if w < 0:
                    raise InvalidGraphError(
                        f"line {lineno}: negative weight {w} on {src!r} → {tgt!r}",
                        vertex_id=src, reason="negative", detail=w,
                    )
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        g = cls()
        n = len(adjacency)
        for i, vid in enumerate(adjacency):
            angle = 2 * math.pi * i / max(n, 1)
            g.create_vertex(vid, x=0.5 + 0.4 * math.cos(angle), y=0.5 + 0.4 * math.sin(angle))

        seen = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                if directed:
                    g.add_edge(src, tgt, w)
                    continue
                key = (frozenset((src, tgt)), w)
                if key in seen:
                    continue
                seen.add(key)
                if src == tgt:
                    g.add_edge(src, tgt, w)
                else:
                    g.connect(src, tgt, w)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def vertex_ids(self) -> List[Hashable]:
        return list(self.vertices.keys())

    def edge_count(self) -> int:
        return sum(v.degree for v in self.vertices.values())

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self)}, edges={self.edge_count()}, frozen={self._frozen})"


def _parse_id(label: str) -> Hashable:
    # map-data ids are plain integers, often wider than 32 bits
    return int(label) if re.fullmatch(r"-?\d+", label) else label


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

"""
edge.py — Directed Weighted Edge
================================
One entry of a vertex's adjacency list.  The tail is implied by the
vertex that owns the list, so an Edge only records where it goes and
what it costs.

Design decisions:
  - `target` is a VertexId, NOT a Vertex reference.  Keeps edges
    serialisable and avoids circular references.
  - Weights are non-negative integers.  Dijkstra's finalisation rule is
    only correct for non-negative weights; `Graph.validate()` rejects
    anything else before a run starts.
  - Edges are always directed.  An undirected link is two mirrored
    edges (see `Graph.connect`).
"""

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        target : VertexId of the head vertex.
        weight : Non-negative integer cost.
    """

    target: Hashable
    weight: int = 1

    def is_valid_weight(self) -> bool:
        # bool is an int subclass; True/False are not weights
        return isinstance(self.weight, int) and not isinstance(self.weight, bool) and self.weight >= 0

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"target": self.target, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(target=data["target"], weight=data.get("weight", 1))

    def __repr__(self) -> str:
        return f"Edge(→{self.target}, w={self.weight})"

from dataclasses import dataclass, field
from typing import Hashable, Sequence, Tuple

from graph.edge import Edge


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------
@dataclass
class Vertex:
    """
    Identity plus outgoing adjacency list.  Position is for the renderer only.

    Attributes:
        id         : VertexId (int in practice, any hashable works).
        neighbours : Outgoing edges, in insertion order.
        x, y       : Position normalised to [0, 1]; the canvas projects it.
    """

    id: Hashable
    neighbours: Sequence[Edge] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def degree(self) -> int:
        return len(self.neighbours)

    # ------------------------------------------------------------------
    # Serialisation  (JSON export / import)
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":         self.id,
            "x":          self.x,
            "y":          self.y,
            "neighbours": [e.to_dict() for e in self.neighbours],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        return cls(
            id=data["id"],
            neighbours=[Edge.from_dict(e) for e in data.get("neighbours", [])],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
        )

    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, degree={self.degree}, pos=({self.x:.2f},{self.y:.2f}))"

"""
table.py — Visitation Table
============================
Per-vertex best-known distance and predecessor, plus the unvisited set.

The table is immutable: `relax()` and `finalize()` hand back a NEW
table and leave the old one untouched.  That gives the step engine its
"no partial update is ever visible" guarantee for free, and lets the
playback layer keep every tick's table around for rewinding.

Invariants (held by construction):
  - distance[source] == 0 and predecessor[source] is None, always
  - a distance only ever decreases
  - unvisited only ever shrinks; removed vertices never come back
  - the entry keys are exactly the graph's vertex set
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Optional, Tuple, Union

from graph.errors import VertexNotFoundError


# "no known path yet": strictly greater than any real distance
INFINITY = float("inf")

Distance = Union[int, float]


@dataclass(frozen=True)
class TableEntry:
    distance:    Distance            = INFINITY
    predecessor: Optional[Hashable]  = None

    @property
    def reachable(self) -> bool:
        return self.distance != INFINITY


@dataclass(frozen=True)
class VisitationTable:
    """
    Attributes:
        source    : VertexId the run started from.
        entries   : {vertex_id: TableEntry}.  Never mutated after construction.
        unvisited : Vertices not yet finalized, in graph iteration order.
        finalized : Vertices removed so far, in removal order.
    """

    source:    Hashable
    entries:   Dict[Hashable, TableEntry] = field(default_factory=dict)
    unvisited: Tuple[Hashable, ...]       = ()
    finalized: Tuple[Hashable, ...]       = ()

    @classmethod
    def initial(cls, vertex_ids: Iterable[Hashable], source: Hashable) -> "VisitationTable":
        ids = tuple(vertex_ids)
        if source not in ids:
            raise VertexNotFoundError(f"Source vertex not in graph: {source!r}", vertex_id=source)
        entries = {vid: TableEntry(0 if vid == source else INFINITY, None) for vid in ids}
        return cls(source=source, entries=entries, unvisited=ids)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def entry(self, vertex_id: Hashable) -> TableEntry:
        try:
            return self.entries[vertex_id]
        except KeyError:
            raise VertexNotFoundError(
                f"Vertex not in graph: {vertex_id!r}", vertex_id=vertex_id
            ) from None

    def distance_of(self, vertex_id: Hashable) -> Distance:
        return self.entry(vertex_id).distance

    def predecessor_of(self, vertex_id: Hashable) -> Optional[Hashable]:
        return self.entry(vertex_id).predecessor

    def is_unvisited(self, vertex_id: Hashable) -> bool:
        self.entry(vertex_id)
        return vertex_id in self.unvisited

    def distances(self) -> Dict[Hashable, Distance]:
        return {vid: e.distance for vid, e in self.entries.items()}

    def predecessors(self) -> Dict[Hashable, Optional[Hashable]]:
        return {vid: e.predecessor for vid, e in self.entries.items()}

    def __contains__(self, vertex_id: Hashable) -> bool:
        return vertex_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    # ------------------------------------------------------------------
    # Writes (copy-on-write)
    # ------------------------------------------------------------------
    def relax(
        self,
        vertex_id: Hashable,
        distance: Distance,
        predecessor: Hashable,
    ) -> Tuple["VisitationTable", bool]:
        """
        Overwrite vertex_id's entry only if `distance` is strictly smaller.
        Returns (table, improved); the same table comes back unchanged
        when there is no improvement.
        """
        current = self.entry(vertex_id)
        if predecessor not in self.entries:
            raise VertexNotFoundError(
                f"Vertex not in graph: {predecessor!r}", vertex_id=predecessor
            )
        if vertex_id == self.source or not distance < current.distance:
            return self, False
        entries = dict(self.entries)
        entries[vertex_id] = TableEntry(distance, predecessor)
        return VisitationTable(self.source, entries, self.unvisited, self.finalized), True

    def finalize(self, vertex_id: Hashable) -> "VisitationTable":
        """Remove vertex_id from the unvisited set.  Removing twice is a no-op."""
        self.entry(vertex_id)
        if vertex_id not in self.unvisited:
            return self
        unvisited = tuple(v for v in self.unvisited if v != vertex_id)
        return VisitationTable(self.source, self.entries, unvisited, self.finalized + (vertex_id,))

    def __repr__(self) -> str:
        return (
            f"VisitationTable(source={self.source!r}, vertices={len(self.entries)}, "
            f"unvisited={len(self.unvisited)})"
        )

"""
snapshot.py — Read-Only Solver Snapshot
========================================
A frozen-in-time picture of everything the presentation layer needs to
render one frame:

    • Which state the engine is in, and which vertex / neighbour it is on
    • The distance & predecessor table
    • Which vertices are still unvisited, and in which order others were finalized
    • Which pseudocode line the last tick corresponds to
    • A plain-English explanation of what the last tick did

Design decisions:
  - Snapshot is a plain frozen dataclass.  The solver is the only
    writer; the stepper / renderer are pure readers and cannot reach
    back into the solver's internals.
  - `to_dict()` is JSON-safe: infinity becomes None.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional

from solver.states import EventKind, StepEvent
from solver.table import INFINITY


@dataclass(frozen=True)
class SolverSnapshot:
    """
    Attributes:
        tick            : Number of advance() calls so far.
        state           : "Idle" | "SelectingNeighbour" | "Visiting" | "Terminated".
        source          : Source vertex of the run.
        current         : Vertex being expanded (None in Idle / Terminated).
        cursor          : Neighbour cursor (Visiting only).
        neighbour       : Neighbour under the cursor (Visiting, cursor not past end).
        neighbour_weight: Weight of the edge under the cursor.
        distances       : {vertex_id: distance}, INFINITY for "no path yet".
        predecessors    : {vertex_id: predecessor or None}.
        unvisited       : Vertices not yet finalized.
        finalized       : Vertices finalized so far, in order.
        event           : What the last tick did (None before the first tick).
        explanation     : Human-readable "why" text.
    """

    tick:             int                           = 0
    state:            str                           = "Idle"
    source:           Optional[Hashable]            = None
    current:          Optional[Hashable]            = None
    cursor:           Optional[int]                 = None
    neighbour:        Optional[Hashable]            = None
    neighbour_weight: Optional[int]                 = None
    distances:        Dict[Hashable, Any]           = field(default_factory=dict)
    predecessors:     Dict[Hashable, Any]           = field(default_factory=dict)
    unvisited:        List[Hashable]                = field(default_factory=list)
    finalized:        List[Hashable]                = field(default_factory=list)
    event:            Optional[StepEvent]           = None
    explanation:      str                           = ""

    @property
    def is_terminated(self) -> bool:
        return self.state == "Terminated"

    @property
    def pseudocode_line(self) -> int:
        return self.event.pseudocode_line if self.event else 1

    def to_dict(self) -> dict:
        return {
            "tick":             self.tick,
            "state":            self.state,
            "source":           self.source,
            "current":          self.current,
            "cursor":           self.cursor,
            "neighbour":        self.neighbour,
            "neighbour_weight": self.neighbour_weight,
            # list of pairs: JSON object keys would turn int ids into strings
            "table": [
                {"vertex": vid, "distance": _finite(d), "predecessor": self.predecessors.get(vid)}
                for vid, d in self.distances.items()
            ],
            "unvisited":        list(self.unvisited),
            "finalized":        list(self.finalized),
            "event":            self.event.kind.value if self.event else None,
            "pseudocode_line":  self.pseudocode_line,
            "explanation":      self.explanation,
            "terminated":       self.is_terminated,
        }


def _finite(d):
    return None if d == INFINITY else d


def fmt_distance(d) -> str:
    return "∞" if d == INFINITY else str(d)


# ---------------------------------------------------------------------------
# Explanations
# ---------------------------------------------------------------------------
def explain(event: Optional[StepEvent], source: Hashable) -> str:
    if event is None:
        return (
            f"Initialise: every distance is ∞ except source '{source}' = 0. "
            f"All vertices start unvisited."
        )

    kind = event.kind
    if kind is EventKind.SELECTED:
        return f"Select '{event.current}': smallest distance among the unvisited vertices."
    if kind is EventKind.CURSOR_RESET:
        return f"Start scanning the neighbours of '{event.current}'."
    if kind is EventKind.SKIPPED_FINALIZED:
        return (
            f"Edge {event.current}→{event.neighbour} (w={event.weight}): "
            f"'{event.neighbour}' is already final — skip."
        )
    if kind is EventKind.RELAXED:
        return (
            f"Relax {event.current}→{event.neighbour}: "
            f"{fmt_distance(event.candidate - event.weight)} + {event.weight} = {fmt_distance(event.candidate)} "
            f"< {fmt_distance(event.previous)} → UPDATE, prev['{event.neighbour}'] = '{event.current}'."
        )
    if kind is EventKind.NOT_IMPROVED:
        return (
            f"Edge {event.current}→{event.neighbour}: {fmt_distance(event.candidate)} "
            f"≥ current {fmt_distance(event.previous)} → no improvement."
        )
    if kind is EventKind.FINALIZED:
        return f"All neighbours of '{event.current}' examined. Its distance is now FINAL."
    if kind is EventKind.TERMINATED:
        return "No unvisited vertices left. Done."
    return "Already terminated."

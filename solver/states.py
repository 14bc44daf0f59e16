"""
states.py — Step Engine States & Events
========================================
The engine's state is a tagged variant: exactly one of the four frozen
dataclasses below.  Each carries only the data that state needs, so an
impossible combination ("Idle with a neighbour cursor") cannot be built.

    Idle  →  SelectingNeighbour(current)  →  Visiting(current, cursor)  →  Idle
      └──────────────→  Terminated  (once nothing is left unvisited)

A StepEvent records what a single transition did, for the renderer's
highlighting and for the explanation panel.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Optional, Union


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Idle:
    name = "Idle"


@dataclass(frozen=True)
class SelectingNeighbour:
    current: Hashable
    name = "SelectingNeighbour"


@dataclass(frozen=True)
class Visiting:
    """`cursor == degree(current)` means the cursor has passed the last neighbour."""

    current: Hashable
    cursor:  int = 0
    name = "Visiting"


@dataclass(frozen=True)
class Terminated:
    name = "Terminated"


EngineState = Union[Idle, SelectingNeighbour, Visiting, Terminated]


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
class EventKind(Enum):
    SELECTED          = "selected"            # min-distance vertex picked
    CURSOR_RESET      = "cursor_reset"        # cursor placed on first neighbour
    RELAXED           = "relaxed"             # neighbour distance improved
    NOT_IMPROVED      = "not_improved"        # candidate >= recorded distance
    SKIPPED_FINALIZED = "skipped_finalized"   # neighbour already finalized
    FINALIZED         = "finalized"           # current removed from unvisited
    TERMINATED        = "terminated"          # nothing left unvisited
    NOOP              = "noop"                # tick after termination


@dataclass(frozen=True)
class StepEvent:
    """
    Attributes:
        kind      : What happened.
        current   : Vertex being expanded (None for terminate / noop).
        neighbour : Neighbour examined by a relax tick.
        weight    : Weight of the examined edge.
        candidate : distance[current] + weight.
        previous  : Neighbour's distance before the tick.
    """

    kind:      EventKind
    current:   Optional[Hashable] = None
    neighbour: Optional[Hashable] = None
    weight:    Optional[int]      = None
    candidate: Optional[float]    = None
    previous:  Optional[float]    = None

    @property
    def improved(self) -> bool:
        return self.kind is EventKind.RELAXED

    @property
    def pseudocode_line(self) -> int:
        return PSEUDOCODE_LINES[self.kind]


# ---------------------------------------------------------------------------
# Pseudocode (one line per event kind, for the side panel)
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                         # 0
    "    dist ← {v: ∞ for v in V};  dist[source] ← 0",       # 1
    "    unvisited ← V",                                    # 2
    "    while unvisited is not empty:",                    # 3
    "        u ← argmin(dist[v] for v in unvisited)",       # 4
    "        for (v, w) in adj(u):",                        # 5
    "            if v not in unvisited: continue",          # 6
    "            if dist[u] + w < dist[v]:",                # 7
    "                dist[v] ← dist[u] + w;  prev[v] ← u",  # 8
    "        unvisited.remove(u)",                          # 9
    "    return dist, prev",                                # 10
]

PSEUDOCODE_LINES = {
    EventKind.SELECTED:          4,
    EventKind.CURSOR_RESET:      5,
    EventKind.SKIPPED_FINALIZED: 6,
    EventKind.NOT_IMPROVED:      7,
    EventKind.RELAXED:           8,
    EventKind.FINALIZED:         9,
    EventKind.TERMINATED:        10,
    EventKind.NOOP:              10,
}

"""
solver.py — Incremental Dijkstra Solver
========================================
The ONLY object the playback layer talks to during a run.  It owns a
frozen private copy of the graph, the current engine state and the
current visitation table, and moves them forward one transition per
advance() call.

    solver = Solver(graph, source=1)
    while not solver.is_terminated():
        solver.advance()                 # one visible micro-step
    solver.distance_of(4)                # 3
    solver.reconstruct_path(4)           # [3, 4]

Everything the renderer may look at is exposed read-only: the immutable
state variant, the immutable table, and `snapshot()`.

Thread safety:
  Not needed and not provided.  Each advance() is synchronous and the
  caller drives every tick from one thread.
"""

import logging
from typing import Hashable, List, Optional

from graph import Edge, Graph, VertexNotFoundError
from solver.path import reconstruct_path
from solver.snapshot import SolverSnapshot, explain
from solver.states import (
    EngineState,
    EventKind,
    Idle,
    SelectingNeighbour,
    StepEvent,
    Terminated,
    Visiting,
)
from solver.table import Distance, VisitationTable
from solver.transitions import transition


logger = logging.getLogger(__name__)


class Solver:
    """
    Attributes:
        graph      : Frozen private copy of the input graph.
        source     : Source vertex, fixed for the run.
        state      : Current EngineState variant.
        table      : Current VisitationTable.
        ticks      : Number of advance() calls since construction / reset.
        last_event : StepEvent produced by the latest tick (None before the first).
    """

    def __init__(self, graph: Graph, source: Hashable):
        self.graph:  Graph    = self._adopt(graph, source)
        self.source: Hashable = source
        self.reset()
        logger.debug("solver ready: %r, source=%r", self.graph, source)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Fresh table, back to Idle.  The graph is kept as is."""
        self.state:      EngineState         = Idle()
        self.table:      VisitationTable     = VisitationTable.initial(self.graph.vertices, self.source)
        self.ticks:      int                 = 0
        self.last_event: Optional[StepEvent] = None
        logger.info("solver reset: source=%r, %d vertices", self.source, len(self.graph))

    def replace_graph(self, graph: Graph, source: Optional[Hashable] = None) -> None:
        """Swap in a new graph (and optionally a new source) for a fresh run."""
        source = self.source if source is None else source
        self.graph = self._adopt(graph, source)
        self.source = source
        self.reset()

    @staticmethod
    def _adopt(graph: Graph, source: Hashable) -> Graph:
        graph.validate()
        if source not in graph:
            raise VertexNotFoundError(f"Source vertex not in graph: {source!r}", vertex_id=source)
        return graph.copy().freeze()

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------
    def advance(self) -> StepEvent:
        """Perform exactly one transition.  A no-op once terminated."""
        if isinstance(self.state, Terminated):
            return StepEvent(EventKind.NOOP)

        step = transition(self.graph, self.state, self.table)
        self.state, self.table = step.state, step.table
        self.ticks += 1
        self.last_event = step.event

        logger.debug("tick %d: %s → %s", self.ticks, step.event.kind.value, self.state.name)
        if isinstance(self.state, Terminated):
            logger.info("terminated after %d ticks", self.ticks)
        return step.event

    def run_to_completion(self, max_ticks: Optional[int] = None) -> int:
        """Advance until Terminated (or max_ticks).  Returns ticks taken by this call."""
        taken = 0
        while not self.is_terminated():
            if max_ticks is not None and taken >= max_ticks:
                break
            self.advance()
            taken += 1
        return taken

    def is_terminated(self) -> bool:
        return isinstance(self.state, Terminated)

    # ------------------------------------------------------------------
    # Table accessors
    # ------------------------------------------------------------------
    def distance_of(self, vertex_id: Hashable) -> Distance:
        return self.table.distance_of(vertex_id)

    def predecessor_of(self, vertex_id: Hashable) -> Optional[Hashable]:
        return self.table.predecessor_of(vertex_id)

    def reconstruct_path(self, destination: Hashable) -> List[Hashable]:
        return reconstruct_path(self.table, destination)

    # ------------------------------------------------------------------
    # Read-only introspection
    # ------------------------------------------------------------------
    @property
    def state_name(self) -> str:
        return self.state.name

    @property
    def current_vertex(self) -> Optional[Hashable]:
        if isinstance(self.state, (SelectingNeighbour, Visiting)):
            return self.state.current
        return None

    @property
    def cursor(self) -> Optional[int]:
        return self.state.cursor if isinstance(self.state, Visiting) else None

    @property
    def current_edge(self) -> Optional[Edge]:
        """Edge under the cursor, or None when not visiting / cursor past the end."""
        if not isinstance(self.state, Visiting):
            return None
        neighbours = self.graph.neighbours(self.state.current)
        if self.state.cursor < len(neighbours):
            return neighbours[self.state.cursor]
        return None

    def snapshot(self) -> SolverSnapshot:
        edge = self.current_edge
        explanation = explain(self.last_event, self.source)
        if self.last_event is not None and self.last_event.kind is EventKind.FINALIZED and self.is_terminated():
            explanation += " No unvisited vertices left. Done."
        return SolverSnapshot(
            tick=self.ticks,
            state=self.state_name,
            source=self.source,
            current=self.current_vertex,
            cursor=self.cursor,
            neighbour=edge.target if edge else None,
            neighbour_weight=edge.weight if edge else None,
            distances=self.table.distances(),
            predecessors=self.table.predecessors(),
            unvisited=list(self.table.unvisited),
            finalized=list(self.table.finalized),
            event=self.last_event,
            explanation=explanation,
        )

    def __repr__(self) -> str:
        return f"Solver(source={self.source!r}, state={self.state_name}, ticks={self.ticks})"

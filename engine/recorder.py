"""
recorder.py — Run Recorder & Analytics
========================================
Runs a Solver to completion, keeping every StepEvent, then computes
the metrics the Analytics panel renders.

Usage:
    rec = Recorder()
    rec.start(graph=g, source=1, destination=4)
    metrics = rec.run_to_completion()     # exhausts the solver
    rec.export()                          # serialisable summary
"""

import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Hashable, List, Optional

from graph import Graph, UnreachableError
from solver import EventKind, Solver, StepEvent, path_cost


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    source:             Any   = None
    destination:        Any   = None
    vertices_finalized: int   = 0
    edges_examined:     int   = 0         # every Visiting tick that looked at an edge
    relaxations:        int   = 0         # examined edges that improved a distance
    skipped_finalized:  int   = 0         # examined edges pointing at final vertices
    total_ticks:        int   = 0
    path:               List[Any] = field(default_factory=list)
    path_cost:          int   = 0
    path_found:         bool  = False
    wall_time_ms:       float = 0.0


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events  : Every StepEvent of the run, in tick order.
        metrics : Computed RunMetrics (available after run_to_completion).
        solver  : The underlying Solver.
    """

    def __init__(self):
        self.events:  List[StepEvent]      = []
        self.metrics: Optional[RunMetrics] = None
        self.solver:  Optional[Solver]     = None

        self._destination: Optional[Hashable] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, graph: Graph, source: Hashable, destination: Optional[Hashable] = None) -> None:
        """Build a fresh solver for this run."""
        self.solver       = Solver(graph, source)
        self._destination = destination
        self.events       = []
        self.metrics      = None

    def run_to_completion(self) -> RunMetrics:
        """Tick the solver until Terminated, record every event, compute metrics."""
        if self.solver is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        while not self.solver.is_terminated():
            self.events.append(self.solver.advance())
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def export(self) -> Dict[str, Any]:
        snap = self.solver.snapshot() if self.solver else None
        return {
            "metrics": asdict(self.metrics) if self.metrics else {},
            "final":   snap.to_dict() if snap else {},
            "events":  [e.kind.value for e in self.events],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        solver = self.solver
        counts = Counter(e.kind for e in self.events)

        path: List[Hashable] = []
        found = False
        if self._destination is not None:
            try:
                path = solver.reconstruct_path(self._destination)
                found = True
            except UnreachableError:
                found = False

        return RunMetrics(
            source=solver.source,
            destination=self._destination,
            vertices_finalized=len(solver.table.finalized),
            edges_examined=counts[EventKind.RELAXED] + counts[EventKind.NOT_IMPROVED] + counts[EventKind.SKIPPED_FINALIZED],
            relaxations=counts[EventKind.RELAXED],
            skipped_finalized=counts[EventKind.SKIPPED_FINALIZED],
            total_ticks=solver.ticks,
            path=path,
            path_cost=path_cost(solver.graph, solver.source, path) if found else 0,
            path_found=found,
            wall_time_ms=round(wall_ms, 2),
        )

"""
solver/
-------
The incremental Dijkstra solver.

    from solver import Solver, SolverSnapshot
    from solver import transition, VisitationTable, INFINITY
"""

from solver.table       import INFINITY, TableEntry, VisitationTable
from solver.states      import (
    PSEUDOCODE,
    EngineState,
    EventKind,
    Idle,
    SelectingNeighbour,
    StepEvent,
    Terminated,
    Visiting,
)
from solver.transitions import Transition, select_minimum, transition
from solver.path        import path_cost, reconstruct_path
from solver.snapshot    import SolverSnapshot, fmt_distance
from solver.solver      import Solver

__all__ = [
    "INFINITY",
    "TableEntry",
    "VisitationTable",
    "PSEUDOCODE",
    "EngineState",
    "EventKind",
    "Idle",
    "SelectingNeighbour",
    "Visiting",
    "Terminated",
    "StepEvent",
    "Transition",
    "select_minimum",
    "transition",
    "path_cost",
    "reconstruct_path",
    "SolverSnapshot",
    "fmt_distance",
    "Solver",
]

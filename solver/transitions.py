"""
transitions.py — Pure Step Engine Transition
=============================================
    transition(graph, state, table)  →  Transition(state', table', event)

No side effects: the graph is only read, the table is immutable, and
the returned state/table are new values.  One call == one external tick.

Transition table:

    Idle                 unvisited empty         →  Terminated
    Idle                 unvisited non-empty     →  SelectingNeighbour(u = argmin dist)
    SelectingNeighbour   u has neighbours        →  Visiting(u, cursor=0)
    SelectingNeighbour   u has no neighbours     →  finalize u  →  Idle
    Visiting             cursor < degree(u)      →  relax adj(u)[cursor]; cursor += 1
    Visiting             cursor == degree(u)     →  finalize u  →  Idle
    Terminated           —                       →  Terminated (no-op)

Two continuations stay inside the current tick:
  - a vertex with zero neighbours passes through Visiting immediately;
  - finalizing the last unvisited vertex continues Idle → Terminated,
    so "unvisited is empty" and "state is Terminated" always coincide.

Tie-break: argmin scans the unvisited vertices in graph insertion order
and keeps the FIRST vertex holding the minimum distance (vertices stuck
at infinity included).
"""

from typing import Hashable, NamedTuple

from graph import Graph
from solver.states import (
    EngineState,
    EventKind,
    Idle,
    SelectingNeighbour,
    StepEvent,
    Terminated,
    Visiting,
)
from solver.table import VisitationTable


class Transition(NamedTuple):
    state: EngineState
    table: VisitationTable
    event: StepEvent


def select_minimum(table: VisitationTable) -> Hashable:
    """First unvisited vertex (iteration order) with the smallest distance."""
    # min() keeps the first of equal keys
    return min(table.unvisited, key=table.distance_of)


def transition(graph: Graph, state: EngineState, table: VisitationTable) -> Transition:
    if isinstance(state, Terminated):
        return Transition(state, table, StepEvent(EventKind.NOOP))

    if isinstance(state, Idle):
        if not table.unvisited:
            return Transition(Terminated(), table, StepEvent(EventKind.TERMINATED))
        current = select_minimum(table)
        return Transition(
            SelectingNeighbour(current), table, StepEvent(EventKind.SELECTED, current=current)
        )

    if isinstance(state, SelectingNeighbour):
        if not graph.neighbours(state.current):
            return _finalize(state.current, table)
        return Transition(
            Visiting(state.current, 0), table, StepEvent(EventKind.CURSOR_RESET, current=state.current)
        )

    if isinstance(state, Visiting):
        return _visit(graph, state, table)

    raise TypeError(f"Unknown engine state: {state!r}")


def _visit(graph: Graph, state: Visiting, table: VisitationTable) -> Transition:
    current = state.current
    neighbours = graph.neighbours(current)
    if state.cursor >= len(neighbours):
        return _finalize(current, table)

    edge = neighbours[state.cursor]
    advanced = Visiting(current, state.cursor + 1)
    previous = table.distance_of(edge.target)

    if not table.is_unvisited(edge.target):
        # final distance; must not be perturbed
        event = StepEvent(
            EventKind.SKIPPED_FINALIZED, current=current, neighbour=edge.target,
            weight=edge.weight, previous=previous,
        )
        return Transition(advanced, table, event)

    candidate = table.distance_of(current) + edge.weight
    relaxed, improved = table.relax(edge.target, candidate, current)
    event = StepEvent(
        EventKind.RELAXED if improved else EventKind.NOT_IMPROVED,
        current=current, neighbour=edge.target, weight=edge.weight,
        candidate=candidate, previous=previous,
    )
    return Transition(advanced, relaxed, event)


def _finalize(current: Hashable, table: VisitationTable) -> Transition:
    table = table.finalize(current)
    event = StepEvent(EventKind.FINALIZED, current=current)
    if not table.unvisited:
        return Transition(Terminated(), table, event)
    return Transition(Idle(), table, event)

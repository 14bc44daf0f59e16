"""
path.py — Path Reconstruction
==============================
Walk predecessor links from a destination back to the source, then
reverse.  The result EXCLUDES the source and INCLUDES the destination:

    source 1, path to 4 via 3   →   [3, 4]
    source 1, path to 1         →   []

Only meaningful once the destination's distance is final, i.e. after the
destination has left the unvisited set (in particular after Terminated).
"""

from typing import Hashable, List, Sequence

from graph import Graph, PathNotReadyError, UnreachableError
from solver.table import VisitationTable


def reconstruct_path(table: VisitationTable, destination: Hashable) -> List[Hashable]:
    source = table.source
    table.entry(destination)            # VertexNotFoundError for unknown ids

    if destination == source:
        return []
    if table.is_unvisited(destination):
        raise PathNotReadyError(
            f"Distance of {destination!r} is not final yet", destination=destination
        )

    path = [destination]
    cur = destination
    # a well-formed chain is at most |V| - 1 links long
    for _ in range(len(table)):
        prev = table.predecessor_of(cur)
        if prev is None:
            break
        if prev == source:
            path.reverse()
            return path
        path.append(prev)
        cur = prev

    raise UnreachableError(
        f"{destination!r} is not reachable from {source!r}",
        source=source, destination=destination,
    )


def path_cost(graph: Graph, source: Hashable, path: Sequence[Hashable]) -> int:
    """Sum of edge weights along source → path[0] → … → path[-1]."""
    total = 0
    prev = source
    for vid in path:
        total += graph.edge_weight(prev, vid)
        prev = vid
    return total

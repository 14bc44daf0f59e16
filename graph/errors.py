"""
errors.py — Graph & Solver Error Types
=======================================
Every failure the solver can report.  None of these are transient:
they mean the graph was malformed or the caller asked for something
that does not exist, so nothing here is ever retried.

    GraphError
      ├── VertexNotFoundError   – id not present in the graph
      ├── UnreachableError      – no predecessor chain back to the source
      ├── InvalidGraphError     – dangling edge / negative weight / frozen graph
      └── PathNotReadyError     – destination distance not final yet
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional


@dataclass
class GraphError(Exception):
    """Base error for the graph model and the step-wise solver.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class VertexNotFoundError(GraphError):
    """A VertexId was looked up that the graph does not contain."""

    vertex_id: Optional[Hashable] = None


@dataclass
class UnreachableError(GraphError):
    """The predecessor chain from the destination never reaches the source."""

    source: Optional[Hashable] = None
    destination: Optional[Hashable] = None


@dataclass
class InvalidGraphError(GraphError):
    """The graph cannot be used for a run.

    Attributes:
        vertex_id: Vertex whose adjacency list holds the bad edge (if any)
        reason: Short machine-readable tag ("dangling", "negative", …)
    """

    vertex_id: Optional[Hashable] = None
    reason: str = ""
    detail: Any = None


@dataclass
class PathNotReadyError(GraphError):
    """A path was requested for a vertex whose distance is not final yet."""

    destination: Optional[Hashable] = None

# -*- coding: utf-8 -*-
"""
Errors - Exception taxonomy for graph construction and execution.

InvalidConnection is raised while editing the graph, MissingNode and
CyclicDependency while the engines walk it.
"""
from typing import Iterable, Optional


class NodeGraphError(Exception):
    """Base class for all node graph errors."""


class InvalidConnection(NodeGraphError, ValueError):
    """
    A connection cannot be created.

    Raised for socket mismatches, occupied single-connection inputs,
    unknown ports and duplicate connections. The graph is left unchanged.
    """


class MissingNode(NodeGraphError, KeyError):
    """A node id does not resolve to a node in the graph."""

    def __init__(self, node_id: str, message: Optional[str] = None):
        self.node_id = node_id
        super().__init__(message or f"Node not found: {node_id}")

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class CyclicDependency(NodeGraphError):
    """Dataflow resolution revisited a node that is still being resolved."""

    def __init__(self, path: Iterable[str]):
        self.path = list(path)
        super().__init__("Cyclic dependency: " + " -> ".join(self.path))

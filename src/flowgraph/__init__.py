# -*- coding: utf-8 -*-
"""
flowgraph - Execution core of a visual node-graph editor.

A pull-based dataflow resolver and a push-based control-flow walker over
a graph of nodes and typed connections, plus a periodic scheduler.
"""
from typing import Optional

from .core import (
    BaseNode,
    NodeMetadata,
    Socket,
    ANY_SOCKET,
    InputPort,
    OutputPort,
    InputControl,
    NodeConnection,
    NodeGraph,
    NodeRegistry,
    NodeGraphError,
    InvalidConnection,
    MissingNode,
    CyclicDependency,
)
from .execution import (
    PortClassifier,
    PortSelection,
    DataflowEngine,
    ControlFlowEngine,
    GraphScheduler,
)
from .editor import EditorSession, create_editor

__version__ = "0.1.0"


def create_graph(name: str = "Untitled Graph") -> NodeGraph:
    return NodeGraph(name)


def create_dataflow_engine(
    graph: NodeGraph, classify_ports: Optional[PortClassifier] = None
) -> DataflowEngine:
    return DataflowEngine(graph, classify_ports)


def create_control_flow_engine(
    graph: NodeGraph, classify_ports: Optional[PortClassifier] = None
) -> ControlFlowEngine:
    return ControlFlowEngine(graph, classify_ports)


__all__ = [
    "BaseNode",
    "NodeMetadata",
    "Socket",
    "ANY_SOCKET",
    "InputPort",
    "OutputPort",
    "InputControl",
    "NodeConnection",
    "NodeGraph",
    "NodeRegistry",
    "NodeGraphError",
    "InvalidConnection",
    "MissingNode",
    "CyclicDependency",
    "PortClassifier",
    "PortSelection",
    "DataflowEngine",
    "ControlFlowEngine",
    "GraphScheduler",
    "EditorSession",
    "create_editor",
    "create_graph",
    "create_dataflow_engine",
    "create_control_flow_engine",
]

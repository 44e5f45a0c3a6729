# -*- coding: utf-8 -*-
"""
flowgraph Core - Data model of the node graph.
"""

from .base_node import BaseNode, NodeMetadata
from .ports import Socket, ANY_SOCKET, InputPort, OutputPort
from .controls import InputControl
from .connection import NodeConnection
from .graph import NodeGraph, EXEC_PORT
from .registry import NodeRegistry
from .signal import Signal
from .errors import NodeGraphError, InvalidConnection, MissingNode, CyclicDependency

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
    "EXEC_PORT",
    "NodeRegistry",
    "Signal",
    "NodeGraphError",
    "InvalidConnection",
    "MissingNode",
    "CyclicDependency",
]

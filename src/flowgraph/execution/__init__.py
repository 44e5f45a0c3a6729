# -*- coding: utf-8 -*-
"""
flowgraph Execution - Engines for running node graphs.
"""
from .classifiers import (
    PortSelection,
    PortClassifier,
    dataflow_ports,
    control_flow_ports,
    make_dataflow_classifier,
    make_control_flow_classifier,
)
from .dataflow import DataflowEngine
from .control_flow import ControlFlowEngine, Forward, ForwardCall
from .scheduler import GraphScheduler

__all__ = [
    "PortSelection",
    "PortClassifier",
    "dataflow_ports",
    "control_flow_ports",
    "make_dataflow_classifier",
    "make_control_flow_classifier",
    "DataflowEngine",
    "ControlFlowEngine",
    "Forward",
    "ForwardCall",
    "GraphScheduler",
]

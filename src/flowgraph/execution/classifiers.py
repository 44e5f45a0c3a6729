# -*- coding: utf-8 -*-
"""
Port Classifiers - Decide which ports each engine walks.

An engine receives a classifier at construction. The dataflow engine
only resolves the ports its classifier returns, the control-flow engine
only forwards along the ports its classifier returns. Two engines over
the same graph can therefore disagree about which ports are theirs.
"""
from typing import Callable, List, NamedTuple

from ..core.base_node import BaseNode
from ..core.graph import EXEC_PORT


class PortSelection(NamedTuple):
    """Input and output port names one engine is responsible for."""
    inputs: List[str]
    outputs: List[str]


PortClassifier = Callable[[BaseNode], PortSelection]


def make_dataflow_classifier(exec_name: str = EXEC_PORT) -> PortClassifier:
    """Classifier selecting every port except the execution port."""
    def classify(node: BaseNode) -> PortSelection:
        return PortSelection(
            inputs=[name for name in node.inputs if name != exec_name],
            outputs=[name for name in node.outputs if name != exec_name],
        )
    return classify


def make_control_flow_classifier(exec_name: str = EXEC_PORT) -> PortClassifier:
    """Classifier selecting only the execution port."""
    def classify(node: BaseNode) -> PortSelection:
        return PortSelection(
            inputs=[name for name in node.inputs if name == exec_name],
            outputs=[name for name in node.outputs if name == exec_name],
        )
    return classify


dataflow_ports = make_dataflow_classifier()
control_flow_ports = make_control_flow_classifier()

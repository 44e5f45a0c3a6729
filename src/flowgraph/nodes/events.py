# -*- coding: utf-8 -*-
"""
Event Nodes - Entry points for graph execution.
"""
from ..core.base_node import BaseNode, NodeMetadata
from ..core.ports import ANY_SOCKET, OutputPort


class StartNode(BaseNode):
    """
    Entry point - execution begins here.

    Has no inputs and a single exec output. Register its id with the
    scheduler to run the graph periodically.
    """
    node_type = "Start"
    metadata = NodeMetadata(
        category="Events",
        display_name="Start",
        description="Entry point for graph execution",
        color="#CC0000"
    )
    width = 180
    height = 90

    def _setup_ports(self):
        self.add_output("exec", OutputPort(ANY_SOCKET, "Exec"))

    def execute(self, input_name, forward):
        forward("exec")

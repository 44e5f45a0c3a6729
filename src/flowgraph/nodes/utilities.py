# -*- coding: utf-8 -*-
"""
Utility Nodes - Side-effecting helpers.
"""
from typing import Callable

from ..core.base_node import BaseNode, NodeMetadata
from ..core.ports import ANY_SOCKET, InputPort, OutputPort
from ..execution.dataflow import DataflowEngine

LogSink = Callable[[str], None]


class LogNode(BaseNode):
    """
    Send a message to the host's log sink.

    When control arrives the node resolves its message input through the
    dataflow engine, hands the first value (or "" when unconnected) to the
    sink, then continues along its exec output.
    """
    node_type = "Log"
    metadata = NodeMetadata(
        category="Utilities",
        display_name="Log",
        description="Report a message to the host application",
        color="#808080"
    )
    width = 180
    height = 150

    def __init__(self, log: LogSink, dataflow: DataflowEngine, label=None, node_id=None):
        self._log = log
        self._dataflow = dataflow
        super().__init__(label=label, node_id=node_id)

    def _setup_ports(self):
        self.add_input("exec", InputPort(ANY_SOCKET, "Exec", multiple_connections=True))
        self.add_input("message", InputPort(ANY_SOCKET, "Text"))
        self.add_output("exec", OutputPort(ANY_SOCKET, "Exec"))

    async def execute(self, input_name, forward):
        inputs = await self._dataflow.fetch_inputs(self.node_id)
        messages = inputs.get("message") or []
        message = messages[0] if messages and messages[0] else ""

        self._log(str(message))
        await forward("exec")

# -*- coding: utf-8 -*-
"""
Value Nodes - Pure data sources driven by an editable control.

These nodes have no exec ports and are only ever evaluated through the
dataflow engine.
"""
from ..core.base_node import BaseNode, NodeMetadata
from ..core.controls import InputControl
from ..core.ports import ANY_SOCKET, OutputPort


class TextNode(BaseNode):
    """
    Text literal.

    Outputs the current value of its text control, or "" when empty.
    """
    node_type = "Text"
    metadata = NodeMetadata(
        category="Values",
        display_name="Text",
        description="Editable text value",
        color="#00CC66"
    )
    width = 180
    height = 120

    def __init__(self, initial: str = "", label=None, node_id=None):
        self._initial = initial
        super().__init__(label=label, node_id=node_id)

    def _setup_ports(self):
        self.add_control("value", InputControl("text", initial=self._initial))
        self.add_output("value", OutputPort(ANY_SOCKET, "Text"))

    @property
    def value(self) -> str:
        return self.get_control("value").value or ""

    def data(self, inputs):
        return {"value": self.value}

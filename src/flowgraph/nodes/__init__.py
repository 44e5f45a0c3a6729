# -*- coding: utf-8 -*-
"""
Built-in node types and the default catalog.
"""
from ..core.registry import NodeRegistry
from ..execution.dataflow import DataflowEngine
from .events import StartNode
from .utilities import LogNode, LogSink
from .values import TextNode


def build_default_catalog(log: LogSink, dataflow: DataflowEngine) -> NodeRegistry:
    """
    Catalog with the built-in node types.

    Args:
        log: Sink handed to every Log node
        dataflow: Engine Log nodes resolve their message through
    """
    catalog = NodeRegistry()
    catalog.register("Start", StartNode)
    catalog.register("Log", lambda: LogNode(log, dataflow))
    catalog.register("Text", lambda: TextNode(""))
    return catalog


__all__ = [
    "StartNode",
    "LogNode",
    "LogSink",
    "TextNode",
    "build_default_catalog",
]

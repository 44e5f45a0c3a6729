# -*- coding: utf-8 -*-
"""
Editor Session - Headless assembly of graph, engines, catalog and scheduler.

Rendering, layout and menus live in the host application; this module
wires up everything they drive. create_editor() also builds the demo
program: Start -> Log, with a Text node feeding the Log message.

Example:
    session = await create_editor(print)
    text = session.add_node_from_catalog("Text")
    ...
    await session.destroy()
"""
from typing import Optional
from loguru import logger

from .config import EditorConfig
from .core.base_node import BaseNode
from .core.graph import NodeGraph
from .core.registry import NodeRegistry
from .execution.classifiers import control_flow_ports, dataflow_ports
from .execution.control_flow import ControlFlowEngine
from .execution.dataflow import DataflowEngine
from .execution.scheduler import ErrorHandler, GraphScheduler
from .nodes import LogNode, LogSink, StartNode, TextNode, build_default_catalog


class EditorSession:
    """
    One editor instance and the runtime attached to it.

    Attributes:
        graph: Node graph owned by the session
        dataflow: Pull engine used by Log nodes
        control_flow: Walker driven by the scheduler
        catalog: Node types offered to the node-creation menu
        scheduler: Periodic driver
        start_node: Start node of the demo program
    """

    def __init__(
        self,
        graph: NodeGraph,
        dataflow: DataflowEngine,
        control_flow: ControlFlowEngine,
        catalog: NodeRegistry,
        scheduler: GraphScheduler,
        start_node: StartNode
    ):
        self.graph = graph
        self.dataflow = dataflow
        self.control_flow = control_flow
        self.catalog = catalog
        self.scheduler = scheduler
        self.start_node = start_node
        self._destroyed = False

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def add_node_from_catalog(self, name: str) -> BaseNode:
        """Create a node from a catalog entry and add it to the graph."""
        if self._destroyed:
            raise RuntimeError("Editor session has been destroyed")
        return self.graph.add_node(self.catalog.create(name))

    async def destroy(self) -> None:
        """Stop the scheduler and release the graph. Safe to call twice."""
        if self._destroyed:
            return
        self._destroyed = True
        await self.scheduler.stop()
        self.graph.clear()
        self.dataflow.reset()
        logger.info("Editor session destroyed")


async def create_editor(
    log: LogSink,
    config: Optional[EditorConfig] = None,
    autostart: Optional[bool] = None,
    on_error: Optional[ErrorHandler] = None
) -> EditorSession:
    """
    Build an editor session with the demo program loaded.

    Args:
        log: Host sink receiving Log node output
        config: Settings (defaults when omitted)
        autostart: Start the scheduler right away; falls back to
            config.scheduler.autostart
        on_error: Host handler for errors raised by a pass

    Returns:
        The assembled session
    """
    config = config or EditorConfig()

    graph = NodeGraph("Editor")
    dataflow = DataflowEngine(graph, dataflow_ports)
    control_flow = ControlFlowEngine(graph, control_flow_ports)
    catalog = build_default_catalog(log, dataflow)

    start = graph.add_node(StartNode())
    text = graph.add_node(TextNode("log"))
    log_node = graph.add_node(LogNode(log, dataflow))

    graph.connect(start.node_id, "exec", log_node.node_id, "exec")
    graph.connect(text.node_id, "value", log_node.node_id, "message")

    scheduler = GraphScheduler(
        dataflow,
        control_flow,
        [start.node_id],
        period=config.scheduler.period,
        on_error=on_error
    )
    session = EditorSession(graph, dataflow, control_flow, catalog, scheduler, start)

    if autostart is None:
        autostart = config.scheduler.autostart
    if autostart:
        await scheduler.start()

    logger.info(f"Editor created: {graph}")
    return session

# -*- coding: utf-8 -*-
"""
Control-Flow Engine - Push-based walk of execution connections.

A pass starts at one node and carries the execution token along the
outputs each node chooses through its forward capability. Propagation is
depth-first: a node, and everything it forwards to, finishes before
control returns to whoever invoked it.

Example:
    class Branch(BaseNode):
        async def execute(self, input_name, forward):
            inputs = await dataflow.fetch_inputs(self.node_id)
            await forward("true" if inputs["condition"][0] else "false")

    engine = ControlFlowEngine(graph, classify)
    await engine.execute(start.node_id)
"""
import asyncio
import inspect
from typing import List, Optional, Sequence, Set
from loguru import logger

from ..core.base_node import BaseNode
from ..core.graph import NodeGraph
from .classifiers import PortClassifier, control_flow_ports


class ForwardCall:
    """
    One activation of an output, returned by Forward.__call__.

    Awaiting it walks everything downstream of the output. The walk runs
    once; later awaits wait for that walk and re-raise its error. A call
    that the node never awaits is run by the engine right after the
    node's execute() returns, and one still running (e.g. wrapped in a
    task) is waited for. A downstream error the node never received
    through an await of its own is raised from the invocation.
    """

    def __init__(self, forward: 'Forward', output: str):
        self._forward = forward
        self.output = output
        self._started = False
        self._finished = asyncio.Event()
        self._error: Optional[Exception] = None
        self._raised_to: Set[asyncio.Task] = set()

    @property
    def started(self) -> bool:
        return self._started

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def error(self) -> Optional[Exception]:
        return self._error

    async def _run(self) -> None:
        if not self._started:
            self._started = True
            try:
                await self._forward._engine._forward(self._forward.node, self.output)
            except Exception as e:
                self._error = e
                self._forward._downstream_errors.append(e)
            finally:
                self._finished.set()
        else:
            await self._finished.wait()
        if self._error is not None:
            self._raised_to.add(asyncio.current_task())
            raise self._error

    def _raise_unseen(self) -> None:
        """Re-raise the walk's error unless the current task already got it."""
        if self._error is not None and asyncio.current_task() not in self._raised_to:
            self._raised_to.add(asyncio.current_task())
            raise self._error

    def __await__(self):
        return self._run().__await__()

    def __repr__(self) -> str:
        return f"<ForwardCall {self._forward.node}.{self.output} done={self.done}>"


class Forward:
    """
    Capability handed to BaseNode.execute() for one invocation.

    Calling it with an output name activates that output. It stops
    accepting calls once the invocation is over.
    """

    def __init__(self, engine: 'ControlFlowEngine', node: BaseNode, outputs: Sequence[str]):
        self._engine = engine
        self.node = node
        self.outputs = list(outputs)
        self._calls: List[ForwardCall] = []
        self._downstream_errors: List[Exception] = []
        self._closed = False

    def __call__(self, output: str) -> ForwardCall:
        if self._closed:
            raise RuntimeError(f"forward('{output}') called after {self.node} finished")
        if output not in self.outputs:
            raise ValueError(f"'{output}' is not a control-flow output of {self.node}")
        call = ForwardCall(self, output)
        self._calls.append(call)
        return call

    async def _drain(self) -> None:
        # Unstarted calls run in call order; running ones are waited for
        i = 0
        while i < len(self._calls):
            call = self._calls[i]
            if call.done:
                call._raise_unseen()
            else:
                await call
            i += 1

    def _close(self) -> None:
        self._closed = True

    def _raised_downstream(self, error: Exception) -> bool:
        return any(error is e for e in self._downstream_errors)


class ControlFlowEngine:
    """
    Walks execution connections and invokes node side effects.

    Nodes without any control port are never invoked by the walker; they
    are only evaluated through the dataflow engine.

    Attributes:
        graph: Graph being walked (read only)
        classify_ports: Selects the control ports of a node
    """

    def __init__(self, graph: NodeGraph, classify_ports: Optional[PortClassifier] = None):
        self.graph = graph
        self.classify_ports = classify_ports or control_flow_ports

    async def execute(self, node_id: str, input_name: Optional[str] = None) -> None:
        """
        Run one pass starting at a node.

        Args:
            node_id: Start node
            input_name: Control input the token arrives on (None for a
                trigger node)

        Raises:
            MissingNode: If the start node or a walked target is absent
            Exception: Whatever a node's execute() raised; the rest of the
                pass is abandoned
        """
        node = self.graph.require_node(node_id)
        logger.debug(f"Control-flow pass from {node}")
        await self._invoke(node, input_name)
        logger.debug(f"Control-flow pass from {node} finished")

    async def _invoke(self, node: BaseNode, input_name: Optional[str]) -> None:
        selection = self.classify_ports(node)
        if not selection.inputs and not selection.outputs:
            logger.debug(f"{node} has no control ports, not executing")
            return
        if input_name is not None and input_name not in selection.inputs:
            raise ValueError(f"'{input_name}' is not a control-flow input of {node}")

        forward = Forward(self, node, selection.outputs)
        node.clear_error()
        try:
            result = node.execute(input_name, forward)
            if inspect.isawaitable(result):
                await result
            await forward._drain()
        except Exception as e:
            if not forward._raised_downstream(e):
                node.set_error(str(e))
                logger.debug(f"{node} failed: {e}")
            raise
        finally:
            forward._close()

    async def _forward(self, node: BaseNode, output: str) -> None:
        for conn in self.graph.get_connections_from_node(node.node_id, output):
            target = self.graph.require_node(conn.target_id)
            if conn.target_input not in self.classify_ports(target).inputs:
                logger.debug(f"Not forwarding along {conn}: target input is not a control input")
                continue
            await self._invoke(target, conn.target_input)

# -*- coding: utf-8 -*-
"""
Dataflow Engine - Pull-based, memoized resolution of node values.

Values are computed on demand: asking for a node's inputs resolves every
upstream node connected to its data inputs, calling each node's data()
once per pass. Call reset() before every pass.

Connections flagged is_loop are skipped during resolution: they
contribute no value and never count as a cycle. Any other revisit of a
node that is still being resolved raises CyclicDependency.

Example:
    dataflow = DataflowEngine(graph)
    dataflow.reset()
    inputs = await dataflow.fetch_inputs(log.node_id)
    message = inputs["message"][0] if inputs["message"] else ""
"""
import inspect
from typing import Any, Dict, List, Optional, Sequence
from loguru import logger

from ..core.errors import CyclicDependency
from ..core.graph import NodeGraph
from .classifiers import PortClassifier, dataflow_ports


class DataflowEngine:
    """
    Resolves data inputs by walking connections upstream.

    The memo cache is shared by every caller of this instance. Two passes
    running at once on the same instance race on it; give each concurrent
    pass its own engine or serialize them (GraphScheduler does).

    Attributes:
        graph: Graph being resolved (read only)
        classify_ports: Selects the data ports of a node
    """

    def __init__(self, graph: NodeGraph, classify_ports: Optional[PortClassifier] = None):
        self.graph = graph
        self.classify_ports = classify_ports or dataflow_ports
        self._cache: Dict[str, Dict[str, Any]] = {}

    def reset(self, node_id: Optional[str] = None) -> None:
        """
        Clear memoized results.

        Args:
            node_id: Only forget this node and everything downstream of it
                along data connections. Clears the whole cache when None.
        """
        if node_id is None:
            self._cache.clear()
            return

        pending = [node_id]
        seen = set()
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            self._cache.pop(current, None)

            node = self.graph.get_node(current)
            if node is None:
                continue
            outputs = self.classify_ports(node).outputs
            for conn in self.graph.get_connections_from_node(current):
                if conn.source_output in outputs:
                    pending.append(conn.target_id)

    def is_cached(self, node_id: str) -> bool:
        """Check whether the node was already resolved in this pass."""
        return node_id in self._cache

    async def fetch_inputs(self, node_id: str) -> Dict[str, List[Any]]:
        """
        Resolve the data inputs of a node.

        Args:
            node_id: Node whose inputs are requested

        Returns:
            Input name -> one value per incoming connection, in connection
            order. Unconnected inputs map to an empty list.

        Raises:
            MissingNode: If the node or an upstream node is absent
            CyclicDependency: If an unflagged cycle is found upstream
        """
        return await self._fetch_inputs(node_id, ())

    async def fetch(self, node_id: str) -> Dict[str, Any]:
        """
        Resolve a node's own outputs (the mapping its data() returned).

        Raises:
            MissingNode: If the node or an upstream node is absent
            CyclicDependency: If an unflagged cycle is found upstream
        """
        return dict(await self._fetch(node_id, ()))

    async def _fetch_inputs(self, node_id: str, path: Sequence[str]) -> Dict[str, List[Any]]:
        node = self.graph.require_node(node_id)
        path = (*path, node_id)

        inputs: Dict[str, List[Any]] = {}
        for name in self.classify_ports(node).inputs:
            values = []
            for conn in self.graph.get_connections_to_node(node_id, name):
                if conn.is_loop:
                    logger.debug(f"Skipping loop connection {conn}")
                    continue
                outputs = await self._fetch(conn.source_id, path)
                values.append(outputs.get(conn.source_output))
            inputs[name] = values
        return inputs

    async def _fetch(self, node_id: str, path: Sequence[str]) -> Dict[str, Any]:
        if node_id in path:
            raise CyclicDependency([*path[path.index(node_id):], node_id])

        cached = self._cache.get(node_id)
        if cached is not None:
            return cached

        node = self.graph.require_node(node_id)
        inputs = await self._fetch_inputs(node_id, path)

        result = node.data(inputs)
        if inspect.isawaitable(result):
            result = await result
        outputs = dict(result or {})

        self._cache[node_id] = outputs
        logger.debug(f"Resolved {node}: {list(outputs)}")
        return outputs

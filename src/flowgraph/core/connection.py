# -*- coding: utf-8 -*-
"""
Connection - Directed edge between an output port and an input port.

A connection is identified by its endpoints:
(source node, source output, target node, target input). It is
immutable once created; edit the graph by removing and re-adding.

Example:
    conn = NodeConnection(start.node_id, "exec", log.node_id, "exec")
    graph.add_connection(conn)
"""
from typing import Tuple

ConnectionKey = Tuple[str, str, str, str]


class NodeConnection:
    """
    Represents a connection between two ports.

    Connections are directional: source (output) -> target (input).

    Attributes:
        source_id: Node producing the value / control token
        source_output: Output port name on the source node
        target_id: Node consuming the value / control token
        target_input: Input port name on the target node
        is_loop: Marks an intentional cycle (skipped by dataflow resolution)
    """
    __slots__ = ("_key", "_is_loop")

    def __init__(
        self,
        source_id: str,
        source_output: str,
        target_id: str,
        target_input: str,
        is_loop: bool = False
    ):
        self._key: ConnectionKey = (source_id, source_output, target_id, target_input)
        self._is_loop = bool(is_loop)

    @property
    def key(self) -> ConnectionKey:
        return self._key

    @property
    def source_id(self) -> str:
        return self._key[0]

    @property
    def source_output(self) -> str:
        return self._key[1]

    @property
    def target_id(self) -> str:
        return self._key[2]

    @property
    def target_input(self) -> str:
        return self._key[3]

    @property
    def is_loop(self) -> bool:
        return self._is_loop

    @property
    def connection_id(self) -> str:
        """Stable string form of the key, used for lookups."""
        return "{}:{}->{}:{}".format(*self._key)

    def touches(self, node_id: str) -> bool:
        """Check whether either endpoint is the given node."""
        return self.source_id == node_id or self.target_id == node_id

    def __repr__(self) -> str:
        loop = " loop" if self._is_loop else ""
        return (
            f"<Connection {self.source_id[:8]}.{self.source_output} -> "
            f"{self.target_id[:8]}.{self.target_input}{loop}>"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeConnection):
            return False
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

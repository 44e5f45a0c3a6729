# -*- coding: utf-8 -*-
"""
NodeGraph - Container for nodes and connections.

The graph owns every node and connection of an editor session and keeps
per-node adjacency lists so the engines can walk it in O(degree).
The engines only read the graph; mutation belongs to the editor session.

Example:
    graph = NodeGraph("My Workflow")

    start = graph.add_node(StartNode())
    log = graph.add_node(LogNode(print, dataflow))

    graph.connect(start.node_id, "exec", log.node_id, "exec")
"""
from typing import Dict, Iterator, List, Optional
from loguru import logger

from .base_node import BaseNode
from .connection import NodeConnection
from .errors import InvalidConnection, MissingNode
from .signal import Signal

EXEC_PORT = "exec"


class NodeGraph:
    """
    Container for nodes and connections.

    Invariant: every connection references nodes currently in the graph.
    Connections are kept in registration order, which is also the order
    the control-flow engine fans out in.

    Attributes:
        name: Human-readable graph name
        nodes: Dictionary of node_id -> BaseNode
        connections: Dictionary of connection_id -> NodeConnection
    """

    def __init__(self, name: str = "Untitled Graph"):
        """
        Create a new node graph.

        Args:
            name: Human-readable name for this graph
        """
        self.name = name
        self.nodes: Dict[str, BaseNode] = {}
        self.connections: Dict[str, NodeConnection] = {}
        self._incoming: Dict[str, List[NodeConnection]] = {}
        self._outgoing: Dict[str, List[NodeConnection]] = {}

        self.on_node_added = Signal("NodeAdded")
        self.on_node_removed = Signal("NodeRemoved")
        self.on_connection_added = Signal("ConnectionAdded")
        self.on_connection_removed = Signal("ConnectionRemoved")

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: BaseNode) -> BaseNode:
        """
        Add a node to the graph.

        Args:
            node: Node instance to add

        Returns:
            The added node (for chaining)

        Raises:
            ValueError: If a node with the same id is already present
        """
        if node.node_id in self.nodes:
            raise ValueError(f"Node already in graph: {node}")
        self.nodes[node.node_id] = node
        self._incoming[node.node_id] = []
        self._outgoing[node.node_id] = []
        logger.debug(f"Added node: {node}")
        self.on_node_added.emit(node)
        return node

    def remove_node(self, node_id: str) -> Optional[BaseNode]:
        """
        Remove a node and all its connections.

        Args:
            node_id: ID of node to remove

        Returns:
            The removed node, or None if it was not in the graph
        """
        node = self.nodes.get(node_id)
        if not node:
            return None

        attached = self._incoming[node_id] + self._outgoing[node_id]
        for conn in dict.fromkeys(attached):
            self.remove_connection(conn)

        del self.nodes[node_id]
        del self._incoming[node_id]
        del self._outgoing[node_id]
        logger.debug(f"Removed node: {node}")
        self.on_node_removed.emit(node)
        return node

    def get_node(self, node_id: str) -> Optional[BaseNode]:
        """Get a node by ID."""
        return self.nodes.get(node_id)

    def require_node(self, node_id: str) -> BaseNode:
        """
        Get a node by ID or fail.

        Raises:
            MissingNode: If the id is unknown
        """
        node = self.nodes.get(node_id)
        if node is None:
            raise MissingNode(node_id)
        return node

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def clear(self) -> None:
        """Remove all nodes and connections."""
        for node_id in list(self.nodes.keys()):
            self.remove_node(node_id)

    # =========================================================================
    # Connection Management
    # =========================================================================

    def connect(
        self,
        source_node_id: str,
        source_output: str,
        target_node_id: str,
        target_input: str,
        is_loop: bool = False
    ) -> NodeConnection:
        """
        Create a connection between two nodes.

        Args:
            source_node_id: ID of node with output port
            source_output: Name of output port
            target_node_id: ID of node with input port
            target_input: Name of input port
            is_loop: Mark the connection as an intentional cycle

        Returns:
            The created connection

        Raises:
            MissingNode: If either node is not in the graph
            InvalidConnection: If the ports are unknown, the sockets differ,
                or the target input is single-connection and occupied
        """
        connection = NodeConnection(
            source_node_id, source_output, target_node_id, target_input, is_loop
        )
        return self.add_connection(connection)

    def add_connection(self, connection: NodeConnection) -> NodeConnection:
        """
        Validate and register a connection.

        See connect() for the failure modes. The graph is unchanged when
        validation fails.
        """
        self._validate(connection)

        self.connections[connection.connection_id] = connection
        self._outgoing[connection.source_id].append(connection)
        self._incoming[connection.target_id].append(connection)

        logger.debug(f"Connected: {connection}")
        self.on_connection_added.emit(connection)
        return connection

    def _validate(self, connection: NodeConnection) -> None:
        source = self.require_node(connection.source_id)
        target = self.require_node(connection.target_id)

        out_port = source.get_output(connection.source_output)
        in_port = target.get_input(connection.target_input)

        if out_port is None:
            raise InvalidConnection(
                f"{source} has no output '{connection.source_output}'"
            )
        if in_port is None:
            raise InvalidConnection(
                f"{target} has no input '{connection.target_input}'"
            )
        if not out_port.socket.compatible_with(in_port.socket):
            raise InvalidConnection(
                f"Cannot connect {out_port.socket} to {in_port.socket}"
            )
        if connection.connection_id in self.connections:
            raise InvalidConnection(f"Already connected: {connection}")
        if not in_port.multiple_connections and self.get_connections_to_node(
            connection.target_id, connection.target_input
        ):
            raise InvalidConnection(
                f"Input '{connection.target_input}' of {target} is already connected"
            )
        if not out_port.multiple_connections and self.get_connections_from_node(
            connection.source_id, connection.source_output
        ):
            raise InvalidConnection(
                f"Output '{connection.source_output}' of {source} is already connected"
            )

    def disconnect(self, connection_id: str) -> Optional[NodeConnection]:
        """
        Remove a connection.

        Args:
            connection_id: ID of connection to remove

        Returns:
            The removed connection, or None if it was not registered
        """
        conn = self.connections.get(connection_id)
        if conn is None:
            return None
        return self.remove_connection(conn)

    def remove_connection(self, connection: NodeConnection) -> Optional[NodeConnection]:
        """Remove a connection given by value."""
        conn = self.connections.pop(connection.connection_id, None)
        if conn is None:
            return None
        self._outgoing[conn.source_id].remove(conn)
        self._incoming[conn.target_id].remove(conn)
        logger.debug(f"Disconnected: {conn}")
        self.on_connection_removed.emit(conn)
        return conn

    def get_connection(self, connection_id: str) -> Optional[NodeConnection]:
        """Get a connection by ID."""
        return self.connections.get(connection_id)

    def get_connections_from_node(
        self, node_id: str, output: Optional[str] = None
    ) -> List[NodeConnection]:
        """
        Get connections originating from a node, in registration order.

        Args:
            node_id: Source node ID
            output: Restrict to one output port
        """
        conns = self._outgoing.get(node_id, [])
        if output is None:
            return list(conns)
        return [conn for conn in conns if conn.source_output == output]

    def get_connections_to_node(
        self, node_id: str, input: Optional[str] = None
    ) -> List[NodeConnection]:
        """
        Get connections going into a node, in registration order.

        Args:
            node_id: Target node ID
            input: Restrict to one input port
        """
        conns = self._incoming.get(node_id, [])
        if input is None:
            return list(conns)
        return [conn for conn in conns if conn.target_input == input]

    # =========================================================================
    # Execution Helpers
    # =========================================================================

    def find_start_nodes(self, exec_name: str = EXEC_PORT) -> List[BaseNode]:
        """
        Find all entry point nodes.

        A start node has an execution output but no execution input.

        Returns:
            List of nodes that can begin execution
        """
        return [
            node for node in self.nodes.values()
            if exec_name in node.outputs and exec_name not in node.inputs
        ]

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[BaseNode]:
        return iter(list(self.nodes.values()))

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"<NodeGraph '{self.name}' nodes={len(self.nodes)} conn={len(self.connections)}>"

# -*- coding: utf-8 -*-
"""
NodeRegistry - Catalog of node types available for creation.

Maps a human-readable type name to a zero-argument factory. The
context-menu collaborator lists menu_items(); the engines never look
at the catalog.

Example:
    catalog = NodeRegistry()
    catalog.register("Start", StartNode)
    catalog.register("Text", lambda: TextNode(""))

    @catalog.register("Log")
    def make_log():
        return LogNode(log, dataflow)

    node = catalog.create("Text")
"""
from typing import Callable, Dict, List, Optional, Tuple
from loguru import logger

from .base_node import BaseNode

NodeFactory = Callable[[], BaseNode]


class NodeRegistry:
    """
    Ordered name -> factory mapping.

    Registration order is preserved so menus list entries the way they
    were registered.
    """

    def __init__(self):
        self._factories: Dict[str, NodeFactory] = {}

    def register(self, name: str, factory: Optional[NodeFactory] = None):
        """
        Register a factory under a name.

        Can be used directly or as a decorator when factory is omitted.

        Raises:
            ValueError: If the name is already registered
        """
        if factory is None:
            def decorator(fn: NodeFactory) -> NodeFactory:
                self.register(name, fn)
                return fn
            return decorator

        if name in self._factories:
            raise ValueError(f"Node type already registered: {name}")
        self._factories[name] = factory
        logger.debug(f"Registered node type: {name}")
        return factory

    def unregister(self, name: str) -> None:
        """Remove a catalog entry (no-op if absent)."""
        self._factories.pop(name, None)

    def create(self, name: str) -> BaseNode:
        """
        Build a new node from the named entry.

        Raises:
            KeyError: If the name is unknown
            TypeError: If the factory does not produce a BaseNode
        """
        factory = self._factories.get(name)
        if factory is None:
            raise KeyError(f"Unknown node type: {name}")
        node = factory()
        if not isinstance(node, BaseNode):
            raise TypeError(
                f"Factory for '{name}' returned {type(node).__name__}, expected a node"
            )
        return node

    def names(self) -> List[str]:
        return list(self._factories)

    def menu_items(self) -> List[Tuple[str, NodeFactory]]:
        """(name, factory) pairs for building a node-creation menu."""
        return list(self._factories.items())

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

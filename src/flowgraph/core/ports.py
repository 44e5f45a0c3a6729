# -*- coding: utf-8 -*-
"""
Ports - Sockets and the input/output endpoints that carry them.

A Socket is the type identity of an endpoint. Two ports can be linked
only when their sockets have the same name; there is no subtyping.

Example:
    text = Socket(name="text")
    node.add_input("message", InputPort(text, "Message"))
    node.add_output("value", OutputPort(text, "Value"))
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Socket(BaseModel):
    """
    Typed identity of a connection endpoint.

    Attributes:
        name: Identity used for compatibility checks
    """
    model_config = ConfigDict(frozen=True)

    name: str

    def compatible_with(self, other: "Socket") -> bool:
        """Exact identity match."""
        return self.name == other.name

    def __str__(self) -> str:
        return self.name


# Shared by every built-in node type
ANY_SOCKET = Socket(name="socket")


class BasePort:
    """
    Common part of input and output ports.

    Attributes:
        socket: Socket this port accepts or produces
        label: Human-readable caption
        multiple_connections: Whether more than one connection may attach
    """
    default_multiple = False

    def __init__(
        self,
        socket: Socket,
        label: str = "",
        multiple_connections: Optional[bool] = None
    ):
        self.socket = socket
        self.label = label
        self.multiple_connections = (
            self.default_multiple if multiple_connections is None
            else multiple_connections
        )

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} socket={self.socket.name} "
            f"multi={self.multiple_connections}>"
        )


class InputPort(BasePort):
    """Input endpoint. Single-connection unless stated otherwise."""
    default_multiple = False


class OutputPort(BasePort):
    """Output endpoint. Fans out to any number of inputs by default."""
    default_multiple = True

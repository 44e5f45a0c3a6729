# -*- coding: utf-8 -*-
"""
Base Node - Abstract base class for all nodes.

Provides:
- Unique identification
- Port and control management
- Metadata for display
- The data()/execute() hooks used by the engines

Example:
    class MyNode(BaseNode):
        node_type = "MyNode"
        metadata = NodeMetadata(category="Custom", display_name="My Node")

        def _setup_ports(self):
            self.add_input("exec", InputPort(ANY_SOCKET, "Exec", True))
            self.add_input("value", InputPort(ANY_SOCKET, "Value"))
            self.add_output("exec", OutputPort(ANY_SOCKET, "Exec"))

        async def execute(self, input_name, forward):
            await forward("exec")
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from pydantic import BaseModel
from uuid import uuid4

from .controls import InputControl
from .ports import InputPort, OutputPort

if TYPE_CHECKING:
    from ..execution.control_flow import Forward


class NodeMetadata(BaseModel):
    """
    Node metadata for the catalog and display.

    Attributes:
        category: Category for grouping in the node menu
        display_name: Human-readable name shown in UI
        description: Tooltip description
        color: Hex color for node header (e.g., "#4A90D9")
    """
    category: str = "General"
    display_name: str = ""
    description: str = ""
    color: str = "#4A90D9"


class BaseNode(ABC):
    """
    Abstract base class for all nodes.

    Subclasses declare their shape in _setup_ports(). Once the constructor
    returns the node is sealed: ports and controls can no longer be added,
    only control values may change.

    Attributes:
        node_id: Unique identifier for this node instance
        label: Caption shown in the editor
        width: Display width (rendering only)
        height: Display height (rendering only)
    """
    node_type: str = "BaseNode"
    metadata: NodeMetadata = NodeMetadata()
    width: float = 180.0
    height: float = 90.0

    def __init__(self, label: Optional[str] = None, node_id: Optional[str] = None):
        """
        Initialize a new node instance.

        Args:
            label: Caption (defaults to metadata.display_name or node_type)
            node_id: Optional unique ID (generated if not provided)
        """
        self.node_id = node_id or str(uuid4())
        self.label = label or self.metadata.display_name or self.node_type
        self._inputs: Dict[str, InputPort] = {}
        self._outputs: Dict[str, OutputPort] = {}
        self._controls: Dict[str, InputControl] = {}
        self._error_message: Optional[str] = None
        self._sealed = False
        self._setup_ports()
        self._sealed = True

    @abstractmethod
    def _setup_ports(self) -> None:
        """Define inputs, outputs and controls. Must be implemented by subclasses."""
        pass

    def _check_mutable(self, kind: str, name: str, existing: Dict[str, Any]) -> None:
        if self._sealed:
            raise RuntimeError(f"{self!r} is sealed, cannot add {kind} '{name}'")
        if name in existing:
            raise ValueError(f"{self!r} already has {kind} '{name}'")

    def add_input(self, name: str, port: InputPort) -> InputPort:
        """
        Add an input port to this node.

        Args:
            name: Port name, unique among this node's inputs
            port: Port instance to add

        Returns:
            The added port (for chaining)
        """
        self._check_mutable("input", name, self._inputs)
        self._inputs[name] = port
        return port

    def add_output(self, name: str, port: OutputPort) -> OutputPort:
        """
        Add an output port to this node.

        Args:
            name: Port name, unique among this node's outputs
            port: Port instance to add

        Returns:
            The added port (for chaining)
        """
        self._check_mutable("output", name, self._outputs)
        self._outputs[name] = port
        return port

    def add_control(self, name: str, control: InputControl) -> InputControl:
        """Add an editable control to this node."""
        self._check_mutable("control", name, self._controls)
        self._controls[name] = control
        return control

    def get_input(self, name: str) -> Optional[InputPort]:
        """Get an input port by name."""
        return self._inputs.get(name)

    def get_output(self, name: str) -> Optional[OutputPort]:
        """Get an output port by name."""
        return self._outputs.get(name)

    def get_control(self, name: str) -> Optional[InputControl]:
        """Get a control by name."""
        return self._controls.get(name)

    @property
    def inputs(self) -> Dict[str, InputPort]:
        """Get all input ports, in declaration order."""
        return self._inputs.copy()

    @property
    def outputs(self) -> Dict[str, OutputPort]:
        """Get all output ports, in declaration order."""
        return self._outputs.copy()

    @property
    def controls(self) -> Dict[str, InputControl]:
        """Get all controls."""
        return self._controls.copy()

    def data(self, inputs: Dict[str, List[Any]]) -> Dict[str, Any]:
        """
        Compute output values from resolved inputs.

        Called by the dataflow engine at most once per pass. May be
        overridden as a coroutine.

        Args:
            inputs: Input name -> one value per incoming connection

        Returns:
            Output name -> value
        """
        return {}

    def execute(self, input_name: Optional[str], forward: 'Forward') -> Any:
        """
        Run the node's side effect when control reaches it.

        May be overridden as a coroutine. Call forward(output_name) to
        continue the walk along an output.

        Args:
            input_name: Control input that received the token (None at the
                start node)
            forward: Capability scoped to this invocation
        """
        return None

    def set_error(self, message: str) -> None:
        """
        Set error state on this node.

        Args:
            message: Error message to display
        """
        self._error_message = message

    def clear_error(self) -> None:
        """Clear error state."""
        self._error_message = None

    @property
    def has_error(self) -> bool:
        """Check if node has an error."""
        return self._error_message is not None

    @property
    def error_message(self) -> Optional[str]:
        """Get current error message."""
        return self._error_message

    def __repr__(self) -> str:
        return f"<{self.node_type}({self.node_id[:8]})>"

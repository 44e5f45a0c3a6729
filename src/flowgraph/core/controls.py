# -*- coding: utf-8 -*-
"""
Controls - User-editable literal values attached to nodes.

Controls are the only part of a node that may change after creation.
"""
from typing import Any, Optional

from .signal import Signal


class InputControl:
    """
    Editable literal value (text field or number field).

    Attributes:
        kind: "text" or "number"
        initial: Value the control was created with
        value: Current value
        readonly: Rejects edits when True
        on_changed: Signal emitted with (control, value) after each edit
    """
    KINDS = ("text", "number")

    def __init__(self, kind: str = "text", initial: Any = None, readonly: bool = False):
        if kind not in self.KINDS:
            raise ValueError(f"Unknown control kind: {kind}")
        self.kind = kind
        self.initial = initial
        self.value: Optional[Any] = initial
        self.readonly = readonly
        self.on_changed = Signal("ControlChanged")

    def set_value(self, value: Any) -> None:
        """
        Replace the current value.

        Raises:
            ValueError: If the control is read-only, or a number control
                receives something that is not a number
        """
        if self.readonly:
            raise ValueError("Control is read-only")
        if self.kind == "number" and value is not None:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Number control cannot hold {value!r}")
        self.value = value
        self.on_changed.emit(self, value)

    def __repr__(self) -> str:
        return f"<InputControl {self.kind}={self.value!r}>"

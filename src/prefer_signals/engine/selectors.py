"""Node selectors: descriptors that decide which nodes a listener receives.

A rule registers callbacks keyed by Selector. The traversal calls a
callback for every node whose kind matches and whose optional attribute
constraints hold:

    readonly        -- field declarations with this readonly flag
    callee_name     -- decorators / calls / new expressions whose invoked
                       name is exactly this identifier
    callee_pattern  -- same, but the invoked name must match this regex
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..scanning.syntax import (
    CallExpression,
    Decorator,
    Identifier,
    NewExpression,
    Node,
    NodeKind,
)


def invoked_name(node: Node) -> Optional[str]:
    """Name of the identifier a decorator, call or ``new`` invokes.

    ``@Input()`` -> "Input"; ``@Input`` (no call) and ``@ng.Input()`` -> None.
    """
    target = node.expression if isinstance(node, Decorator) else node
    if isinstance(target, (CallExpression, NewExpression)) and isinstance(target.callee, Identifier):
        return target.callee.name
    return None


@dataclass(frozen=True)
class Selector:
    kind: NodeKind
    readonly: Optional[bool] = None
    callee_name: Optional[str] = None
    callee_pattern: Optional[str] = None

    def matches(self, node: Node) -> bool:
        if node.kind is not self.kind:
            return False

        if self.readonly is not None and getattr(node, "readonly", False) != self.readonly:
            return False

        if self.callee_name is not None or self.callee_pattern is not None:
            name = invoked_name(node)
            if name is None:
                return False
            if self.callee_name is not None and name != self.callee_name:
                return False
            if self.callee_pattern is not None and re.search(self.callee_pattern, name) is None:
                return False

        return True

    def __str__(self) -> str:
        text = self.kind.value
        if self.readonly is not None:
            text += f":not([readonly={str(not self.readonly).lower()}])"
        if self.callee_name is not None:
            text += f'[expression.callee.name="{self.callee_name}"]'
        if self.callee_pattern is not None:
            text += f"[expression.callee.name=/{self.callee_pattern}/]"
        return text


NEW_EXPRESSION = Selector(NodeKind.NEW_EXPRESSION)
MUTABLE_PROPERTY_DEFINITION = Selector(NodeKind.PROPERTY_DEFINITION, readonly=False)
INPUT_DECORATOR = Selector(NodeKind.DECORATOR, callee_name="Input")

"""Traversal: feeds a unit's nodes to a rule's listeners."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from ..scanning.syntax import Node, SourceUnit
from .selectors import Selector

if TYPE_CHECKING:
    from ..config import RuleOptions
    from ..diagnostics import Diagnostic
    from ..rules.base import Rule
    from .context import RuleContext

Listener = dict[Selector, Callable[[Node], None]]


def run_rule(rule: Rule, unit: SourceUnit, options: RuleOptions, context: RuleContext) -> list[Diagnostic]:
    """Create the rule's listeners once and visit every node in document order.

    A node matching several selectors is passed to each of their callbacks,
    in registration order.
    """
    listener = rule.create(context, options)
    if not listener:
        return context.diagnostics

    entries = list(listener.items())
    for node in unit.nodes:
        for selector, callback in entries:
            if selector.matches(node):
                callback(node)

    return context.diagnostics

"""Rule model.

A rule is declarative metadata plus a factory. The factory receives a
RuleContext and the resolved options and returns the listeners the
traversal should call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from ..config import RuleOptions
    from ..engine.context import RuleContext
    from ..engine.traversal import Listener


@dataclass(frozen=True)
class Rule:
    """A lint rule.

    Attributes:
        name:            Unique rule identifier (e.g. "prefer-signals").
        description:     Human-readable explanation of what this detects.
        schema:          JSON-schema-shaped description of the options, with defaults.
        messages:        Message id -> template with ``{{name}}`` placeholders.
        create:          Callable (context, options) -> listeners.
        rule_type:       "problem", "suggestion" or "layout".
        has_suggestions: Whether diagnostics may carry suggested fixes.
    """

    name: str
    description: str
    schema: dict[str, Any]
    messages: dict[str, str]
    create: Callable[[RuleContext, RuleOptions], Listener]
    rule_type: str = "suggestion"
    has_suggestions: bool = False
    default_options: dict[str, Any] = field(default_factory=dict)

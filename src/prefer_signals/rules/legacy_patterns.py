"""Matchers for legacy constructs with a signal-based replacement.

Each matcher is purely syntactic and independent of the others:

    new BehaviorSubject(1)       -> observable wrapper
    @Input() name: string        -> input decorator
    @ViewChild('ref') ref        -> query decorator (also ViewChildren,
                                    ContentChild, ContentChildren)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import AbstractSet, Optional

from ..engine.selectors import invoked_name
from ..scanning.syntax import Decorator, Identifier, NewExpression

INPUT_DECORATOR_NAME = "Input"
QUERY_DECORATOR_NAMES: tuple[str, ...] = ("ContentChild", "ContentChildren", "ViewChild", "ViewChildren")
QUERY_DECORATOR_PATTERN = rf"^({'|'.join(QUERY_DECORATOR_NAMES)})$"

_QUERY_DECORATOR_RE = re.compile(QUERY_DECORATOR_PATTERN)


@dataclass(frozen=True)
class QueryDecoratorMatch:
    decorator: str
    function: str


def signal_function_name(decorator_name: str) -> str:
    """``ViewChild`` -> ``viewChild``: lowercase the first character only."""
    return decorator_name[:1].lower() + decorator_name[1:]


def match_observable_wrapper(node: NewExpression, types_to_replace: AbstractSet[str]) -> Optional[str]:
    """Constructor name when ``node`` builds one of ``types_to_replace``."""
    if isinstance(node.callee, Identifier) and node.callee.name in types_to_replace:
        return node.callee.name
    return None


def match_input_decorator(node: Decorator) -> bool:
    return invoked_name(node) == INPUT_DECORATOR_NAME


def match_query_decorator(node: Decorator) -> Optional[QueryDecoratorMatch]:
    name = invoked_name(node)
    if name is None or _QUERY_DECORATOR_RE.match(name) is None:
        return None
    return QueryDecoratorMatch(decorator=name, function=signal_function_name(name))

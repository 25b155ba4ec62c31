"""Deciding whether a class field holds a signal.

Three evidence sources, from most to least reliable:

    annotation   ``x: Signal<number>``           -- declared generic type
    call shape   ``x = input.required<number>()`` -- signal factory call
    checker      ``x = this.makeCounter()``       -- resolved type symbol

The classifier applies them in a fixed order:

    1. A field with a type annotation is decided by the annotation alone.
       A non-signal annotation is final even if the initializer looks like
       a signal factory.
    2. Without an annotation, the initializer's call shape is checked
       first. Only when it is inconclusive, and type checking is enabled,
       are the type services asked.
    3. A field with neither annotation nor initializer is never a candidate.

The type services are acquired on the first field that needs them and
reused for the rest of the run.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, AbstractSet, Optional

from ..logging_config import file_logger
from ..scanning.syntax import (
    CallExpression,
    Expression,
    Identifier,
    MemberExpression,
    PropertyDefinition,
    TypeNode,
    TypeReference,
)

if TYPE_CHECKING:
    from ..config import RuleOptions
    from ..engine.context import RuleContext
    from ..engine.type_services import TypeServices

logger = logging.getLogger(__name__)

KNOWN_SIGNAL_TYPES: frozenset[str] = frozenset({"InputSignal", "ModelSignal", "Signal", "WritableSignal"})
KNOWN_SIGNAL_CREATION_FUNCTIONS: frozenset[str] = frozenset(
    {
        "computed",
        "contentChild",
        "contentChildren",
        "input",
        "model",
        "signal",
        "toSignal",
        "viewChild",
        "viewChildren",
    }
)

# The only member a signal factory may be called through, as in input.required()
REQUIRED_MEMBER = "required"


class CallShape(enum.Enum):
    """Outcome of inspecting an initializer's call shape."""

    SIGNAL_FACTORY = "signal_factory"
    INCONCLUSIVE = "inconclusive"
    # Called through a member other than `required`: the field is settled
    UNSUPPORTED_MEMBER = "unsupported_member"


def annotation_evidence(type_annotation: Optional[TypeNode]) -> bool:
    """True for a generic reference to a known signal type, e.g. ``Signal<T>``.

    A bare ``Signal`` (no type arguments) and qualified names such as
    ``core.Signal<T>`` do not count.
    """
    return (
        isinstance(type_annotation, TypeReference)
        and len(type_annotation.type_arguments) > 0
        and isinstance(type_annotation.type_name, Identifier)
        and type_annotation.type_name.name in KNOWN_SIGNAL_TYPES
    )


def call_shape_evidence(value: Optional[Expression], creation_functions: AbstractSet[str]) -> CallShape:
    """Inspect an initializer for a call to a signal factory.

    At most one member access is unwrapped from the callee. A property
    named anything but ``required`` settles the field instead. Computed
    accesses (``fn["x"]()``) and private names (``this.#make()``) are
    unwrapped too.
    """
    if not isinstance(value, CallExpression):
        return CallShape.INCONCLUSIVE

    callee: Expression = value.callee
    if isinstance(callee, MemberExpression):
        if isinstance(callee.property, Identifier) and callee.property.name != REQUIRED_MEMBER:
            return CallShape.UNSUPPORTED_MEMBER
        callee = callee.object

    if isinstance(callee, Identifier) and callee.name in creation_functions:
        return CallShape.SIGNAL_FACTORY
    return CallShape.INCONCLUSIVE


def checker_evidence(services: TypeServices, value: Expression) -> bool:
    """True when the initializer's resolved type symbol is a known signal type."""
    symbol = services.get_type_at_location(value).get_symbol()
    name = symbol.name if symbol is not None else None
    return name is not None and name in KNOWN_SIGNAL_TYPES


class SignalCandidateClassifier:
    """Decides which mutable fields should be declared readonly.

    One instance serves one run; it holds the lazily acquired type services.
    """

    def __init__(self, context: RuleContext, options: RuleOptions) -> None:
        self._context = context
        self._use_type_checking = options.use_type_checking
        self._creation_functions = KNOWN_SIGNAL_CREATION_FUNCTIONS | options.signal_creation_functions
        self._services: Optional[TypeServices] = None
        self._log = file_logger(logger, context.path)

    @property
    def services(self) -> TypeServices:
        # Single-threaded traversal: check-then-set acquires at most once
        if self._services is None:
            self._services = self._context.get_type_services()
        return self._services

    def is_candidate(self, field: PropertyDefinition) -> bool:
        if field.type_annotation is not None:
            return annotation_evidence(field.type_annotation)

        if field.value is None:
            return False

        shape = call_shape_evidence(field.value, self._creation_functions)
        if shape is CallShape.SIGNAL_FACTORY:
            return True
        if shape is CallShape.UNSUPPORTED_MEMBER:
            return False

        if not self._use_type_checking:
            return False

        candidate = checker_evidence(self.services, field.value)
        if candidate:
            owner = field.class_name or "<anonymous class>"
            self._log.debug(f"line {field.span.start_line}: field of {owner} resolved to a signal type")
        return candidate

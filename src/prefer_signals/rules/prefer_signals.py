"""prefer-signals: prefer Angular signals over their legacy counterparts.

Reports:
    preferSignal       new BehaviorSubject(...) (or any configured type)
    preferInputSignal  @Input() decorators
    preferQuerySignal  @ViewChild(), @ViewChildren(), @ContentChild(), @ContentChildren()
    preferReadonly     signal-typed fields without ``readonly``, with a
                       suggestion that inserts the modifier
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import DEFAULT_OPTIONS, RuleOptions, options_to_dict
from ..diagnostics import Suggestion, TextEdit
from ..engine.selectors import INPUT_DECORATOR, MUTABLE_PROPERTY_DEFINITION, NEW_EXPRESSION, Selector
from ..scanning.syntax import Decorator, Identifier, NewExpression, NodeKind, PropertyDefinition
from .base import Rule
from .legacy_patterns import (
    QUERY_DECORATOR_PATTERN,
    QueryDecoratorMatch,
    match_input_decorator,
    match_observable_wrapper,
    match_query_decorator,
)
from .signal_evidence import SignalCandidateClassifier

if TYPE_CHECKING:
    from ..engine.context import RuleContext
    from ..engine.traversal import Listener

RULE_NAME = "prefer-signals"

QUERY_DECORATOR = Selector(NodeKind.DECORATOR, callee_pattern=QUERY_DECORATOR_PATTERN)

READONLY_MODIFIER = "readonly "

MESSAGES: dict[str, str] = {
    "preferSignal": "Prefer to use `Signal` instead of {{type}}",
    "preferInputSignal": "Prefer to use `InputSignal` type instead of `@Input()` decorator",
    "preferQuerySignal": "Prefer to use `{{function}}` function instead of `{{decorator}}` decorator",
    "preferReadonly": (
        "Prefer to declare `Signal` properties as `readonly` since they are not supposed to be reassigned"
    ),
    "suggestAddReadonlyModifier": "Add `readonly` modifier",
}

_DEFAULTS = options_to_dict(DEFAULT_OPTIONS)

SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "typesToReplace": {
            "type": "array",
            "items": {"type": "string"},
            "default": _DEFAULTS["typesToReplace"],
        },
        "preferReadonly": {"type": "boolean", "default": _DEFAULTS["preferReadonly"]},
        "preferInputSignal": {"type": "boolean", "default": _DEFAULTS["preferInputSignal"]},
        "preferQuerySignal": {"type": "boolean", "default": _DEFAULTS["preferQuerySignal"]},
        "useTypeChecking": {"type": "boolean", "default": _DEFAULTS["useTypeChecking"]},
        "signalCreationFunctions": {
            "type": "array",
            "items": {"type": "string"},
            "default": _DEFAULTS["signalCreationFunctions"],
        },
    },
    "additionalProperties": False,
}


# ── Diagnostic emitters ────────────────────────────────────────────


def report_prefer_signal(context: RuleContext, callee: Identifier, type_name: str) -> None:
    context.report(callee, "preferSignal", data={"type": type_name})


def report_prefer_input_signal(context: RuleContext, node: Decorator) -> None:
    context.report(node, "preferInputSignal")


def report_prefer_query_signal(context: RuleContext, node: Decorator, match: QueryDecoratorMatch) -> None:
    context.report(
        node,
        "preferQuerySignal",
        data={"function": match.function, "decorator": match.decorator},
    )


def report_prefer_readonly(context: RuleContext, field: PropertyDefinition) -> None:
    """Anchor at the field name; offer, never apply, the readonly insertion."""
    context.report(
        field.key,
        "preferReadonly",
        suggestions=[
            Suggestion(
                message_id="suggestAddReadonlyModifier",
                edit=TextEdit.insert_before(field.key, READONLY_MODIFIER),
            )
        ],
    )


# ── Factory ────────────────────────────────────────────────────────


def create(context: RuleContext, options: RuleOptions) -> Listener:
    """Register one listener per enabled check."""
    listener: Listener = {}

    if options.types_to_replace:

        def on_new_expression(node: NewExpression) -> None:
            type_name = match_observable_wrapper(node, options.types_to_replace)
            if type_name is not None:
                report_prefer_signal(context, node.callee, type_name)

        listener[NEW_EXPRESSION] = on_new_expression

    if options.prefer_readonly:
        classifier = SignalCandidateClassifier(context, options)

        def on_mutable_field(node: PropertyDefinition) -> None:
            if classifier.is_candidate(node):
                report_prefer_readonly(context, node)

        listener[MUTABLE_PROPERTY_DEFINITION] = on_mutable_field

    if options.prefer_input_signal:

        def on_input_decorator(node: Decorator) -> None:
            if match_input_decorator(node):
                report_prefer_input_signal(context, node)

        listener[INPUT_DECORATOR] = on_input_decorator

    if options.prefer_query_signal:

        def on_query_decorator(node: Decorator) -> None:
            match = match_query_decorator(node)
            if match is not None:
                report_prefer_query_signal(context, node, match)

        listener[QUERY_DECORATOR] = on_query_decorator

    return listener


PREFER_SIGNALS = Rule(
    name=RULE_NAME,
    description=(
        "Prefer to use signals instead of `BehaviorSubject`, `@Input()`, "
        "`@ViewChild()` and other query decorators"
    ),
    schema=SCHEMA,
    messages=MESSAGES,
    create=create,
    rule_type="suggestion",
    has_suggestions=True,
    default_options=_DEFAULTS,
)

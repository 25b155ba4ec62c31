"""Rule engine: selectors, traversal, rule context and type services."""

from .context import RuleContext
from .selectors import INPUT_DECORATOR, MUTABLE_PROPERTY_DEFINITION, NEW_EXPRESSION, Selector
from .traversal import Listener, run_rule
from .type_services import DeclarationTypeServices, TypeServices, TypeSymbol

__all__ = [
    "RuleContext",
    "Selector",
    "NEW_EXPRESSION",
    "MUTABLE_PROPERTY_DEFINITION",
    "INPUT_DECORATOR",
    "Listener",
    "run_rule",
    "DeclarationTypeServices",
    "TypeServices",
    "TypeSymbol",
]

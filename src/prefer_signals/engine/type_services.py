"""Type-resolution services offered to rules.

Rules depend only on the TypeServices protocol. The bundled implementation,
DeclarationTypeServices, resolves types from declarations in the same file:
it knows what ``new X()`` produces, what locally declared functions, methods
and getters return, and what locally declared variables and fields hold.
Anything imported or inferred resolves to a type without a symbol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..scanning.syntax import (
    CallExpression,
    Declaration,
    Expression,
    Identifier,
    MemberExpression,
    NewExpression,
    PrivateIdentifier,
    QualifiedName,
    SourceUnit,
    ThisExpression,
    TypeNode,
    TypeReference,
)


# Bounds chains like `a = b; b = c; ...` and self-references
_MAX_DEPTH = 8


@dataclass(frozen=True)
class TypeSymbol:
    name: str


class ResolvedType(Protocol):
    def get_symbol(self) -> Optional[TypeSymbol]: ...


class TypeServices(Protocol):
    def get_type_at_location(self, node: Expression) -> ResolvedType: ...


@dataclass(frozen=True)
class DeclaredType:
    """A type known by the name of its symbol, or unknown."""

    symbol: Optional[TypeSymbol] = None

    def get_symbol(self) -> Optional[TypeSymbol]:
        return self.symbol


UNKNOWN_TYPE = DeclaredType()


def type_symbol_name(type_node: Optional[TypeNode]) -> Optional[str]:
    """Symbol name of a declared type: ``core.Signal<T>`` -> "Signal"."""
    if not isinstance(type_node, TypeReference):
        return None
    name = type_node.type_name
    if isinstance(name, QualifiedName):
        return name.right.name
    return name.name


class DeclarationTypeServices:
    """Single-file type resolution over a unit's declaration index.

    ``this.f`` and ``this.m()`` resolve against the class that contains the
    expression, located by its start byte. A field initializer reaches the
    method branch only for private methods (``this.#make()``); calls through
    a public member name are settled before the type services are asked.
    Variables and fields initialized from ``this.m()`` reach it indirectly.
    """

    def __init__(self, unit: SourceUnit) -> None:
        self._index = unit.declarations
        self.lookups = 0

    def get_type_at_location(self, node: Expression) -> DeclaredType:
        self.lookups += 1
        name = self._resolve(node, 0)
        if name is None:
            return UNKNOWN_TYPE
        return DeclaredType(TypeSymbol(name))

    def _resolve(self, node: Optional[Expression], depth: int) -> Optional[str]:
        if node is None or depth > _MAX_DEPTH:
            return None

        if isinstance(node, NewExpression):
            if isinstance(node.callee, Identifier):
                return node.callee.name
            return None

        if isinstance(node, CallExpression):
            callee = node.callee
            if isinstance(callee, Identifier):
                return type_symbol_name(self._index.functions.get(callee.name))
            if _is_this_member(callee):
                return type_symbol_name(self._index.method(callee.span.start_byte, callee.property.name))
            return None

        if isinstance(node, Identifier):
            return self._resolve_declaration(self._index.variables.get(node.name), depth)

        if _is_this_member(node):
            return self._resolve_declaration(self._index.member(node.span.start_byte, node.property.name), depth)

        return None

    def _resolve_declaration(self, declaration: Optional[Declaration], depth: int) -> Optional[str]:
        if declaration is None:
            return None
        if declaration.type_annotation is not None:
            return type_symbol_name(declaration.type_annotation)
        return self._resolve(declaration.value, depth + 1)


def _is_this_member(node: Expression) -> bool:
    return (
        isinstance(node, MemberExpression)
        and not node.computed
        and isinstance(node.object, ThisExpression)
        and isinstance(node.property, (Identifier, PrivateIdentifier))
    )

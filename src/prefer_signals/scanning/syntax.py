"""Syntax node model for TypeScript sources.

TypeScriptNormalizer turns a tree-sitter parse tree into these immutable
nodes. Only the shapes rules look into get their own class; every other
expression or type collapses into OpaqueExpression / OpaqueType, which keep
the tree-sitter node type and source text.

A SourceUnit owns its nodes. Rules receive references for the duration of a
callback and never mutate them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class NodeKind(Enum):
    """Kinds of normalized syntax nodes."""

    IDENTIFIER = "Identifier"
    PRIVATE_IDENTIFIER = "PrivateIdentifier"
    THIS_EXPRESSION = "ThisExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    CALL_EXPRESSION = "CallExpression"
    NEW_EXPRESSION = "NewExpression"
    OPAQUE_EXPRESSION = "OpaqueExpression"
    QUALIFIED_NAME = "QualifiedName"
    TYPE_REFERENCE = "TypeReference"
    OPAQUE_TYPE = "OpaqueType"
    DECORATOR = "Decorator"
    PROPERTY_DEFINITION = "PropertyDefinition"
    ABSTRACT_PROPERTY_DEFINITION = "TSAbstractPropertyDefinition"
    ACCESSOR_PROPERTY = "AccessorProperty"


@dataclass(frozen=True)
class Span:
    """Source location. Lines and columns are 1-based, bytes 0-based."""

    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0
    start_byte: int = 0
    end_byte: int = 0


NO_SPAN = Span()


# ── Expressions ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Identifier:
    name: str
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER


@dataclass(frozen=True)
class PrivateIdentifier:
    """``#name`` of a private class member; ``name`` keeps the ``#``."""

    name: str
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.PRIVATE_IDENTIFIER


@dataclass(frozen=True)
class ThisExpression:
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.THIS_EXPRESSION


@dataclass(frozen=True)
class MemberExpression:
    """``object.property``; ``computed`` for ``object[property]``."""

    object: Expression
    property: Expression
    computed: bool = False
    optional: bool = False
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.MEMBER_EXPRESSION


@dataclass(frozen=True)
class CallExpression:
    callee: Expression
    arguments: tuple[Expression, ...] = ()
    type_arguments: tuple[TypeNode, ...] = ()
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION


@dataclass(frozen=True)
class NewExpression:
    callee: Expression
    arguments: tuple[Expression, ...] = ()
    type_arguments: tuple[TypeNode, ...] = ()
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.NEW_EXPRESSION


@dataclass(frozen=True)
class OpaqueExpression:
    """Any expression rules do not look into (literals, arrows, ...)."""

    node_type: str
    text: str = ""
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.OPAQUE_EXPRESSION


# ── Types ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class QualifiedName:
    """Dotted type name such as ``core.Signal``."""

    left: Union[Identifier, QualifiedName]
    right: Identifier
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.QUALIFIED_NAME


@dataclass(frozen=True)
class TypeReference:
    """Named type, generic when ``type_arguments`` is non-empty."""

    type_name: Union[Identifier, QualifiedName]
    type_arguments: tuple[TypeNode, ...] = ()
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.TYPE_REFERENCE


@dataclass(frozen=True)
class OpaqueType:
    node_type: str
    text: str = ""
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.OPAQUE_TYPE


# ── Class members ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Decorator:
    expression: Expression
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.DECORATOR


@dataclass(frozen=True)
class PropertyDefinition:
    """A class field declaration.

    ``type_annotation`` is the annotated type itself (without the colon),
    ``value`` the initializer.
    """

    key: Expression
    type_annotation: Optional[TypeNode] = None
    value: Optional[Expression] = None
    readonly: bool = False
    static: bool = False
    decorators: tuple[Decorator, ...] = ()
    class_name: Optional[str] = None
    span: Span = NO_SPAN

    kind: ClassVar[NodeKind] = NodeKind.PROPERTY_DEFINITION


@dataclass(frozen=True)
class AbstractPropertyDefinition(PropertyDefinition):
    """``abstract x: T;`` - declares a field without storage."""

    kind: ClassVar[NodeKind] = NodeKind.ABSTRACT_PROPERTY_DEFINITION


@dataclass(frozen=True)
class AccessorProperty(PropertyDefinition):
    """``accessor x = ...;`` - an auto-accessor, which cannot be readonly."""

    kind: ClassVar[NodeKind] = NodeKind.ACCESSOR_PROPERTY


Expression = Union[
    Identifier,
    PrivateIdentifier,
    ThisExpression,
    MemberExpression,
    CallExpression,
    NewExpression,
    OpaqueExpression,
]
TypeNode = Union[TypeReference, OpaqueType]
Node = Union[Expression, QualifiedName, TypeNode, Decorator, PropertyDefinition]


# ── Units ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Declaration:
    """A named binding with an optional declared type and initializer."""

    name: str
    type_annotation: Optional[TypeNode] = None
    value: Optional[Expression] = None


@dataclass(frozen=True)
class ClassScope:
    """Byte range of one class body; ``name`` is None for anonymous classes."""

    name: Optional[str]
    start_byte: int
    end_byte: int

    def contains(self, offset: int) -> bool:
        return self.start_byte <= offset < self.end_byte


# (class start byte, member name)
MemberKey = tuple[int, str]


@dataclass
class DeclarationIndex:
    """Declarations of one file, used for single-file type resolution.

    Class members are keyed by the class that declares them, so ``this.f``
    only ever resolves against the class the expression appears in.

    Attributes:
        functions: Function name -> declared return type
        variables: Variable name -> declaration
        classes: Every class in the file, in document order
        members: (class, field or getter name) -> declaration
        methods: (class, method name) -> declared return type
    """

    functions: dict[str, Optional[TypeNode]] = field(default_factory=dict)
    variables: dict[str, Declaration] = field(default_factory=dict)
    classes: list[ClassScope] = field(default_factory=list)
    members: dict[MemberKey, Declaration] = field(default_factory=dict)
    methods: dict[MemberKey, Optional[TypeNode]] = field(default_factory=dict)

    def enclosing_class(self, offset: int) -> Optional[ClassScope]:
        """Innermost class whose body contains byte ``offset``."""
        innermost: Optional[ClassScope] = None
        for scope in self.classes:
            if scope.contains(offset) and (innermost is None or scope.start_byte >= innermost.start_byte):
                innermost = scope
        return innermost

    def member(self, offset: int, name: str) -> Optional[Declaration]:
        scope = self.enclosing_class(offset)
        return self.members.get((scope.start_byte, name)) if scope is not None else None

    def method(self, offset: int, name: str) -> Optional[TypeNode]:
        scope = self.enclosing_class(offset)
        return self.methods.get((scope.start_byte, name)) if scope is not None else None


@dataclass
class SourceUnit:
    """One parsed file.

    ``nodes`` holds every node the traversal visits, in document order.
    """

    path: str
    language: str
    source: bytes
    nodes: list[Node] = field(default_factory=list)
    declarations: DeclarationIndex = field(default_factory=DeclarationIndex)
    has_errors: bool = False

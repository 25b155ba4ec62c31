"""Normalizer: converts tree-sitter TypeScript trees to a SourceUnit.

Walks the tree once in document order. New expressions, class field
declarations and decorators become traversal nodes; function, variable and
class member declarations are indexed for single-file type resolution.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional, Union

from ..exceptions import ParsingError, UnsupportedLanguageError
from ..logging_config import file_logger
from .languages import detect_language, supported_languages
from .syntax import (
    AbstractPropertyDefinition,
    AccessorProperty,
    CallExpression,
    ClassScope,
    Declaration,
    DeclarationIndex,
    Decorator,
    Expression,
    Identifier,
    MemberExpression,
    NewExpression,
    OpaqueExpression,
    OpaqueType,
    PrivateIdentifier,
    PropertyDefinition,
    QualifiedName,
    SourceUnit,
    Span,
    ThisExpression,
    TypeNode,
    TypeReference,
)
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser

if TYPE_CHECKING:
    from .treesitter_parser import TSNode

logger = logging.getLogger(__name__)

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
    }
)
_FIELD_TYPES = frozenset({"public_field_definition", "field_definition"})
_FUNCTION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration", "function_signature"}
)
_FUNCTION_VALUE_TYPES = frozenset({"arrow_function", "function_expression", "function"})
_CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})


def _span(node: TSNode) -> Span:
    return Span(
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1] + 1,
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1] + 1,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def _text(node: TSNode) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _iter_preorder(root: TSNode) -> Iterator[TSNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _enclosing_class(node: TSNode) -> Optional[TSNode]:
    parent = node.parent
    while parent is not None:
        if parent.type in _CLASS_TYPES:
            return parent
        parent = parent.parent
    return None


class TypeScriptNormalizer:
    """Converts TypeScript parse trees to SourceUnit.

    Usage:
        normalizer = TypeScriptNormalizer()
        unit = normalizer.parse_file(content, "src/app/app.component.ts")
    """

    def __init__(self) -> None:
        self._parser = TreeSitterParser() if TREE_SITTER_AVAILABLE else None

    def parse_file(self, content: str, path: str, language: Optional[str] = None) -> SourceUnit:
        """Parse file content and return its SourceUnit.

        Args:
            content: File content as string
            path: File path for the result
            language: "typescript" or "tsx"; detected from the path if omitted

        Raises:
            UnsupportedLanguageError: If the file is not TypeScript
            ParsingError: If tree-sitter is missing or parsing fails
        """
        language = language or detect_language(path)
        if language is None:
            raise UnsupportedLanguageError(path, supported_languages())

        if self._parser is None:
            raise ParsingError(path, language, "tree-sitter-typescript is not installed")
        if not self._parser.is_language_supported(language):
            raise ParsingError(path, language, "grammar not available")

        code_bytes = content.encode("utf-8")
        tree = self._parser.parse(code_bytes, language)
        if tree is None:
            raise ParsingError(path, language, "parser returned no tree")

        unit = SourceUnit(path=path, language=language, source=code_bytes)
        unit.has_errors = tree.root_node.has_error
        if unit.has_errors:
            file_logger(logger, path).debug("has syntax errors; results may be incomplete")

        self._collect(tree.root_node, unit)
        return unit

    # ── Traversal ──────────────────────────────────────────────

    def _collect(self, root: TSNode, unit: SourceUnit) -> None:
        index = unit.declarations
        for node in _iter_preorder(root):
            node_type = node.type

            if node_type == "new_expression":
                unit.nodes.append(self._convert_expression(node))

            elif node_type in _CLASS_TYPES and node.is_named:
                name = node.child_by_field_name("name")
                index.classes.append(
                    ClassScope(_text(name) if name is not None else None, node.start_byte, node.end_byte)
                )

            elif node_type in _FIELD_TYPES:
                field = self._convert_field(node)
                unit.nodes.append(field)
                owner = _enclosing_class(node)
                if owner is not None and isinstance(field.key, (Identifier, PrivateIdentifier)):
                    index.members.setdefault(
                        (owner.start_byte, field.key.name),
                        Declaration(field.key.name, field.type_annotation, field.value),
                    )

            elif node_type == "decorator":
                unit.nodes.append(self._convert_decorator(node))

            elif node_type in _FUNCTION_TYPES:
                name = node.child_by_field_name("name")
                if name is not None:
                    index.functions.setdefault(_text(name), self._return_type(node))

            elif node_type == "variable_declarator":
                self._index_variable(node, index)

            elif node_type == "method_definition":
                self._index_method(node, index)

    def _index_variable(self, node: TSNode, index: DeclarationIndex) -> None:
        name = node.child_by_field_name("name")
        if name is None or name.type != "identifier":
            return
        value = node.child_by_field_name("value")
        var_name = _text(name)

        if value is not None and value.type in _FUNCTION_VALUE_TYPES:
            index.functions.setdefault(var_name, self._return_type(value))
            return

        index.variables.setdefault(
            var_name,
            Declaration(
                var_name,
                self._annotation(node.child_by_field_name("type")),
                self._convert_expression(value) if value is not None else None,
            ),
        )

    def _index_method(self, node: TSNode, index: DeclarationIndex) -> None:
        name = node.child_by_field_name("name")
        # Object-literal methods share the node type but are not class members
        parent = node.parent
        if name is None or parent is None or parent.type != "class_body":
            return
        owner = _enclosing_class(node)
        if owner is None:
            return
        key = (owner.start_byte, _text(name))
        return_type = self._return_type(node)
        if any(child.type == "get" for child in node.children):
            index.members.setdefault(key, Declaration(key[1], return_type))
        else:
            index.methods.setdefault(key, return_type)

    # ── Conversion ─────────────────────────────────────────────

    def _convert_field(self, node: TSNode) -> PropertyDefinition:
        """Abstract and auto-accessor fields get their own node classes."""
        cls: type[PropertyDefinition] = PropertyDefinition
        readonly = False
        static = False
        decorators: list[Decorator] = []
        for child in node.children:
            if child.type == "readonly":
                readonly = True
            elif child.type == "static":
                static = True
            elif child.type == "abstract":
                cls = AbstractPropertyDefinition
            elif child.type == "accessor":
                cls = AccessorProperty
            elif child.type == "decorator":
                decorators.append(self._convert_decorator(child))

        name = node.child_by_field_name("name") or node.child_by_field_name("property")
        key: Expression
        if name is None:
            key = OpaqueExpression("missing", "", _span(node))
        else:
            key = self._convert_expression(name)

        value = node.child_by_field_name("value")

        owner = _enclosing_class(node)
        class_name = owner.child_by_field_name("name") if owner is not None else None

        return cls(
            key=key,
            type_annotation=self._annotation(node.child_by_field_name("type")),
            value=self._convert_expression(value) if value is not None else None,
            readonly=readonly,
            static=static,
            decorators=tuple(decorators),
            class_name=_text(class_name) if class_name is not None else None,
            span=_span(node),
        )

    def _convert_decorator(self, node: TSNode) -> Decorator:
        expression = next((child for child in node.named_children if child.type != "comment"), None)
        if expression is None:
            return Decorator(OpaqueExpression("missing", "", _span(node)), _span(node))
        return Decorator(self._convert_expression(expression), _span(node))

    def _convert_expression(self, node: TSNode) -> Expression:
        node_type = node.type

        if node_type in _IDENTIFIER_TYPES:
            return Identifier(_text(node), _span(node))

        if node_type == "private_property_identifier":
            return PrivateIdentifier(_text(node), _span(node))

        if node_type == "this":
            return ThisExpression(_span(node))

        if node_type == "parenthesized_expression":
            inner = next((child for child in node.named_children if child.type != "comment"), None)
            if inner is not None:
                return self._convert_expression(inner)

        if node_type == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is not None and prop is not None:
                return MemberExpression(
                    object=self._convert_expression(obj),
                    property=self._convert_expression(prop),
                    optional=any(child.type in ("optional_chain", "?.") for child in node.children),
                    span=_span(node),
                )

        if node_type == "subscript_expression":
            obj = node.child_by_field_name("object")
            index = node.child_by_field_name("index")
            if obj is not None and index is not None:
                return MemberExpression(
                    object=self._convert_expression(obj),
                    property=self._convert_expression(index),
                    computed=True,
                    span=_span(node),
                )

        if node_type == "call_expression":
            function = node.child_by_field_name("function")
            if function is not None:
                return CallExpression(
                    callee=self._convert_expression(function),
                    arguments=self._arguments(node.child_by_field_name("arguments")),
                    type_arguments=self._type_arguments(node.child_by_field_name("type_arguments")),
                    span=_span(node),
                )

        if node_type == "new_expression":
            constructor = node.child_by_field_name("constructor")
            if constructor is not None:
                return NewExpression(
                    callee=self._convert_expression(constructor),
                    arguments=self._arguments(node.child_by_field_name("arguments")),
                    type_arguments=self._type_arguments(node.child_by_field_name("type_arguments")),
                    span=_span(node),
                )

        return OpaqueExpression(node_type, _text(node), _span(node))

    def _arguments(self, node: Optional[TSNode]) -> tuple[Expression, ...]:
        # Tagged templates carry a template_string instead of arguments
        if node is None or node.type != "arguments":
            return ()
        return tuple(
            self._convert_expression(child)
            for child in node.named_children
            if child.type != "comment"
        )

    def _type_arguments(self, node: Optional[TSNode]) -> tuple[TypeNode, ...]:
        if node is None:
            return ()
        return tuple(
            self._convert_type(child) for child in node.named_children if child.type != "comment"
        )

    def _annotation(self, node: Optional[TSNode]) -> Optional[TypeNode]:
        """Unwrap a type_annotation node to the annotated type."""
        if node is None:
            return None
        if node.type != "type_annotation":
            return self._convert_type(node)
        inner = next((child for child in node.named_children if child.type != "comment"), None)
        return self._convert_type(inner) if inner is not None else None

    def _return_type(self, node: TSNode) -> Optional[TypeNode]:
        return self._annotation(node.child_by_field_name("return_type"))

    def _convert_type(self, node: TSNode) -> TypeNode:
        node_type = node.type

        if node_type == "parenthesized_type":
            inner = next((child for child in node.named_children if child.type != "comment"), None)
            if inner is not None:
                return self._convert_type(inner)

        if node_type == "generic_type":
            name = node.child_by_field_name("name")
            if name is not None:
                return TypeReference(
                    type_name=self._convert_type_name(name),
                    type_arguments=self._type_arguments(node.child_by_field_name("type_arguments")),
                    span=_span(node),
                )

        if node_type in ("type_identifier", "nested_type_identifier"):
            return TypeReference(type_name=self._convert_type_name(node), span=_span(node))

        return OpaqueType(node_type, _text(node), _span(node))

    def _convert_type_name(self, node: TSNode) -> Union[Identifier, QualifiedName]:
        if node.type in ("nested_type_identifier", "nested_identifier"):
            named = [child for child in node.named_children if child.type != "comment"]
            if len(named) >= 2:
                return QualifiedName(
                    left=self._convert_type_name(named[0]),
                    right=Identifier(_text(named[-1]), _span(named[-1])),
                    span=_span(node),
                )
        if node.type == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is not None and prop is not None:
                return QualifiedName(
                    left=self._convert_type_name(obj),
                    right=Identifier(_text(prop), _span(prop)),
                    span=_span(node),
                )
        return Identifier(_text(node), _span(node))

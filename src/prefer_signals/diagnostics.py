"""Diagnostics and suggested fixes.

Rules report diagnostics through RuleContext.report(); suggestions attached
to them are never applied during analysis. apply_suggestions() rewrites a
source buffer only when a caller asks for it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional

from .scanning.syntax import Node, Span

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def format_message(template: str, data: Optional[Mapping[str, str]] = None) -> str:
    """Interpolate ``{{name}}`` placeholders. Unknown names stay verbatim."""
    if not data:
        return template

    def substitute(match: re.Match) -> str:
        key = match.group(1)
        return str(data[key]) if key in data else match.group(0)

    return _PLACEHOLDER.sub(substitute, template)


@dataclass(frozen=True)
class TextEdit:
    """Insert ``text`` at byte ``offset`` of the source."""

    offset: int
    text: str

    @classmethod
    def insert_before(cls, node: Node, text: str) -> TextEdit:
        return cls(node.span.start_byte, text)


@dataclass(frozen=True)
class Suggestion:
    message_id: str
    edit: TextEdit
    message: str = ""


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem.

    Attributes:
        rule: Name of the rule that reported it
        message_id: Key into the rule's message templates
        message: Rendered message
        path: File the diagnostic belongs to
        span: Location of the anchor node
        data: Interpolation values used to render the message
        suggestions: Fixes a caller may choose to apply
    """

    rule: str
    message_id: str
    message: str
    path: str
    span: Span
    data: Mapping[str, str] = field(default_factory=dict)
    suggestions: tuple[Suggestion, ...] = ()

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        return self.span.start_column

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "messageId": self.message_id,
            "message": self.message,
            "path": self.path,
            "line": self.span.start_line,
            "column": self.span.start_column,
            "endLine": self.span.end_line,
            "endColumn": self.span.end_column,
            "data": dict(self.data),
            "suggestions": [
                {
                    "messageId": s.message_id,
                    "message": s.message,
                    "offset": s.edit.offset,
                    "text": s.edit.text,
                }
                for s in self.suggestions
            ],
        }


def render_suggestions(
    suggestions: Iterable[Suggestion], messages: Mapping[str, str]
) -> tuple[Suggestion, ...]:
    return tuple(
        replace(s, message=format_message(messages.get(s.message_id, s.message_id)))
        for s in suggestions
    )


def apply_suggestions(source: bytes, diagnostics: Iterable[Diagnostic]) -> tuple[bytes, int]:
    """Apply the first suggestion of every diagnostic to ``source``.

    Edits at the same offset with the same text are applied once. Edits are
    applied right to left so earlier offsets stay valid.

    Returns:
        (new_source, number_of_edits_applied)
    """
    edits = {
        (d.suggestions[0].edit.offset, d.suggestions[0].edit.text)
        for d in diagnostics
        if d.suggestions
    }

    result = source
    for offset, text in sorted(edits, reverse=True):
        result = result[:offset] + text.encode("utf-8") + result[offset:]
    return result, len(edits)

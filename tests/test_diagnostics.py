"""Tests for diagnostics.py - message rendering and suggestion application."""

from prefer_signals.diagnostics import (
    Diagnostic,
    Suggestion,
    TextEdit,
    apply_suggestions,
    format_message,
    render_suggestions,
)
from prefer_signals.scanning.syntax import Identifier, Span


def readonly_diagnostic(offset, path="a.ts"):
    return Diagnostic(
        rule="prefer-signals",
        message_id="preferReadonly",
        message="...",
        path=path,
        span=Span(start_line=1, start_column=offset + 1, start_byte=offset),
        suggestions=(Suggestion("suggestAddReadonlyModifier", TextEdit(offset, "readonly ")),),
    )


class TestFormatMessage:
    """Test format_message function."""

    def test_substitutes(self):
        assert format_message("Use {{function}} not {{decorator}}", {"function": "viewChild", "decorator": "ViewChild"}) == (
            "Use viewChild not ViewChild"
        )

    def test_whitespace_in_placeholder(self):
        assert format_message("Prefer {{ type }}", {"type": "Signal"}) == "Prefer Signal"

    def test_unknown_placeholder_kept(self):
        assert format_message("Prefer {{type}}", {"other": "x"}) == "Prefer {{type}}"

    def test_no_data(self):
        assert format_message("Prefer {{type}}") == "Prefer {{type}}"


class TestTextEdit:
    def test_insert_before(self):
        node = Identifier("x", Span(start_byte=42))
        assert TextEdit.insert_before(node, "readonly ") == TextEdit(42, "readonly ")


class TestRenderSuggestions:
    def test_message_from_template(self):
        [s] = render_suggestions([Suggestion("fix", TextEdit(0, "x"))], {"fix": "Add it"})
        assert s.message == "Add it"

    def test_unknown_id_falls_back_to_id(self):
        [s] = render_suggestions([Suggestion("fix", TextEdit(0, "x"))], {})
        assert s.message == "fix"


class TestDiagnosticToDict:
    def test_camel_case_keys(self):
        data = readonly_diagnostic(10).to_dict()

        assert data["messageId"] == "preferReadonly"
        assert data["line"] == 1
        assert data["column"] == 11
        assert data["suggestions"] == [
            {"messageId": "suggestAddReadonlyModifier", "message": "", "offset": 10, "text": "readonly "}
        ]


class TestApplySuggestions:
    """Test apply_suggestions function."""

    def test_single_insertion(self):
        source = b"class C { x: Signal<number>; }"
        fixed, count = apply_suggestions(source, [readonly_diagnostic(10)])

        assert fixed == b"class C { readonly x: Signal<number>; }"
        assert count == 1

    def test_multiple_insertions_keep_offsets(self):
        source = b"class C { a = signal(1); b = signal(2); }"
        diagnostics = [readonly_diagnostic(10), readonly_diagnostic(25)]

        fixed, count = apply_suggestions(source, diagnostics)

        assert fixed == b"class C { readonly a = signal(1); readonly b = signal(2); }"
        assert count == 2

    def test_duplicate_edits_applied_once(self):
        fixed, count = apply_suggestions(b"x = 1", [readonly_diagnostic(0), readonly_diagnostic(0)])
        assert fixed == b"readonly x = 1"
        assert count == 1

    def test_diagnostics_without_suggestions(self):
        diagnostic = Diagnostic("prefer-signals", "preferSignal", "...", "a.ts", Span())
        assert apply_suggestions(b"new BehaviorSubject(1)", [diagnostic]) == (b"new BehaviorSubject(1)", 0)

"""Tests for engine/context.py and engine/traversal.py."""

import pytest

from prefer_signals.engine.context import RuleContext
from prefer_signals.engine.selectors import NEW_EXPRESSION, Selector
from prefer_signals.engine.traversal import run_rule
from prefer_signals.exceptions import TypeInformationUnavailableError
from prefer_signals.config import DEFAULT_OPTIONS
from prefer_signals.diagnostics import Suggestion, TextEdit
from prefer_signals.rules.base import Rule
from prefer_signals.scanning.syntax import Identifier, NewExpression, NodeKind, SourceUnit, Span

MESSAGES = {"found": "Found {{name}}", "fix": "Fix it"}


@pytest.fixture
def source_unit():
    return SourceUnit(path="a.ts", language="typescript", source=b"new A(); new B();")


class TestRuleContext:
    """Test RuleContext.report and type-services access."""

    def test_report_renders_message(self, source_unit):
        context = RuleContext("demo", MESSAGES, source_unit)
        node = Identifier("A", Span(start_line=1, start_column=5, start_byte=4))

        diagnostic = context.report(node, "found", data={"name": "A"})

        assert diagnostic.message == "Found A"
        assert diagnostic.rule == "demo"
        assert diagnostic.path == "a.ts"
        assert (diagnostic.line, diagnostic.column) == (1, 5)
        assert context.diagnostics == [diagnostic]

    def test_report_renders_suggestions(self, source_unit):
        context = RuleContext("demo", MESSAGES, source_unit)
        node = Identifier("A")

        diagnostic = context.report(
            node, "found", data={"name": "A"}, suggestions=[Suggestion("fix", TextEdit(0, "x"))]
        )

        assert diagnostic.suggestions[0].message == "Fix it"

    def test_unknown_message_id(self, source_unit):
        context = RuleContext("demo", MESSAGES, source_unit)
        with pytest.raises(KeyError):
            context.report(Identifier("A"), "missing")

    def test_type_services_unavailable(self, source_unit):
        context = RuleContext("demo", MESSAGES, source_unit)
        with pytest.raises(TypeInformationUnavailableError) as exc_info:
            context.get_type_services()
        assert exc_info.value.rule == "demo"
        assert exc_info.value.filepath == "a.ts"

    def test_type_services_factory_gets_unit(self, source_unit):
        seen = []
        context = RuleContext("demo", MESSAGES, source_unit, lambda unit: seen.append(unit) or "services")

        assert context.get_type_services() == "services"
        assert seen == [source_unit]


class TestRunRule:
    """Test run_rule traversal."""

    def _rule(self, create):
        return Rule(name="demo", description="", schema={}, messages=MESSAGES, create=create)

    def test_visits_matching_nodes_in_order(self, source_unit):
        source_unit.nodes.extend([NewExpression(Identifier("A")), Identifier("x"), NewExpression(Identifier("B"))])

        def create(context, options):
            return {
                NEW_EXPRESSION: lambda node: context.report(node, "found", data={"name": node.callee.name})
            }

        diagnostics = run_rule(self._rule(create), source_unit, DEFAULT_OPTIONS, RuleContext("demo", MESSAGES, source_unit))

        assert [d.message for d in diagnostics] == ["Found A", "Found B"]

    def test_node_passed_to_every_matching_selector(self, source_unit):
        source_unit.nodes.append(NewExpression(Identifier("A")))
        calls = []

        def create(context, options):
            return {
                NEW_EXPRESSION: lambda node: calls.append("any"),
                Selector(NodeKind.NEW_EXPRESSION, callee_name="A"): lambda node: calls.append("named"),
            }

        run_rule(self._rule(create), source_unit, DEFAULT_OPTIONS, RuleContext("demo", MESSAGES, source_unit))

        assert calls == ["any", "named"]

    def test_create_called_once(self, source_unit):
        source_unit.nodes.extend([NewExpression(Identifier("A")), NewExpression(Identifier("B"))])
        created = []

        def create(context, options):
            created.append(options)
            return {NEW_EXPRESSION: lambda node: None}

        run_rule(self._rule(create), source_unit, DEFAULT_OPTIONS, RuleContext("demo", MESSAGES, source_unit))

        assert created == [DEFAULT_OPTIONS]

    def test_empty_listener(self, source_unit):
        source_unit.nodes.append(NewExpression(Identifier("A")))
        diagnostics = run_rule(
            self._rule(lambda context, options: {}),
            source_unit,
            DEFAULT_OPTIONS,
            RuleContext("demo", MESSAGES, source_unit),
        )
        assert diagnostics == []

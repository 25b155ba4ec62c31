"""Shared test fixtures for prefer-signals tests."""

from typing import Optional

import pytest

from prefer_signals.engine.context import RuleContext
from prefer_signals.engine.type_services import DeclaredType, TypeSymbol
from prefer_signals.rules.prefer_signals import MESSAGES, RULE_NAME
from prefer_signals.scanning.syntax import SourceUnit


class FakeTypeServices:
    """Resolves every expression to the same type symbol name."""

    def __init__(self, symbol_name: Optional[str] = None):
        self.symbol_name = symbol_name
        self.calls = 0

    def get_type_at_location(self, node):
        self.calls += 1
        if self.symbol_name is None:
            return DeclaredType()
        return DeclaredType(TypeSymbol(self.symbol_name))


class CountingFactory:
    """Type-services factory that records how often it is invoked."""

    def __init__(self, services):
        self.services = services
        self.calls = 0

    def __call__(self, unit):
        self.calls += 1
        return self.services


@pytest.fixture
def unit():
    """Empty unit; tests append nodes as needed."""
    return SourceUnit(path="app.component.ts", language="typescript", source=b"")


@pytest.fixture
def make_context(unit):
    """Build a RuleContext over the shared unit."""

    def _make(factory=None) -> RuleContext:
        return RuleContext(RULE_NAME, MESSAGES, unit, factory)

    return _make


@pytest.fixture
def fake_services():
    """Build fake type services resolving to a fixed symbol name."""
    return FakeTypeServices


@pytest.fixture
def counting_factory():
    """Wrap services in a factory that counts acquisitions."""
    return CountingFactory

"""Rule registry.

Rules are declared in their own modules and registered here.
"""

from __future__ import annotations

from typing import Optional

from .base import Rule
from .prefer_signals import PREFER_SIGNALS, RULE_NAME

ALL_RULES: list[Rule] = [
    PREFER_SIGNALS,
]


def get_rule_by_name(name: str) -> Optional[Rule]:
    """Look up a rule by name."""
    for rule in ALL_RULES:
        if rule.name == name:
            return rule
    return None


__all__ = [
    "ALL_RULES",
    "PREFER_SIGNALS",
    "RULE_NAME",
    "Rule",
    "get_rule_by_name",
]

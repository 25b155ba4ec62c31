"""
prefer-signals - Angular signal migration linter

Flags class code that predates Angular signals: ``new BehaviorSubject(...)``,
``@Input()``, the ``@ViewChild()`` family of query decorators, and
signal-typed fields that are not ``readonly``.
"""

__version__ = "0.1.0"

from .config import LintConfig, RuleOptions, load_config, resolve_options
from .diagnostics import Diagnostic, Suggestion, apply_suggestions
from .linter import Linter, LintResult, lint
from .rules import PREFER_SIGNALS

__all__ = [
    "lint",  # Main entry point
    "Linter",  # Advanced usage (reusable across sources)
    "LintResult",
    "LintConfig",
    "load_config",
    "Diagnostic",
    "Suggestion",
    "apply_suggestions",
    "RuleOptions",
    "resolve_options",
    "PREFER_SIGNALS",
]

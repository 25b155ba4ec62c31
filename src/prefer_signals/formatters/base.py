"""Base formatter interface for lint output rendering."""

from abc import ABC, abstractmethod

from ..linter import LintResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: LintResult) -> None:
        """Render the result to stdout."""

    @abstractmethod
    def format(self, result: LintResult) -> str:
        """Return formatted string representation of the result."""

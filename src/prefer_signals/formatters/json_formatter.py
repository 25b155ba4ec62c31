"""JSON formatter for lint results."""

import json

from ..linter import LintResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render results as JSON: one entry per linted file."""

    def render(self, result: LintResult) -> None:
        print(self.format(result))

    def format(self, result: LintResult) -> str:
        data = [
            {
                "path": report.path,
                "diagnostics": [d.to_dict() for d in report.diagnostics],
                "suggestionsApplied": report.suggestions_applied,
            }
            for report in result.files
        ]
        return json.dumps(data, indent=2)

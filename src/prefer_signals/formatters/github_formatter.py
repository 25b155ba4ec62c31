"""GitHub Actions formatter: one ``::warning`` annotation per diagnostic."""

from ..linter import LintResult
from .base import BaseFormatter


def _escape(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    def render(self, result: LintResult) -> None:
        output = self.format(result)
        if output:
            print(output)

    def format(self, result: LintResult) -> str:
        lines: list[str] = []
        for d in result.diagnostics:
            lines.append(
                f"::warning file={d.path},line={d.line},col={d.column},"
                f"title={d.rule}::{_escape(d.message)}"
            )
        return "\n".join(lines)

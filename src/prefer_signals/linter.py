"""Public API for prefer-signals.

Example:
    >>> from prefer_signals import lint
    >>>
    >>> result = lint(["src/app"])
    >>> for diagnostic in result.diagnostics:
    ...     print(diagnostic.path, diagnostic.line, diagnostic.message)
    >>>
    >>> # Without type information; useTypeChecking must then be off
    >>> result = lint(["src/app"], type_information=False,
    ...               rule_options={"useTypeChecking": False})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .config import LintConfig, RuleOptions, load_config, resolve_options, validate_options
from .diagnostics import Diagnostic, apply_suggestions
from .engine.context import RuleContext
from .engine.traversal import run_rule
from .engine.type_services import DeclarationTypeServices
from .exceptions import FileAccessError
from .logging_config import file_logger, get_logger
from .rules import PREFER_SIGNALS, Rule
from .scanning.normalizer import TypeScriptNormalizer
from .scanning.scanner import SourceScanner

logger = get_logger(__name__)


@dataclass
class FileReport:
    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    suggestions_applied: int = 0


@dataclass
class LintResult:
    files: list[FileReport] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for report in self.files for d in report.diagnostics]

    @property
    def files_with_diagnostics(self) -> int:
        return sum(1 for report in self.files if report.diagnostics)

    @property
    def suggestions_applied(self) -> int:
        return sum(report.suggestions_applied for report in self.files)

    def counts_by_message(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for d in self.diagnostics:
            counts[d.message_id] = counts.get(d.message_id, 0) + 1
        return counts


class Linter:
    """Runs one rule over TypeScript sources.

    Options are validated against the rule's schema and resolved once;
    every file is a separate run with its own rule context.

    Raises:
        InvalidConfigError: If the configured rule options do not match the schema
    """

    def __init__(self, config: Optional[LintConfig] = None, rule: Rule = PREFER_SIGNALS) -> None:
        self.config = config or LintConfig()
        self.rule = rule
        validate_options(self.config.rule_options, rule.schema)
        self.options: RuleOptions = resolve_options(self.config.rule_options)
        self._normalizer = TypeScriptNormalizer()
        self._type_services_factory = DeclarationTypeServices if self.config.type_information else None

    def lint_source(self, content: str, path: str = "<input>.ts", language: Optional[str] = None) -> list[Diagnostic]:
        """Lint one in-memory source.

        Raises:
            ParsingError: If the source cannot be parsed
            TypeInformationUnavailableError: If the rule needs type services
                and the run has none
        """
        unit = self._normalizer.parse_file(content, path, language)
        context = RuleContext(self.rule.name, self.rule.messages, unit, self._type_services_factory)
        diagnostics = run_rule(self.rule, unit, self.options, context)
        file_logger(logger, path).debug(f"{len(diagnostics)} diagnostic(s)")
        return diagnostics

    def lint_file(self, path: Path, apply: bool = False) -> FileReport:
        """Lint one file, optionally writing its suggestions back.

        Raises:
            FileAccessError: If the file cannot be read or written
        """
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, str(e))

        report = FileReport(path=str(path), diagnostics=self.lint_source(content, str(path)))

        if apply and report.diagnostics:
            fixed, count = apply_suggestions(content.encode("utf-8"), report.diagnostics)
            if count:
                try:
                    path.write_bytes(fixed)
                except OSError as e:
                    raise FileAccessError(path, str(e))
                report.suggestions_applied = count
                file_logger(logger, path).info(f"applied {count} suggestion(s)")

        return report

    def lint_paths(self, paths: Iterable[Path], apply: bool = False) -> LintResult:
        """Discover and lint every TypeScript file under ``paths``.

        Unreadable files are logged and skipped; parse and type-information
        errors abort the run.
        """
        files = SourceScanner(self.config).discover(paths)
        logger.debug(f"Linting {len(files)} file(s)")

        result = LintResult()
        for path in files:
            try:
                result.files.append(self.lint_file(path, apply=apply))
            except FileAccessError as e:
                logger.warning(str(e))
        return result


def lint(
    paths: Sequence[Union[str, Path]] = (".",),
    config_file: Optional[Path] = None,
    apply: bool = False,
    **overrides,
) -> LintResult:
    """Lint paths with auto-discovered configuration.

    Args:
        paths: Files or directories to lint
        config_file: Optional explicit config file path
        apply: Write the first suggestion of each diagnostic back to disk
        **overrides: LintConfig overrides (e.g. type_information=False,
            rule_options={"preferReadonly": False})

    Returns:
        LintResult with one FileReport per linted file

    Raises:
        PreferSignalsError: On invalid configuration, unparsable sources, or
            missing type information
    """
    config = load_config(config_file=config_file, **overrides)
    return Linter(config).lint_paths([Path(p) for p in paths], apply=apply)

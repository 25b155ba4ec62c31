"""RuleContext: what the host hands a rule for one run over one unit."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Optional

from ..diagnostics import Diagnostic, Suggestion, format_message, render_suggestions
from ..exceptions import TypeInformationUnavailableError
from ..logging_config import file_logger
from ..scanning.syntax import Node, SourceUnit
from .type_services import TypeServices

logger = logging.getLogger(__name__)

TypeServicesFactory = Callable[[SourceUnit], TypeServices]


class RuleContext:
    """Diagnostic sink and type-services accessor for one rule run.

    Args:
        rule_name: Name stamped on every diagnostic
        messages: Message id -> template
        unit: The unit being linted
        type_services_factory: Builds type services for the unit; None when
            the run has no type information
    """

    def __init__(
        self,
        rule_name: str,
        messages: Mapping[str, str],
        unit: SourceUnit,
        type_services_factory: Optional[TypeServicesFactory] = None,
    ) -> None:
        self.rule_name = rule_name
        self.messages = messages
        self.unit = unit
        self._type_services_factory = type_services_factory
        self.diagnostics: list[Diagnostic] = []

    @property
    def path(self) -> str:
        return self.unit.path

    def report(
        self,
        node: Node,
        message_id: str,
        data: Optional[Mapping[str, str]] = None,
        suggestions: Iterable[Suggestion] = (),
    ) -> Diagnostic:
        template = self.messages[message_id]
        diagnostic = Diagnostic(
            rule=self.rule_name,
            message_id=message_id,
            message=format_message(template, data),
            path=self.unit.path,
            span=node.span,
            data=dict(data or {}),
            suggestions=render_suggestions(suggestions, self.messages),
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def get_type_services(self) -> TypeServices:
        """Build the type services for this unit.

        Raises:
            TypeInformationUnavailableError: If the run has no type information
        """
        if self._type_services_factory is None:
            raise TypeInformationUnavailableError(self.unit.path, self.rule_name)
        file_logger(logger, self.unit.path).debug("acquiring type services")
        return self._type_services_factory(self.unit)

"""Analysis-related exceptions: file access, parsing, type information."""

from pathlib import Path
from typing import List, Union

from .base import PreferSignalsError


class AnalysisError(PreferSignalsError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Union[Path, str], reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Union[Path, str], language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when a file is not TypeScript source."""

    def __init__(self, filepath: Union[Path, str], supported_languages: List[str]):
        super().__init__(
            f"Unsupported source file: {filepath}",
            details={"filepath": str(filepath), "supported": ", ".join(supported_languages)},
        )
        self.filepath = filepath
        self.supported_languages = supported_languages


class TypeInformationUnavailableError(AnalysisError):
    """Raised when a rule asks for type services the run was not given.

    This aborts the run for the unit. Rules must not treat it as a per-node
    condition.
    """

    def __init__(self, filepath: Union[Path, str], rule: str):
        super().__init__(
            f"Rule '{rule}' requires type information, which is not available for {filepath}",
            details={
                "filepath": str(filepath),
                "rule": rule,
                "hint": "enable type_information or set useTypeChecking to false",
            },
        )
        self.filepath = filepath
        self.rule = rule

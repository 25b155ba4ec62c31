"""Exception hierarchy for prefer-signals."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    TypeInformationUnavailableError,
    UnsupportedLanguageError,
)
from .base import PreferSignalsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "PreferSignalsError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "TypeInformationUnavailableError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]

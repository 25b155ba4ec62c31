"""Source languages the linter understands.

Both map onto grammars bundled in tree-sitter-typescript. Declaration
files carry no class bodies worth linting and are left to the exclude
patterns.
"""

from pathlib import Path
from typing import Optional, Union

_EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(_EXTENSION_TO_LANGUAGE)

SKIP_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".angular",
    ".nx",
    "dist",
    "coverage",
)


def detect_language(filepath: Union[Path, str]) -> Optional[str]:
    """Detect language from file extension.

    Returns:
        "typescript", "tsx", or None for anything else
    """
    path = Path(filepath)
    return _EXTENSION_TO_LANGUAGE.get(path.suffix.lower())


def supported_languages() -> list[str]:
    return sorted(set(_EXTENSION_TO_LANGUAGE.values()))

"""Tree-sitter parser wrapper.

Loads the TypeScript and TSX grammars bundled in tree-sitter-typescript.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "typescript")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_language_modules: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]
    import tree_sitter_typescript

    TREE_SITTER_AVAILABLE = True

    # One package, two grammars: language_typescript() and language_tsx()
    _language_modules["typescript"] = tree_sitter_typescript
    _language_modules["tsx"] = tree_sitter_typescript

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class TSNode:
        text: bytes | None
        type: str
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        start_byte: int
        end_byte: int
        children: list[TSNode]
        named_children: list[TSNode]
        has_error: bool
        is_named: bool
        parent: TSNode | None

        def child_by_field_name(self, name: str) -> TSNode | None: ...

    class Tree:
        root_node: TSNode


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_modules.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for the TypeScript grammars.

    Check TREE_SITTER_AVAILABLE before using, or check if parse() returns None.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}
        self._languages: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, lang_module in _language_modules.items():
            lang_fn = getattr(lang_module, f"language_{lang_name}", None)
            if lang_fn is None:
                lang_fn = getattr(lang_module, "language", None)
            if lang_fn is None:
                logger.debug(f"No grammar entry point for {lang_name}")
                continue

            # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
            lang_obj = _tree_sitter_module.Language(lang_fn())
            self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            self._languages[lang_name] = lang_obj

    def parse(self, code: bytes, language: str) -> Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: "typescript" or "tsx"

        Returns:
            Tree object, or None if the language is not supported
            or tree-sitter is not available
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None

        result: Tree | None = parser.parse(code)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers

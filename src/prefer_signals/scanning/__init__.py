"""Scanning: file discovery, parsing and the syntax node model."""

from .languages import SUPPORTED_EXTENSIONS, detect_language, supported_languages
from .normalizer import TypeScriptNormalizer
from .scanner import SourceScanner
from .syntax import NodeKind, SourceUnit, Span
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser, get_supported_languages

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "TREE_SITTER_AVAILABLE",
    "NodeKind",
    "SourceScanner",
    "SourceUnit",
    "Span",
    "TreeSitterParser",
    "TypeScriptNormalizer",
    "detect_language",
    "get_supported_languages",
    "supported_languages",
]

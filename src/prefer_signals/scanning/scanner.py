"""File discovery for lint runs."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, Optional

from ..config import LintConfig
from ..exceptions import InvalidPathError
from ..logging_config import get_logger
from .languages import SKIP_DIRS, SUPPORTED_EXTENSIONS

logger = get_logger(__name__)


class SourceScanner:
    """Collects TypeScript files under a set of paths.

    Explicit file arguments are always returned when they have a supported
    extension; exclude patterns only apply to files found by walking.
    """

    def __init__(self, config: Optional[LintConfig] = None) -> None:
        self.config = config or LintConfig()
        self.files_skipped = 0

    def discover(self, paths: Iterable[Path]) -> list[Path]:
        """Return supported files in sorted, de-duplicated order.

        Raises:
            InvalidPathError: If a path does not exist
        """
        found: dict[str, Path] = {}
        for path in paths:
            if not path.exists():
                raise InvalidPathError(path, "does not exist")
            if path.is_file():
                if path.suffix.lower() in SUPPORTED_EXTENSIONS:
                    found[str(path)] = path
                else:
                    logger.debug(f"Skipped (extension): {path}")
                continue
            for filepath in self._walk(path):
                found[str(filepath)] = filepath

        return [found[key] for key in sorted(found)]

    def _walk(self, root: Path) -> Iterable[Path]:
        for dirpath, dirnames, filenames in os.walk(root, followlinks=self.config.follow_symlinks):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
            for name in sorted(filenames):
                filepath = Path(dirpath) / name
                if filepath.suffix.lower() not in SUPPORTED_EXTENSIONS:
                    continue
                if self._should_skip(filepath, root):
                    self.files_skipped += 1
                    logger.debug(f"Skipped (excluded): {filepath}")
                    continue
                yield filepath

    def _should_skip(self, filepath: Path, root: Path) -> bool:
        rel_path = filepath.relative_to(root).as_posix()
        for pattern in self.config.exclude_patterns:
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(filepath.name, pattern):
                return True

        try:
            size = filepath.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {filepath}: {e}")
            return True
        if size > self.config.max_file_size_bytes:
            logger.warning(f"Skipping {filepath}: larger than {self.config.max_file_size_mb} MB")
            return True
        return False

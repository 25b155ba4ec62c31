"""
Logging configuration for prefer-signals.

Diagnostics go to stdout through the formatters; log records go to stderr
through a rich handler so the two never interleave in piped output.

Per-file records are written through ``file_logger()``, which prefixes each
message with the file being linted:

    log = file_logger(logger, "src/app/app.component.ts")
    log.debug("3 diagnostic(s)")   # -> "src/app/app.component.ts: 3 diagnostic(s)"
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "prefer_signals"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach handlers to the ``prefer_signals`` logger.

    Only the package logger is configured; the root logger and handlers
    installed by an embedding application are left alone. Calling this again
    replaces the handlers from the previous call.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging (wins over verbose)
        log_file: Optional file that receives the same records, appended

    Returns:
        The configured ``prefer_signals`` logger
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_time=verbose,
        show_path=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``prefer_signals`` namespace.

    Args:
        name: Module name (e.g., 'prefer_signals.linter'); names outside the
              package are nested under it. None returns the package logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)


class FileLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the path of the file being linted."""

    def process(self, msg, kwargs):
        return f"{self.extra['path']}: {msg}", kwargs


def file_logger(logger: logging.Logger, path: Union[Path, str]) -> FileLogAdapter:
    return FileLogAdapter(logger, {"path": str(path)})

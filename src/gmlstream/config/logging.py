# topmark:header:start
#
#   project      : GMLStream
#   file         : logging.py
#   file_relpath : src/gmlstream/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream logging: a TRACE level below DEBUG and severity-colored output.

Every module gets its logger through `get_logger(__name__)`. The encoder logs
each emission decision (inline, back-reference, link, skip) at TRACE, so
``GMLSTREAM_LOG_LEVEL=TRACE`` replays the traversal order of a document.
Records go to stderr, never to the stream a document is written to.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, cast

from yachalk import chalk

from gmlstream.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

# Names accepted in GMLSTREAM_LOG_LEVEL (case-insensitive).
LOG_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"
)


class GmlstreamLogger(logging.Logger):
    """Logger with a `trace()` method for the TRACE level."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(GmlstreamLogger)


class ChalkFormatter(logging.Formatter):
    """Formatter coloring each record by severity with `yachalk`."""

    # Highest threshold first; the first one the record reaches picks the color.
    LEVEL_COLORS: tuple[tuple[int, Callable[[str], str]], ...] = (
        (logging.CRITICAL, chalk.red_bright),
        (logging.ERROR, chalk.red),
        (logging.WARNING, chalk.yellow),
        (logging.INFO, chalk.green),
        (logging.DEBUG, chalk.gray),
        (TRACE_LEVEL, chalk.blue),
    )

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, colorize in self.LEVEL_COLORS:
            if record.levelno >= threshold:
                return colorize(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by GMLSTREAM_LOG_LEVEL, or None if unset or unknown.

    Accepts a level name (``TRACE``, ``debug``...) or a number (``10``).
    """
    raw: str = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    return LOG_LEVEL_NAMES.get(raw)


def setup_logging(level: int | None = None) -> None:
    """(Re)configure the root logger with one colored stderr handler.

    Args:
        level (int | None): Logging level; when None, GMLSTREAM_LOG_LEVEL is
            consulted and CRITICAL is used if it is unset.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger: logging.Logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    # Source locations only below INFO.
    stream_handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    )
    root_logger.addHandler(stream_handler)
    root_logger.propagate = False


def get_logger(name: str) -> GmlstreamLogger:
    """Return the `GmlstreamLogger` for ``name`` (usually ``__name__``)."""
    return cast("GmlstreamLogger", logging.getLogger(name))

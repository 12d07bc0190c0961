# topmark:header:start
#
#   project      : GMLStream
#   file         : model.py
#   file_relpath : src/gmlstream/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics: non-fatal findings of an encode pass or a config build.

A diagnostic never changes the written document. Typical entries are a
property kind without a registered encoder (warning), a mistyped TOML value
(warning) or a config file that was loaded (info). Contract violations are
raised as exceptions instead, see `gmlstream.errors`.

`DiagnosticLog` is the mutable collector carried by `EncodingContext` and
`MutableEncoderConfig`; `FrozenDiagnosticLog` is the snapshot stored on a
frozen `EncoderConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from gmlstream.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from gmlstream.config.logging import GmlstreamLogger


logger: GmlstreamLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity of a diagnostic: INFO < WARNING < ERROR."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` colorizer for this level (human output only)."""
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """A single finding with its severity."""

    level: DiagnosticLevel
    message: str


@dataclass(frozen=True)
class DiagnosticStats:
    """Per-level counts of a set of diagnostics."""

    n_info: int = 0
    n_warning: int = 0
    n_error: int = 0

    @classmethod
    def of(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
        """Count ``diagnostics`` by level."""
        counts: dict[DiagnosticLevel, int] = dict.fromkeys(DiagnosticLevel, 0)
        for d in diagnostics:
            counts[d.level] += 1
        return cls(
            n_info=counts[DiagnosticLevel.INFO],
            n_warning=counts[DiagnosticLevel.WARNING],
            n_error=counts[DiagnosticLevel.ERROR],
        )

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error

    def as_dict(self) -> dict[str, int]:
        """Return counts keyed by level value (``info``, ``warning``, ``error``)."""
        return {
            DiagnosticLevel.INFO.value: self.n_info,
            DiagnosticLevel.WARNING.value: self.n_warning,
            DiagnosticLevel.ERROR.value: self.n_error,
        }


@dataclass
class DiagnosticLog:
    """Mutable, ordered diagnostics of one encode pass or config build."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticLog:
        """Return a new log holding ``diagnostics`` in order (e.g. when thawing a config)."""
        return cls(items=list(diagnostics))

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Record an informational entry, shown by the CLI only with ``-v``."""
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Record a warning.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Record an error that did not abort the pass."""
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Append diagnostics collected elsewhere, preserving their order."""
        for d in diagnostics:
            self._add(d)

    def has_warning(self) -> bool:
        """Return True if any warning was recorded."""
        return any(d.level is DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if any error was recorded."""
        return any(d.level is DiagnosticLevel.ERROR for d in self.items)

    def stats(self) -> DiagnosticStats:
        """Return per-level counts."""
        return DiagnosticStats.of(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return per-level counts as a JSON-friendly mapping."""
        return self.stats().as_dict()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable diagnostics snapshot, as stored on `EncoderConfig`."""

    items: tuple[Diagnostic, ...] = ()

    def stats(self) -> DiagnosticStats:
        """Return per-level counts."""
        return DiagnosticStats.of(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return per-level counts as a JSON-friendly mapping."""
        return self.stats().as_dict()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

# topmark:header:start
#
#   project      : GMLStream
#   file         : enum_mixins.py
#   file_relpath : src/gmlstream/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Keyed string enums for GMLStream.

``KeyedStrEnum`` is a ``str`` Enum whose ``.value`` is a stable key used in
JSON documents, TOML and CLI options, with a human ``label`` and extra
``aliases`` accepted by `parse()`. It backs `PropertyKind` and the CLI output
formats. No UI libraries are imported here.

Example:
    ```python
    class PropertyKind(KeyedStrEnum):
        CODE = ("code", "Coded value", ("code_type",))

    assert PropertyKind.parse("Code-Type") is PropertyKind.CODE
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _norm_token(s: str) -> str:
    """Fold case and treat '-', ' ' and '_' alike."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum with a stable key as value plus a label and parse aliases.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return str(self.value)

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return str(self.value)

    @property
    def tokens(self) -> tuple[str, ...]:
        """Normalized tokens that `parse()` maps to this member."""
        return tuple(_norm_token(t) for t in (self.value, self.name, *self.aliases))

    @classmethod
    def keys(cls) -> list[str]:
        """Return the stable keys of all members, in declaration order."""
        return [m.key for m in cls]

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Return the member whose key, name or alias matches ``raw``, else None.

        Matching is case-insensitive; '-' and ' ' count as '_'.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)
        return next((m for m in cls if token in m.tokens), None)

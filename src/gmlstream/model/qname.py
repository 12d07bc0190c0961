# topmark:header:start
#
#   project      : GMLStream
#   file         : qname.py
#   file_relpath : src/gmlstream/model/qname.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Qualified XML names.

`QName` pairs a namespace URI with a local name. It renders and parses
Clark notation (``{namespace}local``), the same spelling used by
``xml.etree.ElementTree``, so names can be written in config files and on
the command line without a prefix table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, order=True)
class QName:
    """Immutable qualified name.

    Attributes:
        namespace (str): Namespace URI; the empty string means "no namespace".
        local_name (str): Local part of the name (must be non-empty).
    """

    namespace: str
    local_name: str

    def __post_init__(self) -> None:
        if not self.local_name:
            raise ValueError("QName requires a non-empty local name")

    @classmethod
    def local(cls, local_name: str) -> QName:
        """Return a QName without namespace."""
        return cls("", local_name)

    @classmethod
    def parse(cls, text: str, namespaces: Mapping[str, str] | None = None) -> QName:
        """Parse Clark notation, a prefixed name, or a bare local name.

        Args:
            text (str): ``{ns}local``, ``prefix:local`` or ``local``.
            namespaces (Mapping[str, str] | None): Prefix to namespace URI table used
                to expand ``prefix:local``.

        Returns:
            QName: The parsed name.

        Raises:
            ValueError: If the text is malformed or uses an unknown prefix.
        """
        raw: str = text.strip()
        if raw.startswith("{"):
            end: int = raw.find("}")
            if end == -1:
                raise ValueError(f"Unterminated namespace in qualified name: {text!r}")
            return cls(raw[1:end], raw[end + 1 :])
        if ":" in raw:
            prefix, local_name = raw.split(":", 1)
            table: Mapping[str, str] = namespaces or {}
            if prefix not in table:
                raise ValueError(f"Unknown namespace prefix {prefix!r} in {text!r}")
            return cls(table[prefix], local_name)
        return cls("", raw)

    @property
    def has_namespace(self) -> bool:
        """Return True if this name is bound to a namespace."""
        return bool(self.namespace)

    @property
    def clark(self) -> str:
        """Return the Clark notation of this name (``{ns}local`` or ``local``)."""
        if self.namespace:
            return f"{{{self.namespace}}}{self.local_name}"
        return self.local_name

    def __str__(self) -> str:
        return self.clark

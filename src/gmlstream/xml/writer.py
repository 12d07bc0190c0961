# topmark:header:start
#
#   project      : GMLStream
#   file         : writer.py
#   file_relpath : src/gmlstream/xml/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forward-only XML token writer.

`DocumentWriter` is the narrow protocol the encoder drives. `XmlStreamWriter`
implements it on top of a text stream:

- Every call is written through immediately and in call order; nothing is
  buffered except what the underlying stream buffers itself. An `OSError`
  from the stream propagates unchanged.
- A start tag stays open until the next content, child or end call, so
  attributes may follow `start_element` / `empty_element`.
- Namespaces are repaired: the first element or attribute in a namespace that
  is not declared in scope gets an ``xmlns:<prefix>`` declaration, using the
  prefix bound via `set_prefix` or a generated ``ns<N>`` prefix.
- A start/end pair without content collapses to a self-closing tag.

Misuse (an attribute after content, an unbalanced end, writing after
`end_document`) raises `XmlWriterStateError`, as does text or an attribute
value holding a character that XML 1.0 does not allow (most C0 controls,
lone surrogates, U+FFFE and U+FFFF).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol, TextIO
from xml.sax.saxutils import escape

from gmlstream.config.logging import get_logger
from gmlstream.constants import DEFAULT_ENCODING
from gmlstream.errors import XmlWriterStateError
from gmlstream.model.qname import QName

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger

logger: GmlstreamLogger = get_logger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_ATTR_ENTITIES: dict[str, str] = {
    '"': "&quot;",
    "\n": "&#10;",
    "\r": "&#13;",
    "\t": "&#9;",
}

# Complement of the XML 1.0 Char production.
_NON_XML_CHAR = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _check_xml_chars(text: str, where: str) -> None:
    match = _NON_XML_CHAR.search(text)
    if match is not None:
        raise XmlWriterStateError(
            f"Character U+{ord(match.group()):04X} at offset {match.start()} of {where}"
            " is not allowed in XML 1.0"
        )


class DocumentWriter(Protocol):
    """Sequential markup emission primitives used by the encoder."""

    def start_document(self) -> None:
        """Begin the document (e.g. write the XML declaration)."""
        ...

    def end_document(self) -> None:
        """Close every open element and flush."""
        ...

    def set_prefix(self, prefix: str, namespace: str) -> None:
        """Bind ``prefix`` to ``namespace`` for the current scope and its descendants."""
        ...

    def start_element(self, name: QName) -> None:
        """Open an element that receives content and a matching `end_element`."""
        ...

    def empty_element(self, name: QName) -> None:
        """Open an element that closes itself at the next call other than `attribute`."""
        ...

    def attribute(self, name: QName | str, value: str) -> None:
        """Add an attribute to the element whose start tag is still open."""
        ...

    def characters(self, text: str) -> None:
        """Write character data inside the current element."""
        ...

    def end_element(self) -> None:
        """Close the innermost open element."""
        ...


class _Scope:
    """One element on the open-element stack."""

    __slots__ = ("declared", "hints", "tag")

    def __init__(self, tag: str) -> None:
        self.tag: str = tag
        # prefix -> namespace declared on this element
        self.declared: dict[str, str] = {}
        # namespace -> preferred prefix bound via set_prefix
        self.hints: dict[str, str] = {}


class XmlStreamWriter:
    """`DocumentWriter` writing XML text to a stream.

    Args:
        stream (TextIO): Destination text stream; the caller owns (and closes) it.
        encoding (str): Encoding named in the XML declaration.
        xml_declaration (bool): Whether `start_document` writes ``<?xml ...?>``.
    """

    def __init__(
        self,
        stream: TextIO,
        *,
        encoding: str = DEFAULT_ENCODING,
        xml_declaration: bool = True,
    ) -> None:
        self._stream: TextIO = stream
        self._encoding: str = encoding
        self._xml_declaration: bool = xml_declaration
        # Index 0 is the document scope; it never has a tag.
        self._stack: list[_Scope] = [_Scope("")]
        self._start_open: bool = False
        self._start_empty: bool = False
        self._generated: int = 0
        self._started: bool = False
        self._written: bool = False
        self._finished: bool = False

    # --- state helpers ---

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack) - 1

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._written = True

    def _check_active(self, operation: str) -> None:
        if self._finished:
            raise XmlWriterStateError(f"Cannot {operation} after end_document()")

    def _close_start_tag(self) -> None:
        if not self._start_open:
            return
        self._start_open = False
        if self._start_empty:
            self._start_empty = False
            self._write("/>")
            self._stack.pop()
        else:
            self._write(">")

    # --- namespace repairing ---

    def _in_scope_prefix(self, namespace: str) -> str | None:
        shadowed: set[str] = set()
        for scope in reversed(self._stack):
            for prefix, uri in scope.declared.items():
                if prefix in shadowed:
                    continue
                if uri == namespace:
                    return prefix
                shadowed.add(prefix)
        return None

    def _prefix_in_use(self, prefix: str) -> bool:
        return any(prefix in scope.declared for scope in self._stack)

    def _preferred_prefix(self, namespace: str, taken: dict[str, str]) -> str:
        for scope in reversed(self._stack):
            hint: str | None = scope.hints.get(namespace)
            if hint is not None and hint not in taken:
                return hint
        while True:
            candidate: str = f"ns{self._generated}"
            self._generated += 1
            if not self._prefix_in_use(candidate):
                return candidate

    def _qualify(self, name: QName, *, on_open_tag: bool = False) -> tuple[str, str | None]:
        """Return the lexical name for ``name`` and the prefix it still has to declare.

        With ``on_open_tag`` the declaration goes on the start tag that is already
        open, so prefixes declared there are not available for a new binding.
        """
        if not name.namespace:
            return name.local_name, None
        if name.namespace == XML_NAMESPACE:
            return f"xml:{name.local_name}", None
        prefix: str | None = self._in_scope_prefix(name.namespace)
        if prefix is not None:
            return f"{prefix}:{name.local_name}", None
        prefix = self._preferred_prefix(
            name.namespace, self._stack[-1].declared if on_open_tag else {}
        )
        return f"{prefix}:{name.local_name}", prefix

    def _declare(self, prefix: str, namespace: str) -> None:
        self._stack[-1].declared[prefix] = namespace
        self._write(f' xmlns:{prefix}="{escape(namespace, _ATTR_ENTITIES)}"')

    # --- DocumentWriter ---

    def start_document(self) -> None:
        """Write the XML declaration (if enabled); must precede all other output."""
        self._check_active("start the document")
        if self._started or self._written:
            raise XmlWriterStateError("start_document() must be the first call")
        self._started = True
        if self._xml_declaration:
            self._write(f'<?xml version="1.0" encoding="{self._encoding}"?>')

    def end_document(self) -> None:
        """Close all open elements and flush the stream."""
        self._check_active("end the document")
        self._close_start_tag()
        while self.depth > 0:
            self.end_element()
        self._finished = True
        self._stream.flush()
        logger.trace("Document ended")

    def set_prefix(self, prefix: str, namespace: str) -> None:
        """Bind a preferred prefix for ``namespace``.

        The binding applies to the current scope (the element whose start tag is
        open, or else the innermost open element) and its descendants. Nothing is
        written until an element or attribute actually uses the namespace.
        """
        self._check_active("bind a prefix")
        if not prefix or not namespace:
            raise XmlWriterStateError("set_prefix() requires a prefix and a namespace")
        self._stack[-1].hints[namespace] = prefix

    def _open(self, name: QName, *, empty: bool) -> None:
        self._check_active("write an element")
        self._close_start_tag()
        lexical, undeclared = self._qualify(name)
        scope = _Scope(lexical)
        # Bindings made on the parent scope carry over through lookup.
        self._stack.append(scope)
        self._write(f"<{lexical}")
        if undeclared is not None:
            self._declare(undeclared, name.namespace)
        self._start_open = True
        self._start_empty = empty

    def start_element(self, name: QName) -> None:
        """Open ``name``; content and children follow until `end_element`."""
        self._open(name, empty=False)

    def empty_element(self, name: QName) -> None:
        """Open ``name`` as a self-closing element (attributes may follow)."""
        self._open(name, empty=True)

    def attribute(self, name: QName | str, value: str) -> None:
        """Write an attribute on the open start tag.

        Raises:
            XmlWriterStateError: If no start tag is open, or ``value`` holds a character
                XML 1.0 does not allow.
        """
        self._check_active("write an attribute")
        if not self._start_open:
            raise XmlWriterStateError(
                f"Cannot write attribute {name} outside of an open start tag"
            )
        qname: QName = name if isinstance(name, QName) else QName.local(name)
        _check_xml_chars(value, f"attribute {qname}")
        lexical, undeclared = self._qualify(qname, on_open_tag=True)
        if undeclared is not None:
            self._declare(undeclared, qname.namespace)
        self._write(f' {lexical}="{escape(value, _ATTR_ENTITIES)}"')

    def characters(self, text: str) -> None:
        """Write escaped character data.

        Raises:
            XmlWriterStateError: If no element is open, or ``text`` holds a character
                XML 1.0 does not allow.
        """
        self._check_active("write characters")
        self._close_start_tag()
        if self.depth == 0:
            raise XmlWriterStateError("Cannot write characters outside of the root element")
        _check_xml_chars(text, "character data")
        if text:
            self._write(escape(text))

    def end_element(self) -> None:
        """Close the innermost open element.

        Raises:
            XmlWriterStateError: If no element is open.
        """
        self._check_active("end an element")
        if self._start_open and self._start_empty:
            self._close_start_tag()
        if self.depth == 0:
            raise XmlWriterStateError("end_element() without a matching start_element()")
        if self._start_open:
            self._start_open = False
            self._write("/>")
        else:
            self._write(f"</{self._stack[-1].tag}>")
        self._stack.pop()

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._stream.flush()

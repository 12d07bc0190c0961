# topmark:header:start
#
#   project      : GMLStream
#   file         : render.py
#   file_relpath : src/gmlstream/config/io/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render encoder configuration as a TOML document.

TOML has no `null`: unset values are left out. Optional ``[encoder]`` keys
that are unset are written as commented-out examples, so a rendered config
(e.g. from ``gmlstream show-defaults``) doubles as a starting template.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit

from gmlstream.config.keys import Toml
from gmlstream.config.logging import get_logger

if TYPE_CHECKING:
    from tomlkit.container import Container
    from tomlkit.items import Table

    from gmlstream.config.logging import GmlstreamLogger

    from .types import TomlTable

logger: GmlstreamLogger = get_logger(__name__)

# Example values shown for unset optional keys, per section.
UNSET_KEY_EXAMPLES: Final[dict[str, dict[str, str]]] = {
    Toml.SECTION_ENCODER: {
        Toml.KEY_REFERENCE_TEMPLATE: '"http://example.com/wfs?GMLOBJECTID={}"',
        Toml.KEY_TRAVERSE_XLINK_EXPIRY: "60",
    },
}


def _fill(target: Container | Table, section: str, values: Mapping[str, Any]) -> None:
    for key, value in values.items():
        if value is None:
            logger.debug("Ignoring unset key %s.%s", section, key)
            continue
        if isinstance(value, Mapping):
            child: Table = tomlkit.table()
            _fill(child, key, cast("Mapping[str, Any]", value))
            target.add(key, child)
        elif isinstance(value, list):
            items: list[Any] = [v for v in cast("list[Any]", value) if v is not None]
            target.add(key, items)
        else:
            target.add(key, value)

    for key, example in UNSET_KEY_EXAMPLES.get(section, {}).items():
        if values.get(key) is None:
            target.add(tomlkit.comment(f"{key} = {example}"))


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a config mapping to TOML text.

    Args:
        toml_dict (TomlTable): Config mapping, either bare (``[encoder]``,
            ``[output]``) or nested under ``[tool.gmlstream]``.

    Returns:
        str: The rendered TOML document.
    """
    doc: Any = tomlkit.document()
    _fill(cast("Container", doc), "", toml_dict)
    return cast("str", tomlkit.dumps(doc))

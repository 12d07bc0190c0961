# topmark:header:start
#
#   project      : GMLStream
#   file         : keys.py
#   file_relpath : src/gmlstream/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for GMLStream configuration.

This module defines the authoritative string constants used when reading,
writing, and validating GMLStream configuration from TOML sources
(``gmlstream.toml`` and ``[tool.gmlstream]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by GMLStream configuration.

    The ordering of constants mirrors the output of ``gmlstream show-defaults``
    to make it easy to audit schema changes and keep defaults/docs/parsing aligned.
    """

    # [encoder]
    SECTION_ENCODER: Final[str] = "encoder"

    KEY_REFERENCE_TEMPLATE: Final[str] = "reference_template"
    KEY_TRAVERSE_XLINK_DEPTH: Final[str] = "traverse_xlink_depth"
    KEY_TRAVERSE_XLINK_EXPIRY: Final[str] = "traverse_xlink_expiry"
    KEY_REQUESTED_PROPERTIES: Final[str] = "requested_properties"

    # [output]
    SECTION_OUTPUT: Final[str] = "output"

    KEY_FEATURE_PREFIX: Final[str] = "feature_prefix"
    KEY_XML_DECLARATION: Final[str] = "xml_declaration"
    KEY_ENCODING: Final[str] = "encoding"

    # Provenance, export only
    KEY_CONFIG_FILES: Final[str] = "config_files"

    # ---------------------------- Schema helpers ----------------------------

    # Allowed top-level keys under [tool.gmlstream] / gmlstream.toml.
    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            SECTION_ENCODER,
            SECTION_OUTPUT,
        }
    )

    # Allowed keys per section.
    ALLOWED_SECTION_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_ENCODER: frozenset(
            {
                KEY_REFERENCE_TEMPLATE,
                KEY_TRAVERSE_XLINK_DEPTH,
                KEY_TRAVERSE_XLINK_EXPIRY,
                KEY_REQUESTED_PROPERTIES,
            }
        ),
        SECTION_OUTPUT: frozenset(
            {
                KEY_FEATURE_PREFIX,
                KEY_XML_DECLARATION,
                KEY_ENCODING,
            }
        ),
    }

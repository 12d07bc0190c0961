# topmark:header:start
#
#   project      : GMLStream
#   file         : constants.py
#   file_relpath : src/gmlstream/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

GMLSTREAM_VERSION: str = get_version("gmlstream")

# Name of the project-local config file (pyproject.toml uses [tool.gmlstream]).
CONFIG_FILE_NAME: Final[str] = "gmlstream.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "gmlstream"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: Final[str] = "GMLSTREAM_LOG_LEVEL"

# Substitution point for object ids in external reference templates.
REFERENCE_PLACEHOLDER: Final[str] = "{}"

DEFAULT_FEATURE_PREFIX: Final[str] = "app"
DEFAULT_ENCODING: Final[str] = "UTF-8"

VALUE_NOT_SET: str = "<not set>"

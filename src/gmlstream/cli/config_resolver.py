# topmark:header:start
#
#   project      : GMLStream
#   file         : config_resolver.py
#   file_relpath : src/gmlstream/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Utilities for resolving the encoder configuration from Click parameters.

This module bridges CLI parsing and the configuration system: it builds an
`ArgsNamespace` from the command options and merges defaults, discovered
project files, explicit ``--config`` files and CLI overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from gmlstream.cli.cli_types import build_args_namespace
from gmlstream.config.logging import get_logger
from gmlstream.config.model import MutableEncoderConfig

if TYPE_CHECKING:
    from gmlstream.cli.cli_types import ArgsNamespace
    from gmlstream.config.logging import GmlstreamLogger

logger: GmlstreamLogger = get_logger(__name__)


def resolve_config_from_click(
    *,
    input_path: Path | None,
    no_config: bool,
    config_paths: list[str],
    reference_template: str | None = None,
    traverse_xlink_depth: int | None = None,
    traverse_xlink_expiry: int | None = None,
    requested_properties: list[str] | None = None,
) -> MutableEncoderConfig:
    """Build a merged configuration draft from Click parameters.

    Discovery is anchored to the directory of ``input_path`` when given, or to
    the current working directory.

    Resolution order (lowest → highest precedence):
      1. **Built-in defaults**.
      2. **Discovered project configs** (root → anchor), unless `--no-config` is set.
         In each directory ``pyproject.toml`` (``[tool.gmlstream]``) is merged
         before ``gmlstream.toml``.
      3. **Explicit config files** passed via `--config`, merged **in order**.
      4. **CLI overrides**, applied last.

    Args:
        input_path (Path | None): Input document; its parent anchors discovery.
        no_config (bool): If True, skip project config discovery.
        config_paths (list[str]): Extra config TOML files to merge.
        reference_template (str | None): ``--template`` override.
        traverse_xlink_depth (int | None): ``--depth`` override.
        traverse_xlink_expiry (int | None): ``--expiry`` override.
        requested_properties (list[str] | None): ``--property`` values (Clark notation).

    Returns:
        MutableEncoderConfig: The merged draft. Call `.freeze()` to obtain the
            `EncoderConfig` snapshot used by the encoder.

    Raises:
        TomlLoadError: If an explicit config file cannot be read or parsed.
    """
    args: ArgsNamespace = build_args_namespace(
        no_config=no_config,
        config_files=config_paths,
        reference_template=reference_template,
        traverse_xlink_depth=traverse_xlink_depth,
        traverse_xlink_expiry=traverse_xlink_expiry,
        requested_properties=requested_properties,
    )
    logger.trace("ArgsNamespace: %s", args)

    anchor: Path = Path.cwd().resolve()
    if input_path is not None:
        anchor = input_path.resolve().parent
    logger.debug("Config discovery anchor: %s", anchor)

    draft: MutableEncoderConfig = MutableEncoderConfig.load_merged(
        anchor=anchor,
        extra_config_files=[Path(p) for p in args.get("config_files") or []],
        no_config=bool(args.get("no_config")),
    )

    # CLI overrides last
    return draft.apply_cli_args(args)

# topmark:header:start
#
#   project      : GMLStream
#   file         : options.py
#   file_relpath : src/gmlstream/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options for the GMLStream CLI.

The group takes the output options (``-v``/``-q``, ``--color``/``--no-color``);
``encode`` takes the config options (``--config``, ``--no-config``) and the
traversal overrides (``--depth``, ``--template``, ``--expiry``, ``--property``).
Each decorator only declares options; resolution happens in `cli.main` and
`cli.config_resolver`.
"""

import logging
import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from gmlstream.cli.cli_types import ColorMode, EnumChoiceParam, QNameParam
from gmlstream.cli.errors import GmlstreamUsageError
from gmlstream.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")

# Logging level per -v count; -vvv and beyond stay at TRACE.
VERBOSE_LOG_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG, TRACE_LEVEL)
QUIET_LOG_LEVEL: int = logging.ERROR


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Return the logging level selected by ``-v``/``-q`` counts.

    No flag gives WARNING, ``-v`` INFO, ``-vv`` DEBUG, ``-vvv`` TRACE, and any
    ``-q`` ERROR.

    Raises:
        GmlstreamUsageError: If both flags are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise GmlstreamUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return QUIET_LOG_LEVEL
    return VERBOSE_LOG_LEVELS[min(verbose_count, len(VERBOSE_LOG_LEVELS) - 1)]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (both countable)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="More output: list loaded config files, report written files, log more.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress diagnostics and informational output.",
    )(f)
    return f


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Return True if styled output should be written.

    An explicit ``always``/``never`` wins; under ``auto`` FORCE_COLOR (not "0")
    enables and NO_COLOR disables color before falling back to TTY detection.
    """
    if cli_mode is ColorMode.ALWAYS:
        return True
    if cli_mode is ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color MODE`` and its ``--no-color`` shorthand."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (same as --color never).",
    )(f)
    return f


def _reject_underscored(ctx: click.Context, param: click.Parameter, _value: object) -> None:
    source: ParameterSource | None = ctx.get_parameter_source(param.name) if param.name else None
    if source is not ParameterSource.COMMANDLINE:
        return
    bad: str = param.opts[0]
    raise click.UsageError(f"Unknown option: {bad}. Did you mean {bad.replace('_', '-')}?")


def underscored_trap_option(option: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register a hidden underscored spelling of ``option`` that fails with a hint.

    ``underscored_trap_option("--no-config")`` makes ``--no_config`` a usage
    error suggesting ``--no-config`` instead of Click's generic "No such option".
    """
    spelled: str = "--" + option.removeprefix("--").replace("-", "_")
    return click.option(
        spelled,
        f"_trap_{spelled.removeprefix('--')}",
        hidden=True,
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_reject_underscored,
    )


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``-c/--config FILE`` (repeatable)."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Skip gmlstream.toml/pyproject.toml discovery (defaults and --config only).",
    )(f)
    f = underscored_trap_option("--no-config")(f)
    f = click.option(
        "--config",
        "-c",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Config file to merge over discovered ones (repeatable, later wins).",
    )(f)
    return f


def common_traversal_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the reference-traversal overrides of ``[encoder]``."""
    f = click.option(
        "--depth",
        "traverse_xlink_depth",
        type=int,
        default=None,
        help="Inline expansion budget for feature properties (negative: unlimited).",
    )(f)
    f = click.option(
        "--template",
        "reference_template",
        default=None,
        metavar="TEMPLATE",
        help="External link template with one '{}' placeholder for the target id.",
    )(f)
    f = click.option(
        "--expiry",
        "traverse_xlink_expiry",
        type=int,
        default=None,
        help="Expiry value handed to external link generation.",
    )(f)
    f = click.option(
        "--property",
        "requested_properties",
        type=QNameParam(),
        multiple=True,
        metavar="QNAME",
        help="Request an optional property, in Clark notation '{ns}local' (repeatable).",
    )(f)
    return f

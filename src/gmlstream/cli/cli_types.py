# topmark:header:start
#
#   project      : GMLStream
#   file         : cli_types.py
#   file_relpath : src/gmlstream/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and argument parsing helpers for GMLStream.

This module defines the `ArgsNamespace` TypedDict used to pass parsed CLI state
to the configuration layer (its keys match the TOML keys understood by
`MutableEncoderConfig.apply_cli_args`), plus custom Click parameter types.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Iterable, NoReturn, Protocol, TypedDict, TypeVar, cast

import click

from gmlstream.core.enum_mixins import KeyedStrEnum
from gmlstream.model.qname import QName

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

# Type variable bounded to Enum for generic EnumChoiceParam
E = TypeVar("E", bound=Enum)


class OutputFormat(KeyedStrEnum):
    """Output format for informational commands."""

    TEXT = ("text", "Plain text", ("default", "plain"))
    JSON = ("json", "JSON")


class ColorMode(KeyedStrEnum):
    """User intent for styled terminal output."""

    AUTO = ("auto", "Color when stdout is a terminal")
    ALWAYS = ("always", "Always color", ("on", "force"))
    NEVER = ("never", "Never color", ("off", "none"))


class ArgsNamespace(TypedDict, total=False):
    """Parsed CLI arguments, keyed like the configuration they override.

    Attributes:
        verbosity_level (int | None): Program-output verbosity from the group options.
        no_config (bool | None): Whether to skip project config discovery.
        config_files (list[str] | None): Explicit config files, merged in order.
        reference_template (str | None): External link template override.
        traverse_xlink_depth (int | None): Inline expansion budget override.
        traverse_xlink_expiry (int | None): Link expiry override.
        requested_properties (list[str] | None): Allow-list override (Clark notation).
    """

    verbosity_level: int | None
    no_config: bool | None
    config_files: list[str] | None
    reference_template: str | None
    traverse_xlink_depth: int | None
    traverse_xlink_expiry: int | None
    requested_properties: list[str] | None


def build_args_namespace(
    *,
    verbosity_level: int | None = None,
    no_config: bool | None = None,
    config_files: list[str] | None = None,
    reference_template: str | None = None,
    traverse_xlink_depth: int | None = None,
    traverse_xlink_expiry: int | None = None,
    requested_properties: list[str] | None = None,
) -> ArgsNamespace:
    """Build an `ArgsNamespace` dictionary for CLI argument passing."""
    return {
        "verbosity_level": verbosity_level,
        "no_config": no_config,
        "config_files": config_files,
        "reference_template": reference_template,
        "traverse_xlink_depth": traverse_xlink_depth,
        "traverse_xlink_expiry": traverse_xlink_expiry,
        "requested_properties": requested_properties or None,
    }


# --- Custom Click parameter types ---


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        if issubclass(self.enum_cls, KeyedStrEnum):
            parsed = self.enum_cls.parse(str(value))
            if parsed is not None:
                return cast("E", parsed)
        else:
            lookup: dict[str, E] = {
                cast("str", getattr(choice, "value", str(choice))).lower(): choice
                for choice in cast("Iterable[E]", self.enum_cls)
            }
            if str(value).lower() in lookup:
                return lookup[str(value).lower()]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_GMLSTREAM_COMPLETE=bash_source gmlstream)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.lower().startswith(prefix)]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumChoiceParam({self.enum_cls.__name__})"


class QNameParam(ParamTypeBase):
    """A Click parameter type for qualified names in Clark notation (``{ns}local``)."""

    name = "qname"

    def convert(
        self,
        value: str | QName,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> str:
        """Validate ``value`` and return it in Clark notation."""
        if isinstance(value, QName):
            return value.clark
        try:
            # No prefix table: prefixed names are rejected, Clark notation is required.
            return QName.parse(value).clark
        except ValueError as exc:
            raise click.BadParameter(str(exc), param=param, ctx=ctx) from exc

# topmark:header:start
#
#   project      : GMLStream
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the GMLStream test suite.

This file sets up global fixtures, typed marker helpers and small builders for
feature graphs and encoder configurations.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `MutableEncoderConfig` (mutable), then `freeze()` into
      an `EncoderConfig` for the encoder and the public API.
    - Do **not** mutate a frozen `EncoderConfig`. If you need to tweak one,
      call `EncoderConfig.thaw()`, edit the returned builder, then `freeze()` again.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from gmlstream.config import logging
from gmlstream.config.model import MutableEncoderConfig
from gmlstream.constants import LOG_LEVEL_ENV_VAR
from gmlstream.encoder import FeatureEncoder
from gmlstream.model import Feature, PropertyKind, PropertyType, QName
from gmlstream.xml import XmlStreamWriter

if TYPE_CHECKING:
    from gmlstream.config.model import EncoderConfig
    from gmlstream.encoder import EncodingContext, IdentityRegistry

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

APP_NS = "http://www.example.com/app"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_gmlstream_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so emission decisions are captured on failure.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- builders ---


def app(local_name: str) -> QName:
    """Return a name in the test application namespace."""
    return QName(APP_NS, local_name)


def prop_type(
    local_name: str,
    kind: PropertyKind = PropertyKind.SIMPLE,
    *,
    optional: bool = False,
) -> PropertyType:
    """Return a property type in the application namespace."""
    return PropertyType(app(local_name), kind, min_occurs=0 if optional else 1)


def make_config(**overrides: Any) -> EncoderConfig:
    """Return a frozen `EncoderConfig` built from defaults and overrides.

    Keys are the TOML key names (``reference_template``, ``traverse_xlink_depth``,
    ``requested_properties``, ...). The XML declaration is off unless requested,
    so encoded fragments are easy to compare.
    """
    overrides.setdefault("xml_declaration", False)
    draft: MutableEncoderConfig = MutableEncoderConfig.from_defaults()
    return draft.apply_cli_args(overrides).freeze()


def encode_feature(
    feature: Feature,
    config: EncoderConfig | None = None,
    *,
    registry: IdentityRegistry | None = None,
    **encoder_kwargs: Any,
) -> tuple[str, EncodingContext]:
    """Encode ``feature`` to a string and return it with the pass context."""
    cfg: EncoderConfig = config if config is not None else make_config()
    buffer = io.StringIO()
    writer = XmlStreamWriter(buffer, encoding=cfg.encoding, xml_declaration=cfg.xml_declaration)
    encoder = FeatureEncoder(writer, cfg, **encoder_kwargs)
    writer.start_document()
    ctx: EncodingContext = encoder.export(feature, registry)
    writer.end_document()
    return buffer.getvalue(), ctx


def parse_xml(text: str) -> ET.Element:
    """Parse an encoded document (proves it is well-formed XML)."""
    return ET.fromstring(text)


def clark(namespace: str, local_name: str) -> str:
    """Return the ElementTree tag for a namespaced name."""
    return f"{{{namespace}}}{local_name}"

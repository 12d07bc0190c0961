# topmark:header:start
#
#   project      : GMLStream
#   file         : encode.py
#   file_relpath : src/gmlstream/cli/commands/encode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GMLStream `encode` command.

Loads a JSON feature document, resolves the layered configuration and writes
the GML document to ``--output`` (or stdout). Config and pass diagnostics are
printed to stderr.

Exit codes:
    - 0: document written.
    - 64: invalid option combination.
    - 65: malformed input document or value/kind mismatch.
    - 66: input file not found.
    - 70: geometry or writer failure (including characters XML 1.0 forbids).
    - 74: read or write error.
    - 78: unreadable config file, invalid reference template or unknown encoding.
"""

from __future__ import annotations

import codecs
import io
from pathlib import Path
from typing import TYPE_CHECKING

import click

from gmlstream.api import encode_document
from gmlstream.cli.cmd_common import get_console, get_effective_verbosity, report_diagnostics
from gmlstream.cli.config_resolver import resolve_config_from_click
from gmlstream.cli.errors import (
    GmlstreamConfigError,
    GmlstreamDataError,
    GmlstreamEncodingError,
    GmlstreamFileNotFoundError,
    GmlstreamIOError,
)
from gmlstream.cli.options import common_config_options, common_traversal_options
from gmlstream.config.io import TomlLoadError
from gmlstream.config.logging import get_logger
from gmlstream.errors import (
    EncodingContractError,
    FeatureSourceError,
    GeometryEncodingError,
    ReferenceTemplateError,
    XmlWriterStateError,
)
from gmlstream.source import load_feature_document

if TYPE_CHECKING:
    from gmlstream.cli_shared.console_api import ConsoleLike
    from gmlstream.config.model import EncoderConfig, MutableEncoderConfig
    from gmlstream.encoder import EncodingContext
    from gmlstream.source import FeatureDocument

logger = get_logger(__name__)


def _load_document(input_path: str) -> FeatureDocument:
    try:
        if input_path == "-":
            return load_feature_document(click.get_text_stream("stdin").read())
        path = Path(input_path)
        if not path.exists():
            raise GmlstreamFileNotFoundError(f"Input file not found: {input_path}")
        return load_feature_document(path)
    except FeatureSourceError as exc:
        raise GmlstreamDataError(f"Invalid feature document {input_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise GmlstreamDataError(f"Input is not valid UTF-8: {input_path}") from exc
    except OSError as exc:
        raise GmlstreamIOError(f"Cannot read {input_path}: {exc}") from exc


def _encode(doc: FeatureDocument, config: EncoderConfig, output: Path | None) -> EncodingContext:
    try:
        codecs.lookup(config.encoding)
    except LookupError as exc:
        raise GmlstreamConfigError(f"Unknown output encoding {config.encoding!r}") from exc
    try:
        if output is None:
            return _encode_to_stdout(doc, config)
        with output.open(
            "w", encoding=config.encoding, errors="xmlcharrefreplace", newline=""
        ) as fh:
            return encode_document(doc, fh, config=config)
    except EncodingContractError as exc:
        raise GmlstreamDataError(str(exc)) from exc
    except (GeometryEncodingError, XmlWriterStateError) as exc:
        raise GmlstreamEncodingError(str(exc)) from exc
    except OSError as exc:
        raise GmlstreamIOError(f"Cannot write output: {exc}") from exc


def _encode_to_stdout(doc: FeatureDocument, config: EncoderConfig) -> EncodingContext:
    # Encode with the configured charset so the bytes match the XML declaration.
    stream = io.TextIOWrapper(
        click.get_binary_stream("stdout"),
        encoding=config.encoding,
        errors="xmlcharrefreplace",
        newline="",
    )
    try:
        ctx: EncodingContext = encode_document(doc, stream, config=config)
        stream.write("\n")
        stream.flush()
    finally:
        # Leave the process stdout open.
        stream.detach()
    return ctx


@click.command(
    name="encode",
    help="Encode a JSON feature document as a GML 3.1.1 document.",
)
@click.argument("input_path", metavar="INPUT", type=str)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the document to FILE instead of stdout.",
)
@common_traversal_options
@common_config_options
def encode_command(
    *,
    input_path: str,
    output_path: Path | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    traverse_xlink_depth: int | None,
    reference_template: str | None,
    traverse_xlink_expiry: int | None,
    requested_properties: tuple[str, ...],
) -> None:
    """Encode INPUT (a JSON feature document, or '-' for stdin).

    Args:
        input_path (str): Input document path or ``-``.
        output_path (Path | None): Destination file; stdout when None.
        no_config (bool): Skip project config discovery.
        config_paths (tuple[str, ...]): Explicit config files.
        traverse_xlink_depth (int | None): ``--depth`` override.
        reference_template (str | None): ``--template`` override.
        traverse_xlink_expiry (int | None): ``--expiry`` override.
        requested_properties (tuple[str, ...]): ``--property`` values.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    try:
        draft: MutableEncoderConfig = resolve_config_from_click(
            input_path=None if input_path == "-" else Path(input_path),
            no_config=no_config,
            config_paths=list(config_paths),
            reference_template=reference_template,
            traverse_xlink_depth=traverse_xlink_depth,
            traverse_xlink_expiry=traverse_xlink_expiry,
            requested_properties=list(requested_properties),
        )
        config: EncoderConfig = draft.freeze()
    except TomlLoadError as exc:
        raise GmlstreamConfigError(str(exc)) from exc
    except ReferenceTemplateError as exc:
        raise GmlstreamConfigError(str(exc)) from exc

    report_diagnostics(console, config.diagnostics, verbosity=vlevel)
    logger.debug("Effective config sources: %s", config.config_files)

    doc: FeatureDocument = _load_document(input_path)
    pass_ctx: EncodingContext = _encode(doc, config, output_path)

    logger.debug("Pass diagnostics: %s", pass_ctx.diagnostics.to_dict())
    report_diagnostics(console, pass_ctx.diagnostics, verbosity=vlevel)
    if vlevel > 0 and output_path is not None:
        console.print(f"Wrote {output_path} ({len(pass_ctx.registry)} identified object(s))")

# topmark:header:start
#
#   project      : GMLStream
#   file         : model.py
#   file_relpath : src/gmlstream/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder configuration model and merge policy.

This module defines:
    - `EncoderConfig`: an immutable, runtime snapshot used by an encode pass.
    - `MutableEncoderConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `EncoderConfig` and thawed back for edits.

Immutability:
    - `EncoderConfig` stores tuples/frozensets and is ``frozen=True`` to prevent
      accidental mutation while encoding. Use `EncoderConfig.thaw` → edit →
      `MutableEncoderConfig.freeze` for safe updates.

Layering:
    Merge order (lowest → highest precedence) is built-in defaults, discovered
    project files (root-most first), explicit ``--config`` files, then CLI/API
    overrides. Every builder field is tri-state (``None`` = inherit) so a later
    layer only overrides what it actually sets.

Validation:
    Shape problems in TOML sources are recorded as warnings on the builder's
    `DiagnosticLog`; contract violations (a reference template without exactly
    one ``{}`` placeholder) raise `ReferenceTemplateError` from `freeze`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gmlstream.config.io import (
    TomlLoadError,
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_checked,
    get_string_value_or_none_checked,
    get_table_value_checked,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
    warn_unknown_keys,
)
from gmlstream.config.keys import Toml
from gmlstream.config.logging import get_logger
from gmlstream.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ENCODING,
    DEFAULT_FEATURE_PREFIX,
    PYPROJECT_TOOL_SECTION,
    REFERENCE_PLACEHOLDER,
)
from gmlstream.diagnostic import DiagnosticLog, FrozenDiagnosticLog
from gmlstream.errors import ReferenceTemplateError
from gmlstream.model.qname import QName

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gmlstream.config.io import TomlTable
    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.diagnostic import Diagnostic

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: GmlstreamLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


def validate_reference_template(template: str) -> str:
    """Return ``template`` if it holds exactly one ``{}`` placeholder.

    Raises:
        ReferenceTemplateError: If the placeholder is missing or repeated.
    """
    count: int = template.count(REFERENCE_PLACEHOLDER)
    if count != 1:
        raise ReferenceTemplateError(template, count)
    return template


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Immutable runtime configuration for one encode pass.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the snapshot was built.
        reference_template (str | None): URI template for external links; the single
            ``{}`` placeholder receives the target id. ``None`` disables external
            links, so every feature property is inlined.
        traverse_xlink_depth (int): Inline expansion budget for feature properties;
            negative means unlimited.
        traverse_xlink_expiry (int | None): Opaque value handed to link generation.
        requested_properties (frozenset[QName]): Allow-list for optional properties;
            empty means every property is requested.
        feature_prefix (str): Namespace prefix bound for feature and property elements.
        xml_declaration (bool): Whether `write_document` emits ``<?xml ...?>``.
        encoding (str): Declared (and, for files, actual) document encoding.
        config_files (tuple[Path | str, ...]): Config sources merged into this snapshot.
        diagnostics (FrozenDiagnosticLog): Warnings collected while loading or merging.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    reference_template: str | None = None
    traverse_xlink_depth: int = -1
    traverse_xlink_expiry: int | None = None
    requested_properties: frozenset[QName] = frozenset()
    feature_prefix: str = DEFAULT_FEATURE_PREFIX
    xml_declaration: bool = True
    encoding: str = DEFAULT_ENCODING
    config_files: tuple[Path | str, ...] = ()
    diagnostics: FrozenDiagnosticLog = field(default_factory=FrozenDiagnosticLog)

    def __post_init__(self) -> None:
        if self.reference_template is not None:
            validate_reference_template(self.reference_template)

    @property
    def unlimited_depth(self) -> bool:
        """Return True if feature properties may be inlined at any depth."""
        return self.traverse_xlink_depth < 0

    def is_property_requested(self, name: QName) -> bool:
        """Return True if ``name`` passes the allow-list (an empty list admits all)."""
        return not self.requested_properties or name in self.requested_properties

    def to_toml_dict(self) -> TomlTable:
        """Convert this snapshot into a TOML-serializable dict.

        ``None`` values are kept here and dropped by the TOML renderer.
        """
        return {
            Toml.SECTION_ENCODER: {
                Toml.KEY_REFERENCE_TEMPLATE: self.reference_template,
                Toml.KEY_TRAVERSE_XLINK_DEPTH: self.traverse_xlink_depth,
                Toml.KEY_TRAVERSE_XLINK_EXPIRY: self.traverse_xlink_expiry,
                Toml.KEY_REQUESTED_PROPERTIES: sorted(
                    q.clark for q in self.requested_properties
                ),
            },
            Toml.SECTION_OUTPUT: {
                Toml.KEY_FEATURE_PREFIX: self.feature_prefix,
                Toml.KEY_XML_DECLARATION: self.xml_declaration,
                Toml.KEY_ENCODING: self.encoding,
            },
        }

    def to_toml(self) -> str:
        """Render this snapshot as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableEncoderConfig:
        """Return a mutable copy of this frozen config.

        Symmetry:
            Mirrors `MutableEncoderConfig.freeze`. Prefer thaw→edit→freeze rather
            than replacing fields on a runtime `EncoderConfig`.
        """
        return MutableEncoderConfig(
            timestamp=self.timestamp,
            reference_template=self.reference_template,
            traverse_xlink_depth=self.traverse_xlink_depth,
            traverse_xlink_expiry=self.traverse_xlink_expiry,
            requested_properties=sorted(self.requested_properties),
            feature_prefix=self.feature_prefix,
            xml_declaration=self.xml_declaration,
            encoding=self.encoding,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableEncoderConfig:
    """Mutable configuration used during discovery and merging.

    This builder collects config from defaults, project files, extra files, and CLI
    overrides, then produces an immutable `EncoderConfig` via `freeze`. TOML I/O is
    delegated to `gmlstream.config.io`.

    ``None`` on any option means "not set by this layer".
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    reference_template: str | None = None
    traverse_xlink_depth: int | None = None
    traverse_xlink_expiry: int | None = None
    requested_properties: list[QName] | None = None

    feature_prefix: str | None = None
    xml_declaration: bool | None = None
    encoding: str | None = None

    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Collected diagnostics while loading / merging config.
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> EncoderConfig:
        """Freeze this mutable builder into an immutable `EncoderConfig`.

        An empty ``reference_template`` is treated as unset (TOML has no null).

        Raises:
            ReferenceTemplateError: If a reference template is set without exactly
                one ``{}`` placeholder.
        """
        template: str | None = self.reference_template or None
        if template is not None:
            validate_reference_template(template)

        return EncoderConfig(
            timestamp=self.timestamp,
            reference_template=template,
            traverse_xlink_depth=(
                self.traverse_xlink_depth if self.traverse_xlink_depth is not None else -1
            ),
            traverse_xlink_expiry=self.traverse_xlink_expiry,
            requested_properties=frozenset(self.requested_properties or ()),
            feature_prefix=self.feature_prefix or DEFAULT_FEATURE_PREFIX,
            xml_declaration=self.xml_declaration if self.xml_declaration is not None else True,
            encoding=self.encoding or DEFAULT_ENCODING,
            config_files=tuple(self.config_files),
            diagnostics=self.diagnostics.freeze(),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableEncoderConfig:
        """Return a builder populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableEncoderConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``gmlstream.toml`` and ``pyproject.toml`` files, extracting the
        ``[tool.gmlstream]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableEncoderConfig | None: The builder if successful; None if a
                ``pyproject.toml`` has no ``[tool.gmlstream]`` section.

        Raises:
            TomlLoadError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableEncoderConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path)

        if path.name == "pyproject.toml":
            tool_section: Any = toml_data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
            if not tool_section or not isinstance(tool_section, dict):
                logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            toml_data = tool_section

        draft: MutableEncoderConfig = cls.from_toml_dict(toml_data, config_file=path)
        logger.debug("Generated MutableEncoderConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        config_file: Path | None = None,
    ) -> MutableEncoderConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data as a dictionary.
            config_file (Path | None): Optional path to the source TOML file, used
                for provenance and diagnostic locations.

        Returns:
            MutableEncoderConfig: The resulting builder.
        """
        draft: MutableEncoderConfig = cls()
        diags: DiagnosticLog = draft.diagnostics
        origin: str = f"{config_file}: " if config_file else ""

        warn_unknown_keys(
            data,
            Toml.ALLOWED_TOP_LEVEL_KEYS,
            where=f"{origin}top level",
            diagnostics=diags,
            logger=logger,
        )

        encoder_tbl: TomlTable = get_table_value_checked(
            data, Toml.SECTION_ENCODER, diagnostics=diags, logger=logger
        )
        logger.trace("TOML [encoder]: %s", encoder_tbl)

        output_tbl: TomlTable = get_table_value_checked(
            data, Toml.SECTION_OUTPUT, diagnostics=diags, logger=logger
        )
        logger.trace("TOML [output]: %s", output_tbl)

        for section, tbl in (
            (Toml.SECTION_ENCODER, encoder_tbl),
            (Toml.SECTION_OUTPUT, output_tbl),
        ):
            warn_unknown_keys(
                tbl,
                Toml.ALLOWED_SECTION_KEYS[section],
                where=f"{origin}[{section}]",
                diagnostics=diags,
                logger=logger,
            )

        where_enc: str = f"{origin}[{Toml.SECTION_ENCODER}]"
        where_out: str = f"{origin}[{Toml.SECTION_OUTPUT}]"

        draft.reference_template = get_string_value_or_none_checked(
            encoder_tbl,
            Toml.KEY_REFERENCE_TEMPLATE,
            where=where_enc,
            diagnostics=diags,
            logger=logger,
        )
        draft.traverse_xlink_depth = get_int_value_or_none_checked(
            encoder_tbl,
            Toml.KEY_TRAVERSE_XLINK_DEPTH,
            where=where_enc,
            diagnostics=diags,
            logger=logger,
        )
        draft.traverse_xlink_expiry = get_int_value_or_none_checked(
            encoder_tbl,
            Toml.KEY_TRAVERSE_XLINK_EXPIRY,
            where=where_enc,
            diagnostics=diags,
            logger=logger,
        )
        raw_props: list[str] | None = get_string_list_value_checked(
            encoder_tbl,
            Toml.KEY_REQUESTED_PROPERTIES,
            where=where_enc,
            diagnostics=diags,
            logger=logger,
        )
        if raw_props is not None:
            draft.requested_properties = draft._parse_property_names(
                raw_props, where=f"{where_enc}.{Toml.KEY_REQUESTED_PROPERTIES}"
            )

        draft.feature_prefix = get_string_value_or_none_checked(
            output_tbl,
            Toml.KEY_FEATURE_PREFIX,
            where=where_out,
            diagnostics=diags,
            logger=logger,
        )
        draft.xml_declaration = get_bool_value_or_none_checked(
            output_tbl,
            Toml.KEY_XML_DECLARATION,
            where=where_out,
            diagnostics=diags,
            logger=logger,
        )
        draft.encoding = get_string_value_or_none_checked(
            output_tbl,
            Toml.KEY_ENCODING,
            where=where_out,
            diagnostics=diags,
            logger=logger,
        )

        if config_file is not None:
            draft.config_files = [config_file]

        return draft

    def _parse_property_names(self, raw: Iterable[str], *, where: str) -> list[QName]:
        """Parse Clark-notation property names, warning on malformed entries."""
        out: list[QName] = []
        for text in raw:
            try:
                out.append(QName.parse(text))
            except ValueError as exc:
                logger.warning("Ignoring property name in %s: %s", where, exc)
                self.diagnostics.add_warning(f"Ignoring property name in {where}: {exc}")
        return out

    # ----------------------------- Discovery ------------------------------
    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned root-most first, nearest last, so that a later merge
        (nearest-last-wins) gives precedence to the closest directory. Within one
        directory ``pyproject.toml`` comes before ``gmlstream.toml``.

        Args:
            start (Path): The Path instance where discovery starts.

        Returns:
            list[Path]: Discovered config file paths ordered for stable merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            dir_entries: list[Path] = [
                cur / name
                for name in ("pyproject.toml", CONFIG_FILE_NAME)
                if (cur / name).is_file()
            ]
            if dir_entries:
                logger.debug("Discovered config file(s): %s", dir_entries)
                per_dir.append(dir_entries)
            parent: Path = cur.parent
            if parent == cur:
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableEncoderConfig:
        """Discover and merge configuration layers into a draft builder.

        Merge order (lowest → highest precedence):
            1) Built-in defaults
            2) Project configs discovered upward from ``anchor`` (root → current)
            3) Extra config files passed explicitly (in the order provided)

        Discovered files that cannot be parsed are skipped with a warning;
        explicitly named files propagate `TomlLoadError`.

        Args:
            anchor (Path | None): Discovery start (file or directory); CWD if None.
            extra_config_files (Iterable[Path] | None): Explicit additional config files.
            no_config (bool): If True, skip project discovery.

        Returns:
            MutableEncoderConfig: A draft ready to be frozen or further edited.
        """
        draft: MutableEncoderConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                try:
                    mc: MutableEncoderConfig | None = cls.from_toml_file(cfg_path)
                except TomlLoadError as exc:
                    draft.diagnostics.add_warning(f"Skipping discovered config: {exc}")
                    continue
                if mc is not None:
                    draft = draft.merge_with(mc)
                    draft.diagnostics.add_info(f"Loaded config file {cfg_path}")

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableEncoderConfig) -> MutableEncoderConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableEncoderConfig): The config whose values override those of this draft.

        Returns:
            MutableEncoderConfig: A new builder representing the merged result.
        """

        def _pick(mine: Any, theirs: Any) -> Any:
            return theirs if theirs is not None else mine

        diagnostics: list[Diagnostic] = [*self.diagnostics, *other.diagnostics]
        return MutableEncoderConfig(
            timestamp=self.timestamp,
            reference_template=_pick(self.reference_template, other.reference_template),
            traverse_xlink_depth=_pick(self.traverse_xlink_depth, other.traverse_xlink_depth),
            traverse_xlink_expiry=_pick(self.traverse_xlink_expiry, other.traverse_xlink_expiry),
            requested_properties=_pick(self.requested_properties, other.requested_properties),
            feature_prefix=_pick(self.feature_prefix, other.feature_prefix),
            xml_declaration=_pick(self.xml_declaration, other.xml_declaration),
            encoding=_pick(self.encoding, other.encoding),
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog.from_iterable(diagnostics),
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableEncoderConfig:
        """Update builder fields from an arguments mapping (CLI or API).

        Keys match the TOML key names (see `gmlstream.config.keys.Toml`); a key that
        is absent or maps to ``None`` keeps the value from discovery/TOML.
        ``requested_properties`` accepts Clark-notation strings or `QName` values.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableEncoderConfig: This builder, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableEncoderConfig: %s", args)

        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get(Toml.KEY_REFERENCE_TEMPLATE) is not None:
            self.reference_template = str(args[Toml.KEY_REFERENCE_TEMPLATE])
        if args.get(Toml.KEY_TRAVERSE_XLINK_DEPTH) is not None:
            self.traverse_xlink_depth = int(args[Toml.KEY_TRAVERSE_XLINK_DEPTH])
        if args.get(Toml.KEY_TRAVERSE_XLINK_EXPIRY) is not None:
            self.traverse_xlink_expiry = int(args[Toml.KEY_TRAVERSE_XLINK_EXPIRY])

        props: Any = args.get(Toml.KEY_REQUESTED_PROPERTIES)
        if props:
            names: list[QName] = [p for p in props if isinstance(p, QName)]
            names.extend(
                self._parse_property_names(
                    (p for p in props if isinstance(p, str)), where="arguments"
                )
            )
            self.requested_properties = names

        if args.get(Toml.KEY_FEATURE_PREFIX) is not None:
            self.feature_prefix = str(args[Toml.KEY_FEATURE_PREFIX])
        if args.get(Toml.KEY_XML_DECLARATION) is not None:
            self.xml_declaration = bool(args[Toml.KEY_XML_DECLARATION])
        if args.get(Toml.KEY_ENCODING) is not None:
            self.encoding = str(args[Toml.KEY_ENCODING])

        logger.debug("Patched MutableEncoderConfig: %s", self)
        return self

# topmark:header:start
#
#   project      : GMLStream
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `EncoderConfig` / `MutableEncoderConfig`: layering, freeze/thaw and discovery."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

import pytest
import tomlkit

from gmlstream.config.model import EncoderConfig, MutableEncoderConfig
from gmlstream.errors import ReferenceTemplateError
from gmlstream.model import QName
from tests.conftest import APP_NS, app, mark_integration

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    cfg: EncoderConfig = MutableEncoderConfig.from_defaults().freeze()

    assert cfg.reference_template is None
    assert cfg.traverse_xlink_depth == -1
    assert cfg.unlimited_depth
    assert cfg.traverse_xlink_expiry is None
    assert cfg.requested_properties == frozenset()
    assert cfg.feature_prefix == "app"
    assert cfg.xml_declaration is True
    assert cfg.encoding == "UTF-8"
    assert len(cfg.diagnostics) == 0


def test_frozen_config_cannot_be_mutated() -> None:
    cfg = EncoderConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.traverse_xlink_depth = 3  # type: ignore[misc]


def test_thaw_edit_freeze() -> None:
    cfg = EncoderConfig(reference_template="urn:x:{}", traverse_xlink_depth=2)

    draft = cfg.thaw()
    draft.traverse_xlink_depth = 0
    updated = draft.freeze()

    assert updated.traverse_xlink_depth == 0
    assert updated.reference_template == "urn:x:{}"
    assert cfg.traverse_xlink_depth == 2


def test_from_toml_dict_reads_both_sections() -> None:
    data: dict[str, Any] = {
        "encoder": {
            "reference_template": "http://h/wfs?id={}",
            "traverse_xlink_depth": 1,
            "traverse_xlink_expiry": 30,
            "requested_properties": [f"{{{APP_NS}}}p1"],
        },
        "output": {"feature_prefix": "roads", "xml_declaration": False, "encoding": "UTF-16"},
    }

    cfg = MutableEncoderConfig.from_toml_dict(data).freeze()

    assert cfg.reference_template == "http://h/wfs?id={}"
    assert cfg.traverse_xlink_depth == 1
    assert cfg.traverse_xlink_expiry == 30
    assert cfg.requested_properties == frozenset({app("p1")})
    assert cfg.feature_prefix == "roads"
    assert cfg.xml_declaration is False
    assert cfg.encoding == "UTF-16"


def test_shape_problems_become_warnings() -> None:
    data: dict[str, Any] = {
        "encoder": {"traverse_xlink_depth": "deep", "requested_properties": ["{urn:a"]},
        "outptu": {},
    }

    draft = MutableEncoderConfig.from_toml_dict(data)

    messages = [d.message for d in draft.diagnostics]
    assert any("outptu" in m for m in messages)
    assert any("Expected int" in m for m in messages)
    assert any("Ignoring property name" in m for m in messages)
    assert draft.traverse_xlink_depth is None
    assert draft.requested_properties == []


@pytest.mark.parametrize("template", ["http://h/static", "a{}b{}"])
def test_freeze_rejects_bad_template(template: str) -> None:
    draft = MutableEncoderConfig.from_defaults()
    draft.reference_template = template

    with pytest.raises(ReferenceTemplateError):
        draft.freeze()


def test_direct_construction_validates_template() -> None:
    with pytest.raises(ReferenceTemplateError):
        EncoderConfig(reference_template="no-placeholder")


def test_empty_template_means_unset() -> None:
    draft = MutableEncoderConfig.from_toml_dict({"encoder": {"reference_template": ""}})

    assert draft.freeze().reference_template is None


def test_merge_later_layer_wins_only_where_set() -> None:
    base = MutableEncoderConfig.from_toml_dict(
        {"encoder": {"reference_template": "urn:a:{}", "traverse_xlink_depth": 4}}
    )
    top = MutableEncoderConfig.from_toml_dict({"encoder": {"traverse_xlink_depth": 0}})

    merged = base.merge_with(top).freeze()

    assert merged.reference_template == "urn:a:{}"
    assert merged.traverse_xlink_depth == 0


def test_apply_cli_args_accepts_qnames_and_strings() -> None:
    draft = MutableEncoderConfig.from_defaults()

    draft.apply_cli_args(
        {
            "requested_properties": [app("p1"), f"{{{APP_NS}}}p2"],
            "traverse_xlink_depth": None,
        }
    )
    cfg = draft.freeze()

    assert cfg.requested_properties == frozenset({app("p1"), app("p2")})
    assert cfg.traverse_xlink_depth == -1
    assert "<CLI overrides>" in cfg.config_files


def test_is_property_requested() -> None:
    open_cfg = EncoderConfig()
    narrow = EncoderConfig(requested_properties=frozenset({app("p1")}))

    assert open_cfg.is_property_requested(app("anything"))
    assert narrow.is_property_requested(app("p1"))
    assert not narrow.is_property_requested(QName(APP_NS, "p2"))


def test_to_toml_round_trips() -> None:
    cfg = EncoderConfig(
        reference_template="urn:x:{}",
        traverse_xlink_depth=2,
        requested_properties=frozenset({app("b"), app("a")}),
    )

    parsed: Any = tomlkit.parse(cfg.to_toml()).unwrap()
    again = MutableEncoderConfig.from_toml_dict(parsed).freeze()

    assert parsed["encoder"]["requested_properties"] == [
        f"{{{APP_NS}}}a",
        f"{{{APP_NS}}}b",
    ]
    assert "traverse_xlink_expiry" not in parsed["encoder"]
    assert again.reference_template == cfg.reference_template
    assert again.requested_properties == cfg.requested_properties


@mark_integration
def test_discovery_orders_root_most_first(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[tool.gmlstream.encoder]\ntraverse_xlink_depth = 1\n")
    _write(tmp_path / "gmlstream.toml", "[encoder]\ntraverse_xlink_depth = 2\n")
    _write(tmp_path / "sub" / "gmlstream.toml", "[encoder]\ntraverse_xlink_depth = 3\n")

    found = MutableEncoderConfig.discover_local_config_files(tmp_path / "sub")

    assert found[-3:] == [
        tmp_path / "pyproject.toml",
        tmp_path / "gmlstream.toml",
        tmp_path / "sub" / "gmlstream.toml",
    ]


@mark_integration
def test_load_merged_nearest_wins_and_explicit_files_win_last(tmp_path: Path) -> None:
    _write(tmp_path / "gmlstream.toml", '[encoder]\nreference_template = "urn:root:{}"\n')
    _write(tmp_path / "sub" / "gmlstream.toml", "[encoder]\ntraverse_xlink_depth = 3\n")
    extra = _write(tmp_path / "extra.toml", "[encoder]\ntraverse_xlink_depth = 7\n")

    discovered = MutableEncoderConfig.load_merged(anchor=tmp_path / "sub").freeze()
    explicit = MutableEncoderConfig.load_merged(
        anchor=tmp_path / "sub", extra_config_files=[extra]
    ).freeze()
    skipped = MutableEncoderConfig.load_merged(anchor=tmp_path / "sub", no_config=True).freeze()

    assert discovered.reference_template == "urn:root:{}"
    assert discovered.traverse_xlink_depth == 3
    assert explicit.traverse_xlink_depth == 7
    assert skipped.reference_template is None
    assert skipped.traverse_xlink_depth == -1


@mark_integration
def test_pyproject_without_tool_section_is_ignored(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", "[project]\nname = 'x'\n")

    assert MutableEncoderConfig.from_toml_file(path) is None


@mark_integration
def test_broken_discovered_file_is_skipped_with_warning(tmp_path: Path) -> None:
    _write(tmp_path / "gmlstream.toml", "[encoder\n")

    draft = MutableEncoderConfig.load_merged(anchor=tmp_path)

    assert any("Skipping discovered config" in d.message for d in draft.diagnostics)

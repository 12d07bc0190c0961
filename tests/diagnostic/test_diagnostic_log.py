# topmark:header:start
#
#   project      : GMLStream
#   file         : test_diagnostic_log.py
#   file_relpath : tests/diagnostic/test_diagnostic_log.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `DiagnosticLog` and its frozen snapshot."""

from __future__ import annotations

import pytest

from gmlstream.diagnostic import Diagnostic, DiagnosticLevel, DiagnosticLog


def _log() -> DiagnosticLog:
    log = DiagnosticLog()
    log.add_info("loaded")
    log.add_warning("no encoder for kind")
    log.add_warning("ignored key")
    log.add_error("broken")
    return log


def test_counts_by_level() -> None:
    log = _log()

    stats = log.stats()

    assert (stats.n_info, stats.n_warning, stats.n_error) == (1, 2, 1)
    assert stats.total == len(log) == 4
    assert log.to_dict() == {"info": 1, "warning": 2, "error": 1}


def test_level_predicates() -> None:
    log = DiagnosticLog()
    assert not log.has_warning()
    assert not log.has_error()

    log.add_info("only info")
    assert not log.has_warning()

    log.add_error("boom")
    assert log.has_error()


def test_freeze_is_an_ordered_snapshot() -> None:
    log = _log()

    frozen = log.freeze()
    log.add_info("later")

    assert [d.message for d in frozen] == ["loaded", "no encoder for kind", "ignored key", "broken"]
    assert frozen.to_dict() == {"info": 1, "warning": 2, "error": 1}
    with pytest.raises(AttributeError):
        frozen.items = ()  # type: ignore[misc]


def test_extend_and_from_iterable_keep_order() -> None:
    first = Diagnostic(DiagnosticLevel.WARNING, "a")
    second = Diagnostic(DiagnosticLevel.INFO, "b")

    log = DiagnosticLog.from_iterable([first])
    log.extend([second])

    assert list(log) == [first, second]


def test_levels_have_colorizers() -> None:
    for level in DiagnosticLevel:
        assert "x" in level.color("x")

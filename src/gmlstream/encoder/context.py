# topmark:header:start
#
#   project      : GMLStream
#   file         : context.py
#   file_relpath : src/gmlstream/encoder/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-pass encoding state.

An `EncodingContext` bundles what one encode pass threads through recursion:
the frozen configuration, the identity registry and the diagnostics recorded
along the way. The traversal driver creates one per top-level export call and
returns it to the caller once the pass completes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gmlstream.diagnostic import DiagnosticLog
from gmlstream.encoder.registry import IdentityRegistry

if TYPE_CHECKING:
    from gmlstream.config.model import EncoderConfig


@dataclass
class EncodingContext:
    """State scoped to exactly one encode pass and one document writer.

    Attributes:
        config (EncoderConfig): Frozen options for the pass.
        registry (IdentityRegistry): Ids written in full so far.
        diagnostics (DiagnosticLog): Non-fatal findings (e.g. unhandled property kinds).
    """

    config: EncoderConfig
    registry: IdentityRegistry = field(default_factory=IdentityRegistry)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @property
    def emitted_ids(self) -> frozenset[str]:
        """Ids written in full during this pass."""
        return self.registry.snapshot()

# topmark:header:start
#
#   project      : GMLStream
#   file         : policy.py
#   file_relpath : src/gmlstream/encoder/policy.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline-vs-reference decisions for feature-typed property values.

`ReferencePolicy.decide` is pure: it reads the registry and configuration and
returns a `ReferenceDecision`; writing the element (and marking the target
emitted on inline expansion) is left to the property dispatcher.

Decision order (first match wins):
    1. BACK_REFERENCE: the target id is already in the registry -> ``#<id>``.
    2. REMOTE: the target is a non-local `FeatureReference` -> its own href.
    3. INLINE: no template configured, or the target has no id, or the depth
       budget is unlimited, or ``0 <= depth < budget`` -> expand in place.
    4. EXTERNAL_LINK: otherwise -> the template with ``{}`` replaced by the id.

A budget of ``0`` therefore never inlines a property value once a template is
configured. The root feature is not subject to this policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from gmlstream.config.logging import get_logger
from gmlstream.constants import REFERENCE_PLACEHOLDER
from gmlstream.model.feature import Feature, FeatureReference

if TYPE_CHECKING:
    from gmlstream.config.logging import GmlstreamLogger
    from gmlstream.config.model import EncoderConfig
    from gmlstream.encoder.registry import IdentityRegistry
    from gmlstream.model.feature import FeatureValue

logger: GmlstreamLogger = get_logger(__name__)

# (template, object id, expiry hint) -> href
LinkBuilder = Callable[[str, str, int | None], str]


def build_external_link(template: str, object_id: str, expiry: int | None = None) -> str:
    """Substitute ``object_id`` into ``template``.

    ``expiry`` is accepted so custom link builders can honor it; the default
    builder ignores it.
    """
    return template.replace(REFERENCE_PLACEHOLDER, object_id)


class ReferenceOutcome(Enum):
    """How a feature-typed property value is written."""

    BACK_REFERENCE = "back_reference"
    REMOTE = "remote"
    INLINE = "inline"
    EXTERNAL_LINK = "external_link"


@dataclass(frozen=True, slots=True)
class ReferenceDecision:
    """Result of `ReferencePolicy.decide`.

    Attributes:
        outcome (ReferenceOutcome): The chosen rendering.
        href (str | None): Link target for every outcome except INLINE.
        target (Feature | None): Feature to expand for INLINE; None otherwise.
    """

    outcome: ReferenceOutcome
    href: str | None = None
    target: Feature | None = None

    @property
    def is_inline(self) -> bool:
        """Return True if the value is expanded in place."""
        return self.outcome is ReferenceOutcome.INLINE


class ReferencePolicy:
    """Choose between back-reference, remote link, inline expansion and external link."""

    def __init__(
        self,
        config: EncoderConfig,
        link_builder: LinkBuilder = build_external_link,
    ) -> None:
        self._config: EncoderConfig = config
        self._link_builder: LinkBuilder = link_builder

    def may_inline(self, object_id: str | None, depth: int) -> bool:
        """Return True if a target with ``object_id`` may be expanded at ``depth``."""
        budget: int = self._config.traverse_xlink_depth
        return (
            self._config.reference_template is None
            or object_id is None
            or budget < 0
            or (budget > 0 and depth < budget)
        )

    def decide(
        self,
        value: FeatureValue,
        depth: int,
        registry: IdentityRegistry,
    ) -> ReferenceDecision:
        """Decide how to write ``value`` found at inline ``depth``.

        Args:
            value (FeatureValue): A `Feature` or `FeatureReference`.
            depth (int): Number of inline expansions between the root and the owner
                of the property.
            registry (IdentityRegistry): Ids already written in this pass.

        Returns:
            ReferenceDecision: The outcome and its link or expansion target.
        """
        object_id: str | None = value.id

        if registry.has_been_emitted(object_id):
            logger.trace("Back-reference to %s", object_id)
            return ReferenceDecision(ReferenceOutcome.BACK_REFERENCE, href=f"#{object_id}")

        target: Feature | None
        if isinstance(value, FeatureReference):
            if not value.is_local:
                logger.trace("Remote reference %s", value.href)
                return ReferenceDecision(ReferenceOutcome.REMOTE, href=value.href)
            target = value.referent
            if target is None:
                # Nothing to expand; keep the same-document fragment as written.
                logger.debug("Unresolved local reference %s", value.href)
                return ReferenceDecision(ReferenceOutcome.BACK_REFERENCE, href=value.href)
        else:
            target = value

        if self.may_inline(object_id, depth):
            logger.trace("Inline %s at depth %d", object_id, depth)
            return ReferenceDecision(ReferenceOutcome.INLINE, target=target)

        # may_inline() is only False with a template and an id
        template: str = self._config.reference_template or REFERENCE_PLACEHOLDER
        href: str = self._link_builder(
            template, object_id or "", self._config.traverse_xlink_expiry
        )
        logger.trace("External link for %s: %s", object_id, href)
        return ReferenceDecision(ReferenceOutcome.EXTERNAL_LINK, href=href)

"""Artifact result ingestion.

Turns one ``getArtifactPortals`` result into a fresh
:class:`~pyartifacts.models.artifact.ArtifactSnapshot`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pyartifacts._constants import CORE_PORTAL_DATA_LENGTH, PORTAL_TYPE_MARKER
from pyartifacts.models.artifact import ArtifactSnapshot, EntityRecord, KindDetail, LocationFact
from pyartifacts.models.portal import DecodedPortal, DecodeResult, Malformed, NoBrief, PortalSummary

_logger = logging.getLogger(__name__)


def decode_portal_summary(raw: Any) -> DecodeResult:
    """Decode one raw portal blob from an artifact result.

    Accepts the positional intel array (``["p", team, latE6, lngE6, ...]``)
    or an already-decoded mapping. Never raises.
    """
    if isinstance(raw, (list, tuple)):
        if len(raw) < CORE_PORTAL_DATA_LENGTH:
            return Malformed(reason=f"portal array too short ({len(raw)} fields)")
        if raw[0] != PORTAL_TYPE_MARKER:
            return Malformed(reason=f"unexpected entity type {raw[0]!r}")
    elif not isinstance(raw, Mapping):
        return Malformed(reason=f"unsupported portal blob type {type(raw).__name__}")

    try:
        summary = PortalSummary.model_validate(raw)
    except ValidationError as exc:
        return Malformed(reason=f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")

    if summary.artifact_brief is None:
        return NoBrief(summary=summary)
    return DecodedPortal(summary=summary)


def normalize_artifact_portals(portals: Mapping[str, Any]) -> ArtifactSnapshot:
    """Build a fresh snapshot from a ``getArtifactPortals`` result mapping.

    Only the current payload is consulted; nothing is carried over from a
    previous generation.
    """
    facts: dict[str, LocationFact] = {}
    known_kinds: set[str] = set()
    entities: list[EntityRecord] = []

    for key, raw in portals.items():
        location_id = str(key)
        decoded = decode_portal_summary(raw)

        if isinstance(decoded, Malformed):
            _logger.warning("Skipping undecodable artifact portal %s: %s", location_id, decoded.reason)
            continue

        summary = decoded.summary
        entities.append(EntityRecord(location_id, summary.timestamp, raw))

        if isinstance(decoded, NoBrief):
            # A portal that lost its last shard stays in the result without a brief.
            continue

        brief = summary.artifact_brief
        assert brief is not None  # noqa: S101
        known_kinds.update(brief.target)
        known_kinds.update(brief.fragment)

        kinds = {
            kind: KindDetail(is_target=kind in brief.target, has_fragments=kind in brief.fragment)
            for kind in brief.kinds()
        }
        if not kinds:
            continue

        facts[location_id] = LocationFact(
            location_id=location_id,
            lat_e6=summary.lat_e6,
            lng_e6=summary.lng_e6,
            title=summary.title,
            timestamp=summary.timestamp,
            kinds=kinds,
        )

    return ArtifactSnapshot(
        facts=facts,
        known_kinds=frozenset(known_kinds),
        entities=tuple(entities),
    )

"""In-memory artifact store and read-only query API.

The store holds exactly one :class:`ArtifactSnapshot` at a time. A refresh
builds a complete new snapshot and swaps it in with a single assignment, so
readers never observe a partially updated generation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyartifacts._constants import ARTIFACTS_UPDATED_HOOK
from pyartifacts.hooks import HookRunner
from pyartifacts.ingestion.artifacts import normalize_artifact_portals
from pyartifacts.models.artifact import EMPTY_SNAPSHOT, ArtifactSnapshot, EntityRecord, KindDetail, LocationFact
from pyartifacts.state.events import ArtifactsUpdated

_logger = logging.getLogger(__name__)


class ArtifactStore:
    """Current artifact generation plus the accessors renderers read from."""

    def __init__(self, *, hooks: HookRunner | None = None) -> None:
        self._hooks = hooks
        self._snapshot: ArtifactSnapshot = EMPTY_SNAPSHOT
        self._generation = 0

    @property
    def snapshot(self) -> ArtifactSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        """Number of refreshes applied so far (``0`` before the first)."""
        return self._generation

    def clear(self) -> None:
        """Drop all facts, kinds and entities."""
        self._snapshot = EMPTY_SNAPSHOT

    def apply_refresh(self, payload: Mapping[str, Any]) -> bool:
        """Replace the current generation with one built from *payload*.

        Returns ``False`` (leaving the store and listeners untouched) when the
        payload carries an ``error`` marker or no ``result`` mapping.
        """
        if not isinstance(payload, Mapping) or payload.get("error") or not isinstance(payload.get("result"), Mapping):
            _logger.warning("Failed to find result in getArtifactPortals response")
            return False

        fresh = normalize_artifact_portals(payload["result"])

        old = self._snapshot
        self._snapshot = fresh
        self._generation += 1
        _logger.debug(
            "Artifact generation %d: %d kinds, %d relevant portals, %d entities",
            self._generation,
            len(fresh.known_kinds),
            len(fresh.facts),
            len(fresh.entities),
        )

        if self._hooks is not None:
            self._hooks.run_hooks(
                ARTIFACTS_UPDATED_HOOK,
                ArtifactsUpdated(old=old.entities, new=fresh.entities, generation=self._generation),
            )
        return True

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    def list_known_kinds(self) -> list[str]:
        return list(self._snapshot.known_kinds)

    def is_known_kind(self, kind: str) -> bool:
        return kind in self._snapshot.known_kinds

    def list_entities(self) -> list[EntityRecord]:
        """Raw ``(location_id, timestamp, raw)`` records for the current generation."""
        return list(self._snapshot.entities)

    def list_relevant_locations(self) -> list[str]:
        return list(self._snapshot.facts)

    def is_relevant_location(self, location_id: str) -> bool:
        return location_id in self._snapshot.facts

    def get_location(self, location_id: str) -> LocationFact | None:
        return self._snapshot.facts.get(location_id)

    def get_detail(self, location_id: str, kind: str) -> KindDetail | None:
        """Detail for a (location, kind) pair, or ``None`` if nothing is known."""
        fact = self._snapshot.facts.get(location_id)
        if fact is None:
            return None
        return fact.kinds.get(kind)

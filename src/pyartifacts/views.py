"""Plain-data views for map markers and the artifact list.

These builders only read the store's query API. Drawing the markers and
rendering the tables (HTML, escaping, dialogs) is left to the host.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyartifacts._constants import (
    FRAGMENT_ICON_SIZE,
    FRAGMENT_OPACITY,
    MARKER_IMAGE_BASE,
    TARGET_ICON_SIZE,
    TARGET_OPACITY,
)
from pyartifacts.state.store import ArtifactStore


class MarkerSpec(BaseModel):
    """A non-interactive map marker for one artifact kind at one portal."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    kind: str
    latitude: float
    longitude: float
    icon_url: str
    icon_size: float
    opacity: float
    is_target: bool


class ArtifactRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    location_id: str
    title: str | None
    latitude: float | None
    longitude: float | None
    is_target: bool
    has_fragments: bool


class ArtifactTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    display_name: str
    rows: tuple[ArtifactRow, ...] = ()


def display_name(kind: str) -> str:
    """Best-effort display name; the feed only carries internal kind ids."""
    return f"{kind[:1].upper()}{kind[1:]} shards"


def build_markers(store: ArtifactStore) -> list[MarkerSpec]:
    """One marker per (portal, kind); a target marker wins over fragments.

    Portals without a known position are skipped.
    """
    markers: list[MarkerSpec] = []
    for location_id in store.list_relevant_locations():
        fact = store.get_location(location_id)
        if fact is None or fact.latitude is None or fact.longitude is None:
            continue
        for kind, detail in fact.kinds.items():
            if detail.is_target:
                icon_url = f"{MARKER_IMAGE_BASE}{kind}_shard_target.png"
                size, opacity = TARGET_ICON_SIZE, TARGET_OPACITY
            elif detail.has_fragments:
                icon_url = f"{MARKER_IMAGE_BASE}{kind}_shard.png"
                size, opacity = FRAGMENT_ICON_SIZE, FRAGMENT_OPACITY
            else:
                continue
            markers.append(
                MarkerSpec(
                    location_id=location_id,
                    kind=kind,
                    latitude=fact.latitude,
                    longitude=fact.longitude,
                    icon_url=icon_url,
                    icon_size=size,
                    opacity=opacity,
                    is_target=detail.is_target,
                )
            )
    return markers


def build_artifact_tables(store: ArtifactStore) -> list[ArtifactTable]:
    """One table per known kind, target portals first, then by portal id."""
    tables: list[ArtifactTable] = []
    for kind in sorted(store.list_known_kinds()):
        rows: list[ArtifactRow] = []
        for location_id in store.list_relevant_locations():
            detail = store.get_detail(location_id, kind)
            fact = store.get_location(location_id)
            if detail is None or fact is None:
                continue
            rows.append(
                ArtifactRow(
                    location_id=location_id,
                    title=fact.title,
                    latitude=fact.latitude,
                    longitude=fact.longitude,
                    is_target=detail.is_target,
                    has_fragments=detail.has_fragments,
                )
            )
        rows.sort(key=lambda row: (not row.is_target, row.location_id))
        tables.append(ArtifactTable(kind=kind, display_name=display_name(kind), rows=tuple(rows)))
    return tables

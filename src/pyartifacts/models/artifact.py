"""Normalized artifact model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple

from pydantic import Field, field_serializer, field_validator

from pyartifacts.models._base import IntelBaseModel


class KindDetail(IntelBaseModel):
    """What is known about one artifact kind at one location.

    There is deliberately no team/faction field: the feed stopped sending
    target ownership, so a target is only ever "a target for someone".
    """

    is_target: bool = False
    has_fragments: bool = False


class LocationFact(IntelBaseModel):
    """Artifact facts for a single location (portal)."""

    location_id: str
    lat_e6: int | None = None
    lng_e6: int | None = None
    title: str | None = None
    timestamp: int | None = None
    kinds: Mapping[str, KindDetail] = Field(default_factory=lambda: MappingProxyType({}))

    @property
    def latitude(self) -> float | None:
        return None if self.lat_e6 is None else self.lat_e6 / 1e6

    @property
    def longitude(self) -> float | None:
        return None if self.lng_e6 is None else self.lng_e6 / 1e6

    @field_validator("kinds")
    @classmethod
    def _read_only_kinds(cls, value: Mapping[str, KindDetail]) -> Mapping[str, KindDetail]:
        return MappingProxyType(dict(value))

    @field_serializer("kinds")
    def _kinds_as_dict(self, value: Mapping[str, KindDetail]) -> dict[str, KindDetail]:
        return dict(value)


class EntityRecord(NamedTuple):
    """Raw passthrough of one portal from the feed, kept for renderers."""

    location_id: str
    timestamp: int | None
    raw: Any


@dataclass(frozen=True, slots=True)
class ArtifactSnapshot:
    """One refresh generation: facts, known kinds and raw entities together.

    ``facts`` is wrapped in a read-only view, so a published generation cannot
    be edited through the store accessors.
    """

    facts: Mapping[str, LocationFact] = field(default_factory=dict)
    known_kinds: frozenset[str] = frozenset()
    entities: tuple[EntityRecord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "facts", MappingProxyType(dict(self.facts)))


EMPTY_SNAPSHOT = ArtifactSnapshot()

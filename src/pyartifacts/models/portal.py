"""Portal summary model and decode results.

The intel site sends portal summaries as positional arrays::

    ["p", team, latE6, lngE6, level, health, resCount, image, title,
     ornaments, mission, mission50plus, artifactBrief, timestamp, ...]

Older payloads stop before ``artifactBrief`` or ``timestamp``; anything
missing is kept as ``None`` (unknown) rather than defaulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from pyartifacts._constants import (
    IDX_ARTIFACT_BRIEF,
    IDX_LAT_E6,
    IDX_LNG_E6,
    IDX_TIMESTAMP,
    IDX_TITLE,
)
from pyartifacts.ingestion.normalize import artifact_kinds, safe_int, safe_str
from pyartifacts.models._base import IntelBaseModel

_ARRAY_FIELDS: dict[str, int] = {
    "latE6": IDX_LAT_E6,
    "lngE6": IDX_LNG_E6,
    "title": IDX_TITLE,
    "artifactBrief": IDX_ARTIFACT_BRIEF,
    "timestamp": IDX_TIMESTAMP,
}


class ArtifactBrief(IntelBaseModel):
    """Which artifact kinds a portal holds fragments of, or is a target for.

    Parameters
    ----------
    fragment : frozenset[str]
        Kinds with one or more fragments at the portal.
    target : frozenset[str]
        Kinds for which the portal is a target. The owning faction is not
        part of the upstream data.
    """

    fragment: frozenset[str] = frozenset()
    target: frozenset[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _from_array(cls, values: Any) -> Any:
        # Array form: index 0 holds fragments, index 1 holds targets.
        if isinstance(values, (list, tuple)):
            return {
                "fragment": values[0] if len(values) > 0 else None,
                "target": values[1] if len(values) > 1 else None,
            }
        return values

    @field_validator("fragment", "target", mode="before")
    @classmethod
    def _coerce_kinds(cls, value: Any) -> frozenset[str]:
        return artifact_kinds(value)

    def kinds(self) -> list[str]:
        """All kinds referenced by the brief, sorted."""
        return sorted(self.fragment | self.target)


class PortalSummary(IntelBaseModel):
    """Decoded portal summary.

    The owner team at index 1 is not read: it names the portal owner, which
    says nothing about who a target belongs to.

    Parameters
    ----------
    lat_e6, lng_e6 : int or None
        Position in integer microdegrees.
    title : str or None
        Portal display name.
    timestamp : int or None
        Summary timestamp in epoch milliseconds.
    artifact_brief : ArtifactBrief or None
        ``None`` when the portal carries no artifact state.
    """

    lat_e6: int | None = Field(default=None, validation_alias=AliasChoices("latE6", "lat_e6"))
    lng_e6: int | None = Field(default=None, validation_alias=AliasChoices("lngE6", "lng_e6"))
    title: str | None = None
    timestamp: int | None = None
    artifact_brief: ArtifactBrief | None = Field(
        default=None,
        validation_alias=AliasChoices("artifactBrief", "artifact_brief"),
    )

    @model_validator(mode="before")
    @classmethod
    def _from_array(cls, values: Any) -> Any:
        if not isinstance(values, (list, tuple)):
            return values
        return {key: values[index] for key, index in _ARRAY_FIELDS.items() if index < len(values)}

    @field_validator("lat_e6", "lng_e6", "timestamp", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("artifact_brief", mode="before")
    @classmethod
    def _empty_brief_is_absent(cls, value: Any) -> Any:
        # The feed uses null (and occasionally an empty container) for "no brief".
        if value is None or value == [] or value == {}:
            return None
        return value


@dataclass(frozen=True, slots=True)
class DecodedPortal:
    """Summary decoded with an artifact brief."""

    summary: PortalSummary


@dataclass(frozen=True, slots=True)
class NoBrief:
    """Summary decoded, but the portal carries no artifact brief."""

    summary: PortalSummary


@dataclass(frozen=True, slots=True)
class Malformed:
    """The blob could not be decoded as a portal summary."""

    reason: str


DecodeResult = DecodedPortal | NoBrief | Malformed

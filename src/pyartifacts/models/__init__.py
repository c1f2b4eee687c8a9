"""Data models for intel artifact responses."""

from pyartifacts.models._base import IntelBaseModel
from pyartifacts.models.artifact import EMPTY_SNAPSHOT, ArtifactSnapshot, EntityRecord, KindDetail, LocationFact
from pyartifacts.models.portal import (
    ArtifactBrief,
    DecodedPortal,
    DecodeResult,
    Malformed,
    NoBrief,
    PortalSummary,
)

__all__ = [
    "ArtifactBrief",
    "ArtifactSnapshot",
    "DecodeResult",
    "DecodedPortal",
    "EMPTY_SNAPSHOT",
    "EntityRecord",
    "IntelBaseModel",
    "KindDetail",
    "LocationFact",
    "Malformed",
    "NoBrief",
    "PortalSummary",
]

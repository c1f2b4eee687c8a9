"""Change events published by the artifact store."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pyartifacts.models.artifact import EntityRecord


class ArtifactsUpdated(BaseModel):
    """Published after every successful refresh.

    ``old`` and ``new`` are the raw entity lists of the replaced and the
    current generation.
    """

    model_config = ConfigDict(frozen=True)

    old: tuple[EntityRecord, ...] = ()
    new: tuple[EntityRecord, ...] = ()
    generation: int = Field(..., ge=1, description="Generation number of the new snapshot")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

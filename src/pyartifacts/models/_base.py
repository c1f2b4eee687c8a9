"""Base model for intel payload models.

Every intel model inherits from :class:`IntelBaseModel`, which is frozen,
ignores unknown keys and accepts both field names and payload aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class IntelBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

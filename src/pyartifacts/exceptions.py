"""Custom exception hierarchy for pyartifacts."""

from __future__ import annotations


class ArtifactError(Exception):
    """Base exception for all pyartifacts errors."""


class ArtifactConfigError(ArtifactError):
    """Invalid or missing configuration."""


class ArtifactTransportError(ArtifactError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)

"""``getArtifactPortals`` endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pyartifacts._constants import ARTIFACT_PORTALS_ACTION
from pyartifacts._transport import Transport
from pyartifacts.exceptions import ArtifactTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """The endpoint answered with a JSON object.

    The payload is not inspected here; an ``error`` marker or missing
    ``result`` is for the store to reject.
    """

    payload: dict[str, Any]


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """The request failed; there is no usable data."""

    error: Exception


FetchResult = FetchSuccess | FetchFailure


async def fetch_artifact_portals(transport: Transport) -> FetchResult:
    """Post ``getArtifactPortals`` with an empty parameter object."""
    try:
        payload = await transport.post_action(ARTIFACT_PORTALS_ACTION, {})
    except ArtifactTransportError as exc:
        _logger.debug("%s failed: %s", ARTIFACT_PORTALS_ACTION, exc)
        return FetchFailure(error=exc)
    return FetchSuccess(payload=payload)

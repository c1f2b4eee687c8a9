"""High-level async client owning the artifact refresh cycle."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import Any

import aiohttp

from pyartifacts._api.artifacts import FetchFailure, FetchResult, fetch_artifact_portals
from pyartifacts._transport import IntelTransport, Transport
from pyartifacts.config import ArtifactConfig
from pyartifacts.exceptions import ArtifactError
from pyartifacts.hooks import Hooks
from pyartifacts.idle import IdleSource
from pyartifacts.ingestion.scheduler import RefreshScheduler
from pyartifacts.state.store import ArtifactStore

_logger = logging.getLogger(__name__)


class ArtifactClient:
    """Async client that keeps an artifact store refreshed.

    Each client owns its own store, hooks and scheduler, so several
    independent instances can run side by side.

    Usage::

        async with ArtifactClient(config) as client:
            client.hooks.add_hook("artifactsUpdated", on_update)
            client.start()
            ...
            client.store.list_known_kinds()
    """

    def __init__(
        self,
        config: ArtifactConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        idle: IdleSource | None = None,
        hooks: Hooks | None = None,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self.hooks = hooks or Hooks()
        self.store = ArtifactStore(hooks=self.hooks)
        self.scheduler = RefreshScheduler(
            config,
            self.fetch,
            self.store.apply_refresh,
            idle=idle,
            clock=clock,
            rng=rng,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ArtifactClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = IntelTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise ArtifactError("Client not initialized. Use 'async with ArtifactClient(...) as client:'")
        return self._transport

    async def fetch(self) -> FetchResult:
        """Fetch the raw artifact portal payload once."""
        return await fetch_artifact_portals(self._require_transport())

    async def refresh(self) -> bool:
        """Fetch and apply once, outside the schedule.

        Returns ``True`` when a new generation was applied.
        """
        result = await self.fetch()
        if isinstance(result, FetchFailure):
            _logger.debug("Artifact refresh failed: %s", result.error)
            return False
        return self.store.apply_refresh(result.payload)

    def start(self) -> None:
        """Start periodic refreshing (call from inside the event loop)."""
        self._require_transport()
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()

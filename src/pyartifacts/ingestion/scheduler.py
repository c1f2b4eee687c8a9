"""Artifact refresh scheduling.

Successful fetches reschedule onto a shared clock grid (every
``refresh_success`` seconds since the epoch) plus a random jitter, so many
clients refresh near the same time without all hitting the server at once.
Failures retry after a flat ``refresh_failure`` delay.

While the host is idle no request is made; a single pending flag is set
instead and consumed by :meth:`RefreshScheduler.on_idle_resume`.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pyartifacts._api.artifacts import FetchFailure, FetchResult, FetchSuccess
from pyartifacts.config import ArtifactConfig
from pyartifacts.idle import IdleSource

_logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Drive one fetch at a time and keep at most one refresh timer pending.

    Parameters
    ----------
    fetch
        Coroutine function performing one fetch.
    apply
        Called with the payload of every successful fetch (usually
        :meth:`ArtifactStore.apply_refresh`).
    idle
        Optional idle source; without one the host is never idle.
    clock
        Wall-clock time in epoch seconds, used for grid alignment.
    rng
        Random source for the jitter term.
    """

    def __init__(
        self,
        config: ArtifactConfig,
        fetch: Callable[[], Awaitable[FetchResult]],
        apply: Callable[[Mapping[str, Any]], Any],
        *,
        idle: IdleSource | None = None,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._fetch = fetch
        self._apply = apply
        self._idle = idle
        self._clock = clock
        self._rng = rng or random.Random()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None
        self._next_delay: float | None = None
        self._pending = False
        self._resume_registered = False
        self._stopped = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def pending(self) -> bool:
        """Whether a request was deferred because the host was idle."""
        return self._pending

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def next_refresh_delay(self) -> float | None:
        """Delay of the currently scheduled refresh, if one is scheduled."""
        if self._timer is None or self._timer.cancelled():
            return None
        return self._next_delay

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Register for idle resume and schedule the first fetch.

        The first fetch is deferred by ``initial_delay`` so a fault while
        processing the first response cannot break the caller's setup.
        Must be called from inside a running event loop.
        """
        self._loop = asyncio.get_running_loop()
        self._stopped = False
        if self._idle is not None and not self._resume_registered:
            self._idle.add_resume_function(self.on_idle_resume)
            self._resume_registered = True
        self._schedule(self._config.initial_delay)

    def stop(self) -> None:
        """Drop the pending timer and cancel an in-flight fetch."""
        self._stopped = True
        self._pending = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._task is not None and not self._task.done():
            self._task.cancel()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request_data(self) -> asyncio.Task[None] | None:
        """Fetch now unless the host is idle or a fetch is already running.

        Returns the fetch task, or ``None`` when nothing was issued.
        """
        if self._idle is not None and self._idle.is_idle():
            self._pending = True
            _logger.debug("Host idle; deferring artifact request")
            return None
        if self.in_flight:
            _logger.debug("Artifact fetch already in flight; ignoring request")
            return None

        loop = self._loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run_once())
        return self._task

    def on_idle_resume(self) -> None:
        """Issue the request deferred while idle, if there is one.

        Without an event loop to run on, the request stays pending.
        """
        if not self._pending:
            return
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                _logger.debug("No running event loop; keeping artifact request pending")
                return
        self._pending = False
        self.request_data()

    def next_success_delay(self, now: float | None = None) -> float:
        """Seconds from *now* until the next grid boundary plus jitter."""
        if now is None:
            now = self._clock()
        now_ms = now * 1000
        interval_ms = self._config.refresh_success * 1000
        next_ms = math.ceil(now_ms / interval_ms) * interval_ms + math.floor(
            self._rng.random() * self._config.refresh_jitter * 1000
        )
        return (next_ms - now_ms) / 1000

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _run_once(self) -> None:
        try:
            result = await self._fetch()
        except Exception as exc:
            _logger.warning("Artifact fetch raised; treating as failure", exc_info=True)
            result = FetchFailure(error=exc)

        if isinstance(result, FetchSuccess):
            try:
                self._apply(result.payload)
            except Exception:
                _logger.warning("Failed to process artifact data", exc_info=True)
            self._schedule(self.next_success_delay())
        else:
            # No useful data on failure.
            self._schedule(self._config.refresh_failure)

    def _schedule(self, delay: float) -> None:
        if self._stopped:
            return
        if self._timer is not None:
            self._timer.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._next_delay = delay
        self._timer = loop.call_later(delay, self._on_timer)
        _logger.debug("Next artifact refresh in %.1fs", delay)

    def _on_timer(self) -> None:
        self._timer = None
        self.request_data()

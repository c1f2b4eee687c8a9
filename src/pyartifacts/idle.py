"""Host idle state.

Idle detection belongs to the host application. :class:`IdleSource` is the
interface the scheduler depends on; :class:`IdleMonitor` is a minimal
implementation the host drives explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

_logger = logging.getLogger(__name__)

ResumeCallback = Callable[[], None]


class IdleSource(Protocol):
    def is_idle(self) -> bool:
        ...

    def add_resume_function(self, callback: ResumeCallback) -> None:
        ...


class IdleMonitor:
    """Idle flag toggled by the host, with resume callbacks."""

    def __init__(self, *, idle: bool = False) -> None:
        self._idle = idle
        self._resume_callbacks: list[ResumeCallback] = []

    def is_idle(self) -> bool:
        return self._idle

    def add_resume_function(self, callback: ResumeCallback) -> None:
        self._resume_callbacks.append(callback)

    def mark_idle(self) -> None:
        self._idle = True

    def mark_active(self) -> None:
        """Leave idle mode and run resume callbacks (only on an actual transition)."""
        if not self._idle:
            return
        self._idle = False
        for callback in list(self._resume_callbacks):
            try:
                callback()
            except Exception:
                _logger.debug("Idle resume callback failed", exc_info=True)

"""Named hook registry used for change notification."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol

_logger = logging.getLogger(__name__)

HookCallback = Callable[[Any], None]


class HookRunner(Protocol):
    """Anything that can publish a named event to interested callbacks."""

    def run_hooks(self, name: str, data: Any) -> None:
        ...


class Hooks:
    """Registry of callbacks keyed by event name.

    A failing callback is logged and does not prevent the remaining
    callbacks from running.
    """

    def __init__(self) -> None:
        self._callbacks: defaultdict[str, list[HookCallback]] = defaultdict(list)

    def add_hook(self, name: str, callback: HookCallback) -> None:
        self._callbacks[name].append(callback)

    def remove_hook(self, name: str, callback: HookCallback) -> bool:
        """Unregister *callback*; returns ``False`` if it was not registered."""
        callbacks = self._callbacks.get(name)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def run_hooks(self, name: str, data: Any) -> None:
        for callback in list(self._callbacks.get(name, ())):
            try:
                callback(data)
            except Exception:
                _logger.debug("%s hook callback failed", name, exc_info=True)

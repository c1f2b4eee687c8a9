from __future__ import annotations

from typing import Any

from pyartifacts.hooks import Hooks
from pyartifacts.idle import IdleMonitor


def test_hooks_run_in_registration_order_and_can_be_removed() -> None:
    hooks = Hooks()
    calls: list[tuple[str, Any]] = []

    def first(data: Any) -> None:
        calls.append(("first", data))

    def second(data: Any) -> None:
        calls.append(("second", data))

    hooks.add_hook("artifactsUpdated", first)
    hooks.add_hook("artifactsUpdated", second)
    hooks.run_hooks("artifactsUpdated", 1)

    assert hooks.remove_hook("artifactsUpdated", first) is True
    assert hooks.remove_hook("artifactsUpdated", first) is False
    assert hooks.remove_hook("unknown", second) is False
    hooks.run_hooks("artifactsUpdated", 2)
    hooks.run_hooks("unknown", 3)

    assert calls == [("first", 1), ("second", 1), ("second", 2)]


def test_idle_monitor_resumes_only_on_transition() -> None:
    monitor = IdleMonitor()
    resumed: list[int] = []
    monitor.add_resume_function(lambda: resumed.append(1))

    monitor.mark_active()
    assert resumed == []

    monitor.mark_idle()
    assert monitor.is_idle() is True
    monitor.mark_active()
    assert monitor.is_idle() is False
    assert resumed == [1]


def test_idle_monitor_survives_failing_callback() -> None:
    monitor = IdleMonitor(idle=True)
    resumed: list[int] = []

    def _boom() -> None:
        raise RuntimeError("bad callback")

    monitor.add_resume_function(_boom)
    monitor.add_resume_function(lambda: resumed.append(1))
    monitor.mark_active()

    assert resumed == [1]

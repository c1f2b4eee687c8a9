"""Client configuration for pyartifacts."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyartifacts._constants import (
    BASE_URL,
    INITIAL_DELAY,
    REFRESH_FAILURE,
    REFRESH_JITTER,
    REFRESH_SUCCESS,
)
from pyartifacts.exceptions import ArtifactConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ArtifactConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Intel site base URL. Actions are posted to ``{base_url}/r/{action}``.
    api_version : str or None
        Value of the ``v`` parameter the intel site expects on every
        request. Omitted from the request body when ``None``.
    csrf_token : str or None
        CSRF token, sent both as the ``X-CSRFToken`` header and the
        ``csrftoken`` cookie.
    session_id : str or None
        Authenticated session cookie value.
    refresh_jitter : float
        Width in seconds of the random window added after each success
        boundary, so clients sharing a boundary do not refresh together.
    refresh_success : float
        Refresh grid interval in seconds after a successful fetch.
    refresh_failure : float
        Flat retry delay in seconds after a failed fetch.
    initial_delay : float
        Delay in seconds before the first fetch once the scheduler starts.
    request_timeout : float
        Total HTTP timeout in seconds for a single fetch.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    api_version: str | None = None
    csrf_token: str | None = None
    session_id: str | None = None
    refresh_jitter: float = REFRESH_JITTER
    refresh_success: float = REFRESH_SUCCESS
    refresh_failure: float = REFRESH_FAILURE
    initial_delay: float = INITIAL_DELAY
    request_timeout: float = 30.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.refresh_success <= 0:
            raise ArtifactConfigError(f"refresh_success must be positive, got {self.refresh_success}")
        if self.refresh_failure <= 0:
            raise ArtifactConfigError(f"refresh_failure must be positive, got {self.refresh_failure}")
        if self.refresh_jitter < 0:
            raise ArtifactConfigError(f"refresh_jitter must not be negative, got {self.refresh_jitter}")
        if self.initial_delay < 0:
            raise ArtifactConfigError(f"initial_delay must not be negative, got {self.initial_delay}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ArtifactConfig:
        """Create configuration from ``ARTIFACTS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ARTIFACTS_BASE_URL": "base_url",
            "ARTIFACTS_API_VERSION": "api_version",
            "ARTIFACTS_CSRF_TOKEN": "csrf_token",
            "ARTIFACTS_SESSION_ID": "session_id",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "ARTIFACTS_REFRESH_JITTER": "refresh_jitter",
            "ARTIFACTS_REFRESH_SUCCESS": "refresh_success",
            "ARTIFACTS_REFRESH_FAILURE": "refresh_failure",
            "ARTIFACTS_INITIAL_DELAY": "initial_delay",
            "ARTIFACTS_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise ArtifactConfigError(f"{env_key} must be a number, got {val!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("ARTIFACTS_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

"""HTTP transport for intel ``/r/<action>`` calls with cookie management."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http.cookies import SimpleCookie
from typing import Any, Protocol

import aiohttp

from pyartifacts._constants import USER_AGENT
from pyartifacts._redact import redact_for_log
from pyartifacts.config import ArtifactConfig
from pyartifacts.exceptions import ArtifactTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`IntelTransport`) concrete.
    """

    async def post_action(self, action: str, params: Mapping[str, Any]) -> dict[str, Any]:
        ...


class IntelTransport:
    """JSON transport that posts intel actions and persists session cookies."""

    def __init__(
        self,
        config: ArtifactConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._cookies: dict[str, str] = {}
        if config.csrf_token:
            self._cookies["csrftoken"] = config.csrf_token
        if config.session_id:
            self._cookies["sessionid"] = config.session_id
        self._cookie_header: str = "; ".join(f"{k}={v}" for k, v in self._cookies.items())

    def _update_cookies(self, headers: Any) -> None:
        """Extract Set-Cookie headers and store them."""
        raw_cookies = headers.getall("Set-Cookie", [])
        changed = False
        for raw in raw_cookies:
            cookie: SimpleCookie = SimpleCookie()
            cookie.load(raw)
            for key, morsel in cookie.items():
                value = morsel.value
                if self._cookies.get(key) != value:
                    self._cookies[key] = value
                    changed = True

        if changed:
            self._cookie_header = "; ".join(f"{k}={v}" for k, v in self._cookies.items())

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        csrf = self._cookies.get("csrftoken")
        if csrf:
            headers["x-csrftoken"] = csrf
        if self._cookie_header:
            headers["cookie"] = self._cookie_header
        return headers

    async def post_action(self, action: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """Post *params* to ``/r/<action>`` and return the decoded JSON object.

        The configured API version is added as ``v`` unless *params*
        already carries one.
        """
        body: dict[str, Any] = dict(params)
        if self._config.api_version is not None:
            body.setdefault("v", self._config.api_version)

        endpoint = f"/r/{action}"
        url = f"{self._config.base_url}{endpoint}"
        headers = self._build_headers()

        _logger.debug("POST %s", url)
        if self._config.api_trace_enabled:
            _logger.debug("Request %s headers=%s body=%s", endpoint, redact_for_log(headers), redact_for_log(body))

        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
        try:
            async with self._http.post(url, data=json.dumps(body), headers=headers, timeout=timeout) as resp:
                self._update_cookies(resp.headers)
                text = await resp.text()
                if resp.status != 200:
                    raise ArtifactTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except ArtifactTransportError:
            raise
        except TimeoutError as exc:
            raise ArtifactTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ArtifactTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ArtifactTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(result, dict):
            raise ArtifactTransportError(
                f"Expected a JSON object from {endpoint}, got {type(result).__name__}",
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("Response %s body=%s", endpoint, redact_for_log(result))

        return result

"""HTTP transport for the tuning service's JSON method calls."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pytuner._constants import USER_AGENT
from pytuner._redact import redact_for_log
from pytuner.config import TunerConfig
from pytuner.exceptions import TunerServiceError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the live-state client.

    Tests pass simple doubles here; production uses :class:`ServiceTransport`.
    """

    async def call(self, method: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        ...


class ServiceTransport:
    """POSTs ``{service_url}/{method}`` with a JSON body and returns the JSON reply."""

    def __init__(self, config: TunerConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.service_timeout)

    async def call(self, method: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._config.service_url.rstrip('/')}/{method}"
        body = json.dumps(dict(payload or {}), separators=(",", ":"))
        headers = {
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }

        _logger.debug("POST %s", url)

        try:
            async with self._http.post(url, data=body, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise TunerServiceError(
                        f"HTTP {resp.status} from {method}: {text[:200]}",
                        status_code=resp.status,
                        method=method,
                    )
        except TunerServiceError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TunerServiceError(f"Call to {method} failed: {exc}", method=method) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TunerServiceError(f"Invalid JSON from {method}: {text[:200]}", method=method) from exc

        if not isinstance(result, dict):
            raise TunerServiceError(f"Reply from {method} is not a JSON object", method=method)

        _logger.debug("Reply from %s: %s", method, redact_for_log(result))
        return result

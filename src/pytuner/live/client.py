"""Live-state service client.

:class:`LiveStateClient` is the boundary the poll controller talks to.
:class:`HttpLiveStateClient` implements it against the tuning service's
JSON method protocol.  Reading and writing the actual kernel tunables is
the service's job, not this library's.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import aiohttp

from pytuner._transport import ServiceTransport, Transport
from pytuner.config import TunerConfig
from pytuner.exceptions import TunerServiceError
from pytuner.live.replies import (
    parse_available_governors,
    parse_choices,
    parse_compcache,
    parse_scheduler,
    parse_single_value,
    reply_ok,
)
from pytuner.models.values import TunableValue

_logger = logging.getLogger(__name__)


class LiveStateClient(Protocol):
    """Reports the live tunables.

    Each getter resolves to a :class:`TunableValue`: a concrete value, or
    an explicit disabled/unsupported/unavailable marker, never ``None``.
    """

    async def get_governor(self) -> TunableValue:
        ...

    async def get_scheduler(self) -> TunableValue:
        ...

    async def get_congestion(self) -> TunableValue:
        ...

    async def get_compcache(self) -> TunableValue:
        ...


class HttpLiveStateClient:
    """Async client for the tuning service.

    Usage::

        async with HttpLiveStateClient(config) as client:
            governor = await client.get_governor()
    """

    def __init__(
        self,
        config: TunerConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> HttpLiveStateClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = ServiceTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RuntimeError("HttpLiveStateClient is not started; use 'async with'")
        return self._transport

    async def _call(self, method: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self._require_transport().call(method, payload)

    async def _read(self, method: str, parse: Callable[[Mapping[str, Any]], TunableValue]) -> TunableValue:
        try:
            reply = await self._call(method)
        except TunerServiceError:
            _logger.debug("Live read %s failed", method, exc_info=True)
            return TunableValue.unavailable()
        return parse(reply)

    async def _write(self, method: str, payload: Mapping[str, Any]) -> bool:
        try:
            reply = await self._call(method, payload)
        except TunerServiceError:
            _logger.warning("Live write %s failed", method, exc_info=True)
            return False
        if not reply_ok(reply):
            _logger.warning("Service rejected %s: %s", method, reply.get("errorText", "unknown error"))
            return False
        return True

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    async def get_governor(self) -> TunableValue:
        return await self._read("get_scaling_governor", parse_single_value)

    async def get_scheduler(self) -> TunableValue:
        return await self._read("get_io_scheduler", parse_scheduler)

    async def get_congestion(self) -> TunableValue:
        return await self._read("get_tcp_congestion_control", parse_single_value)

    async def get_compcache(self) -> TunableValue:
        return await self._read("get_compcache_config", parse_compcache)

    async def get_available_congestion(self) -> list[str]:
        try:
            return parse_choices(await self._call("get_tcp_available_congestion_control"))
        except TunerServiceError:
            _logger.debug("Listing congestion algorithms failed", exc_info=True)
            return []

    async def get_available_governors(self) -> list[str]:
        try:
            return parse_available_governors(await self._call("get_cpufreq_params"))
        except TunerServiceError:
            _logger.debug("Listing governors failed", exc_info=True)
            return []

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    async def set_governor(self, governor: str) -> bool:
        return await self._write(
            "set_cpufreq_params",
            {"governorParams": [{"name": "scaling_governor", "value": governor}]},
        )

    async def set_congestion(self, algorithm: str) -> bool:
        return await self._write("set_tcp_congestion_control", {"value": algorithm})

    async def set_compcache(self, *, enabled: bool, memlimit: int | str = 16384) -> bool:
        return await self._write(
            "set_compcache_config",
            {
                "compcacheConfig": [
                    {"name": "compcache_enabled", "value": "1" if enabled else "0"},
                    {"name": "compcache_memlimit", "value": str(memlimit)},
                ]
            },
        )

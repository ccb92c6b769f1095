from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pytuner._transport import ServiceTransport
from pytuner.config import TunerConfig
from pytuner.exceptions import TunerServiceError
from pytuner.live.client import HttpLiveStateClient
from pytuner.live.replies import parse_compcache, parse_scheduler, parse_single_value
from pytuner.models.values import TunableValue, ValueKind


@dataclass
class FakeServiceBackend:
    replies: dict[str, dict[str, Any]] = field(default_factory=dict)
    failing: set[str] = field(default_factory=set)
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    async def call(self, method: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append((method, dict(payload or {})))
        if method in self.failing:
            raise TunerServiceError(f"Call to {method} failed", method=method)
        if method not in self.replies:
            raise AssertionError(f"Unexpected method: {method}")
        return self.replies[method]


def test_single_value_strips_newline() -> None:
    assert parse_single_value({"value": "ondemand\n", "returnValue": True}) == TunableValue.of("ondemand")


def test_single_value_from_std_out() -> None:
    assert parse_single_value({"stdOut": ["cubic"], "returnValue": True}) == TunableValue.of("cubic")


def test_failed_reply_is_unsupported() -> None:
    reply = {"errorText": "Unable to open /sys/...", "returnValue": False, "errorCode": -1}
    assert parse_single_value(reply).kind == ValueKind.UNSUPPORTED


def test_empty_reply_is_unavailable() -> None:
    assert parse_single_value({"stdOut": [], "returnValue": True}).kind == ValueKind.UNAVAILABLE


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("noop anticipatory deadline [cfq]\n", "cfq"),
        ("[noop] deadline", "noop"),
        ("deadline", "deadline"),
    ],
)
def test_scheduler_active_entry(raw: str, expected: str) -> None:
    assert parse_scheduler({"value": raw, "returnValue": True}) == TunableValue.of(expected)


def test_compcache_variants() -> None:
    assert parse_compcache({"params": [], "returnValue": True}).kind == ValueKind.UNSUPPORTED
    disabled = {
        "params": [
            {"name": "compcache_enabled", "value": "0", "writeable": True},
            {"name": "compcache_memlimit", "value": "16384", "writeable": True},
        ],
        "returnValue": True,
    }
    assert parse_compcache(disabled).kind == ValueKind.DISABLED
    enabled = {
        "params": [
            {"name": "compcache_enabled", "value": "1", "writeable": True},
            {"name": "compcache_memlimit", "value": "24576", "writeable": True},
        ],
        "returnValue": True,
    }
    assert parse_compcache(enabled) == TunableValue.of("24576")


@pytest.mark.asyncio
async def test_client_getters_use_service_methods() -> None:
    backend = FakeServiceBackend(
        replies={
            "get_scaling_governor": {"value": "performance\n", "returnValue": True},
            "get_io_scheduler": {"value": "noop [deadline]", "returnValue": True},
            "get_tcp_congestion_control": {"stdOut": ["westwood"], "returnValue": True},
            "get_compcache_config": {"params": [], "returnValue": True},
            "get_tcp_available_congestion_control": {"stdOut": ["cubic reno westwood"], "returnValue": True},
            "get_cpufreq_params": {
                "params": [{"name": "scaling_available_governors", "value": "ondemand performance"}],
                "returnValue": True,
            },
        }
    )

    async with HttpLiveStateClient(TunerConfig(), transport=backend) as client:
        assert await client.get_governor() == TunableValue.of("performance")
        assert await client.get_scheduler() == TunableValue.of("deadline")
        assert await client.get_congestion() == TunableValue.of("westwood")
        assert await client.get_compcache() == TunableValue.unsupported()
        assert await client.get_available_congestion() == ["cubic", "reno", "westwood"]
        assert await client.get_available_governors() == ["ondemand", "performance"]


@pytest.mark.asyncio
async def test_client_transport_failure_is_unavailable() -> None:
    backend = FakeServiceBackend(failing={"get_scaling_governor", "get_tcp_available_congestion_control"})

    async with HttpLiveStateClient(TunerConfig(), transport=backend) as client:
        assert await client.get_governor() == TunableValue.unavailable()
        assert await client.get_available_congestion() == []


@pytest.mark.asyncio
async def test_client_setters_send_payloads() -> None:
    backend = FakeServiceBackend(
        replies={
            "set_cpufreq_params": {"returnValue": True},
            "set_tcp_congestion_control": {"returnValue": False, "errorText": "Invalid or missing value"},
            "set_compcache_config": {"returnValue": True},
        }
    )

    async with HttpLiveStateClient(TunerConfig(), transport=backend) as client:
        assert await client.set_governor("powersave") is True
        assert await client.set_congestion("bogus") is False
        assert await client.set_compcache(enabled=True, memlimit=8192) is True

    assert backend.calls[0] == (
        "set_cpufreq_params",
        {"governorParams": [{"name": "scaling_governor", "value": "powersave"}]},
    )
    assert backend.calls[2][1]["compcacheConfig"][0] == {"name": "compcache_enabled", "value": "1"}
    assert backend.calls[2][1]["compcacheConfig"][1] == {"name": "compcache_memlimit", "value": "8192"}


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = HttpLiveStateClient(TunerConfig())
    with pytest.raises(RuntimeError):
        await client.get_governor()


class _FakeResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class _FakeHttpSession:
    status: int = 200
    text: str = "{}"
    error: Exception | None = None
    posted: list[tuple[str, str]] = field(default_factory=list)

    def post(self, url: str, *, data: str, headers: dict[str, str], timeout: Any) -> _FakeResponse:
        if self.error is not None:
            raise self.error
        self.posted.append((url, data))
        return _FakeResponse(self.status, self.text)


@pytest.mark.asyncio
async def test_service_transport_posts_json() -> None:
    session = _FakeHttpSession(text='{"value": "ondemand", "returnValue": true}')
    transport = ServiceTransport(TunerConfig(service_url="http://tuner.local/"), session)  # type: ignore[arg-type]

    reply = await transport.call("get_scaling_governor")

    assert reply == {"value": "ondemand", "returnValue": True}
    assert session.posted == [("http://tuner.local/get_scaling_governor", "{}")]


@pytest.mark.asyncio
async def test_service_transport_errors() -> None:
    config = TunerConfig()

    transport = ServiceTransport(config, _FakeHttpSession(status=503, text="busy"))  # type: ignore[arg-type]
    with pytest.raises(TunerServiceError) as excinfo:
        await transport.call("status")
    assert excinfo.value.status_code == 503

    with pytest.raises(TunerServiceError):
        await ServiceTransport(config, _FakeHttpSession(text="not json")).call("status")  # type: ignore[arg-type]

    with pytest.raises(TunerServiceError):
        await ServiceTransport(config, _FakeHttpSession(text="[]")).call("status")  # type: ignore[arg-type]

    failing = _FakeHttpSession(error=aiohttp.ClientConnectionError("refused"))
    with pytest.raises(TunerServiceError):
        await ServiceTransport(config, failing).call("status")  # type: ignore[arg-type]

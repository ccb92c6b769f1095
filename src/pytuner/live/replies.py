"""Parsing of tuning-service replies into tagged tunable values.

Every reply carries ``returnValue``.  A ``false`` reply means the service
could not read the tunable on this device (missing sysfs node, no kernel
module), which is reported as ``UNSUPPORTED`` rather than an error.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pytuner._normalize import safe_str
from pytuner.models.values import TunableValue

_ACTIVE_ENTRY = re.compile(r"\[([^\]]+)\]")


def reply_ok(reply: Mapping[str, Any]) -> bool:
    return reply.get("returnValue") is True


def _first_line(reply: Mapping[str, Any]) -> str | None:
    """First non-empty line of ``value`` or ``stdOut``."""
    value = reply.get("value")
    if value is None:
        std_out = reply.get("stdOut")
        if isinstance(std_out, list) and std_out:
            value = std_out[0]
    text = safe_str(value)
    if text is None:
        return None
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return None


def _param_map(reply: Mapping[str, Any]) -> dict[str, str]:
    params = reply.get("params")
    if not isinstance(params, list):
        return {}
    out: dict[str, str] = {}
    for entry in params:
        if not isinstance(entry, Mapping):
            continue
        name = safe_str(entry.get("name"))
        if name is None:
            continue
        out[name] = safe_str(entry.get("value")) or ""
    return out


def parse_single_value(reply: Mapping[str, Any]) -> TunableValue:
    """``{"value": "ondemand\\n"}`` or ``{"stdOut": ["cubic"]}`` → VALUE."""
    if not reply_ok(reply):
        return TunableValue.unsupported()
    line = _first_line(reply)
    if line is None:
        return TunableValue.unavailable()
    return TunableValue.of(line)


def parse_scheduler(reply: Mapping[str, Any]) -> TunableValue:
    """Pick the bracketed active entry from ``"noop [cfq] deadline"``."""
    result = parse_single_value(reply)
    if result.value is None:
        return result
    match = _ACTIVE_ENTRY.search(result.value)
    if match:
        return TunableValue.of(match.group(1).strip())
    if len(result.value.split()) == 1:
        return result
    return TunableValue.unavailable()


def parse_compcache(reply: Mapping[str, Any]) -> TunableValue:
    """Compressed swap: no params → unsupported, enabled ``"0"`` → disabled."""
    if not reply_ok(reply):
        return TunableValue.unsupported()
    params = _param_map(reply)
    if not params:
        return TunableValue.unsupported()
    if params.get("compcache_enabled", "0") != "1":
        return TunableValue.disabled()
    memlimit = params.get("compcache_memlimit", "").strip()
    return TunableValue.of(memlimit or "on")


def parse_choices(reply: Mapping[str, Any]) -> list[str]:
    """Space-separated choice list (``"cubic reno westwood"``)."""
    if not reply_ok(reply):
        return []
    line = _first_line(reply)
    return line.split() if line else []


def parse_available_governors(reply: Mapping[str, Any]) -> list[str]:
    if not reply_ok(reply):
        return []
    governors = _param_map(reply).get("scaling_available_governors", "")
    return governors.split()

"""Trimming of service replies for debug logging.

Replies can carry whole command outputs (``stdOut``/``stdErr`` arrays) and,
when the service sits behind an authenticating proxy, credentials.  Both
are cut down here before a reply reaches a DEBUG log line.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MASKED_KEYS: frozenset[str] = frozenset({"authorization", "cookie", "password", "token"})
_MAX_DEPTH = 20


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 256, max_items: int = 8, _depth: int = 0) -> Any:
    """Copy of a decoded JSON *value* with secrets masked and long output clipped.

    Strings longer than *max_string* are cut; lists keep their first
    *max_items* entries followed by a ``"<+N more>"`` marker.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip(value, max_string)

    def nested(item: Any) -> Any:
        return redact_for_log(item, max_string=max_string, max_items=max_items, _depth=_depth + 1)

    if isinstance(value, Mapping):
        return {
            str(key): "<redacted>" if str(key).lower() in _MASKED_KEYS else nested(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        kept = [nested(item) for item in value[:max_items]]
        if len(value) > max_items:
            kept.append(f"<+{len(value) - max_items} more>")
        return kept

    return repr(value)

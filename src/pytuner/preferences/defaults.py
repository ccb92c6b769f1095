"""Built-in preference defaults."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from pytuner._constants import COMPCACHE_OFF

PreferenceSet = dict[str, Any]
"""Setting key → value.  Known keys hold ``str | int | float | bool``;
unknown keys loaded from storage keep whatever JSON value they had."""

DEFAULT_PREFERENCES: MappingProxyType[str, Any] = MappingProxyType(
    {
        # Global
        "theme": "palm-default",
        # List rendering
        "secondRow": "version,maint",
        # Tunables
        "governor": "ondemand",
        "compcache": COMPCACHE_OFF,
        "scheduler": "noop",
        "congestion": "cubic",
        # Space-separated per-rail steps; empty means "device defaults".
        "voltages": "",
    }
)

# Keys captured in a profile, in summary order.
TUNABLE_KEYS: tuple[str, ...] = ("governor", "compcache", "scheduler", "congestion", "voltages")


def default_preferences() -> PreferenceSet:
    """Fresh mutable copy of the defaults."""
    return dict(DEFAULT_PREFERENCES)

"""Legacy value migrations applied while loading stored preferences.

Rules are keyed by setting name and are pure functions of the stored value.
Each rule maps canonical input to itself, so running a migration over
already-migrated data changes nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pytuner._constants import COMPCACHE_ON, COMPCACHE_UNSUPPORTED

# Old joined second-row codes → explicit token lists.
LEGACY_SECOND_ROW_CODES: Mapping[str, str] = MappingProxyType(
    {
        "v&m": "version,maint",
        "v&d": "version,date",
        "v&p": "version,price",
        "m&d": "maint,date",
        "m&p": "maint,price",
        "p&v": "price,version",
        "p&d": "price,date",
        "v&m&d": "version,maint,date",
        "p&v&d": "price,version,date",
    }
)


def migrate_second_row(value: Any) -> Any:
    if isinstance(value, str):
        return LEGACY_SECOND_ROW_CODES.get(value, value)
    return value


def migrate_compcache(value: Any) -> Any:
    # Older releases stored ``false`` when the kernel module was missing.
    if value is False:
        return COMPCACHE_UNSUPPORTED
    if value is True:
        return COMPCACHE_ON
    return value


def migrate_voltages(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return " ".join(str(step) for step in value)
    return value


MIGRATIONS: Mapping[str, Callable[[Any], Any]] = MappingProxyType(
    {
        "secondRow": migrate_second_row,
        "compcache": migrate_compcache,
        "voltages": migrate_voltages,
    }
)


def migrate_value(key: str, value: Any) -> Any:
    """Rewrite *value* to its canonical encoding; unknown keys pass through."""
    rule = MIGRATIONS.get(key)
    if rule is None:
        return value
    return rule(value)


def migrate_preferences(blob: Mapping[str, Any]) -> dict[str, Any]:
    """Return a migrated copy of a stored preference blob."""
    return {key: migrate_value(key, value) for key, value in blob.items()}

"""Preference storage with default values and legacy-encoding migration."""

from pytuner.preferences.defaults import DEFAULT_PREFERENCES, TUNABLE_KEYS, PreferenceSet, default_preferences
from pytuner.preferences.migrations import (
    LEGACY_SECOND_ROW_CODES,
    MIGRATIONS,
    migrate_preferences,
    migrate_value,
)
from pytuner.preferences.store import ConfigStore

__all__ = [
    "ConfigStore",
    "DEFAULT_PREFERENCES",
    "LEGACY_SECOND_ROW_CODES",
    "MIGRATIONS",
    "PreferenceSet",
    "TUNABLE_KEYS",
    "default_preferences",
    "migrate_preferences",
    "migrate_value",
]

"""Persistent preference store.

One :class:`ConfigStore` is constructed per process and handed to every
consumer.  It never raises on storage trouble: failures are logged and the
store keeps serving in-memory values.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from pytuner._constants import PREFERENCES_KEY
from pytuner.preferences.defaults import DEFAULT_PREFERENCES, PreferenceSet
from pytuner.preferences.migrations import migrate_preferences, migrate_value
from pytuner.storage import BlobStorage

_logger = logging.getLogger(__name__)

_MISSING: Any = object()


class ConfigStore:
    """Defaults + persisted overrides, flushed on every ``put``."""

    def __init__(
        self,
        storage: BlobStorage,
        *,
        defaults: Mapping[str, Any] = DEFAULT_PREFERENCES,
        key: str = PREFERENCES_KEY,
    ) -> None:
        self._storage = storage
        self._defaults = dict(defaults)
        self._key = key
        self._prefs: PreferenceSet | None = None
        # put() reads through get(), so the lock must be re-entrant.
        self._lock = threading.RLock()

    @property
    def defaults(self) -> PreferenceSet:
        return dict(self._defaults)

    def get(self, force_reload: bool = False) -> PreferenceSet:
        """Return the current preference set (a copy).

        The first call, or any call with *force_reload*, rebuilds the set
        from defaults and the persisted blob.
        """
        with self._lock:
            if self._prefs is None or force_reload:
                self._prefs = self._load()
            return dict(self._prefs)

    def put(self, key: str | Mapping[str, Any], value: Any = _MISSING) -> None:
        """Persist one setting, or overwrite the whole blob with a mapping.

        ``put("governor", "performance")`` merges into the current set and
        writes it back.  ``put(full_set)`` replaces the stored blob as-is,
        which is how profiles and backups are restored.
        """
        with self._lock:
            if value is _MISSING:
                if not isinstance(key, Mapping):
                    raise TypeError("put() needs a value unless given a full preference mapping")
                blob = migrate_preferences(key)
                prefs = dict(self._defaults)
                prefs.update(blob)
                self._prefs = prefs
                self._write(blob)
                return

            if not isinstance(key, str):
                raise TypeError(f"setting key must be a string, got {type(key).__name__}")
            prefs = self.get()
            prefs[key] = migrate_value(key, value)
            self._prefs = prefs
            self._write(prefs)

    def _load(self) -> PreferenceSet:
        prefs = dict(self._defaults)
        try:
            blob = self._storage.read(self._key)
        except Exception:
            _logger.warning("Preference storage unavailable; using defaults", exc_info=True)
            return prefs

        if blob is None:
            _logger.debug("No stored preferences; persisting defaults")
            self._write(prefs)
            return prefs

        prefs.update(migrate_preferences(blob))
        return prefs

    def _write(self, prefs: Mapping[str, Any]) -> None:
        try:
            self._storage.write(self._key, dict(prefs))
        except Exception:
            _logger.warning("Failed to persist preferences", exc_info=True)

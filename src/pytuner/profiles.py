"""Named profiles over the tunable preference subset.

Profiles live in their own ``"profiles"`` blob, keyed by name in save order.
Applying a profile produces a preference set for :meth:`ConfigStore.put`;
the manager itself never writes preferences except in :meth:`activate`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pytuner._constants import COMPCACHE_OFF, COMPCACHE_ON, COMPCACHE_UNSUPPORTED, PROFILES_KEY
from pytuner.exceptions import TunerProfileNotFoundError
from pytuner.models.profile import Editability, Profile, SummaryRow
from pytuner.models.snapshot import LiveSnapshot
from pytuner.models.values import TunableValue, ValueKind
from pytuner.preferences.defaults import TUNABLE_KEYS, PreferenceSet
from pytuner.preferences.store import ConfigStore
from pytuner.storage import BlobStorage

_logger = logging.getLogger(__name__)

# (preference key, row label, editor target)
_SUMMARY_ROWS: tuple[tuple[str, str, str], ...] = (
    ("governor", "CPU Frequency", "settings-cpufreq"),
    ("compcache", "Compressed Swap", "settings-compcache"),
    ("scheduler", "I/O Scheduler", "settings-iosched"),
    ("congestion", "TCP Congestion", "settings-tcpcong"),
)
SAVE_PROFILE_ROW = SummaryRow(key="save-profile", name="Save As New Profile", target="profile-save")


def stored_tunable(key: str, value: Any) -> TunableValue:
    """Interpret a stored preference value as a tagged tunable."""
    if key == "compcache":
        if value == COMPCACHE_UNSUPPORTED or value is False:
            return TunableValue.unsupported()
        if value == COMPCACHE_OFF:
            return TunableValue.disabled()
        if value is True:
            value = COMPCACHE_ON
    if value is None or value == "":
        return TunableValue.unavailable()
    return TunableValue.of(str(value))


def _editability(value: TunableValue) -> Editability:
    if value.kind == ValueKind.UNSUPPORTED:
        return Editability.UNSUPPORTED
    if value.kind == ValueKind.UNAVAILABLE:
        return Editability.DISABLED
    return Editability.EDITABLE


class ProfileManager:
    """Save, list, update and apply named tunable profiles."""

    def __init__(self, storage: BlobStorage, *, key: str = PROFILES_KEY) -> None:
        self._storage = storage
        self._key = key

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def build_summary(self, store: ConfigStore, snapshot: LiveSnapshot | None = None) -> list[SummaryRow]:
        """Ordered settings summary for display.

        Live readings win over stored preferences whenever the snapshot
        knows something definite about the device.
        """
        prefs = store.get()
        rows: list[SummaryRow] = []
        for key, name, target in _SUMMARY_ROWS:
            value = stored_tunable(key, prefs.get(key))
            live = snapshot.get(key) if snapshot is not None else None
            if live is not None and live.is_known:
                value = live
            editability = _editability(value)
            rows.append(
                SummaryRow(
                    key=key,
                    name=name,
                    value=value,
                    editability=editability,
                    target=target if editability == Editability.EDITABLE else None,
                )
            )
        rows.append(SAVE_PROFILE_ROW)
        return rows

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Profile]:
        try:
            blob = self._storage.read(self._key)
        except Exception:
            _logger.warning("Profile storage unavailable; no profiles loaded", exc_info=True)
            return {}
        if not blob:
            return {}

        profiles: dict[str, Profile] = {}
        for name, raw in blob.items():
            try:
                profiles[name] = Profile.model_validate(raw)
            except ValidationError:
                _logger.warning("Skipping unreadable profile %r", name, exc_info=True)
        return profiles

    def _flush(self, profiles: Mapping[str, Profile]) -> None:
        try:
            self._storage.write(self._key, {name: p.to_blob() for name, p in profiles.items()})
        except Exception:
            _logger.warning("Failed to persist profiles", exc_info=True)

    def list_profiles(self) -> list[Profile]:
        return list(self._load().values())

    def get(self, name: str) -> Profile:
        profile = self._load().get(name.strip())
        if profile is None:
            raise TunerProfileNotFoundError(name)
        return profile

    def save(self, name: str, store: ConfigStore) -> Profile:
        """Capture the current tunables under *name*, replacing any profile of that name."""
        prefs = store.get()
        settings: dict[str, Any] = {}
        for key in TUNABLE_KEYS:
            value = prefs.get(key)
            if isinstance(value, (str, int, float, bool)):
                settings[key] = value
            elif key in prefs:
                _logger.debug("Not capturing %s=%r in profile %r", key, value, name)
        profile = Profile(name=name, settings=settings)
        profiles = self._load()
        profiles.pop(profile.name, None)
        profiles[profile.name] = profile
        self._flush(profiles)
        _logger.debug("Saved profile %r", profile.name)
        return profile

    def update(self, name: str, key: str, value: Any) -> Profile:
        """Change one tunable of a saved profile."""
        if key not in TUNABLE_KEYS:
            raise ValueError(f"{key!r} is not a profile setting")
        profiles = self._load()
        current = profiles.get(name.strip())
        if current is None:
            raise TunerProfileNotFoundError(name)
        # Raises ValidationError (a ValueError) for values a profile cannot hold.
        updated = Profile.model_validate({**current.model_dump(), "settings": {**current.settings, key: value}})
        profiles[updated.name] = updated
        self._flush(profiles)
        return updated

    def apply(self, name: str, store: ConfigStore | None = None) -> PreferenceSet:
        """Preference set for a saved profile.

        Without *store* this is just the profile's settings.  With *store*
        it is the full current set overlaid with them, ready for
        ``store.put(full_set)``.
        """
        settings = dict(self.get(name).settings)
        if store is None:
            return settings
        prefs = store.get()
        prefs.update(settings)
        return prefs

    def activate(self, name: str, store: ConfigStore) -> PreferenceSet:
        """Apply a profile and persist the result."""
        prefs = self.apply(name, store)
        store.put(prefs)
        return prefs

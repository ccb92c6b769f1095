"""Composition root for the presentation layer.

A :class:`TunerPanel` owns the single process-wide :class:`ConfigStore` and
hands the same instance to the profile manager; the UI only ever talks to
the panel.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pytuner.config import TunerConfig
from pytuner.live.client import LiveStateClient
from pytuner.live.poll import PollController, SnapshotHandler, TapHandler
from pytuner.models.profile import Profile, SummaryRow
from pytuner.models.voltage import VoltageBounds
from pytuner.preferences.defaults import PreferenceSet
from pytuner.preferences.store import ConfigStore
from pytuner.profiles import ProfileManager
from pytuner.storage import BlobStorage, FileBlobStorage
from pytuner.voltage import VOLTAGES_KEY, VoltageEditor, VoltageSpec


class TunerPanel:
    """Settings summary, voltage editing, profiles and live polling in one place."""

    def __init__(
        self,
        config: TunerConfig,
        client: LiveStateClient,
        *,
        storage: BlobStorage | None = None,
        on_snapshot: SnapshotHandler | None = None,
        on_tap: TapHandler | None = None,
    ) -> None:
        self._config = config
        self._storage: BlobStorage = storage if storage is not None else FileBlobStorage(config.storage_dir)
        self.store = ConfigStore(self._storage)
        self.profiles = ProfileManager(self._storage)
        self.poller = PollController(
            client,
            on_snapshot=on_snapshot,
            on_tap=on_tap,
            poll_on_activate=config.poll_on_activate,
        )

    # UI boundary -------------------------------------------------------

    def summary(self) -> list[SummaryRow]:
        return self.profiles.build_summary(self.store, self.poller.snapshot)

    def voltage_editor(
        self,
        labels: Sequence[str],
        bounds: VoltageBounds | None = None,
        *,
        voltages: str | None = None,
    ) -> VoltageEditor:
        """Editor over *voltages* (default: the stored voltage string)."""
        if voltages is None:
            voltages = str(self.store.get().get(VOLTAGES_KEY, ""))
        return VoltageEditor(VoltageSpec(voltages, labels, bounds), window=self._config.voltage_window)

    def set_preference(self, key: str, value: Any) -> None:
        self.store.put(key, value)

    def save_profile(self, name: str) -> Profile:
        return self.profiles.save(name, self.store)

    def apply_profile(self, name: str) -> PreferenceSet:
        return self.profiles.activate(name, self.store)

    def update_profile(self, name: str, key: str, value: Any) -> Profile:
        return self.profiles.update(name, key, value)

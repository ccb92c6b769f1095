from __future__ import annotations

from typing import Any

import pytest

from pytuner.exceptions import TunerProfileNotFoundError, TunerStorageError
from pytuner.models.profile import Editability
from pytuner.models.snapshot import LiveSnapshot
from pytuner.models.values import TunableValue, ValueKind
from pytuner.preferences import ConfigStore
from pytuner.profiles import ProfileManager, stored_tunable
from pytuner.storage import MemoryBlobStorage


@pytest.fixture
def storage() -> MemoryBlobStorage:
    return MemoryBlobStorage()


@pytest.fixture
def store(storage: MemoryBlobStorage) -> ConfigStore:
    return ConfigStore(storage)


@pytest.fixture
def manager(storage: MemoryBlobStorage) -> ProfileManager:
    return ProfileManager(storage)


def test_summary_rows_in_order(manager: ProfileManager, store: ConfigStore) -> None:
    rows = manager.build_summary(store)

    assert [row.name for row in rows] == [
        "CPU Frequency",
        "Compressed Swap",
        "I/O Scheduler",
        "TCP Congestion",
        "Save As New Profile",
    ]
    assert rows[0].display == "ondemand"
    assert rows[0].target == "settings-cpufreq"
    # Compressed swap switched off is still navigable.
    assert rows[1].value == TunableValue.disabled()
    assert rows[1].editability == Editability.EDITABLE
    assert rows[4].target == "profile-save"


def test_unsupported_compcache_renders_na(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("compcache", "unsupported")

    row = manager.build_summary(store)[1]

    assert row.display == "N/A"
    assert row.editability == Editability.UNSUPPORTED
    assert row.target is None


def test_live_snapshot_wins_over_preferences(manager: ProfileManager, store: ConfigStore) -> None:
    snapshot = LiveSnapshot.captured(
        governor=TunableValue.of("performance"),
        compcache=TunableValue.unsupported(),
        scheduler=TunableValue.unavailable(),
        congestion=TunableValue.of("westwood"),
    )

    rows = {row.key: row for row in manager.build_summary(store, snapshot)}

    assert rows["governor"].display == "performance"
    assert rows["compcache"].editability == Editability.UNSUPPORTED
    # Unreadable live values fall back to the stored preference.
    assert rows["scheduler"].display == "noop"
    assert rows["congestion"].display == "westwood"


def test_empty_stored_value_is_disabled_row(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("scheduler", "")

    row = manager.build_summary(store)[2]

    assert row.editability == Editability.DISABLED
    assert row.target is None
    assert row.display == "--"


@pytest.mark.parametrize(
    ("key", "value", "kind"),
    [
        ("compcache", "unsupported", ValueKind.UNSUPPORTED),
        ("compcache", False, ValueKind.UNSUPPORTED),
        ("compcache", "off", ValueKind.DISABLED),
        ("compcache", "16384", ValueKind.VALUE),
        ("governor", None, ValueKind.UNAVAILABLE),
        ("governor", "ondemand", ValueKind.VALUE),
    ],
)
def test_stored_tunable_kinds(key: str, value: Any, kind: ValueKind) -> None:
    assert stored_tunable(key, value).kind == kind


def test_save_captures_tunable_subset(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("governor", "performance")
    store.put("voltages", "12 10 8")

    profile = manager.save("Fast", store)

    assert profile.settings == {
        "governor": "performance",
        "compcache": "off",
        "scheduler": "noop",
        "congestion": "cubic",
        "voltages": "12 10 8",
    }
    assert "theme" not in profile.settings
    assert [p.name for p in manager.list_profiles()] == ["Fast"]


def test_save_same_name_replaces(manager: ProfileManager, store: ConfigStore) -> None:
    manager.save("A", store)
    manager.save("B", store)
    store.put("governor", "powersave")
    manager.save("A", store)

    profiles = manager.list_profiles()
    assert [p.name for p in profiles] == ["B", "A"]
    assert profiles[1].settings["governor"] == "powersave"


def test_apply_without_store_returns_profile_settings(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("congestion", "reno")
    manager.save("Net", store)

    assert manager.apply("Net")["congestion"] == "reno"


def test_apply_with_store_returns_full_set(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("governor", "performance")
    manager.save("Fast", store)
    store.put("governor", "powersave")
    store.put("theme", "dark")

    prefs = manager.apply("Fast", store)

    assert prefs["governor"] == "performance"
    assert prefs["theme"] == "dark"
    # Nothing written yet.
    assert store.get(force_reload=True)["governor"] == "powersave"


def test_activate_persists(manager: ProfileManager, store: ConfigStore) -> None:
    store.put("governor", "performance")
    manager.save("Fast", store)
    store.put("governor", "powersave")

    manager.activate("Fast", store)

    assert store.get(force_reload=True)["governor"] == "performance"


def test_unknown_profile(manager: ProfileManager, store: ConfigStore) -> None:
    with pytest.raises(TunerProfileNotFoundError):
        manager.apply("missing")
    with pytest.raises(KeyError):
        manager.update("missing", "voltages", "1 2")


def test_update_voltage_string(manager: ProfileManager, store: ConfigStore) -> None:
    manager.save("Volt", store)

    updated = manager.update("Volt", "voltages", "11 9 7")

    assert updated.settings["voltages"] == "11 9 7"
    assert manager.get("Volt").settings["voltages"] == "11 9 7"


def test_update_rejects_non_profile_key(manager: ProfileManager, store: ConfigStore) -> None:
    manager.save("P", store)
    with pytest.raises(ValueError):
        manager.update("P", "theme", "dark")


def test_save_skips_null_stored_tunables() -> None:
    storage = MemoryBlobStorage({"preferences": {"governor": None}})
    store = ConfigStore(storage)
    manager = ProfileManager(storage)

    profile = manager.save("p", store)

    assert "governor" not in profile.settings
    assert profile.settings["scheduler"] == "noop"
    assert [p.name for p in manager.list_profiles()] == ["p"]


def test_update_rejects_value_a_profile_cannot_hold(manager: ProfileManager, store: ConfigStore) -> None:
    manager.save("P", store)

    with pytest.raises(ValueError):
        manager.update("P", "voltages", [12, 10])
    assert manager.get("P").settings["voltages"] == ""


def test_unreadable_profile_entries_are_skipped(store: ConfigStore) -> None:
    storage = MemoryBlobStorage({"profiles": {"bad": {"name": ""}, "ok": {"name": "ok", "settings": {}}}})

    assert [p.name for p in ProfileManager(storage).list_profiles()] == ["ok"]


class _ReadOnlyBrokenStorage:
    def read(self, key: str) -> dict[str, Any] | None:
        raise TunerStorageError("gone", key=key)

    def write(self, key: str, blob: dict[str, Any]) -> None:
        raise TunerStorageError("gone", key=key)


def test_profile_storage_failure_degrades(store: ConfigStore) -> None:
    manager = ProfileManager(_ReadOnlyBrokenStorage())

    assert manager.list_profiles() == []
    profile = manager.save("Kept", store)
    assert profile.name == "Kept"

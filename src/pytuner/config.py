"""Runtime configuration for pytuner."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytuner._constants import SERVICE_URL, VOLTAGE_WINDOW
from pytuner.exceptions import TunerConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise TunerConfigError(f"{env_key} must be a number, got {value!r}") from exc


def default_storage_dir() -> str:
    """Per-user state directory (``$XDG_STATE_HOME/pytuner`` or ``~/.local/state/pytuner``)."""
    xdg_state = os.environ.get("XDG_STATE_HOME")
    if xdg_state:
        return os.path.join(xdg_state, "pytuner")
    return os.path.join(os.path.expanduser("~"), ".local", "state", "pytuner")


@dataclasses.dataclass(frozen=True)
class TunerConfig:
    """Engine configuration.

    Parameters
    ----------
    storage_dir : str
        Directory holding the durable ``preferences`` and ``profiles`` blobs.
    service_url : str
        Base URL of the tuning service that reads and writes live tunables.
    service_timeout : float or None
        Total timeout in seconds for one service call.  ``None`` disables
        the timeout: a hung request never resolves and the poll controller
        keeps its last snapshot until visibility toggles.
    voltage_window : int
        Number of steps offered on each side of the current voltage step.
    poll_on_activate : bool
        Refresh live state whenever the host view becomes visible.
    """

    storage_dir: str = dataclasses.field(default_factory=default_storage_dir)
    service_url: str = SERVICE_URL
    service_timeout: float | None = None
    voltage_window: int = VOLTAGE_WINDOW
    poll_on_activate: bool = True

    def __post_init__(self) -> None:
        if self.voltage_window < 0:
            raise TunerConfigError(f"voltage_window must be >= 0, got {self.voltage_window}")
        if self.service_timeout is not None and self.service_timeout <= 0:
            raise TunerConfigError(f"service_timeout must be positive, got {self.service_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> TunerConfig:
        """Create configuration from ``PYTUNER_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "PYTUNER_STORAGE_DIR": "storage_dir",
            "PYTUNER_SERVICE_URL": "service_url",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("PYTUNER_SERVICE_TIMEOUT")
        if timeout_env is not None and "service_timeout" not in overrides:
            timeout = float(_env_number("PYTUNER_SERVICE_TIMEOUT", timeout_env, float))
            # 0 means "no timeout", matching the unset default.
            config_kwargs["service_timeout"] = timeout if timeout > 0 else None

        window_env = env.get("PYTUNER_VOLTAGE_WINDOW")
        if window_env is not None and "voltage_window" not in overrides:
            config_kwargs["voltage_window"] = int(_env_number("PYTUNER_VOLTAGE_WINDOW", window_env, int))

        if "poll_on_activate" not in overrides:
            config_kwargs["poll_on_activate"] = _env_bool(env.get("PYTUNER_POLL_ON_ACTIVATE"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

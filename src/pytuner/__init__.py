"""pytuner - device tuning preferences, voltage tables and live-state polling."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytuner")
except PackageNotFoundError:
    __version__ = "0+local"
from pytuner.config import TunerConfig
from pytuner.exceptions import (
    TunerConfigError,
    TunerError,
    TunerProfileNotFoundError,
    TunerServiceError,
    TunerStorageError,
)
from pytuner.live import HttpLiveStateClient, LiveStateClient, PollController, PollState
from pytuner.models import (
    Editability,
    LiveSnapshot,
    Profile,
    SummaryRow,
    TunableValue,
    ValueKind,
    VoltageBounds,
    VoltageChoice,
    VoltageRail,
)
from pytuner.panel import TunerPanel
from pytuner.preferences import ConfigStore, migrate_preferences
from pytuner.profiles import ProfileManager
from pytuner.storage import BlobStorage, FileBlobStorage, MemoryBlobStorage
from pytuner.voltage import VoltageEditor, VoltageSpec, bounds_from_limits, generate_voltage_choices

__all__ = [
    "__version__",
    "BlobStorage",
    "ConfigStore",
    "Editability",
    "FileBlobStorage",
    "HttpLiveStateClient",
    "LiveSnapshot",
    "LiveStateClient",
    "MemoryBlobStorage",
    "PollController",
    "PollState",
    "Profile",
    "ProfileManager",
    "SummaryRow",
    "TunableValue",
    "TunerConfig",
    "TunerConfigError",
    "TunerError",
    "TunerPanel",
    "TunerProfileNotFoundError",
    "TunerServiceError",
    "TunerStorageError",
    "ValueKind",
    "VoltageBounds",
    "VoltageChoice",
    "VoltageEditor",
    "VoltageRail",
    "VoltageSpec",
    "bounds_from_limits",
    "generate_voltage_choices",
    "migrate_preferences",
]

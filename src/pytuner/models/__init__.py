"""Value objects exchanged between the engine and the presentation layer."""

from pytuner.models._base import TunerBaseModel
from pytuner.models.profile import Editability, PreferenceValue, Profile, SummaryRow
from pytuner.models.snapshot import LiveSnapshot
from pytuner.models.values import TunableValue, ValueKind
from pytuner.models.voltage import VoltageBounds, VoltageChoice, VoltageRail

__all__ = [
    "Editability",
    "LiveSnapshot",
    "PreferenceValue",
    "Profile",
    "SummaryRow",
    "TunableValue",
    "TunerBaseModel",
    "ValueKind",
    "VoltageBounds",
    "VoltageChoice",
    "VoltageRail",
]

"""Tagged tunable values.

A live or stored tunable is one of four variants:

* ``VALUE``       – a concrete setting (``"ondemand"``, ``"16384"``)
* ``DISABLED``    – the feature exists on this device but is switched off
* ``UNSUPPORTED`` – the device does not have the feature at all
* ``UNAVAILABLE`` – the value could not be read right now

Keeping these distinct avoids overloading ``False``/``"N/A"`` strings, where
"feature absent" and "feature off" would otherwise look the same.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import model_validator

from pytuner.models._base import TunerBaseModel

NOT_APPLICABLE = "N/A"
UNAVAILABLE_DISPLAY = "--"
DISABLED_DISPLAY = "off"


class ValueKind(StrEnum):
    VALUE = "value"
    DISABLED = "disabled"
    UNSUPPORTED = "unsupported"
    UNAVAILABLE = "unavailable"


class TunableValue(TunerBaseModel):
    """One tunable reading; ``value`` is set only for ``ValueKind.VALUE``."""

    kind: ValueKind
    value: str | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> TunableValue:
        if self.kind == ValueKind.VALUE and not self.value:
            raise ValueError("a VALUE tunable needs a non-empty value")
        if self.kind != ValueKind.VALUE and self.value is not None:
            raise ValueError(f"{self.kind} tunables carry no value")
        return self

    @classmethod
    def of(cls, value: str) -> TunableValue:
        return cls(kind=ValueKind.VALUE, value=value)

    @classmethod
    def disabled(cls) -> TunableValue:
        return cls(kind=ValueKind.DISABLED)

    @classmethod
    def unsupported(cls) -> TunableValue:
        return cls(kind=ValueKind.UNSUPPORTED)

    @classmethod
    def unavailable(cls) -> TunableValue:
        return cls(kind=ValueKind.UNAVAILABLE)

    @property
    def is_known(self) -> bool:
        """Whether this reading says something definite about the device."""
        return self.kind != ValueKind.UNAVAILABLE

    @property
    def display(self) -> str:
        if self.kind == ValueKind.VALUE:
            return str(self.value)
        if self.kind == ValueKind.DISABLED:
            return DISABLED_DISPLAY
        if self.kind == ValueKind.UNSUPPORTED:
            return NOT_APPLICABLE
        return UNAVAILABLE_DISPLAY

"""Profile and summary row models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from pytuner.models._base import TunerBaseModel
from pytuner.models.values import TunableValue

PreferenceValue = str | int | float | bool


class Editability(StrEnum):
    """How the presentation layer may treat a summary row.

    ``EDITABLE`` rows navigate to an editor.  ``DISABLED`` rows have a
    supported feature whose value is not readable right now.  ``UNSUPPORTED``
    rows describe a feature the device lacks and render as ``"N/A"``.
    """

    EDITABLE = "editable"
    DISABLED = "disabled"
    UNSUPPORTED = "unsupported"


class Profile(TunerBaseModel):
    """A named snapshot of tunable settings."""

    name: str
    settings: dict[str, PreferenceValue] = Field(default_factory=dict)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("profile name must be non-empty")
        return name

    def to_blob(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class SummaryRow(TunerBaseModel):
    """One entry of the settings summary list."""

    key: str
    name: str
    value: TunableValue | None = None
    editability: Editability = Editability.EDITABLE
    target: str | None = None
    """Editor the row navigates to, or ``None`` when it is not navigable."""

    @property
    def display(self) -> str:
        return self.value.display if self.value is not None else ""

    @property
    def editable(self) -> bool:
        return self.editability == Editability.EDITABLE

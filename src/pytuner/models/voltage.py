"""Voltage table models."""

from __future__ import annotations

from pydantic import Field

from pytuner._constants import format_millivolts
from pytuner.models._base import TunerBaseModel


class VoltageBounds(TunerBaseModel):
    """Device-reported step limits.

    ``max < min`` is accepted here; the generator treats such bounds as
    degenerate and offers no choices.
    """

    min: int
    max: int

    @property
    def is_degenerate(self) -> bool:
        return self.max < self.min


class VoltageChoice(TunerBaseModel):
    """One selectable voltage for a rail."""

    step: int
    millivolts: float

    @property
    def label(self) -> str:
        """Display label, e.g. ``"737.5 mV"``."""
        return format_millivolts(self.millivolts)


class VoltageRail(TunerBaseModel):
    """One labelled rail with its current step and offered choices."""

    index: int = Field(..., ge=0)
    label: str
    current_step: int
    choices: tuple[VoltageChoice, ...] = ()

    @property
    def steps(self) -> list[int]:
        return [choice.step for choice in self.choices]

"""Voltage choice tables.

The generator is a pure function: given the current step of one rail and
the optional device limits it returns the ordered choices offered for that
rail, highest voltage first.  :class:`VoltageEditor` runs it once per
labelled rail and collects the user's picks back into a voltage string.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from typing import Any

from pytuner._constants import VOLTAGE_WINDOW, step_to_millivolts
from pytuner._normalize import safe_int
from pytuner.models.voltage import VoltageBounds, VoltageChoice, VoltageRail

VOLTAGES_KEY = "voltages"


def bounds_from_limits(minimum: Any, maximum: Any) -> VoltageBounds | None:
    """Build bounds from device-reported limits; either limit missing means no bounds."""
    low = safe_int(minimum)
    high = safe_int(maximum)
    if low is None or high is None:
        return None
    return VoltageBounds(min=low, max=high)


def generate_voltage_choices(
    current_step: int,
    bounds: VoltageBounds | None = None,
    *,
    window: int = VOLTAGE_WINDOW,
) -> list[VoltageChoice]:
    """Return the selectable steps around *current_step*, descending.

    The window is ``[current_step - window, current_step + window]``, clamped
    to *bounds* when given.  Degenerate bounds (``max < min``) yield an empty
    list, as does a clamped window that ends up empty.

    >>> [c.step for c in generate_voltage_choices(10, VoltageBounds(min=9, max=11))]
    [11, 10, 9]
    """
    low = current_step - window
    high = current_step + window
    if bounds is not None:
        if bounds.is_degenerate:
            return []
        low = max(low, bounds.min)
        high = min(high, bounds.max)

    return [VoltageChoice(step=step, millivolts=step_to_millivolts(step)) for step in range(high, low - 1, -1)]


class VoltageSpec:
    """Input for one voltage editing screen.

    Parameters
    ----------
    voltages : str
        Whitespace-separated current step per rail (``"12 10 8"``).
    labels : sequence of str
        Human label per rail, in the same order as the steps.
    bounds : VoltageBounds or None
        Device-reported limits, if the device exposes them.
    """

    def __init__(
        self,
        voltages: str,
        labels: Sequence[str],
        bounds: VoltageBounds | None = None,
    ) -> None:
        self.tokens: list[str] = voltages.split()
        self.labels: tuple[str, ...] = tuple(labels)
        self.bounds = bounds


class VoltageEditor:
    """Per-rail choice lists plus the edits made on one screen.

    Rails pair labels and tokens by position.  Tokens past the last label
    are kept as-is so they survive the round trip.
    """

    def __init__(self, spec: VoltageSpec, *, window: int = VOLTAGE_WINDOW) -> None:
        self._tokens = list(spec.tokens)
        rails: list[VoltageRail] = []
        for index, (label, token) in enumerate(zip(spec.labels, spec.tokens, strict=False)):
            current = int(token)
            rails.append(
                VoltageRail(
                    index=index,
                    label=label,
                    current_step=current,
                    choices=tuple(generate_voltage_choices(current, spec.bounds, window=window)),
                )
            )
        self._rails = tuple(rails)

    @property
    def rails(self) -> tuple[VoltageRail, ...]:
        return self._rails

    def selected_step(self, index: int) -> int:
        return int(self._tokens[self._rails[index].index])

    def select(self, index: int, step: int) -> None:
        """Record a new step for rail *index*; it must be one of the rail's choices."""
        rail = self._rails[index]
        if step not in rail.steps:
            raise ValueError(f"step {step} is not offered for rail {rail.label!r} (choices {rail.steps})")
        self._tokens[rail.index] = str(step)

    def to_voltage_string(self) -> str:
        return " ".join(self._tokens)

    def teardown(self, settings: MutableMapping[str, Any]) -> str:
        """Write the edited voltage string into *settings* and return it."""
        voltages = self.to_voltage_string()
        settings[VOLTAGES_KEY] = voltages
        return voltages

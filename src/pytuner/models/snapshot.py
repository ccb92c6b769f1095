"""Live system state snapshot."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from pytuner.models._base import TunerBaseModel
from pytuner.models.values import TunableValue


def _unavailable() -> TunableValue:
    return TunableValue.unavailable()


class LiveSnapshot(TunerBaseModel):
    """Ephemeral view of the live tunables.

    Never persisted and never patched: the poll controller builds a new
    snapshot on every successful refresh and swaps it in whole.
    """

    governor: TunableValue = Field(default_factory=_unavailable)
    compcache: TunableValue = Field(default_factory=_unavailable)
    scheduler: TunableValue = Field(default_factory=_unavailable)
    congestion: TunableValue = Field(default_factory=_unavailable)
    observed_at: datetime | None = None
    """When the refresh that produced this snapshot completed (``None`` before the first)."""

    @classmethod
    def captured(
        cls,
        *,
        governor: TunableValue,
        compcache: TunableValue,
        scheduler: TunableValue,
        congestion: TunableValue,
    ) -> LiveSnapshot:
        return cls(
            governor=governor,
            compcache=compcache,
            scheduler=scheduler,
            congestion=congestion,
            observed_at=datetime.now(UTC),
        )

    def get(self, setting: str) -> TunableValue | None:
        """Look up a live field by preference key (``None`` for non-live keys)."""
        if setting in ("governor", "compcache", "scheduler", "congestion"):
            value: TunableValue = getattr(self, setting)
            return value
        return None

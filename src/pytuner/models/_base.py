"""Base model for pytuner value objects.

Every value object the engine hands to the presentation layer is a frozen
pydantic model, so snapshots and rows can be shared by reference without
defensive copies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TunerBaseModel(BaseModel):
    """Frozen base for engine value objects."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

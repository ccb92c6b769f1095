"""Visibility-gated live-state polling.

The controller refreshes the live snapshot only while the host view is
visible.  At most one refresh is in flight; going invisible cancels it and
bumps a generation counter, so a late reply can never overwrite the
snapshot of a screen the user has already left.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pytuner.live.client import LiveStateClient
from pytuner.models.snapshot import LiveSnapshot
from pytuner.models.values import TunableValue

_logger = logging.getLogger(__name__)

_FIELDS: tuple[str, ...] = ("governor", "compcache", "scheduler", "congestion")


class PollState(StrEnum):
    INVISIBLE = "invisible"
    VISIBLE = "visible"


SnapshotHandler = Callable[["PollController", LiveSnapshot], None]
TapHandler = Callable[["PollController", Any], None]


class PollController:
    """Keeps a :class:`LiveSnapshot` in sync while the view is on screen."""

    def __init__(
        self,
        client: LiveStateClient,
        *,
        on_snapshot: SnapshotHandler | None = None,
        on_tap: TapHandler | None = None,
        poll_on_activate: bool = True,
    ) -> None:
        self._client = client
        self._on_snapshot = on_snapshot
        self._on_tap = on_tap
        self._poll_on_activate = poll_on_activate
        self._state = PollState.INVISIBLE
        self._snapshot = LiveSnapshot()
        self._generation = 0
        self._inflight: asyncio.Task[None] | None = None

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def snapshot(self) -> LiveSnapshot:
        return self._snapshot

    @property
    def refresh_in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    # ------------------------------------------------------------------
    # Visibility events
    # ------------------------------------------------------------------

    def on_visible(self) -> asyncio.Task[None] | None:
        """Host became active: enter VISIBLE and start a refresh if none is running.

        Must be called from inside the running event loop.  Returns the
        refresh task (the existing one when a refresh is already in
        flight), or ``None`` when activation polling is turned off.
        """
        self._state = PollState.VISIBLE
        if not self._poll_on_activate:
            return None
        if self._inflight is not None and not self._inflight.done():
            return self._inflight
        return self._start_refresh()

    def on_invisible(self) -> None:
        """Host became inactive: drop interest in any outstanding refresh."""
        self._state = PollState.INVISIBLE
        self._generation += 1
        task, self._inflight = self._inflight, None
        if task is not None and not task.done():
            task.cancel()

    def on_tap(self, payload: Any = None) -> bool:
        """Forward a summary tap to the presentation handler while visible."""
        if self._state != PollState.VISIBLE:
            return False
        if self._on_tap is not None:
            self._on_tap(self, payload)
        return True

    def refresh(self) -> asyncio.Task[None] | None:
        """Explicit refresh request; ignored while invisible."""
        if self._state != PollState.VISIBLE:
            return None
        if self._inflight is not None and not self._inflight.done():
            return self._inflight
        return self._start_refresh()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_refresh(self) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(self._refresh(self._generation))
        task.add_done_callback(self._refresh_done)
        self._inflight = task
        return task

    def _refresh_done(self, task: asyncio.Task[None]) -> None:
        if self._inflight is task:
            self._inflight = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("Live refresh failed", exc_info=exc)

    async def _refresh(self, generation: int) -> None:
        results = await asyncio.gather(
            self._client.get_governor(),
            self._client.get_compcache(),
            self._client.get_scheduler(),
            self._client.get_congestion(),
            return_exceptions=True,
        )

        values: dict[str, TunableValue] = {}
        for name, result in zip(_FIELDS, results, strict=True):
            if isinstance(result, TunableValue):
                values[name] = result
            else:
                _logger.debug("Live read of %s failed: %r", name, result)
                values[name] = TunableValue.unavailable()

        if generation != self._generation or self._state != PollState.VISIBLE:
            _logger.debug(
                "Discarding stale live state (generation=%d, current=%d, state=%s)",
                generation,
                self._generation,
                self._state,
            )
            return

        snapshot = LiveSnapshot.captured(**values)
        self._snapshot = snapshot
        if self._on_snapshot is not None:
            self._on_snapshot(self, snapshot)

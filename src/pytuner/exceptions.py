"""Custom exception hierarchy for pytuner."""

from __future__ import annotations


class TunerError(Exception):
    """Base exception for all pytuner errors."""


class TunerConfigError(TunerError):
    """Invalid or missing configuration."""


class TunerStorageError(TunerError):
    """Durable preference storage could not be read or written.

    Raised by :class:`~pytuner.storage.BlobStorage` implementations.  The
    preference and profile layers catch it and fall back to in-memory
    defaults, so callers of those layers never see it.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class TunerServiceError(TunerError):
    """Live-state service call failed (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        method: str = "",
    ) -> None:
        self.status_code = status_code
        self.method = method
        super().__init__(message)


class TunerProfileNotFoundError(TunerError, KeyError):
    """No saved profile exists under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No saved profile named {name!r}")

    def __str__(self) -> str:
        return str(self.args[0])

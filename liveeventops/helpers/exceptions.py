"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations

_NOT_FOUND_MARKERS = ("ResourceNotFound", "ResourceGroupNotFound", "was not found", "could not be found")


class AzCliError(Exception):
    """Raised when an `az` invocation fails, times out, or returns unparsable output."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    @property
    def not_found(self) -> bool:
        """True when the provider reported that the resource does not exist."""
        return any(marker in self.stderr for marker in _NOT_FOUND_MARKERS)


class PrerequisiteError(Exception):
    """Raised when the `az` CLI is missing or the session is not logged in."""


class ResourceLookupFailed(Exception):
    """Raised when a target does not exist or its status cannot be determined."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"{target}: {reason}")
        self.target = target
        self.reason = reason


class FetchFailed(Exception):
    """Raised when one metric or log stream cannot be fetched for a target."""

    def __init__(self, target: str, signal: str, reason: str) -> None:
        super().__init__(f"{target}: could not fetch {signal} ({reason})")
        self.target = target
        self.signal = signal
        self.reason = reason


class RemediationFailed(Exception):
    """Raised when a stop/start instruction is rejected or confirmation polling is exhausted."""

    def __init__(self, target: str, stage: str, reason: str) -> None:
        super().__init__(f"{target}: remediation failed at {stage} ({reason})")
        self.target = target
        self.stage = stage
        self.reason = reason


class NotificationFailed(Exception):
    """Raised inside the notification component when a webhook delivery fails. Never escapes it."""

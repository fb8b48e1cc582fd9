"""
Key Vault and alert-webhook DTOs.

Rules:
- Import only stdlib and typing (no liveeventops.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SecretSpec:
    """A secret to write: name, value and the tags recorded alongside it."""

    name: str
    value: str
    purpose: str
    source: str


@dataclass(frozen=True)
class SecretInfo:
    name: str
    created: str | None = None
    updated: str | None = None


@dataclass
class SecretWriteResult:
    """Which secrets were written and which were skipped for lack of a value."""

    vault_name: str
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class AccessCheckResult:
    """Outcome of the list/read/write permission check."""

    vault_name: str
    can_list: bool = False
    can_read: bool | None = None
    """None when the vault holds no secret to read."""
    can_write: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.can_list and self.can_read is not False and self.can_write


@dataclass
class AccessGrantResult:
    vault_name: str
    granted: list[str] = field(default_factory=list)
    """Object ids / client ids that received a policy."""
    skipped: list[str] = field(default_factory=list)


@dataclass
class WebhookSetupResult:
    """Outcome of wiring the action group to the repository-dispatch webhook."""

    resource_group: str
    action_group: str
    webhook_name: str
    webhook_url: str
    action_group_updated: bool = False
    test_status_code: int | None = None
    payload_path: str | None = None
    summary_path: str | None = None

    @property
    def test_passed(self) -> bool:
        return self.test_status_code == 204

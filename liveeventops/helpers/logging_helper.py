"""
Logging helpers: identity/role tagging and per-invocation context.

Every module logs through ``logging.getLogger(__name__)``. The filter below
turns the module name into readable tags so a line from
``liveeventops.workflows.health.assess_vm_health_wf`` renders as
``[Assess Vm Health] [Workflow]``, and appends whatever context the current
invocation set (usually the target VM).
"""

from __future__ import annotations

import contextvars
import logging
import sys
from typing import Any

_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_cli": "[CLI]",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(identity_tag)s %(role_tag)s %(context_str)s%(message)s"

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "liveeventops_log_context", default=None
)


def set_log_context(**values: Any) -> None:
    """Merge key/value pairs into the log context of the current thread/task."""
    current = dict(_log_context.get() or {})
    current.update(values)
    _log_context.set(current)


def clear_log_context() -> None:
    """Drop all context values."""
    _log_context.set(None)


def _derive_tags(name: str) -> tuple[str, str]:
    stem = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if stem.endswith(suffix):
            base = stem[: -len(suffix)]
            if not base.strip("_"):
                return name, ""
            identity = " ".join(part.capitalize() for part in base.split("_") if part)
            return f"[{identity}]", role
    return name, ""


class LiveOpsLogFilter(logging.Filter):
    """Adds ``identity_tag``, ``role_tag`` and ``context_str`` to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.identity_tag, record.role_tag = _derive_tags(record.name)
        except Exception:
            record.identity_tag, record.role_tag = record.name, ""

        try:
            context = _log_context.get() or {}
            if context:
                pairs = " ".join(f"{k}={v}" for k, v in context.items())
                record.context_str = f"[{pairs}] "
            else:
                record.context_str = ""
        except Exception:
            record.context_str = ""

        return True


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger once for a CLI process."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_liveeventops", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(LiveOpsLogFilter())
    handler._liveeventops = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    root.setLevel(level)

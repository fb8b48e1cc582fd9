"""
Pytest fixtures and configuration for the test suite.

Mocking strategy:
- No test runs a real `az` binary or touches the network
- Provider calls go through FakeAzRunner, scripted per test
- HTTP calls (requests.post/get) are patched where a component makes them
- Report output goes to pytest's tmp_path
"""

import json
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Add project root to path so tests can import the liveeventops package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from liveeventops.helpers.dto.config_dto import DiagnosticsConfig, PollingPolicy  # noqa: E402
from liveeventops.helpers.exceptions import AzCliError  # noqa: E402
from liveeventops.helpers.logging_helper import clear_log_context  # noqa: E402


# === FAKE AZ RUNNER ===


class FakeAzRunner:
    """
    Scripted stand-in for AzCliRunner.

    Each rule is (tokens, response): a call matches when every token appears
    in its argument list. The most recently added matching rule wins.

    Response kinds:
    - an Exception instance: raised
    - a list wrapped via ``sequence()``: returned one item per call, the
      last item repeating
    - a callable: called with the args, its return value used
    - anything else: returned as-is (run() returns JSON text for non-str)
    """

    def __init__(self) -> None:
        self.rules: list[tuple[tuple[str, ...], Any]] = []
        self.calls: list[list[str]] = []
        self.available = True

    def on(self, *tokens: str, returns: Any = None, raises: Exception | None = None) -> "FakeAzRunner":
        self.rules.append((tokens, raises if raises is not None else returns))
        return self

    @staticmethod
    def sequence(*items: Any) -> "_Sequence":
        return _Sequence(list(items))

    def is_available(self) -> bool:
        return self.available

    def _resolve(self, args: list[str]) -> Any:
        self.calls.append(list(args))
        for tokens, response in reversed(self.rules):
            if all(t in args for t in tokens):
                if isinstance(response, _Sequence):
                    response = response.next()
                if isinstance(response, Exception):
                    raise response
                if callable(response):
                    return response(args)
                return response
        raise AzCliError(f"unscripted az call: {' '.join(args)}", returncode=2, stderr="unscripted")

    def run(self, args: list[str], timeout_s: float | None = None) -> str:
        result = self._resolve(args)
        if result is None:
            return ""
        return result if isinstance(result, str) else json.dumps(result)

    def run_json(self, args: list[str], timeout_s: float | None = None) -> Any:
        return self._resolve([*args, "--output", "json"])

    def calls_with(self, *tokens: str) -> list[list[str]]:
        return [c for c in self.calls if all(t in c for t in tokens)]


class _Sequence:
    def __init__(self, items: list[Any]) -> None:
        self.items = items

    def next(self) -> Any:
        if len(self.items) > 1:
            return self.items.pop(0)
        return self.items[0]


@pytest.fixture
def fake_az() -> FakeAzRunner:
    """Provide an empty scripted az runner."""
    return FakeAzRunner()


# === CONFIG FIXTURES ===


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., DiagnosticsConfig]:
    """Factory for DiagnosticsConfig with test-friendly defaults (fast polling, tmp output)."""

    def _make(**overrides: Any) -> DiagnosticsConfig:
        values: dict[str, Any] = {
            "output_dir": str(tmp_path / "diagnostics"),
            "resource_group": "liveeventops-rg",
            "subscription_id": None,
            "log_analytics_workspace": "liveeventops-law",
            "webhook_url": None,
            "polling": PollingPolicy(timeout_s=60.0, poll_interval_s=1.0, max_attempts=5),
        }
        values.update(overrides)
        return DiagnosticsConfig(**values)

    return _make


@pytest.fixture
def diagnostics_config(make_config) -> DiagnosticsConfig:
    return make_config()


# === LOGGING ===


@pytest.fixture(autouse=True)
def _reset_log_context() -> Generator[None, None, None]:
    """Log context is a contextvar; keep tests independent."""
    clear_log_context()
    yield
    clear_log_context()


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a fast, isolated unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test (requires az login)")

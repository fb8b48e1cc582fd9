"""Tests for az_cli_comp.py."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from liveeventops.components.azure.az_cli_comp import AzCliRunner, ensure_az_ready
from liveeventops.helpers.exceptions import AzCliError, PrerequisiteError


def _completed(stdout: str) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.returncode = 0
    return result


class TestAzCliRunnerRun:
    """Tests for AzCliRunner.run()."""

    @pytest.mark.unit
    def test_returns_stdout_and_passes_timeout(self):
        """Command is prefixed with the executable and bounded by the timeout."""
        with patch("subprocess.run", return_value=_completed("ok\n")) as mock_run:
            out = AzCliRunner(timeout_s=42).run(["account", "show"])

        assert out == "ok\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["az", "account", "show"]
        assert kwargs["timeout"] == 42
        assert kwargs["check"] is True

    @pytest.mark.unit
    def test_timeout_becomes_az_cli_error(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("az", 5)):
            with pytest.raises(AzCliError, match="timed out"):
                AzCliRunner(timeout_s=5).run(["vm", "list"])

    @pytest.mark.unit
    def test_missing_binary_becomes_az_cli_error(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(AzCliError, match="not found"):
                AzCliRunner().run(["vm", "list"])

    @pytest.mark.unit
    def test_nonzero_exit_keeps_stderr(self):
        """Last stderr line becomes the message; full stderr is preserved."""
        stderr = "WARNING: something\nERROR: (ResourceNotFound) The Resource was not found."
        err = subprocess.CalledProcessError(3, "az", stderr=stderr)
        with patch("subprocess.run", side_effect=err):
            with pytest.raises(AzCliError) as exc_info:
                AzCliRunner().run(["vm", "show"])

        assert exc_info.value.returncode == 3
        assert str(exc_info.value).startswith("ERROR: (ResourceNotFound)")
        assert exc_info.value.not_found is True


class TestAzCliRunnerRunJson:
    """Tests for AzCliRunner.run_json()."""

    @pytest.mark.unit
    def test_parses_json_and_requests_json_output(self):
        with patch("subprocess.run", return_value=_completed('{"name": "vm-1"}')) as mock_run:
            payload = AzCliRunner().run_json(["vm", "show"])

        assert payload == {"name": "vm-1"}
        assert mock_run.call_args[0][0][-2:] == ["--output", "json"]

    @pytest.mark.unit
    def test_empty_output_is_none(self):
        with patch("subprocess.run", return_value=_completed("  \n")):
            assert AzCliRunner().run_json(["vm", "stop"]) is None

    @pytest.mark.unit
    def test_invalid_json_raises(self):
        with patch("subprocess.run", return_value=_completed("not json")):
            with pytest.raises(AzCliError, match="invalid JSON"):
                AzCliRunner().run_json(["vm", "show"])


class TestEnsureAzReady:
    """Tests for ensure_az_ready()."""

    @pytest.mark.unit
    def test_missing_binary(self, fake_az):
        fake_az.available = False
        with pytest.raises(PrerequisiteError, match="not installed"):
            ensure_az_ready(fake_az)

    @pytest.mark.unit
    def test_not_logged_in(self, fake_az):
        fake_az.on("account", "show", raises=AzCliError("Please run 'az login'", returncode=1))
        with pytest.raises(PrerequisiteError, match="az login"):
            ensure_az_ready(fake_az)

    @pytest.mark.unit
    def test_sets_subscription_when_given(self, fake_az):
        fake_az.on("account", "show", returns={"id": "sub-1", "user": {"name": "ops"}})
        fake_az.on("account", "set", returns="")

        account = ensure_az_ready(fake_az, "sub-2")

        assert account["id"] == "sub-1"
        assert fake_az.calls_with("account", "set", "--subscription", "sub-2")

    @pytest.mark.unit
    def test_rejected_subscription(self, fake_az):
        fake_az.on("account", "show", returns={"id": "sub-1"})
        fake_az.on("account", "set", raises=AzCliError("subscription not found", returncode=1))
        with pytest.raises(PrerequisiteError, match="sub-x"):
            ensure_az_ready(fake_az, "sub-x")

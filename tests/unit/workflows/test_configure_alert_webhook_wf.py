"""Tests for configure_alert_webhook_wf.py."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from liveeventops.helpers.exceptions import AzCliError, ResourceLookupFailed
from liveeventops.workflows.alerts.configure_alert_webhook_wf import (
    PAYLOAD_FILENAME,
    SUMMARY_FILENAME,
    configure_alert_webhook_workflow,
)


def _response(status: int) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = ""
    return response


def _script_azure(fake_az) -> None:
    fake_az.on("group", "show", returns={"name": "rg"})
    fake_az.on("action-group", "show", returns={"name": "ag", "webhookReceivers": []})
    fake_az.on("action-group", "update", returns="")


def _run(fake_az, tmp_path, **kwargs):
    params = {
        "resource_group": "rg",
        "action_group": "ag",
        "webhook_name": "github-actions-webhook",
        "owner": "acme",
        "repo": "ops",
        "token": "tok",
        "output_dir": tmp_path,
    }
    params.update(kwargs)
    return configure_alert_webhook_workflow(fake_az, **params)


class TestConfigureAlertWebhookWorkflow:
    @pytest.mark.unit
    def test_configures_and_tests(self, fake_az, tmp_path):
        _script_azure(fake_az)

        with patch("requests.get", return_value=_response(200)), patch(
            "requests.post", return_value=_response(204)
        ) as post:
            result = _run(fake_az, tmp_path)

        assert result.action_group_updated is True
        assert result.test_passed is True
        assert result.webhook_url == "https://api.github.com/repos/acme/ops/dispatches"
        assert post.call_args[0][0] == result.webhook_url
        payload = json.loads((tmp_path / PAYLOAD_FILENAME).read_text())
        assert payload["event_type"] == "azure-monitor-alert"
        assert "passed (HTTP 204)" in (tmp_path / SUMMARY_FILENAME).read_text()

    @pytest.mark.unit
    def test_skip_test(self, fake_az, tmp_path):
        _script_azure(fake_az)

        with patch("requests.get", return_value=_response(200)), patch("requests.post") as post:
            result = _run(fake_az, tmp_path, send_test=False)

        post.assert_not_called()
        assert result.test_status_code is None
        assert "not run" in (tmp_path / SUMMARY_FILENAME).read_text()

    @pytest.mark.unit
    def test_unreachable_dispatch_is_reported(self, fake_az, tmp_path):
        _script_azure(fake_az)

        with patch("requests.get", side_effect=requests.ConnectionError("down")), patch(
            "requests.post", side_effect=requests.ConnectionError("down")
        ):
            result = _run(fake_az, tmp_path)

        assert result.action_group_updated is True
        assert result.test_passed is False
        assert result.summary_path is not None

    @pytest.mark.unit
    def test_missing_action_group(self, fake_az, tmp_path):
        fake_az.on("group", "show", returns={})
        fake_az.on("action-group", "show", raises=AzCliError("not found"))

        with pytest.raises(ResourceLookupFailed):
            _run(fake_az, tmp_path)

    @pytest.mark.unit
    def test_token_required(self, fake_az, tmp_path):
        with pytest.raises(ValueError):
            _run(fake_az, tmp_path, token="")
        assert fake_az.calls == []

"""Tests for webhook_notify_comp.py."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from liveeventops.components.notifications.webhook_notify_comp import (
    build_notification_payload,
    send_notification,
)

URL = "https://hooks.example.com/leo"


def _response(status: int) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    return response


class TestBuildNotificationPayload:
    @pytest.mark.unit
    def test_fields(self):
        payload = build_notification_payload(
            "VM Restart", "vm-1 restarted", target="vm-1", resource_group="rg", timestamp="t"
        )
        assert payload == {
            "title": "VM Restart",
            "message": "vm-1 restarted",
            "timestamp": "t",
            "resource_group": "rg",
            "vm_name": "vm-1",
        }


class TestSendNotification:
    @pytest.mark.unit
    def test_no_url_is_skipped(self):
        with patch("requests.post") as post:
            assert send_notification(None, "t", "m") is False
            assert send_notification("", "t", "m") is False
        post.assert_not_called()

    @pytest.mark.unit
    def test_delivered(self):
        with patch("requests.post", return_value=_response(200)) as post:
            assert send_notification(URL, "VM Restart", "msg", target="vm-1", timeout_s=3) is True

        args, kwargs = post.call_args
        assert args[0] == URL
        assert kwargs["json"]["vm_name"] == "vm-1"
        assert kwargs["timeout"] == 3

    @pytest.mark.unit
    def test_http_error_returns_false(self):
        with patch("requests.post", return_value=_response(500)):
            assert send_notification(URL, "t", "m") is False

    @pytest.mark.unit
    def test_connection_error_never_raises(self):
        with patch("requests.post", side_effect=requests.ConnectionError("refused")):
            assert send_notification(URL, "t", "m") is False

    @pytest.mark.unit
    def test_timeout_never_raises(self):
        with patch("requests.post", side_effect=requests.Timeout("slow")):
            assert send_notification(URL, "t", "m") is False

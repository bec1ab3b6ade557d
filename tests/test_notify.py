# SPDX-License-Identifier: MIT

import pytest
import requests

from gotrack.configuration import get_default_configuration
from gotrack.errors import NotificationError
from gotrack.service import notify
from gotrack.service.notify import WebhookNotifier, build_notifier


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class TestWebhookNotifier:
    def test_posts_threshold(self, monkeypatch):
        calls = []

        def fake_post(url, json=None, timeout=None):
            calls.append((url, json, timeout))
            return FakeResponse(200, "ok")

        monkeypatch.setattr(notify.requests, "post", fake_post)
        WebhookNotifier("https://hooks.example.com/remind", timeout_seconds=5).notify(96)
        assert calls == [("https://hooks.example.com/remind", {"hours": 96}, 5)]

    def test_error_status_raises_with_body(self, monkeypatch):
        monkeypatch.setattr(
            notify.requests,
            "post",
            lambda url, json=None, timeout=None: FakeResponse(502, "upstream down"),
        )
        with pytest.raises(NotificationError, match="upstream down"):
            WebhookNotifier("https://hooks.example.com/remind").notify(72)

    def test_connection_error_raises(self, monkeypatch):
        def fake_post(url, json=None, timeout=None):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(notify.requests, "post", fake_post)
        with pytest.raises(NotificationError, match="refused"):
            WebhookNotifier("https://hooks.example.com/remind").notify(72)


class TestBuildNotifier:
    def test_none_without_url(self):
        assert build_notifier(get_default_configuration()) is None

    def test_uses_configured_url_and_timeout(self):
        config = get_default_configuration()
        config["webhook_url"] = "https://hooks.example.com/remind"
        config["webhook_timeout_seconds"] = 3.0
        notifier = build_notifier(config)
        assert notifier is not None
        assert notifier.url == "https://hooks.example.com/remind"
        assert notifier.timeout_seconds == 3.0

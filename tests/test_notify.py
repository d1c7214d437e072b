"""Tests for the Telegram alert transport.

No network requests are made: ``requests.post`` or the module-level
``send_message`` is monkeypatched to record calls.
"""

from __future__ import annotations

import pytest
import requests

from workerchecks.errors import AlertDispatchError, ConfigurationError
from workerchecks.notify.base import NullAlertDispatcher
from workerchecks.notify.telegram import TelegramAlertDispatcher, format_alert, send_message


class _Response:
    def __init__(self, status: int = 200) -> None:
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.exceptions.HTTPError(f"{self.status} error")


def test_send_message_posts_to_bot_api(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_post(url, json=None, timeout=None):  # type: ignore[no-untyped-def]
        calls.append((url, json, timeout))
        return _Response()

    monkeypatch.setenv("TELEGRAM_CHAT_ID_ALLOWLIST", "111, 12345")
    monkeypatch.setattr("workerchecks.notify.telegram.requests.post", fake_post)
    send_message("tok", "12345", "hello")
    assert calls == [
        ("https://api.telegram.org/bottok/sendMessage", {"chat_id": "12345", "text": "hello"}, 10)
    ]


def test_send_message_refuses_unlisted_chat(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELEGRAM_CHAT_ID_ALLOWLIST", "111")

    def fail_post(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise AssertionError("should not post")

    monkeypatch.setattr("workerchecks.notify.telegram.requests.post", fail_post)
    with pytest.raises(AlertDispatchError, match="not in TELEGRAM_CHAT_ID_ALLOWLIST"):
        send_message("tok", "12345", "hello")


def test_send_message_wraps_http_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELEGRAM_CHAT_ID_ALLOWLIST", "12345")
    monkeypatch.setattr(
        "workerchecks.notify.telegram.requests.post", lambda *a, **k: _Response(500)
    )
    with pytest.raises(AlertDispatchError) as excinfo:
        send_message("secret-token", "12345", "hello")
    assert "secret-token" not in str(excinfo.value)
    assert excinfo.value.stage == "alert"


def test_dispatcher_formats_alert(monkeypatch: pytest.MonkeyPatch) -> None:
    sent = []
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "tok")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "12345")
    monkeypatch.setattr(
        "workerchecks.notify.telegram.send_message",
        lambda token, chat_id, text: sent.append((token, chat_id, text)),
    )
    dispatcher = TelegramAlertDispatcher.from_env()
    dispatcher.send_alert(
        subject="Work service job background check alert activated for BackupPackages job",
        details="No of packages yet to be backed up is 15.",
        alert_name="Alert for BackupPackages",
        component="BackupPackages Job",
    )
    assert len(sent) == 1
    token, chat_id, text = sent[0]
    assert (token, chat_id) == ("tok", "12345")
    assert text.splitlines() == [
        "🚨 Work service job background check alert activated for BackupPackages job",
        "Alert: Alert for BackupPackages",
        "Component: BackupPackages Job",
        "",
        "No of packages yet to be backed up is 15.",
    ]


def test_from_env_reports_missing_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)
    with pytest.raises(ConfigurationError) as excinfo:
        TelegramAlertDispatcher.from_env()
    assert "TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID" in str(excinfo.value)


def test_null_dispatcher_records_alerts() -> None:
    dispatcher = NullAlertDispatcher()
    dispatcher.send_alert("s", "d", "a", "c")
    assert dispatcher.sent == [("s", "d", "a", "c")]
    assert format_alert("s", "d", "a", "c").startswith("🚨 s\n")

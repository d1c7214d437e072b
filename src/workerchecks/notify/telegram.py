"""Telegram alert transport.

This module implements a thin wrapper around the Telegram Bot API and
an :class:`AlertDispatcher` that formats check alerts for it.  Delivery
is restricted to the chat IDs listed in ``TELEGRAM_CHAT_ID_ALLOWLIST``.

The expected environment variables are:

* ``TELEGRAM_BOT_TOKEN`` – the Telegram bot token used to authenticate.
* ``TELEGRAM_CHAT_ID`` – the chat ID (or user ID) receiving alerts.
* ``TELEGRAM_CHAT_ID_ALLOWLIST`` – a comma‑separated list of chat IDs
  that are permitted to receive alerts.

Every failure raises
:class:`~workerchecks.errors.AlertDispatchError` so the run can report
itself as degraded.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import requests

from ..errors import AlertDispatchError, ConfigurationError
from .base import AlertDispatcher

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.telegram.org"


def _is_allowed(chat_id: str, allowlist_str: str) -> bool:
    """Return True if chat_id is in the comma‑separated allowlist."""
    allowlist = [cid.strip() for cid in allowlist_str.split(",") if cid.strip()]
    return chat_id in allowlist


def send_message(token: str, chat_id: str, text: str, *, timeout: float = 10) -> None:
    """Send a message via the Telegram Bot API.

    Args:
        token: Telegram bot token.
        chat_id: Chat or user ID as a string.
        text: Message text to send.
        timeout: Request timeout in seconds.

    Raises:
        AlertDispatchError: If the chat is not allowlisted or the API
            request fails.
    """
    allowlist_str = os.getenv("TELEGRAM_CHAT_ID_ALLOWLIST", "")
    if not _is_allowed(chat_id, allowlist_str):
        raise AlertDispatchError(f"Chat ID {chat_id} is not in TELEGRAM_CHAT_ID_ALLOWLIST")
    url = f"{API_BASE_URL}/bot{token}/sendMessage"
    payload = {"chat_id": chat_id, "text": text}
    try:
        resp = requests.post(url, json=payload, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as exc:
        # The token is part of the URL; keep it out of the error text.
        raise AlertDispatchError(f"Telegram request failed: {type(exc).__name__}") from exc


def format_alert(subject: str, details: str, alert_name: str, component: str) -> str:
    return "\n".join(
        [
            f"🚨 {subject}",
            f"Alert: {alert_name}",
            f"Component: {component}",
            "",
            details,
        ]
    )


class TelegramAlertDispatcher(AlertDispatcher):
    """Send check alerts to a Telegram chat."""

    def __init__(self, token: str, chat_id: str) -> None:
        self.token = token
        self.chat_id = chat_id

    @classmethod
    def from_env(cls) -> "TelegramAlertDispatcher":
        token: Optional[str] = os.getenv("TELEGRAM_BOT_TOKEN")
        chat_id: Optional[str] = os.getenv("TELEGRAM_CHAT_ID")
        missing = [
            name
            for name, value in (("TELEGRAM_BOT_TOKEN", token), ("TELEGRAM_CHAT_ID", chat_id))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Missing environment variables: " + ", ".join(sorted(missing))
            )
        return cls(token=token, chat_id=chat_id)  # type: ignore[arg-type]

    def send_alert(self, subject: str, details: str, alert_name: str, component: str) -> None:
        text = format_alert(subject, details, alert_name, component)
        logger.info("Sending alert %r for %s", alert_name, component)
        send_message(self.token, self.chat_id, text)

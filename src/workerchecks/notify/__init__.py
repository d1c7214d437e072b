"""Alert delivery for workerchecks.

This package contains the :class:`AlertDispatcher` interface and its
implementations.  Alerts go to Telegram; a null dispatcher records
alerts without sending them for dry runs.
"""

from .base import AlertDispatcher, NullAlertDispatcher
from .telegram import TelegramAlertDispatcher, send_message  # noqa: F401

__all__ = ["AlertDispatcher", "NullAlertDispatcher", "TelegramAlertDispatcher", "send_message"]

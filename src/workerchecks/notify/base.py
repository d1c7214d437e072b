"""Alert dispatcher interface."""

from __future__ import annotations

import abc
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


class AlertDispatcher(abc.ABC):
    """Deliver an alert for a job whose check fired."""

    @abc.abstractmethod
    def send_alert(self, subject: str, details: str, alert_name: str, component: str) -> None:
        """Send one alert.

        Args:
            subject: Job-specific subject line.
            details: The verdict message.
            alert_name: Static alert name for the job.
            component: Static component name for the job.

        Raises:
            AlertDispatchError: If the alert could not be delivered.
        """
        raise NotImplementedError


class NullAlertDispatcher(AlertDispatcher):
    """Record alerts instead of sending them (``run --no-alerts``)."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str, str, str]] = []

    def send_alert(self, subject: str, details: str, alert_name: str, component: str) -> None:
        logger.info("Alert suppressed: %s (%s)", alert_name, details)
        self.sent.append((subject, details, alert_name, component))

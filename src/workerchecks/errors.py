"""Exception types raised by a background check run.

Every error carries the ``stage`` of the run that failed (observation,
alert, publish or config) and, where it applies, the job being
evaluated at the time.  The CLI uses both to tell operators exactly
where a run stopped.
"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .checks.models import AlertFailure, Report, Verdict


class WorkerChecksError(Exception):
    """Base class for run failures."""

    stage: str = "run"

    def __init__(self, message: str, *, job_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.job_name = job_name

    def describe(self) -> str:
        """Return ``"<stage> failed[ for <job>]: <message>"``."""
        where = f" for {self.job_name}" if self.job_name else ""
        return f"{self.stage} failed{where}: {self}"


class ObservationError(WorkerChecksError):
    """A collaborator could not answer an observation query."""

    stage = "observation"


class AlertDispatchError(WorkerChecksError):
    """The alert transport rejected or failed to deliver an alert."""

    stage = "alert"


class PublishError(WorkerChecksError):
    """The report could not be persisted.

    The report, the verdicts and any alert dispatch failures from the
    run are kept on the exception so the evaluation work and the
    degraded state are not lost.
    """

    stage = "publish"

    def __init__(
        self,
        message: str,
        *,
        destination: str,
        report: Optional["Report"] = None,
        verdicts: Optional[List["Verdict"]] = None,
        alert_failures: Optional[List["AlertFailure"]] = None,
    ) -> None:
        super().__init__(message)
        self.destination = destination
        self.report = report
        self.verdicts = list(verdicts or [])
        self.alert_failures = list(alert_failures or [])


class ConfigurationError(WorkerChecksError):
    """Required environment configuration is missing or invalid."""

    stage = "config"


__all__ = [
    "WorkerChecksError",
    "ObservationError",
    "AlertDispatchError",
    "PublishError",
    "ConfigurationError",
]

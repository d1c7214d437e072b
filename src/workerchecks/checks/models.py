"""Pydantic models for the worker job checks.

A run evaluates a fixed list of jobs against one :class:`CheckPolicy`.
Each job yields a :class:`Verdict`; the verdicts are assembled into a
:class:`Report` whose entries are what consumers of the published
document see.  :class:`RunResult` wraps the report together with the
per-run bookkeeping the CLI prints.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel

from ..config import (
    DEFAULT_BACKUP_WINDOW,
    DEFAULT_EXPECTED_ONLINE_BACKUPS,
    DEFAULT_NEW_PACKAGE_WINDOW,
    DEFAULT_PENDING_EDIT_MAX_AGE,
    DEFAULT_STATISTICS_RETENTION,
)

# OK when no job alerted, ALERTING when alerts were raised and all of
# them were delivered, DEGRADED when at least one alert failed to send.
RunStatus = Literal["OK", "ALERTING", "DEGRADED"]


class CheckPolicy(BaseModel):
    """Thresholds and time windows applied to every job in a run."""

    model_config = ConfigDict(frozen=True)

    backup_window: timedelta = DEFAULT_BACKUP_WINDOW
    expected_online_backups: int = DEFAULT_EXPECTED_ONLINE_BACKUPS
    statistics_retention: timedelta = DEFAULT_STATISTICS_RETENTION
    pending_edit_max_age: timedelta = DEFAULT_PENDING_EDIT_MAX_AGE
    new_package_window: timedelta = DEFAULT_NEW_PACKAGE_WINDOW


class AlertSpec(BaseModel):
    """Static alert metadata for one job."""

    model_config = ConfigDict(frozen=True)

    subject: str
    alert_name: str
    component: str


class Verdict(BaseModel):
    """Outcome of a single job check.

    Attributes:
        job_name: Name of the monitored job.
        message: Human-readable description embedding the observed value.
        triggered_alert: True when the observation is outside the job's
            operating envelope.
    """

    model_config = ConfigDict(frozen=True)

    job_name: str
    message: str
    triggered_alert: bool


class ReportEntry(BaseModel):
    """One ``{name, output}`` element of the published document."""

    name: str
    output: str


class Report(RootModel[List[ReportEntry]]):
    """Ordered list of report entries, serialised as a JSON array."""

    def __iter__(self):  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ReportEntry:
        return self.root[index]


class AlertFailure(BaseModel):
    """An alert that could not be delivered during a run."""

    job_name: str
    error: str


class RunResult(BaseModel):
    """Everything produced by one evaluation pass."""

    run_id: str
    generated_at: datetime
    status: RunStatus
    verdicts: List[Verdict]
    report: Report
    alert_failures: List[AlertFailure] = Field(default_factory=list)
    destination: Optional[str] = None

    @property
    def alert_count(self) -> int:
        return sum(1 for v in self.verdicts if v.triggered_alert)


__all__ = [
    "RunStatus",
    "CheckPolicy",
    "AlertSpec",
    "Verdict",
    "ReportEntry",
    "Report",
    "AlertFailure",
    "RunResult",
]

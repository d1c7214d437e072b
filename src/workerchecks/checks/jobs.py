"""Declarative table of the monitored worker jobs.

Each :class:`JobDescriptor` ties a job name to the observations it
needs, the rule that judges them and the alert raised when the rule
fires.  :data:`JOBS` lists the descriptors in report order; the run
iterates it and has no job-specific code of its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Tuple

from ..config import (
    BACKUP_PACKAGES_CONTAINER,
    BACKUP_PREFIX,
    JOB_BACKUP_DATABASE,
    JOB_BACKUP_PACKAGES,
    JOB_CLEAN_ONLINE_BACKUP,
    JOB_HANDLE_QUEUED_PACKAGE_EDITS,
    JOB_PURGE_PACKAGE_STATISTICS,
    ONLINE_STATE,
    PACKAGE_EDITS_TABLE,
    PACKAGE_STATISTICS_TABLE,
    PACKAGES_CONTAINER,
    PACKAGES_TABLE,
)
from ..providers.base import ObservationProvider
from .evaluators import (
    evaluate_backup_freshness,
    evaluate_backup_lag,
    evaluate_online_backups,
    evaluate_stale_pending_edits,
    evaluate_stale_statistics,
)
from .models import AlertSpec, CheckPolicy, Verdict

Observe = Callable[[ObservationProvider, datetime, CheckPolicy], Any]
Evaluate = Callable[[Any, datetime, CheckPolicy], Verdict]

_SUBJECT = "Work service job background check alert activated for {} job"


def _alert(label: str) -> AlertSpec:
    return AlertSpec(
        subject=_SUBJECT.format(label),
        alert_name=f"Alert for {label}",
        component=f"{label} Job",
    )


@dataclass(frozen=True)
class JobDescriptor:
    """One monitored job.

    Attributes:
        name: Job name as it appears in the report.
        observe: Fetches the job's observation from a provider.
        evaluate: Turns the observation into a :class:`Verdict`.
        alert: Alert metadata sent when the verdict triggers.
    """

    name: str
    observe: Observe
    evaluate: Evaluate
    alert: AlertSpec

    def run(self, provider: ObservationProvider, now: datetime, policy: CheckPolicy) -> Verdict:
        return self.evaluate(self.observe(provider, now, policy), now, policy)


def _observe_backup_lag(
    provider: ObservationProvider, now: datetime, policy: CheckPolicy
) -> Tuple[int, int, int]:
    new_packages = provider.count_records_created_since(
        PACKAGES_TABLE, now - policy.new_package_window
    )
    primary = provider.count_objects_in_location(PACKAGES_CONTAINER)
    backup = provider.count_objects_in_location(BACKUP_PACKAGES_CONTAINER)
    return new_packages, primary, backup


# Alert labels for the first two jobs differ from their report names.
JOBS: Tuple[JobDescriptor, ...] = (
    JobDescriptor(
        name=JOB_BACKUP_DATABASE,
        observe=lambda p, now, policy: p.last_backup_timestamp(BACKUP_PREFIX),
        evaluate=lambda last, now, policy: evaluate_backup_freshness(last, now, policy),
        alert=AlertSpec(
            subject=_SUBJECT.format("BackupDataBase"),
            alert_name="Alert for BackupDatabase",
            component="BackupDatabase Job",
        ),
    ),
    JobDescriptor(
        name=JOB_CLEAN_ONLINE_BACKUP,
        observe=lambda p, now, policy: p.count_databases_in_state(BACKUP_PREFIX, ONLINE_STATE),
        evaluate=lambda count, now, policy: evaluate_online_backups(count, policy),
        alert=_alert("CleanOnlineDatabase"),
    ),
    JobDescriptor(
        name=JOB_PURGE_PACKAGE_STATISTICS,
        observe=lambda p, now, policy: p.count_rows_older_than(
            PACKAGE_STATISTICS_TABLE, now - policy.statistics_retention
        ),
        evaluate=lambda count, now, policy: evaluate_stale_statistics(count),
        alert=_alert("PurgePackageStatistics"),
    ),
    JobDescriptor(
        name=JOB_HANDLE_QUEUED_PACKAGE_EDITS,
        observe=lambda p, now, policy: p.count_rows_older_than(
            PACKAGE_EDITS_TABLE, now - policy.pending_edit_max_age
        ),
        evaluate=lambda count, now, policy: evaluate_stale_pending_edits(count),
        alert=_alert("HandleQueuedPackageEdits"),
    ),
    JobDescriptor(
        name=JOB_BACKUP_PACKAGES,
        observe=_observe_backup_lag,
        evaluate=lambda obs, now, policy: evaluate_backup_lag(*obs),
        alert=_alert("BackupPackages"),
    ),
)


def get_job(name: str) -> JobDescriptor:
    """Return the descriptor for ``name`` or raise ``KeyError``."""
    for job in JOBS:
        if job.name == name:
            return job
    raise KeyError(name)


__all__ = ["JobDescriptor", "JOBS", "get_job"]

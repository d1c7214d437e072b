"""Decision rules for the worker job checks.

Each function here is total and pure: it receives observations that
have already been fetched plus the run's :class:`CheckPolicy`, and it
returns a :class:`Verdict` without touching the database, storage or
alert transport.  ``None`` counts are treated as zero and a missing
backup timestamp is a valid input rather than an error.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..config import (
    JOB_BACKUP_DATABASE,
    JOB_BACKUP_PACKAGES,
    JOB_CLEAN_ONLINE_BACKUP,
    JOB_HANDLE_QUEUED_PACKAGE_EDITS,
    JOB_PURGE_PACKAGE_STATISTICS,
)
from .models import CheckPolicy, Verdict

_DEFAULT_POLICY = CheckPolicy()

STALE_RECORDS_TEMPLATE = "No of Old stats record found online is {count}"


def _as_utc(ts: datetime) -> datetime:
    """Return ``ts`` as an aware UTC datetime, assuming naive values are UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _count(value: Optional[int]) -> int:
    return int(value) if value is not None else 0


def evaluate_backup_freshness(
    last_backup: Optional[datetime],
    now: datetime,
    policy: CheckPolicy = _DEFAULT_POLICY,
) -> Verdict:
    """Flag a backup that started less than ``policy.backup_window`` ago.

    A backup younger than the check window means the backup job is
    overlapping itself or stuck in a copy.  A timestamp in the future
    also alerts.  ``None`` (no backup found) does not alert.
    """
    now_utc = _as_utc(now)
    if last_backup is None:
        rendered = "never"
        alert = False
    else:
        last_utc = _as_utc(last_backup)
        rendered = str(last_utc)
        alert = now_utc - last_utc < policy.backup_window
    return Verdict(
        job_name=JOB_BACKUP_DATABASE,
        message=f"Last backup time in utc as of {now_utc} is {rendered}",
        triggered_alert=alert,
    )


def evaluate_online_backups(
    online_count: Optional[int],
    policy: CheckPolicy = _DEFAULT_POLICY,
) -> Verdict:
    """Require exactly ``policy.expected_online_backups`` online backups."""
    count = _count(online_count)
    return Verdict(
        job_name=JOB_CLEAN_ONLINE_BACKUP,
        message=f"No of online databases is {count}",
        triggered_alert=count != policy.expected_online_backups,
    )


def evaluate_stale_statistics(stale_count: Optional[int]) -> Verdict:
    """Any statistics row past the retention window means the purge is behind."""
    count = _count(stale_count)
    return Verdict(
        job_name=JOB_PURGE_PACKAGE_STATISTICS,
        message=STALE_RECORDS_TEMPLATE.format(count=count),
        triggered_alert=count > 0,
    )


def evaluate_stale_pending_edits(stale_count: Optional[int]) -> Verdict:
    """Any queued edit older than the allowed age means the edit handler is stuck."""
    count = _count(stale_count)
    return Verdict(
        job_name=JOB_HANDLE_QUEUED_PACKAGE_EDITS,
        message=STALE_RECORDS_TEMPLATE.format(count=count),
        triggered_alert=count > 0,
    )


def evaluate_backup_lag(
    new_packages: Optional[int],
    primary_objects: Optional[int],
    backup_objects: Optional[int],
) -> Verdict:
    """Compare the mirror lag with the packages created in the recent window.

    Packages uploaded inside the window may legitimately be waiting for
    the next mirror pass.  A lag larger than that buffer means the
    backup job is falling behind.
    """
    lag = _count(primary_objects) - _count(backup_objects)
    return Verdict(
        job_name=JOB_BACKUP_PACKAGES,
        message=f"No of packages yet to be backed up is {lag}.",
        triggered_alert=lag > _count(new_packages),
    )


__all__ = [
    "STALE_RECORDS_TEMPLATE",
    "evaluate_backup_freshness",
    "evaluate_online_backups",
    "evaluate_stale_statistics",
    "evaluate_stale_pending_edits",
    "evaluate_backup_lag",
]

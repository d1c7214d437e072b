"""Tests for the worker job decision rules.

The evaluators are pure, so these tests feed observations directly and
check both the alert decision and the message that ends up in the
report.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from workerchecks.checks.evaluators import (
    evaluate_backup_freshness,
    evaluate_backup_lag,
    evaluate_online_backups,
    evaluate_stale_pending_edits,
    evaluate_stale_statistics,
)
from workerchecks.checks.models import CheckPolicy

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def test_backup_freshness_old_backup_does_not_alert() -> None:
    """A backup that started 90 minutes ago is outside the check window."""
    verdict = evaluate_backup_freshness(NOW - timedelta(minutes=90), NOW)
    assert verdict.job_name == "BackupDatabase"
    assert verdict.triggered_alert is False
    assert verdict.message == (
        "Last backup time in utc as of 2026-10-19 12:00:00+00:00 is 2026-10-19 10:30:00+00:00"
    )


def test_backup_freshness_recent_backup_alerts() -> None:
    """A backup that started 30 minutes ago triggers the alert."""
    verdict = evaluate_backup_freshness(NOW - timedelta(minutes=30), NOW)
    assert verdict.triggered_alert is True
    assert "2026-10-19 11:30:00+00:00" in verdict.message


def test_backup_freshness_window_boundary() -> None:
    """Exactly one window ago is not fresh; one second less is."""
    at_boundary = evaluate_backup_freshness(NOW - timedelta(minutes=60), NOW)
    inside = evaluate_backup_freshness(NOW - timedelta(minutes=59, seconds=59), NOW)
    assert at_boundary.triggered_alert is False
    assert inside.triggered_alert is True


def test_backup_freshness_future_timestamp_alerts() -> None:
    verdict = evaluate_backup_freshness(NOW + timedelta(minutes=5), NOW)
    assert verdict.triggered_alert is True


def test_backup_freshness_without_backup() -> None:
    """No backup found is reported as ``never`` and does not alert."""
    verdict = evaluate_backup_freshness(None, NOW)
    assert verdict.triggered_alert is False
    assert verdict.message.endswith(" is never")


def test_backup_freshness_naive_timestamps_are_utc() -> None:
    naive_now = NOW.replace(tzinfo=None)
    verdict = evaluate_backup_freshness(naive_now - timedelta(minutes=10), naive_now)
    assert verdict.triggered_alert is True
    assert "as of 2026-10-19 12:00:00+00:00" in verdict.message


def test_backup_freshness_respects_policy_window() -> None:
    policy = CheckPolicy(backup_window=timedelta(minutes=15))
    verdict = evaluate_backup_freshness(NOW - timedelta(minutes=30), NOW, policy)
    assert verdict.triggered_alert is False


@pytest.mark.parametrize(
    "count, expected",
    [(0, True), (3, True), (4, False), (5, True), (None, True)],
)
def test_online_backups_require_exact_count(count, expected) -> None:
    """Both too few and too many online backups alert."""
    verdict = evaluate_online_backups(count)
    assert verdict.job_name == "CleanOnlineBackup"
    assert verdict.triggered_alert is expected
    assert verdict.message == f"No of online databases is {count or 0}"


def test_online_backups_custom_expectation() -> None:
    verdict = evaluate_online_backups(2, CheckPolicy(expected_online_backups=2))
    assert verdict.triggered_alert is False


@pytest.mark.parametrize("evaluate, job_name", [
    (evaluate_stale_statistics, "PurgePackageStatistics"),
    (evaluate_stale_pending_edits, "HandleQueuedPackageEdits"),
])
def test_stale_record_rules(evaluate, job_name) -> None:
    """Zero stale rows is healthy; a single stale row alerts."""
    clean = evaluate(0)
    dirty = evaluate(1)
    assert clean.job_name == job_name
    assert clean.triggered_alert is False
    assert dirty.triggered_alert is True
    assert dirty.message == "No of Old stats record found online is 1"
    assert evaluate(None).triggered_alert is False


def test_stale_record_message_embeds_large_counts() -> None:
    verdict = evaluate_stale_statistics(123456789)
    assert verdict.message == "No of Old stats record found online is 123456789"


def test_backup_lag_within_buffer() -> None:
    """A lag equal to the recent uploads is tolerated."""
    verdict = evaluate_backup_lag(10, 110, 100)
    assert verdict.job_name == "BackupPackages"
    assert verdict.triggered_alert is False
    assert verdict.message == "No of packages yet to be backed up is 10."


def test_backup_lag_exceeds_buffer() -> None:
    verdict = evaluate_backup_lag(10, 115, 100)
    assert verdict.triggered_alert is True
    assert verdict.message == "No of packages yet to be backed up is 15."


def test_backup_lag_boundary() -> None:
    assert evaluate_backup_lag(0, 100, 100).triggered_alert is False
    assert evaluate_backup_lag(0, 101, 100).triggered_alert is True


def test_backup_lag_mirror_ahead_reports_negative_lag() -> None:
    verdict = evaluate_backup_lag(0, 100, 103)
    assert verdict.triggered_alert is False
    assert verdict.message == "No of packages yet to be backed up is -3."


def test_evaluators_are_idempotent() -> None:
    """The same inputs always give the same verdict."""
    last = NOW - timedelta(minutes=30)
    assert evaluate_backup_freshness(last, NOW) == evaluate_backup_freshness(last, NOW)
    assert evaluate_backup_lag(1, 5, 2) == evaluate_backup_lag(1, 5, 2)

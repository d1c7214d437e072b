"""Check evaluation for the worker jobs.

This package holds the pydantic models describing verdicts and reports,
the pure decision rules for each monitored job, the declarative job
table that binds observations to rules, and the report builder.
"""

from .evaluators import (
    evaluate_backup_freshness,
    evaluate_backup_lag,
    evaluate_online_backups,
    evaluate_stale_pending_edits,
    evaluate_stale_statistics,
)
from .jobs import JOBS, JobDescriptor, get_job
from .models import AlertFailure, AlertSpec, CheckPolicy, Report, ReportEntry, RunResult, Verdict
from .report import build_report, report_to_bytes, report_to_json

__all__ = [
    "evaluate_backup_freshness",
    "evaluate_backup_lag",
    "evaluate_online_backups",
    "evaluate_stale_pending_edits",
    "evaluate_stale_statistics",
    "JOBS",
    "JobDescriptor",
    "get_job",
    "AlertFailure",
    "AlertSpec",
    "CheckPolicy",
    "Report",
    "ReportEntry",
    "RunResult",
    "Verdict",
    "build_report",
    "report_to_bytes",
    "report_to_json",
]

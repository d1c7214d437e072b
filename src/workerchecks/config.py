"""
Configuration constants for the workerchecks project.

This module centralises the static values shared across the checks,
providers and CLI.  Connection strings and credentials are not kept
here; they are read from the environment at the CLI seam and handed
to the collaborators that need them.
"""

from datetime import timedelta
from typing import Final

PROJECT_NAME: Final[str] = "workerchecks"

# Backup databases are named ``<prefix><yyyyMMddHHmmss>`` on the server.
BACKUP_PREFIX: Final[str] = "Backup_"
BACKUP_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S"

# ``sys.databases.state`` value for an ONLINE database.
ONLINE_STATE: Final[int] = 0

# Object storage locations.  The lag check compares the primary
# package location with its mirror.
PACKAGES_CONTAINER: Final[str] = "packages"
BACKUP_PACKAGES_CONTAINER: Final[str] = "backup"
REPORT_CONTAINER: Final[str] = "dashboard"
REPORT_NAME: Final[str] = "RunBackGroundChecksForWorkerJobsReport.json"
REPORT_CONTENT_TYPE: Final[str] = "application/json"

# Gallery tables read by the checks.
PACKAGE_STATISTICS_TABLE: Final[str] = "PackageStatistics"
PACKAGE_EDITS_TABLE: Final[str] = "PackageEdits"
PACKAGES_TABLE: Final[str] = "Packages"

# Default policy values.  A run builds one CheckPolicy from these and
# never changes it afterwards.
DEFAULT_BACKUP_WINDOW: Final[timedelta] = timedelta(minutes=60)
DEFAULT_EXPECTED_ONLINE_BACKUPS: Final[int] = 4
DEFAULT_STATISTICS_RETENTION: Final[timedelta] = timedelta(days=7)
DEFAULT_PENDING_EDIT_MAX_AGE: Final[timedelta] = timedelta(hours=3)
DEFAULT_NEW_PACKAGE_WINDOW: Final[timedelta] = timedelta(hours=2)

# Job names in report order.  Consumers of the report depend on this
# order, so append new jobs at the end.
JOB_BACKUP_DATABASE: Final[str] = "BackupDatabase"
JOB_CLEAN_ONLINE_BACKUP: Final[str] = "CleanOnlineBackup"
JOB_PURGE_PACKAGE_STATISTICS: Final[str] = "PurgePackageStatistics"
JOB_HANDLE_QUEUED_PACKAGE_EDITS: Final[str] = "HandleQueuedPackageEdits"
JOB_BACKUP_PACKAGES: Final[str] = "BackupPackages"

JOB_ORDER: Final[list[str]] = [
    JOB_BACKUP_DATABASE,
    JOB_CLEAN_ONLINE_BACKUP,
    JOB_PURGE_PACKAGE_STATISTICS,
    JOB_HANDLE_QUEUED_PACKAGE_EDITS,
    JOB_BACKUP_PACKAGES,
]

DEFAULT_ARTIFACTS_DIR: Final[str] = "artifacts/reports"

__all__ = [
    "PROJECT_NAME",
    "BACKUP_PREFIX",
    "BACKUP_TIMESTAMP_FORMAT",
    "ONLINE_STATE",
    "PACKAGES_CONTAINER",
    "BACKUP_PACKAGES_CONTAINER",
    "REPORT_CONTAINER",
    "REPORT_NAME",
    "REPORT_CONTENT_TYPE",
    "PACKAGE_STATISTICS_TABLE",
    "PACKAGE_EDITS_TABLE",
    "PACKAGES_TABLE",
    "DEFAULT_BACKUP_WINDOW",
    "DEFAULT_EXPECTED_ONLINE_BACKUPS",
    "DEFAULT_STATISTICS_RETENTION",
    "DEFAULT_PENDING_EDIT_MAX_AGE",
    "DEFAULT_NEW_PACKAGE_WINDOW",
    "JOB_BACKUP_DATABASE",
    "JOB_CLEAN_ONLINE_BACKUP",
    "JOB_PURGE_PACKAGE_STATISTICS",
    "JOB_HANDLE_QUEUED_PACKAGE_EDITS",
    "JOB_BACKUP_PACKAGES",
    "JOB_ORDER",
    "DEFAULT_ARTIFACTS_DIR",
]

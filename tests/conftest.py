"""Shared fakes for the workerchecks tests.

The fakes stand in for the database, object storage, alert transport
and report storage so the check run can be exercised without network
or database access.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from workerchecks.notify.base import AlertDispatcher
from workerchecks.providers.base import ObservationProvider
from workerchecks.publish.publishers import ReportPublisher

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeProvider(ObservationProvider):
    """Observation provider returning fixed values and recording calls."""

    def __init__(
        self,
        last_backup: Optional[datetime] = None,
        online_count: int = 4,
        stale_stats: int = 0,
        stale_edits: int = 0,
        new_packages: int = 10,
        primary_objects: int = 100,
        backup_objects: int = 100,
        fail_on: Optional[str] = None,
    ) -> None:
        self.last_backup = last_backup if last_backup is not None else NOW - timedelta(hours=3)
        self.online_count = online_count
        self.stale = {"PackageStatistics": stale_stats, "PackageEdits": stale_edits}
        self.new_packages = new_packages
        self.objects = {"packages": primary_objects, "backup": backup_objects}
        self.fail_on = fail_on
        self.calls: List[Tuple] = []

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise ConnectionError(f"{name} unavailable")

    def last_backup_timestamp(self, prefix: str) -> Optional[datetime]:
        self.calls.append(("last_backup_timestamp", prefix))
        self._maybe_fail("last_backup_timestamp")
        return self.last_backup

    def count_databases_in_state(self, prefix: str, state: int) -> int:
        self.calls.append(("count_databases_in_state", prefix, state))
        self._maybe_fail("count_databases_in_state")
        return self.online_count

    def count_rows_older_than(self, table: str, cutoff: datetime) -> int:
        self.calls.append(("count_rows_older_than", table, cutoff))
        self._maybe_fail("count_rows_older_than")
        return self.stale[table]

    def count_records_created_since(self, table: str, cutoff: datetime) -> int:
        self.calls.append(("count_records_created_since", table, cutoff))
        self._maybe_fail("count_records_created_since")
        return self.new_packages

    def count_objects_in_location(self, location_id: str) -> int:
        self.calls.append(("count_objects_in_location", location_id))
        self._maybe_fail("count_objects_in_location")
        return self.objects[location_id]


class RecordingDispatcher(AlertDispatcher):
    """Dispatcher that records alerts and can fail for chosen components."""

    def __init__(self, fail_components: Tuple[str, ...] = ()) -> None:
        self.sent: List[Dict[str, str]] = []
        self.fail_components = fail_components

    def send_alert(self, subject: str, details: str, alert_name: str, component: str) -> None:
        if component in self.fail_components:
            raise RuntimeError(f"transport down for {component}")
        self.sent.append(
            {"subject": subject, "details": details, "alert_name": alert_name, "component": component}
        )


class MemoryPublisher(ReportPublisher):
    """Publisher that keeps published documents in memory."""

    def __init__(self, fail: bool = False) -> None:
        self.published: List[Tuple[bytes, str, str]] = []
        self.fail = fail

    def publish(self, document: bytes, destination: str, content_type: str = "application/json") -> str:
        if self.fail:
            raise OSError("container unavailable")
        self.published.append((document, destination, content_type))
        return f"memory://{destination}"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def healthy_provider() -> FakeProvider:
    """Provider whose observations are all inside the operating envelope."""
    return FakeProvider()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def publisher() -> MemoryPublisher:
    return MemoryPublisher()

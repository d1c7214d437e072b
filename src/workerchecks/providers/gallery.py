"""Observation provider for a gallery deployment.

Combines the SQL and object storage adapters behind the single
:class:`ObservationProvider` interface the check run consumes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .base import ObservationProvider
from .blobs import BlobObservationProvider
from .sql import SqlObservationProvider


class GalleryObservationProvider(ObservationProvider):
    """Route database questions to SQL and object counts to storage."""

    def __init__(self, database: SqlObservationProvider, storage: BlobObservationProvider) -> None:
        self.database = database
        self.storage = storage

    def last_backup_timestamp(self, prefix: str) -> Optional[datetime]:
        return self.database.last_backup_timestamp(prefix)

    def count_databases_in_state(self, prefix: str, state: int) -> int:
        return self.database.count_databases_in_state(prefix, state)

    def count_rows_older_than(self, table: str, cutoff: datetime) -> int:
        return self.database.count_rows_older_than(table, cutoff)

    def count_records_created_since(self, table: str, cutoff: datetime) -> int:
        return self.database.count_records_created_since(table, cutoff)

    def count_objects_in_location(self, location_id: str) -> int:
        return self.storage.count_objects_in_location(location_id)

"""Abstract base class for observation providers.

This module defines the interface the check run uses to read the state
of the gallery database, the database server catalog and the package
object storage.  Implementations must answer with zero (or ``None`` for
the backup timestamp) when nothing matches, and raise when the backing
service cannot answer at all.
"""

from __future__ import annotations

import abc
from datetime import datetime
from typing import Optional


class ObservationProvider(abc.ABC):
    """Interface for the raw facts the checks evaluate."""

    @abc.abstractmethod
    def last_backup_timestamp(self, prefix: str) -> Optional[datetime]:
        """Return the UTC creation time of the newest online backup.

        Args:
            prefix: Name prefix shared by backup databases.

        Returns:
            The timestamp of the most recent backup, or ``None`` when no
            backup database exists.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def count_databases_in_state(self, prefix: str, state: int) -> int:
        """Count databases whose name starts with ``prefix`` and are in ``state``."""
        raise NotImplementedError

    @abc.abstractmethod
    def count_rows_older_than(self, table: str, cutoff: datetime) -> int:
        """Count rows of ``table`` whose timestamp is at or before ``cutoff``."""
        raise NotImplementedError

    @abc.abstractmethod
    def count_records_created_since(self, table: str, cutoff: datetime) -> int:
        """Count rows of ``table`` created at or after ``cutoff``."""
        raise NotImplementedError

    @abc.abstractmethod
    def count_objects_in_location(self, location_id: str) -> int:
        """Count the objects stored in an object storage location (bucket)."""
        raise NotImplementedError

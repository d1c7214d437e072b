"""SQL-backed observations.

Answers the database half of :class:`ObservationProvider` with
SQLAlchemy Core queries.  Gallery timestamps are stored as naive UTC
datetimes, so cutoffs are converted to naive UTC before binding.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from ..config import BACKUP_TIMESTAMP_FORMAT, ONLINE_STATE
from ..db.tables import TIMESTAMP_COLUMNS, database_catalog_table

logger = logging.getLogger(__name__)


def _naive_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def parse_backup_timestamp(name: str, prefix: str) -> Optional[datetime]:
    """Extract the UTC creation time encoded in a backup database name.

    ``Backup_20261019101500`` with prefix ``Backup_`` yields
    2026-10-19 10:15:00 UTC.  Names that do not follow the convention
    yield ``None``, including suffixes that are not exactly fourteen
    digits.
    """
    if not name.startswith(prefix):
        return None
    suffix = name[len(prefix):]
    if len(suffix) != 14 or not suffix.isdigit():
        return None
    try:
        parsed = datetime.strptime(suffix, BACKUP_TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


class SqlObservationProvider:
    """Database observations for the check run.

    Args:
        engine: Engine bound to the gallery database.
        master_engine: Engine bound to the server catalog.  Defaults to
            ``engine``.
        catalog_table: Table describing the database catalog.  Defaults
            to ``sys.databases``.
    """

    def __init__(
        self,
        engine: Engine,
        master_engine: Optional[Engine] = None,
        catalog_table: Optional[sa.Table] = None,
    ) -> None:
        self.engine = engine
        self.master_engine = master_engine or engine
        self.catalog_table = catalog_table if catalog_table is not None else database_catalog_table

    def _backup_names(self, prefix: str, state: int) -> List[str]:
        catalog = self.catalog_table
        stmt = sa.select(catalog.c.name).where(
            catalog.c.name.startswith(prefix, autoescape=True),
            catalog.c.state == state,
        )
        with self.master_engine.connect() as conn:
            return [row[0] for row in conn.execute(stmt)]

    def last_backup_timestamp(self, prefix: str) -> Optional[datetime]:
        timestamps = []
        for name in self._backup_names(prefix, ONLINE_STATE):
            ts = parse_backup_timestamp(name, prefix)
            if ts is None:
                logger.warning("Ignoring backup database with unparseable name %r", name)
                continue
            timestamps.append(ts)
        return max(timestamps, default=None)

    def count_databases_in_state(self, prefix: str, state: int) -> int:
        return len(self._backup_names(prefix, state))

    def _count(self, table_name: str, cutoff: datetime, newer: bool) -> int:
        try:
            table, column_name = TIMESTAMP_COLUMNS[table_name]
        except KeyError:
            raise ValueError(f"Unknown table {table_name!r}") from None
        column = table.c[column_name]
        bound = _naive_utc(cutoff)
        condition = column >= bound if newer else column <= bound
        stmt = sa.select(sa.func.count()).select_from(table).where(condition)
        with self.engine.connect() as conn:
            result = conn.execute(stmt).scalar()
        return int(result or 0)

    def count_rows_older_than(self, table: str, cutoff: datetime) -> int:
        return self._count(table, cutoff, newer=False)

    def count_records_created_since(self, table: str, cutoff: datetime) -> int:
        return self._count(table, cutoff, newer=True)

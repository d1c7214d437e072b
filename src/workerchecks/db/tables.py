"""SQLAlchemy Core definitions of the tables the checks read.

The gallery schema is owned by the gallery itself; only the columns the
checks query are declared here.  The server catalog is declared through
:func:`make_database_catalog_table` so tests can build a schema-less
copy on SQLite, which has no ``sys`` schema.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text

from ..config import PACKAGE_EDITS_TABLE, PACKAGE_STATISTICS_TABLE, PACKAGES_TABLE

metadata = MetaData()

package_statistics_table = Table(
    PACKAGE_STATISTICS_TABLE,
    metadata,
    Column("Key", Integer, primary_key=True),
    Column("TimeStamp", DateTime, nullable=False),
)

package_edits_table = Table(
    PACKAGE_EDITS_TABLE,
    metadata,
    Column("Key", Integer, primary_key=True),
    Column("TimeStamp", DateTime, nullable=False),
)

packages_table = Table(
    PACKAGES_TABLE,
    metadata,
    Column("Key", Integer, primary_key=True),
    Column("Created", DateTime, nullable=False),
)

# Table name -> (table, timestamp column used by the age queries).
TIMESTAMP_COLUMNS: Dict[str, Tuple[Table, str]] = {
    PACKAGE_STATISTICS_TABLE: (package_statistics_table, "TimeStamp"),
    PACKAGE_EDITS_TABLE: (package_edits_table, "TimeStamp"),
    PACKAGES_TABLE: (packages_table, "Created"),
}


def make_database_catalog_table(
    catalog_metadata: Optional[MetaData] = None, schema: Optional[str] = "sys"
) -> Table:
    """Return a Table describing the server's database catalog.

    On SQL Server this is ``sys.databases``.  Only ``name`` and
    ``state`` are declared.
    """
    return Table(
        "databases",
        catalog_metadata if catalog_metadata is not None else MetaData(),
        Column("name", Text, nullable=False),
        Column("state", Integer, nullable=False),
        schema=schema,
    )


database_catalog_table = make_database_catalog_table()

__all__ = [
    "metadata",
    "package_statistics_table",
    "package_edits_table",
    "packages_table",
    "TIMESTAMP_COLUMNS",
    "make_database_catalog_table",
    "database_catalog_table",
]

"""Database engine construction.

This module builds SQLAlchemy engines from environment configuration.
The checks need two connections: the gallery database, and the server
catalog (the ``master`` database on SQL Server) where backup databases
are listed.  When no separate catalog URL is configured the gallery URL
is used for both.
"""

from __future__ import annotations

import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ..errors import ConfigurationError


def get_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """Create a new SQLAlchemy engine for the gallery database.

    Args:
        url: A database URL.  If ``None``, the value of
            ``os.getenv('DATABASE_URL')`` is used.
        **kwargs: Additional keyword arguments passed to
            ``sqlalchemy.create_engine``.

    Returns:
        A SQLAlchemy :class:`Engine`.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise ConfigurationError("DATABASE_URL environment variable is not set")
    return create_engine(url, **kwargs)


def get_master_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """Create an engine for the server catalog.

    Falls back from ``url`` to ``MASTER_DATABASE_URL`` and then to
    ``DATABASE_URL``.
    """
    url = url or os.getenv("MASTER_DATABASE_URL") or os.getenv("DATABASE_URL")
    if not url:
        raise ConfigurationError(
            "MASTER_DATABASE_URL or DATABASE_URL environment variable is not set"
        )
    return create_engine(url, **kwargs)

"""Observation providers for the worker job checks.

:class:`ObservationProvider` is the interface the check run consumes.
:class:`GalleryObservationProvider` combines the SQL adapter
(:mod:`workerchecks.providers.sql`) with the object storage adapter
(:mod:`workerchecks.providers.blobs`).
"""

from .base import ObservationProvider
from .blobs import BlobObservationProvider, build_s3_client
from .gallery import GalleryObservationProvider
from .sql import SqlObservationProvider, parse_backup_timestamp

__all__ = [
    "ObservationProvider",
    "BlobObservationProvider",
    "build_s3_client",
    "GalleryObservationProvider",
    "SqlObservationProvider",
    "parse_backup_timestamp",
]

"""Report persistence.

A :class:`ReportPublisher` stores the serialised report under a
destination name.  :class:`FileReportPublisher` writes into a local
artifacts directory; :class:`S3ReportPublisher` uploads to a bucket.
Failures propagate to the caller, which wraps them in
:class:`~workerchecks.errors.PublishError`.
"""

from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import Any, Union

from ..config import REPORT_CONTAINER, REPORT_CONTENT_TYPE

logger = logging.getLogger(__name__)


class ReportPublisher(abc.ABC):
    """Interface for persisting a serialised report."""

    @abc.abstractmethod
    def publish(self, document: bytes, destination: str, content_type: str = REPORT_CONTENT_TYPE) -> str:
        """Persist ``document`` and return where it was written."""
        raise NotImplementedError


class FileReportPublisher(ReportPublisher):
    """Write reports below a local directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def publish(self, document: bytes, destination: str, content_type: str = REPORT_CONTENT_TYPE) -> str:
        path = self.root / destination
        path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so readers never see a partial report.
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(document)
        tmp_path.replace(path)
        logger.info("Report written to %s", path)
        return str(path)


class S3ReportPublisher(ReportPublisher):
    """Upload reports to an S3-compatible bucket."""

    def __init__(self, client: Any, bucket: str = REPORT_CONTAINER) -> None:
        self.client = client
        self.bucket = bucket

    def publish(self, document: bytes, destination: str, content_type: str = REPORT_CONTENT_TYPE) -> str:
        self.client.put_object(
            Bucket=self.bucket,
            Key=destination,
            Body=document,
            ContentType=content_type,
        )
        location = f"s3://{self.bucket}/{destination}"
        logger.info("Report uploaded to %s", location)
        return location

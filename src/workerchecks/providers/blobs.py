"""Object storage observations.

Counts the objects in an S3-compatible bucket with boto3.  Listing a
large bucket walks every page, so the count is exact but not cheap.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import boto3

logger = logging.getLogger(__name__)


def build_s3_client(endpoint_url: Optional[str] = None, region_name: Optional[str] = None) -> Any:
    """Create a boto3 S3 client from explicit arguments or the environment.

    ``S3_ENDPOINT_URL`` and ``S3_REGION`` are read when the arguments are
    omitted.  Credentials follow the normal boto3 resolution chain
    (``AWS_ACCESS_KEY_ID``/``AWS_SECRET_ACCESS_KEY``, profiles, roles).
    """
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url or os.getenv("S3_ENDPOINT_URL") or None,
        region_name=region_name or os.getenv("S3_REGION") or None,
    )


class BlobObservationProvider:
    """Object counts for the package backup lag check.

    Args:
        client: A boto3 S3 client (or anything with ``get_paginator``).
        buckets: Maps the logical location ids used by the checks
            (``packages``, ``backup``) to bucket names.  Unmapped ids are
            used as bucket names directly.
        prefix: Optional key prefix applied to every listing.
    """

    def __init__(self, client: Any, buckets: Optional[Dict[str, str]] = None, prefix: str = "") -> None:
        self.client = client
        self.buckets = dict(buckets or {})
        self.prefix = prefix

    def count_objects_in_location(self, location_id: str) -> int:
        bucket = self.buckets.get(location_id, location_id)
        paginator = self.client.get_paginator("list_objects_v2")
        total = 0
        for page in paginator.paginate(Bucket=bucket, Prefix=self.prefix):
            if "KeyCount" in page:
                total += int(page["KeyCount"])
            else:
                total += len(page.get("Contents", []))
        logger.debug("Counted %d objects in bucket %s", total, bucket)
        return total

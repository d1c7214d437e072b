"""Report publishers (local directory or S3 bucket)."""

from .publishers import FileReportPublisher, ReportPublisher, S3ReportPublisher

__all__ = ["FileReportPublisher", "ReportPublisher", "S3ReportPublisher"]

"""Report assembly.

Turns the verdicts of a run into the ordered ``[{name, output}, ...]``
document consumers read.  Entries keep the order the verdicts arrive
in; nothing is merged, dropped or sorted.
"""

from __future__ import annotations

import json
from typing import Iterable

from .models import Report, ReportEntry, Verdict


def build_report(verdicts: Iterable[Verdict]) -> Report:
    return Report([ReportEntry(name=v.job_name, output=v.message) for v in verdicts])


def report_to_json(report: Report, indent: int | None = 2) -> str:
    """Serialise ``report`` as a JSON array, preserving entry order."""
    return json.dumps(report.model_dump(), indent=indent, ensure_ascii=False)


def report_to_bytes(report: Report) -> bytes:
    return report_to_json(report).encode("utf-8")


__all__ = ["build_report", "report_to_json", "report_to_bytes"]

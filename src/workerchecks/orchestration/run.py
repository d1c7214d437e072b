"""One evaluation pass over the monitored worker jobs.

``run_background_checks`` walks :data:`~workerchecks.checks.jobs.JOBS`
in order.  For each job it fetches the observation, evaluates it, and
dispatches an alert when the verdict fires, finishing one job before
starting the next.  The verdicts are then assembled into the report and
handed to the publisher.

Failure handling differs by stage:

* an observation failure aborts the run with :class:`ObservationError`;
* an alert dispatch failure is recorded, the remaining jobs still run,
  and the run result is marked ``DEGRADED``;
* a publish failure raises :class:`PublishError` carrying the report
  and any alert failures already recorded.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..checks.jobs import JOBS, JobDescriptor
from ..checks.models import AlertFailure, CheckPolicy, RunResult, RunStatus, Verdict
from ..checks.report import build_report, report_to_bytes
from ..config import REPORT_CONTENT_TYPE, REPORT_NAME
from ..errors import ObservationError, PublishError
from ..notify.base import AlertDispatcher
from ..providers.base import ObservationProvider
from ..publish.publishers import ReportPublisher

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def _run_status(verdicts: Sequence[Verdict], failures: Sequence[AlertFailure]) -> RunStatus:
    if failures:
        return "DEGRADED"
    if any(v.triggered_alert for v in verdicts):
        return "ALERTING"
    return "OK"


def evaluate_job(
    job: JobDescriptor,
    provider: ObservationProvider,
    now: datetime,
    policy: CheckPolicy,
) -> Verdict:
    """Observe and evaluate a single job.

    Raises:
        ObservationError: If the provider cannot answer.
    """
    try:
        observation = job.observe(provider, now, policy)
    except Exception as exc:
        raise ObservationError(
            f"{type(exc).__name__}: {exc}", job_name=job.name
        ) from exc
    return job.evaluate(observation, now, policy)


def run_background_checks(
    provider: ObservationProvider,
    dispatcher: AlertDispatcher,
    publisher: ReportPublisher,
    *,
    now: Optional[datetime] = None,
    policy: Optional[CheckPolicy] = None,
    run_id: Optional[str] = None,
    destination: str = REPORT_NAME,
    jobs: Sequence[JobDescriptor] = JOBS,
) -> RunResult:
    """Run every job check once, dispatch alerts and publish the report.

    Parameters
    ----------
    provider : ObservationProvider
        Source of the raw observations.
    dispatcher : AlertDispatcher
        Receives one ``send_alert`` call per triggered verdict.
    publisher : ReportPublisher
        Persists the serialised report.
    now : datetime, optional
        Reference time for every window in the run.  Defaults to the
        current UTC time; naive values are taken as UTC.
    policy : CheckPolicy, optional
        Thresholds for the run.  Defaults to :class:`CheckPolicy()`.
    run_id : str, optional
        Identifier echoed in the result.  Defaults to ``now`` formatted
        as ``YYYYMMDDTHHMMSSZ``.
    destination : str
        Name under which the report is published.
    jobs : sequence of JobDescriptor
        Jobs to evaluate, in report order.

    Returns
    -------
    RunResult
        Verdicts, report, alert failures and overall status.

    Raises
    ------
    ObservationError
        If any observation cannot be fetched.
    PublishError
        If the report cannot be persisted.
    """
    if now is None:
        now = _utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    policy = policy or CheckPolicy()
    run_id = run_id or now.strftime("%Y%m%dT%H%M%SZ")

    verdicts: List[Verdict] = []
    failures: List[AlertFailure] = []
    for job in jobs:
        verdict = evaluate_job(job, provider, now, policy)
        verdicts.append(verdict)
        if not verdict.triggered_alert:
            logger.info("%s: ok (%s)", job.name, verdict.message)
            continue
        logger.warning("%s: alert (%s)", job.name, verdict.message)
        try:
            dispatcher.send_alert(
                subject=job.alert.subject,
                details=verdict.message,
                alert_name=job.alert.alert_name,
                component=job.alert.component,
            )
        except Exception as exc:
            logger.error("Alert dispatch failed for %s: %s", job.name, exc)
            failures.append(AlertFailure(job_name=job.name, error=f"{type(exc).__name__}: {exc}"))

    report = build_report(verdicts)
    try:
        location = publisher.publish(report_to_bytes(report), destination, REPORT_CONTENT_TYPE)
    except Exception as exc:
        raise PublishError(
            f"{type(exc).__name__}: {exc}",
            destination=destination,
            report=report,
            verdicts=verdicts,
            alert_failures=failures,
        ) from exc

    return RunResult(
        run_id=run_id,
        generated_at=now,
        status=_run_status(verdicts, failures),
        verdicts=verdicts,
        report=report,
        alert_failures=failures,
        destination=location,
    )


__all__ = ["evaluate_job", "run_background_checks"]

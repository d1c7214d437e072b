"""Command‑line interface for workerchecks.

This module uses the :mod:`click` library to expose the background
check run and a configuration check.  Collaborators (database engines,
the S3 client, the alert dispatcher and the report publisher) are built
by small ``_build_*`` helpers so tests can monkeypatch them without
touching the network.
"""

from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

import click

from .config import (
    BACKUP_PACKAGES_CONTAINER,
    DEFAULT_ARTIFACTS_DIR,
    PACKAGES_CONTAINER,
    REPORT_CONTAINER,
    REPORT_NAME,
)
from .db.session import get_engine, get_master_engine
from .errors import PublishError, WorkerChecksError
from .notify.base import AlertDispatcher, NullAlertDispatcher
from .notify.telegram import TelegramAlertDispatcher
from .orchestration.run import run_background_checks
from .providers.base import ObservationProvider
from .providers.blobs import BlobObservationProvider, build_s3_client
from .providers.gallery import GalleryObservationProvider
from .providers.sql import SqlObservationProvider
from .publish.publishers import FileReportPublisher, ReportPublisher, S3ReportPublisher
from .checks.report import report_to_json

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=lambda: os.getenv("WORKERCHECKS_LOG_LEVEL", "WARNING"),
    show_default="WARNING",
    help="Logging verbosity (env WORKERCHECKS_LOG_LEVEL).",
)
def cli(log_level: str) -> None:
    """Background health checks for the gallery worker jobs."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_provider() -> ObservationProvider:
    """Construct the observation provider from the environment.

    Reads ``DATABASE_URL``, ``MASTER_DATABASE_URL``, ``PACKAGES_BUCKET``
    and ``BACKUP_BUCKET``.  Factored out so tests can monkeypatch it.
    """
    database = SqlObservationProvider(get_engine(), master_engine=get_master_engine())
    buckets = {
        PACKAGES_CONTAINER: os.getenv("PACKAGES_BUCKET") or PACKAGES_CONTAINER,
        BACKUP_PACKAGES_CONTAINER: os.getenv("BACKUP_BUCKET") or BACKUP_PACKAGES_CONTAINER,
    }
    storage = BlobObservationProvider(build_s3_client(), buckets=buckets)
    return GalleryObservationProvider(database, storage)


def _build_dispatcher(no_alerts: bool) -> AlertDispatcher:
    """Return the Telegram dispatcher, or a recording one for ``--no-alerts``."""
    if no_alerts:
        return NullAlertDispatcher()
    return TelegramAlertDispatcher.from_env()


def _build_publisher(target: str, out_dir: Optional[str]) -> ReportPublisher:
    """Return the publisher for ``--publish file`` or ``--publish s3``."""
    if target == "s3":
        return S3ReportPublisher(build_s3_client(), bucket=os.getenv("REPORT_BUCKET") or REPORT_CONTAINER)
    root = out_dir or os.getenv("WORKERCHECKS_ARTIFACTS_DIR") or DEFAULT_ARTIFACTS_DIR
    return FileReportPublisher(root)


@click.command(name="run")
@click.option(
    "--publish",
    "publish_target",
    type=click.Choice(["file", "s3"], case_sensitive=False),
    default="file",
    show_default=True,
    help="Where to publish the report: a local directory or the report bucket.",
)
@click.option(
    "--out-dir",
    type=str,
    default=None,
    help=f"Directory for --publish file (default: $WORKERCHECKS_ARTIFACTS_DIR or {DEFAULT_ARTIFACTS_DIR}).",
)
@click.option(
    "--destination",
    type=str,
    default=REPORT_NAME,
    show_default=True,
    help="Report name inside the directory or bucket.",
)
@click.option("--run-id", "run_id_opt", type=str, default=None, help="Identifier for this run.")
@click.option(
    "--no-alerts",
    is_flag=True,
    default=False,
    help="Evaluate and report without sending alert notifications.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the run result as JSON after the summary.",
)
def run_checks(
    publish_target: str,
    out_dir: Optional[str],
    destination: str,
    run_id_opt: Optional[str],
    no_alerts: bool,
    json_output: bool,
) -> None:
    """Run the background checks for the worker jobs once.

    Each job is evaluated in a fixed order; alerts are dispatched for
    every job outside its operating envelope and the report is
    published.  Exit status is 0 when the run completed, 2 when at least
    one alert could not be delivered, and 1 on any fatal error.
    """
    run_id = run_id_opt or os.getenv("RUN_ID")
    try:
        provider = _build_provider()
        dispatcher = _build_dispatcher(no_alerts)
        publisher = _build_publisher(publish_target.lower(), out_dir)
    except WorkerChecksError as exc:
        raise click.ClickException(exc.describe()) from exc
    except Exception as exc:
        raise click.ClickException(f"config failed: {type(exc).__name__}: {exc}") from exc
    try:
        result = run_background_checks(
            provider,
            dispatcher,
            publisher,
            run_id=run_id,
            destination=destination,
        )
    except PublishError as exc:
        # Keep the evaluation output even though it could not be stored.
        if exc.report is not None:
            click.echo(report_to_json(exc.report))
        for failure in exc.alert_failures:
            click.echo(f"alert failed for {failure.job_name}: {failure.error}", err=True)
        raise click.ClickException(exc.describe()) from exc
    except WorkerChecksError as exc:
        raise click.ClickException(exc.describe()) from exc

    for verdict in result.verdicts:
        marker = "ALERT" if verdict.triggered_alert else "OK"
        click.echo(f"[{marker}] {verdict.job_name}: {verdict.message}")
    for failure in result.alert_failures:
        click.echo(f"alert failed for {failure.job_name}: {failure.error}", err=True)
    click.echo(
        f"run: status={result.status} alerts={result.alert_count} "
        f"failed_alerts={len(result.alert_failures)} report={result.destination}"
    )
    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True))
    ctx = click.get_current_context()
    ctx.exit(2 if result.status == "DEGRADED" else 0)


@click.command(name="config-check")
@click.option(
    "--publish",
    "publish_target",
    type=click.Choice(["file", "s3"], case_sensitive=False),
    default="file",
    help="Publish target the configuration should support.",
)
@click.option(
    "--no-alerts",
    is_flag=True,
    default=False,
    help="Do not require the Telegram variables.",
)
def config_check(publish_target: str, no_alerts: bool) -> None:
    """Validate that the required environment variables are present.

    Every target needs the gallery database and the two package buckets
    compared by the lag check.  ``--publish s3`` also needs
    ``REPORT_BUCKET``.  Missing variable names are reported in sorted
    order and the command exits with status 2.  No connections are
    opened.
    """
    target = publish_target.lower()
    required = ["DATABASE_URL", "PACKAGES_BUCKET", "BACKUP_BUCKET"]
    if target == "s3":
        required.append("REPORT_BUCKET")
    if not no_alerts:
        required.extend(["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID", "TELEGRAM_CHAT_ID_ALLOWLIST"])
    missing: List[str] = sorted(name for name in required if not os.getenv(name))
    if missing:
        click.echo("Missing environment variables: " + ", ".join(missing), err=True)
        ctx = click.get_current_context()
        ctx.exit(2)
    click.echo(f"OK (publish={target})")


cli.add_command(run_checks)
# Short alias.
cli.add_command(run_checks, name="rbgc")
cli.add_command(config_check)


__all__ = ["cli"]

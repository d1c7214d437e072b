"""Top-level package for workerchecks.

This package runs background health checks for the gallery worker jobs.
It provides a command-line interface via :mod:`workerchecks.cli`, the
check rules and report models in :mod:`workerchecks.checks`, observation
providers in :mod:`workerchecks.providers`, alert delivery in
:mod:`workerchecks.notify`, report publishers in
:mod:`workerchecks.publish` and the run itself in
:mod:`workerchecks.orchestration`.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "checks",
    "providers",
    "notify",
    "publish",
    "orchestration",
]

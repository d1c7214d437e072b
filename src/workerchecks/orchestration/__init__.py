"""Run orchestration for workerchecks."""

from .run import evaluate_job, run_background_checks

__all__ = ["evaluate_job", "run_background_checks"]

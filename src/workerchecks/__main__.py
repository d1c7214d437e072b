"""Entry point for running workerchecks as a module.

This allows the CLI to be invoked with ``python -m workerchecks``.
"""

from .cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli()

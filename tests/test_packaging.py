"""Check the packaging metadata in ``pyproject.toml``.

The test reads the file as text; it does not build or install the
project.
"""

from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_pyproject_declares_console_script_without_readme() -> None:
    """The distribution ships no long description file and exposes the CLI."""
    content = PYPROJECT.read_text(encoding="utf-8")
    lines = [line.strip() for line in content.splitlines()]
    assert not any(line.startswith("readme") for line in lines)
    assert 'workerchecks = "workerchecks.cli:cli"' in lines

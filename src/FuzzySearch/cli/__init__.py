"""CLI package for FuzzySearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from FuzzySearch.cli.runner import CommandRunner
from FuzzySearch.cli.ui import cli


def main() -> None:
    """Run FuzzySearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()

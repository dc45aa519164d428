"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, database cleanup and
error handling for every command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from FuzzySearch.cli.commands import CompileCommand, LoadCommand, RoutesCommand, SearchCommand
from FuzzySearch.config import AppConfig
from FuzzySearch.renderers import create_output_writer
from FuzzySearch.services import create_search_service
from FuzzySearch.storage import create_storage
from FuzzySearch.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_compile(
        self,
        action: str,
        tokens: Sequence[str],
        types: Sequence[str] = (),
        *,
        as_json: bool = False,
    ) -> None:
        """Compile a query and print its predicate and SQL.

        Raises:
            click.Abort: When compilation fails.
        """
        self._configure(action)
        try:
            service = create_search_service(self.config)
            CompileCommand(
                config=self.config,
                search_service=service,
                echo=click.echo,
                as_json=as_json,
            ).execute(tokens, types)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Compile failed: %s", e)
            raise click.Abort from e

    def run_load(self, action: str, path: Path) -> None:
        """Import records from JSON into the configured database.

        Raises:
            click.Abort: When the import fails.
        """
        self._configure(action)
        try:
            db_manager, store = create_storage(self.config)
            with db_manager:
                LoadCommand(store=store).execute(path)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Load failed: %s", e)
            raise click.Abort from e

    def run_search(
        self,
        action: str,
        tokens: Sequence[str],
        types: Sequence[str] = (),
        offset: int = 0,
    ) -> None:
        """Search the configured database and write results.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure(action)
        try:
            output_writer = create_output_writer(self.config)
            db_manager, store = create_storage(self.config)
            command = SearchCommand(
                search_service=create_search_service(self.config, store),
                output_writer=output_writer,
            )
            with db_manager:
                command.execute(tokens, types, offset)
                output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_routes(
        self,
        action: str,
        query: str | None,
        types: Sequence[str] = (),
        request: str | None = None,
    ) -> None:
        """Print rewrite rules, a redirect path or resolved request variables.

        Raises:
            click.Abort: When routing fails.
        """
        self._configure(action)
        try:
            RoutesCommand(config=self.config, echo=click.echo).execute(query, types, request)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Routes failed: %s", e)
            raise click.Abort from e

"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to the
runner. Excluded terms start with ``-``; put them after ``--`` so they are
not read as options::

    fuzzysearch search -- 東京タワー -夜景
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from FuzzySearch.cli.runner import CommandRunner
from FuzzySearch.config import load_config_with_defaults

_TERMS_SETTINGS = {"ignore_unknown_options": True}


@click.group(help="FuzzySearch: compile fuzzy CJK-aware search queries and run them.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file (merged over --defaults).",
)
@click.option(
    "--defaults",
    "default_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to the default YAML config.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path, default_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file, then the layered config.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path, default_path=default_path)


@cli.command("compile", context_settings=_TERMS_SETTINGS)
@click.option("--type", "-t", "types", multiple=True, help="Restrict to a record type (repeatable).")
@click.option("--json", "as_json", is_flag=True, help="Print the compiled plan as JSON.")
@click.argument("terms", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def compile_cmd(ctx: click.Context, types: tuple[str, ...], as_json: bool, terms: tuple[str, ...]) -> None:
    """Print the predicate and SQL compiled from TERMS."""
    CommandRunner(ctx.obj).run_compile(ctx.command.name, terms, types, as_json=as_json)


@cli.command("load")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.pass_context
def load_cmd(ctx: click.Context, path: Path) -> None:
    """Import records from the JSON file PATH."""
    CommandRunner(ctx.obj).run_load(ctx.command.name, path)


@cli.command("search", context_settings=_TERMS_SETTINGS)
@click.option("--type", "-t", "types", multiple=True, help="Restrict to a record type (repeatable).")
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True, help="Hits to skip.")
@click.argument("terms", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def search_cmd(ctx: click.Context, types: tuple[str, ...], offset: int, terms: tuple[str, ...]) -> None:
    """Search stored records for TERMS."""
    CommandRunner(ctx.obj).run_search(ctx.command.name, terms, types, offset)


@cli.command("routes")
@click.option("--query", "-q", default=None, help="Print the redirect path for this query instead.")
@click.option("--type", "-t", "types", multiple=True, help="Requested record type (repeatable).")
@click.option(
    "--request",
    "-r",
    default=None,
    help="Print the resolved variables of a routed request, e.g. 's=a%1Fb&pagename=search'.",
)
@click.pass_context
def routes_cmd(ctx: click.Context, query: str | None, types: tuple[str, ...], request: str | None) -> None:
    """Print search page rewrite rules."""
    CommandRunner(ctx.obj).run_routes(ctx.command.name, query, types, request)

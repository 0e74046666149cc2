"""
Guidelint CLI Entry Point

Command-line interface using Click.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

# Load .env file from the current directory
_env_path = Path.cwd() / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

from guidelint import __version__
from guidelint.config import OUTPUT_FORMATS, SEVERITY_NAMES, ConfigError
from guidelint.linter import Linter
from guidelint.reporting import render_github, render_json, render_text
from guidelint.rules import get_registry
from guidelint_cli.config import get_config, init_project

EXIT_CONFIG_ERROR = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _split(values: Tuple[str, ...]) -> Optional[list]:
    items = [item.strip() for value in values for item in value.split(",") if item.strip()]
    return items or None


def _config_failure(error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(EXIT_CONFIG_ERROR)


@click.group()
@click.option(
    "--project", "-P",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project .guidelint directory (detected from cwd by default)",
)
@click.option(
    "--config", "-c", "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Explicit JSON config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    project: Optional[Path],
    config_file: Optional[Path],
    verbose: bool,
) -> None:
    """
    Guidelint - lint a set of Markdown guides.

    Checks code fences, heading structure, index references, links and
    duplicated guides.
    """
    ctx.ensure_object(dict)
    _setup_logging(verbose)
    ctx.obj["project"] = project
    ctx.obj["config_file"] = config_file


def _load_config(ctx: click.Context):
    try:
        return get_config(
            project_dir=ctx.obj.get("project"),
            config_file=ctx.obj.get("config_file"),
        )
    except ConfigError as e:
        _config_failure(e)


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format",
)
@click.option("--select", "-s", multiple=True, help="Rule ids/names/prefixes to run")
@click.option("--ignore", "-i", multiple=True, help="Rule ids/names/prefixes to skip")
@click.option(
    "--fail-on",
    type=click.Choice(SEVERITY_NAMES),
    default=None,
    help="Lowest severity that makes the run fail",
)
@click.option("--exclude", "-e", multiple=True, help="Glob patterns to skip")
@click.option("--no-recursive", is_flag=True, help="Do not descend into subdirectories")
@click.pass_context
def check(
    ctx: click.Context,
    paths: Tuple[Path, ...],
    output_format: Optional[str],
    select: Tuple[str, ...],
    ignore: Tuple[str, ...],
    fail_on: Optional[str],
    exclude: Tuple[str, ...],
    no_recursive: bool,
) -> None:
    """
    Lint the guides under PATHS (default: current directory).

    Example: guidelint check docs/ --ignore GL010
    """
    cfg = _load_config(ctx)
    try:
        lint_config = cfg.lint.merge(
            output_format=output_format,
            fail_on=fail_on,
            select=_split(select),
            ignore=_split(ignore),
            exclude=(cfg.lint.exclude + list(exclude)) if exclude else None,
            recursive=False if no_recursive else None,
        )
        linter = Linter(lint_config)
    except ConfigError as e:
        _config_failure(e)

    report = linter.lint_paths(list(paths) or [Path(".")])

    if lint_config.output_format == "json":
        click.echo(render_json(report))
    elif lint_config.output_format == "github":
        output = render_github(report)
        if output:
            click.echo(output)
    else:
        render_text(report, Console())

    sys.exit(report.exit_code(lint_config.fail_on))


@cli.command()
def rules() -> None:
    """
    List available rules.
    """
    table = Table(title="Rules", title_justify="left")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Scope")
    table.add_column("Description")
    for rule in get_registry().list_rules():
        table.add_row(
            rule.rule_id,
            rule.name,
            rule.default_severity.value,
            rule.scope,
            rule.description,
        )
    Console().print(table)


@cli.command()
@click.option(
    "--path", "-p",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory to initialize",
)
def init(path: Optional[Path]) -> None:
    """
    Initialize a guidelint project.

    Creates .guidelint/config.json with the default settings.
    """
    try:
        project_dir = init_project(path)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Initialized guidelint project at: {project_dir}")
    click.echo("\nCreated:")
    click.echo("  - .guidelint/config.json")


@cli.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """
    Show current configuration.
    """
    cfg = _load_config(ctx)
    lint = cfg.lint

    click.echo("Guidelint Configuration")
    click.echo("=" * 40)
    click.echo(f"Project dir:    {cfg.project_dir or 'None'}")
    click.echo(f"Config file:    {cfg.config_file or 'None'}")
    click.echo(f"Select:         {', '.join(lint.select) or 'all'}")
    click.echo(f"Ignore:         {', '.join(lint.ignore) or 'none'}")
    click.echo(f"Exclude:        {', '.join(lint.exclude) or 'none'}")
    click.echo(f"Index names:    {', '.join(lint.index_names)}")
    click.echo(f"First heading:  h{lint.first_heading_level}")
    click.echo(f"Near-dup ratio: {lint.near_duplicate_threshold}")
    click.echo(f"Fail on:        {lint.fail_on}")
    click.echo(f"Format:         {lint.output_format}")


@cli.command()
def version() -> None:
    """
    Show version information.
    """
    click.echo(f"guidelint v{__version__}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

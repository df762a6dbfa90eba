"""gitsemver CLI"""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

import click
from returns.maybe import Some
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitsemver import __version__
from gitsemver.config import dump_configuration, load_configuration
from gitsemver.git.repository import GitRepositoryStore
from gitsemver.model.configuration import Configuration
from gitsemver.versioning.calculator import NextVersionCalculator, VersionVariables
from gitsemver.versioning.exceptions import VersioningError

from .debug import add_debug_option
from .utils.logging import logger

VARIABLE_NAMES = sorted(
    list(VersionVariables.__dataclass_fields__)
    + ["major_minor_patch", "sem_ver", "full_sem_ver"]
)

repository_argument = click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
branch_option = click.option(
    "--branch",
    "-b",
    type=str,
    default=None,
    help="Calculate for this branch instead of the checked out one.",
)
config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    envvar="GITSEMVER_CONFIG",
    help="Configuration file (defaults to gitsemver.yml in the repository root).",
)


@contextmanager
def _open_repository(
    path: str, branch: Optional[str], config_path: Optional[str]
) -> Iterator[Tuple[GitRepositoryStore, Configuration]]:
    with GitRepositoryStore(Path(path), target_branch=branch) as store:
        yield store, load_configuration(config_path, repo_root=store.root)


@click.group()
@click.version_option(__version__, prog_name="gitsemver")
@click.pass_context
def cli(ctx):
    """
    Derive a semantic version for the current commit from git history.
    """
    ctx.ensure_object(dict)


@add_debug_option
@cli.command("calculate")
@repository_argument
@branch_option
@config_option
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print all version variables as JSON.",
)
@click.option(
    "--show-variable",
    type=click.Choice(VARIABLE_NAMES),
    default=None,
    help="Print a single version variable.",
)
@click.pass_context
def calculate(
    ctx,
    path: str,
    branch: Optional[str],
    config_path: Optional[str],
    as_json: bool = False,
    show_variable: Optional[str] = None,
):
    """Calculate the version of the repository at PATH."""
    try:
        with _open_repository(path, branch, config_path) as (store, configuration):
            variables = NextVersionCalculator(store, configuration).calculate()
    except VersioningError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(variables.to_dict(), indent=2))
    elif show_variable:
        value = getattr(variables, show_variable)
        click.echo("" if value is None else str(value))
    else:
        click.echo(variables.full_sem_ver)


def _print_candidates(calculator: NextVersionCalculator, context):
    click.echo(
        f"Branch '{context.current_branch.friendly_name}' "
        f"(configuration '{context.effective.branch_key}', "
        f"increment {context.effective.increment.value})"
    )

    engine = calculator.engine
    table = Table(box=None, padding=(0, 2))
    table.add_column("Strategy", style="bold")
    table.add_column("Version")
    table.add_column("Anchor", style="dim")
    table.add_column("Increment")
    table.add_column("Source")

    for strategy in engine.enabled_strategies(context):
        for base_version in strategy.get_versions(context):
            anchor = base_version.base_version_source
            table.add_row(
                strategy.name.value,
                str(base_version.semantic_version),
                anchor.short_sha if anchor is not None else "-",
                "yes" if base_version.should_increment else "no",
                Text(base_version.source),
            )

    console = Console(highlight=False)
    if table.row_count:
        console.print(table)

    result = engine.calculate(context)
    if isinstance(result, Some):
        selected = result.unwrap()
        click.echo(
            f"Selected: {selected.semantic_version} from {selected.source} "
            f"(+{selected.commits_since_source})"
        )
    else:
        logger.debug("No strategy produced a candidate")
        click.echo("No base version found")


@add_debug_option
@cli.command("candidates")
@repository_argument
@branch_option
@config_option
@click.pass_context
def candidates(ctx, path: str, branch: Optional[str], config_path: Optional[str]):
    """List the base version candidates of every enabled strategy."""
    try:
        with _open_repository(path, branch, config_path) as (store, configuration):
            calculator = NextVersionCalculator(store, configuration)
            _print_candidates(calculator, calculator.create_context())
    except VersioningError as e:
        raise click.ClickException(str(e))


@add_debug_option
@cli.command("config")
@repository_argument
@config_option
@click.pass_context
def show_config(ctx, path: str, config_path: Optional[str]):
    """Print the effective configuration as YAML."""
    try:
        with _open_repository(path, None, config_path) as (_, configuration):
            text = dump_configuration(configuration)
    except VersioningError as e:
        raise click.ClickException(str(e))

    click.echo(text, nl=False)


add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})

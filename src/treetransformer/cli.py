"""
Command line entry point.

    treetransformer diff GIVEN DESIRED     print the edit script between two tree files
    treetransformer apply TREE SCRIPT      replay an edit script against a tree file
    treetransformer [interactive]          edit a tree interactively
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from treetransformer.commands.repl import InteractiveSession
from treetransformer.config import ENV_PREFIX, TransformerSettings, setup_logging
from treetransformer.core.tree import Tree
from treetransformer.exceptions import TreeTransformerError
from treetransformer.execution.transformer import apply_script, diff
from treetransformer.parsing.parser import parse_edit_script
from treetransformer.structure.serialization import (
    deserialize_tree,
    read_tree_file,
    serialize_tree,
)

logger = logging.getLogger(__name__)

FAREWELL = "Thanks for using Tree Transformer! Hope to see you soon! :)"

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def load_tree(path: Path, settings: TransformerSettings) -> Tree:
    """Read `path` in the line format if it has the tree extension, else as an edge list."""
    if path.name.endswith(settings.extension):
        return deserialize_tree(path, settings.extension)
    return read_tree_file(path)


def _fail(error: Exception) -> None:
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Transformation failed! {error}", err=True)
    click.get_current_context().exit(1)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level.")
@click.option("--log-level", default=None, help="Logging level name, e.g. INFO.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_level: str | None) -> None:
    """Compute and apply structural edit scripts between trees."""
    try:
        settings = TransformerSettings.from_env(log_level=log_level)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0])
        if field == "log_level" and log_level is not None:
            raise click.BadParameter(error["msg"], param_hint="--log-level") from e
        raise click.UsageError(
            f"Invalid setting {ENV_PREFIX}{field.upper()}: {error['msg']}"
        ) from e

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        format_style=settings.log_format,
    )
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(interactive)


@cli.command("diff")
@click.argument("given", type=_FILE)
@click.argument("desired", type=_FILE)
@click.option("--show-trees", is_flag=True, help="Print both trees before the script.")
@click.pass_obj
def diff_command(
    settings: TransformerSettings, given: Path, desired: Path, show_trees: bool
) -> None:
    """Print the edit script turning the GIVEN tree into the DESIRED tree."""
    try:
        given_tree = load_tree(given, settings)
        desired_tree = load_tree(desired, settings)
    except (TreeTransformerError, OSError) as e:
        _fail(e)
        return

    if show_trees:
        click.echo(str(given_tree), nl=False)
        click.echo(str(desired_tree), nl=False)
    script = diff(given_tree, desired_tree)
    logger.info("Computed %d operations", len(script))
    click.echo(str(script))


@cli.command("apply")
@click.argument("tree_file", metavar="TREE", type=_FILE)
@click.argument("script_file", metavar="SCRIPT", type=_FILE)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the resulting tree to this file.",
)
@click.pass_obj
def apply_command(
    settings: TransformerSettings,
    tree_file: Path,
    script_file: Path,
    output: Path | None,
) -> None:
    """Replay the edit script in SCRIPT against TREE and print the result."""
    try:
        tree = load_tree(tree_file, settings)
        script = parse_edit_script(script_file.read_text(encoding="utf-8"))
        apply_script(tree, script)
        if output is not None:
            serialize_tree(tree, output, settings.extension)
    except (TreeTransformerError, OSError) as e:
        _fail(e)
        return

    logger.info("Applied %d operations", len(script))
    click.echo(str(tree), nl=False)


@cli.command()
@click.pass_obj
def interactive(settings: TransformerSettings) -> None:
    """Edit a tree interactively, one command per line."""
    session = InteractiveSession(sys.stdin, sys.stdout, sys.stderr, settings=settings)
    session.run()
    click.echo(FAREWELL)


def main() -> None:
    cli()

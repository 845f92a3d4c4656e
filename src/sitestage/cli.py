"""CLI interface for Sitestage.

Command-line tool for inspecting, generating and compiling site resources.
"""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import NoReturn

import click

from sitestage.config import Config
from sitestage.core.client import to_json
from sitestage.core.resolver import UnknownResourceTypeError
from sitestage.core.site import Site

RESOURCE_KINDS = ("all", "discovered", "registered", "base", "pages", "non-pages")


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitestage.toml)",
)
@click.option(
    "--base-dir",
    "-b",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Site root directory (overrides config)",
)
@click.option(
    "--theme",
    "-t",
    default=None,
    help="Active theme name (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (show per-resource reports)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    base_dir: Path | None,
    theme: str | None,
    verbose: bool,
) -> None:
    """Sitestage - resources for static sites, resolved."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["base_dir"] = base_dir
    ctx.obj["theme"] = theme


@cli.command()
@click.option(
    "--kind",
    "-k",
    type=click.Choice(RESOURCE_KINDS),
    default="all",
    help="Which resource names to list (default: all)",
)
@click.pass_context
def resources(ctx: click.Context, kind: str) -> None:
    """List resource names known to the site."""
    site = _load_site(ctx)
    registry = site.resources
    listings: dict[str, Callable[[], list[str]]] = {
        "all": registry.all,
        "discovered": registry.discover,
        "registered": registry.registered,
        "base": registry.base,
        "pages": registry.acting_as_pages,
        "non-pages": registry.non_pages,
    }
    for name in listings[kind]():
        click.echo(name)


@cli.command()
@click.argument("name")
@click.option(
    "--id",
    "ids",
    multiple=True,
    help="Only collect this id (repeatable)",
)
@click.pass_context
def files(ctx: click.Context, name: str, ids: tuple[str, ...]) -> None:
    """List candidate files for a resource, lowest precedence first."""
    site = _load_site(ctx)
    try:
        collection = site.collection(name)
    except UnknownResourceTypeError as e:
        _fail(e)

    for pointer in collection.files(list(ids) or None):
        click.echo(json.dumps(pointer.to_dict()))


@cli.command()
@click.argument("name")
@click.option(
    "--id",
    "ids",
    multiple=True,
    help="Only generate this id (repeatable)",
)
@click.pass_context
def generate(ctx: click.Context, name: str, ids: tuple[str, ...]) -> None:
    """Generate the merged dictionary for a resource as JSON."""
    site = _load_site(ctx)
    try:
        collection = site.collection(name)
    except UnknownResourceTypeError as e:
        _fail(e)

    data = collection.generate(list(ids) or None)
    click.echo(json.dumps(to_json(data), indent=2, sort_keys=True))


@cli.command()
@click.argument("name")
@click.argument("pointer_id", required=False)
@click.pass_context
def show(ctx: click.Context, name: str, pointer_id: str | None) -> None:
    """List ids of a resource, or show the record for one id."""
    site = _load_site(ctx)
    try:
        client = site.resources.client(name)
    except UnknownResourceTypeError as e:
        _fail(e)

    if pointer_id is None:
        for item in client.list():
            click.echo(item)
        return

    record = client.show(pointer_id)
    if record is None:
        click.echo(
            click.style(f"Error: '{pointer_id}' not found in {name}", fg="red"),
            err=True,
        )
        sys.exit(1)
    click.echo(json.dumps(record, indent=2, sort_keys=True))


@cli.command(name="compile")
@click.argument("names", nargs=-1)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory (overrides config)",
)
@click.pass_context
def compile_command(ctx: click.Context, names: tuple[str, ...], output_dir: Path | None) -> None:
    """Compile resources into the output directory."""
    site = _load_site(ctx, output_dir=output_dir)
    target = site.config.compile.output_dir

    click.echo(f"Output directory: {target}")
    total = 0
    for name in names or site.resources.all():
        try:
            compiler = site.resources.compiler(name)
        except UnknownResourceTypeError as e:
            _fail(e)
        written = compiler.run(target)
        if written:
            click.echo(f"  {name}: {len(written)} files")
        total += len(written)

    click.echo(click.style(f"\nCompiled {total} files.", fg="green", bold=True))


@cli.command()
@click.pass_context
def watch(ctx: click.Context) -> None:
    """Watch cascade roots and report regenerated ids."""
    from sitestage.live import WatchManager

    site = _load_site(ctx)
    if not site.config.live_reload.enabled:
        click.echo("Watching: disabled (live_reload.enabled = false)")
        return

    manager = WatchManager(site, watch_patterns=site.config.live_reload.watch_patterns)
    for root in manager.roots():
        click.echo(f"Watching {root}")

    try:
        for event in manager.run():
            state = "removed" if event.record is None else "updated"
            click.echo(f"[{event.resource}] {event.id} {state}")
    except UnknownResourceTypeError as e:
        _fail(e)
    except KeyboardInterrupt:
        click.echo("\nStopped.")


def _load_site(ctx: click.Context, *, output_dir: Path | None = None) -> Site:
    """Load configuration and build the site context.

    Args:
        ctx: Click context carrying the group options
        output_dir: Optional compile output directory override

    Returns:
        Site instance

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        config = Config.load(ctx.obj["config_path"])
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    config = config.with_overrides(
        base_dir=ctx.obj["base_dir"],
        theme=ctx.obj["theme"],
        output_dir=output_dir,
    )
    return Site(config)


def _fail(error: UnknownResourceTypeError) -> NoReturn:
    """Report a fatal resource type error and exit with status 1.

    Args:
        error: Error naming the resource and its unknown type

    Raises:
        SystemExit: Always
    """
    click.echo(click.style(str(error), fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()

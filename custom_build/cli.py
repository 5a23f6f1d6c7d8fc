"""Click CLI with build, deps, and categories subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from custom_build.config import load_profile, parse_commands
from custom_build.errors import BuildError
from custom_build.graph import DependencyGraph
from custom_build.minify import WhitespaceMinifier
from custom_build.models import BuildDirectives
from custom_build.pipeline import prepare_state, run_build
from custom_build.resolver import category_label


def _directives(commands: tuple[str, ...], profile: Path | None) -> BuildDirectives:
    if profile and commands:
        raise click.UsageError("Pass build commands or --profile, not both")
    try:
        if profile:
            return load_profile(profile)
        return parse_commands(commands)
    except BuildError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Log rule firing and pruning details")
def cli(verbose: bool):
    """custom-build: Build trimmed variants of a monolithic library source."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("commands", nargs=-1)
@click.option("--profile", "-P", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML build profile")
@click.option("-o", "--output", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Output file (default: <source>.custom.js)")
@click.option("--stdout", "-c", "to_stdout", is_flag=True, help="Write the build to stdout")
@click.option("--minify", "-m", is_flag=True, help="Also write a minified build")
@click.option("--silent", "-s", is_flag=True, help="Skip status output")
def build(
    source: Path,
    commands: tuple[str, ...],
    profile: Path | None,
    output_path: Path | None,
    to_stdout: bool,
    minify: bool,
    silent: bool,
):
    """Build SOURCE with COMMANDS such as `modern include=map,filter`."""
    directives = _directives(commands, profile)
    quiet = silent or to_stdout

    def progress(stage: str, current: int, total: int):
        if not quiet:
            click.echo(f"  {stage}: {current}/{total}", err=True)

    try:
        result = run_build(
            source.read_text(encoding="utf-8"),
            directives,
            minifier=WhitespaceMinifier() if minify else None,
            progress=progress,
        )
    except BuildError as e:
        raise click.ClickException(str(e))

    for warning in result.warnings:
        click.echo(click.style(f"warning: {warning}", fg="yellow"), err=True)

    if to_stdout:
        click.echo(result.minified if minify else result.source, nl=False)
        return

    output_path = output_path or Path(f"{source.stem}.custom.js")
    output_path.write_text(result.source, encoding="utf-8")
    written = [output_path]
    if result.minified is not None:
        min_path = output_path.with_name(output_path.stem + ".min.js")
        min_path.write_text(result.minified, encoding="utf-8")
        written.append(min_path)

    if not silent:
        click.echo(f"\nBuilt {len(result.build_funcs)} function(s):")
        for path in written:
            click.echo(f"  {click.style(str(path), fg='cyan')}")


@cli.command()
@click.argument("commands", nargs=-1)
@click.option("--profile", "-P", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML build profile")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def deps(commands: tuple[str, ...], profile: Path | None, as_json: bool):
    """Show the build set COMMANDS resolve to, without reading any source."""
    directives = _directives(commands, profile)
    try:
        state = prepare_state(directives)
    except BuildError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps({
            "functions": sorted(state.build_funcs),
            "properties": sorted(state.include_props),
            "variables": sorted(state.include_vars),
            "rules": state.rules_fired,
        }, indent=2))
        return

    sections = (
        ("functions", state.build_funcs, "green"),
        ("properties", state.include_props, "yellow"),
        ("variables", state.include_vars, "blue"),
    )
    for label, names, color in sections:
        click.echo(click.style(f"{label} ({len(names)})", fg=color))
        for name in sorted(names):
            click.echo(f"  {name}")
    if state.rules_fired:
        click.echo(click.style("rules: ", dim=True) + ", ".join(state.rules_fired))


@cli.command()
@click.argument("category", required=False)
def categories(category: str | None):
    """List categories, or the functions in CATEGORY."""
    graph = DependencyGraph.default()
    labels = graph.tables.all_categories

    if category:
        label = category_label(category)
        if label not in labels:
            raise click.ClickException(f"Unknown category: {category}")
        for name in graph.names_by_category(label):
            aliases = graph.aliases_of(name)
            suffix = click.style(f" ({', '.join(aliases)})", dim=True) if aliases else ""
            click.echo(f"  {name}{suffix}")
        return

    for label in labels:
        count = len(graph.names_by_category(label))
        click.echo(f"{click.style(label, fg='cyan')}  {count}")


if __name__ == "__main__":
    cli()

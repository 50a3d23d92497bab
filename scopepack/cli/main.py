"""Command-line interface for scopepack.

Provides CLI commands for inspecting scopes and building the web archive.
"""

import logging
import sys
from typing import Optional

import click
import yaml

from .. import __version__
from ..errors import ScopepackError


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("scopepack")


def load_project(config: str):
    """Load, validate and apply a build file; exit with status 1 if invalid."""
    from scopepack.config import BuildConfig

    build_config = BuildConfig(config)
    try:
        build_config.load()
        build_config.parse()
    except ScopepackError as e:
        raise click.ClickException(str(e))

    valid, errors = build_config.validate()
    if not valid:
        for error in errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    try:
        return build_config.create_project()
    except ScopepackError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="scopepack")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """scopepack: web archive packaging without provided dependencies.

    Examples:

        # Show scopes and what they resolve to
        scopepack scopes --config build.yaml

        # Show the classpath that goes into the archive
        scopepack classpath --config build.yaml

        # Build the archive
        scopepack package --config build.yaml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["logger"] = setup_logging(verbose, debug)


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Build file (YAML)")
@click.option("--resolved/--direct", default=True,
              help="List resolved dependencies or only direct ones")
@click.pass_context
def scopes(ctx: click.Context, config: str, resolved: bool) -> None:
    """List scopes with their extends edges and dependencies."""
    project = load_project(config)
    graph = project.scopes

    report = {}
    for scope in graph:
        dependencies = graph.resolve(scope) if resolved else scope.dependencies
        report[scope.name] = {
            "description": scope.description,
            "extends": sorted(scope.extends),
            "dependencies": sorted(str(dep) for dep in dependencies),
        }

    click.echo(yaml.safe_dump(report, sort_keys=False).rstrip("\n"))


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Build file (YAML)")
@click.option("--base", default="runtime-classpath", help="Scope to include")
@click.option("--subtract", default="provided-runtime", help="Scope to leave out")
@click.pass_context
def classpath(ctx: click.Context, config: str, base: str, subtract: str) -> None:
    """Print the classpath derived as BASE minus SUBTRACT."""
    logger = ctx.obj["logger"]
    project = load_project(config)

    try:
        entries = project.classpaths.derive(base, subtract).get()
    except ScopepackError as e:
        raise click.ClickException(str(e))

    logger.info(f"{len(entries)} dependencies in {base} - {subtract}")
    for entry in sorted(str(dep) for dep in entries):
        click.echo(entry)


@cli.command()
@click.option("--config", "-c", required=True, type=click.Path(exists=True),
              help="Build file (YAML)")
@click.option("--dry-run", is_flag=True, help="Show execution plan without running")
@click.option("--report", type=click.Path(), help="Append a JSON build report to this file")
@click.option("--log-dir", type=click.Path(), help="Directory for the build log file")
@click.pass_context
def package(
    ctx: click.Context,
    config: str,
    dry_run: bool,
    report: Optional[str],
    log_dir: Optional[str],
) -> None:
    """Build the web archive."""
    verbose = ctx.obj["verbose"]

    from scopepack.config import PACKAGE_TASK_NAME
    from scopepack.pipeline import BuildExecutor, BuildLogger

    project = load_project(config)

    build_logger = BuildLogger(log_dir, log_level="DEBUG" if verbose else "INFO")
    build_logger.setup()
    executor = BuildExecutor(project, build_logger, report_path=report)

    try:
        results = executor.run([PACKAGE_TASK_NAME], dry_run=dry_run)
    except ScopepackError as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)

    if dry_run:
        click.echo("Dry run - no tasks were executed")
        return

    result = results[PACKAGE_TASK_NAME]
    click.echo(f"Archive written: {result.destination}")
    click.echo(f"Entries: {len(result.entries)}")


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()

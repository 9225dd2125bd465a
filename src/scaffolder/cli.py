"""Click command for the scaffolder CLI."""

import logging
import sys
from contextlib import contextmanager

import click

from scaffolder import __version__
from scaffolder.config import DEFAULT_CONFIG_PATH, load_config
from scaffolder.errors import ScaffoldError
from scaffolder.events import ConsoleReporter
from scaffolder.git_provider import GitRepositoryProvider
from scaffolder.orchestrator import ScaffoldOrchestrator
from scaffolder.render_engine import RenderEngine
from scaffolder.run_settings import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROJECT_NAME,
    RunSettings,
    merge_settings,
)
from scaffolder.source_resolver import SourceResolver


@contextmanager
def with_error_handling():
    try:
        yield
    except ScaffoldError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def build_orchestrator(reporter=None):
    """Wire the orchestrator with its production collaborators."""
    return ScaffoldOrchestrator(
        resolver=SourceResolver(GitRepositoryProvider()),
        render_engine=RenderEngine(),
        reporter=reporter or ConsoleReporter(),
    )


@click.command()
@click.option("-p", "--project-name", default=DEFAULT_PROJECT_NAME, show_default=True,
              help="Name of the project to scaffold")
@click.option("-o", "--output", default=DEFAULT_OUTPUT_DIR, show_default=True,
              help="Directory the generated files are written to")
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Scaffolding configuration file")
@click.option("--overwrite", is_flag=True, help="Replace files that already exist in the output directory")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="scaffolder")
def main(project_name, output, config_path, overwrite, verbose):
    """Generate a project from the scaffolds declared in a configuration file.

    Values in the configuration's [project] table take precedence over the
    corresponding options.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    with with_error_handling():
        click.echo(f"Loading configuration from: {config_path}")
        config = load_config(config_path)
        settings = merge_settings(
            RunSettings(project_name=project_name, output=output, overwrite=overwrite),
            config.project,
        )
        build_orchestrator().run(config, settings)

    click.echo(f"Scaffolding for project '{settings.project_name}' created successfully!")

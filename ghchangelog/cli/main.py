"""Main CLI entry point for ghchangelog."""

import logging

import click
from pydantic import ValidationError

from .. import __version__
from ..config import get_config, create_sample_config, Options
from .generate import generate


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="ghchangelog")
@click.pass_context
def cli(ctx, debug, config_file):
    """ghchangelog - Markdown changelogs from GitHub tags, issues and pull requests."""

    # Setup logging
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config_file
    ctx.obj['logger'] = logging.getLogger('ghchangelog')


def load_options(ctx, **overrides) -> Options:
    """Load options with CLI flags taking precedence over config and environment."""
    try:
        return get_config(ctx.obj['config_file'], **overrides)
    except ValidationError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.option('--path', '-p', default='ghchangelog.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"ghchangelog version {__version__}")


# Add subcommands
cli.add_command(generate)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()

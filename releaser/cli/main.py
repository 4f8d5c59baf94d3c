"""Main CLI entry point for Releaser."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, create_sample_config, Config
from ..github import GitHubClient
from .release import release
from .changelog import changelog


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--github-token', help='GitHub API token (default: $GITHUB_TOKEN)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="releaser")
@click.pass_context
def cli(ctx, debug, github_token, config_file):
    """Releaser - cut collectd releases from merged pull requests."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    ctx.ensure_object(dict)
    ctx.obj['base_config'] = get_config(config_file)
    ctx.obj['global_github_token'] = github_token
    ctx.obj['logger'] = logging.getLogger('releaser')


def create_client(ctx, require_token=True, **overrides):
    """Create a GitHub client, applying command line overrides to the loaded config.

    Options left unset on the command line (None) keep their configured value.
    """
    base_config = ctx.obj['base_config']
    logger = ctx.obj['logger']

    values = base_config.model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None})
    if ctx.obj['global_github_token']:
        values['github_token'] = ctx.obj['global_github_token']
    config = Config(**values)

    if require_token and not config.github_token:
        click.echo("Error: GitHub token is required. Set GITHUB_TOKEN, use --github-token, or config file", err=True)
        sys.exit(1)

    return GitHubClient(config, logger), config


@cli.command()
@click.option('--path', '-p', default='releaser.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"Releaser version {__version__}")


cli.add_command(release)
cli.add_command(changelog)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()

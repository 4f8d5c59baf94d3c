"""Release command implementation."""

import sys

import click

from ..exceptions import NoQualifyingChangeError, ReleaserError
from ..workflow import Releaser


@click.command()
@click.option('--owner', help='Repository owner (default: collectd)')
@click.option('--repo', help='Repository name (default: collectd)')
@click.option('--branch', '-b', help='Release branch (default: collectd-6.0)')
@click.option('--git-dir', help='Path to the .git directory of a local clone')
@click.option('--dry-run/--no-dry-run', default=None,
              help='Only show what would be done (default: dry run)')
@click.pass_context
def release(ctx, owner, repo, branch, git_dir, dry_run):
    """Create a release from the pull requests merged since the last one."""

    # Import here to avoid circular dependency
    from .main import create_client

    client, config = create_client(
        ctx, owner=owner, repo=repo, branch=branch, git_dir=git_dir, dry_run=dry_run
    )
    logger = ctx.obj['logger']

    logger.info(f"Releasing {config.owner}/{config.repo}, branch: {config.branch}")

    try:
        version = Releaser(config, client, logger).run()
    except NoQualifyingChangeError as e:
        click.echo(f"Nothing to release: {e}")
        return
    except ReleaserError as e:
        logger.error(f"Release failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if version is None:
        click.echo("No new pull requests, nothing to release")
    elif config.dry_run:
        click.echo(f"(Dry run - version {version} was not released)")
    else:
        click.echo(f"Successfully released version {version}")

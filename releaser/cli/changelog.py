"""Changelog command implementation."""

import sys
from datetime import datetime

import click

from ..changelog import Changelog
from ..exceptions import NoQualifyingChangeError, ReleaserError
from ..version import parse_tag
from ..workflow import Releaser


@click.command()
@click.argument('numbers', nargs=-1, type=int)
@click.option('--owner', help='Repository owner (default: collectd)')
@click.option('--repo', help='Repository name (default: collectd)')
@click.option('--branch', '-b', help='Release branch (default: collectd-6.0)')
@click.option('--git-dir', help='Path to the .git directory of a local clone')
@click.option('--tag', '-t', help='Tag of the previous release (default: latest release)')
@click.option('--date', '-d', type=click.DateTime(formats=['%Y-%m-%d']),
              help='Release date (default: today)')
@click.option('--format', '-f', 'fmt', type=click.Choice(['markdown', 'file']),
              default='markdown', help='Output format')
@click.option('--output', '-o', help='Write the changelog to a file instead of stdout')
@click.pass_context
def changelog(ctx, numbers, owner, repo, branch, git_dir, tag, date, fmt, output):
    """Preview the next version and its changelog without publishing anything.

    NUMBERS are the pull requests to include. If none are given, the pull
    requests merged since the previous release are looked up with git.
    """

    # Import here to avoid circular dependency
    from .main import create_client

    client, config = create_client(
        ctx, require_token=False, owner=owner, repo=repo, branch=branch, git_dir=git_dir
    )
    logger = ctx.obj['logger']
    releaser = Releaser(config, client, logger)

    try:
        if tag is None:
            tag = releaser.last_release().tag_name
        prev_version = parse_tag(tag)

        if numbers:
            prs = releaser.fetch_pull_requests(list(numbers))
        else:
            prs = releaser.pull_requests_since(tag)

        next_version = prev_version.next(prs)
    except NoQualifyingChangeError as e:
        click.echo(f"Nothing to release: {e}")
        return
    except ReleaserError as e:
        logger.error(f"Changelog generation failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    data = Changelog.build(date or datetime.now(), next_version, prs)
    text = data.file_format() if fmt == 'file' else data.markdown()

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Changelog for {next_version} saved to: {output}")
    else:
        click.echo(f"Next version: {next_version}\n")
        click.echo(text, nl=False)

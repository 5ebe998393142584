"""Generate command implementation."""

import click

from ..changelog import generate_changelog
from ..source import SnapshotSource


@click.command()
@click.option('--data', '-d', required=True, help='JSON snapshot with tags, issues and pull requests')
@click.option('--output', '-o', default='CHANGELOG.md', help='Changelog file path')
@click.option('--stdout', 'to_stdout', is_flag=True, help='Print the changelog instead of writing a file')
@click.option('--user', '-u', help='GitHub user or organization owning the project')
@click.option('--project', '-p', help='GitHub project name')
@click.option('--base', '-b', help='Existing changelog to append verbatim')
@click.option('--header', help='Header line of the document')
@click.option('--since-tag', help='Only include tags released after this one')
@click.option('--future-release', help='Name the unreleased section after this upcoming release')
@click.option('--unreleased-only', is_flag=True, default=None, help='Only generate the unreleased section')
@click.option('--unreleased/--no-unreleased', default=None, help='Include the unreleased section')
@click.option('--simple-list', is_flag=True, default=None, help='Do not split sections into issues and pull requests')
@click.option('--compare-link/--no-compare-link', default=None, help='Add "Full Changelog" compare links')
@click.option('--filter-by-milestone', 'filter_issues_by_milestone', is_flag=True, default=None,
              help='Respect milestones when assigning items to releases')
@click.option('--issue-line-labels', help='Comma separated labels to show on each line, or ALL')
@click.option('--author/--no-author', default=None, help='Attribute pull requests to their author')
@click.option('--usernames-as-github-logins', is_flag=True, default=None, help='Render authors as @login')
@click.option('--verbose', '-v', is_flag=True, default=None, help='Report progress')
@click.pass_context
def generate(ctx, data, output, to_stdout, issue_line_labels, **overrides):
    """Generate a changelog from a snapshot of GitHub data."""

    # Import here to avoid circular dependency
    from .main import load_options

    logger = ctx.obj['logger']

    if issue_line_labels is not None:
        overrides['issue_line_labels'] = [
            label.strip() for label in issue_line_labels.split(',') if label.strip()
        ]

    options = load_options(ctx, **overrides)
    if not options.user or not options.project:
        click.echo("Error: --user and --project are required (or set them in the config file)", err=True)
        ctx.exit(1)

    logger.info(f"Generating changelog for {options.user}/{options.project} from {data}")

    try:
        log = generate_changelog(options, SnapshotSource(data, logger), logger)
    except Exception as e:
        logger.error(f"Error generating changelog: {e}")
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if to_stdout:
        click.echo(log)
        return

    try:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(log)
    except OSError as e:
        click.echo(f"Error writing to file {output}: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Changelog saved to: {output}")

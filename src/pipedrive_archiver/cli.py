"""Click CLI entry point for pipedrive-archiver."""

import sys

import click

EPILOG = """\b
Examples:
  pipedrive-archiver              # Interactive mode
  pipedrive-archiver --dry-run    # Preview what will be archived
  pipedrive-archiver --yes        # Archive without confirmation
"""


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.option(
    "--dry-run", is_flag=True, default=False, help="Show what would be archived without making changes"
)
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompt")
def cli(dry_run: bool, yes: bool) -> None:
    """Archive every unarchived email thread in your Pipedrive inbox."""
    from pipedrive_archiver.__main__ import main

    sys.exit(main(dry_run=dry_run, assume_yes=yes))

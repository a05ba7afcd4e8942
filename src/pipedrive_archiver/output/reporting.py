"""Human-readable run output: summary, dry-run preview, and final results."""

from __future__ import annotations

import sys
from typing import TextIO

from pipedrive_archiver.core.models import RunStats, Thread
from pipedrive_archiver.output.colors import BLUE, BOLD, CYAN, DIM, GREEN, RED, YELLOW, color

SAMPLE_SIZE = 5
CHECKMARK = "\u2713"


def _describe(thread: Thread) -> str:
    return f"{thread.display_subject} ({thread.display_party})"


def print_banner(out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(color("\nPipedrive email archiver\n", BOLD + BLUE, out), file=out)


def print_fetch_start(out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(color("Fetching all email threads from Pipedrive...\n", BLUE, out), file=out)


def print_page_fetched(offset: int, count: int, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(f"  {color(CHECKMARK, GREEN, out)} Fetched {count} threads (offset: {offset})", file=out)


def print_summary(
    threads: list[Thread],
    unarchived: list[Thread],
    archived: list[Thread],
    out: TextIO | None = None,
) -> None:
    """Print totals and a preview of the first few unarchived threads."""
    out = out or sys.stdout
    print(color("\nEmail thread summary:", CYAN, out), file=out)
    print(f"Total threads found: {len(threads)}", file=out)
    print(color(f"Unarchived: {len(unarchived)}", YELLOW, out), file=out)
    print(color(f"Already archived: {len(archived)}", DIM, out), file=out)

    if not unarchived:
        return

    print(color("\nSample of unarchived threads:", CYAN, out), file=out)
    for thread in unarchived[:SAMPLE_SIZE]:
        print(f"  - {_describe(thread)}", file=out)
    if len(unarchived) > SAMPLE_SIZE:
        print(color(f"  ... and {len(unarchived) - SAMPLE_SIZE} more", DIM, out), file=out)


def print_dry_run(threads: list[Thread], out: TextIO | None = None) -> None:
    """List every thread that a real run would archive."""
    out = out or sys.stdout
    print(color("\nDRY RUN MODE - No changes will be made\n", YELLOW, out), file=out)
    for thread in threads:
        print(color(f"Would archive: {_describe(thread)}", DIM, out), file=out)
    print(f"\n{len(threads)} thread(s) would be archived.", file=out)


def print_archive_failure(message: str, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(color(message, RED, out), file=out)


def print_notice(message: str, code: str = YELLOW, out: TextIO | None = None) -> None:
    """Print a one-line status notice (empty inbox, cancelled, ...)."""
    out = out or sys.stdout
    print(color(f"\n{message}", code, out), file=out)


def print_stats(stats: RunStats, out: TextIO | None = None) -> None:
    """Print final archive results. Failures line only when non-zero."""
    out = out or sys.stdout
    print(color("\nArchive Results:", GREEN, out), file=out)
    print(f"Total processed: {stats.total}", file=out)
    print(color(f"Successfully archived: {stats.archived}", GREEN, out), file=out)
    if stats.already_archived:
        print(color(f"Already archived (skipped): {stats.already_archived}", DIM, out), file=out)
    if stats.failed:
        print(color(f"Failed: {stats.failed}", RED, out), file=out)

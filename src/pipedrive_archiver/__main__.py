"""pipedrive-archiver entry point.

Startup sequence:
- Load .env into the process environment (existing env vars win)
- Load and validate settings (missing token -> exit 1, no requests sent)
- Build the client and BatchArchiver with the CLI-selected policies
- Run; a FetchError is fatal (exit 1), archive failures are not
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from pipedrive_archiver.clients.pipedrive import FetchError, PipedriveClient
from pipedrive_archiver.core.config import ArchiverSettings
from pipedrive_archiver.core.logging import configure_logging, get_logger
from pipedrive_archiver.output.colors import RED, color
from pipedrive_archiver.workflows.archiver import BatchArchiver
from pipedrive_archiver.workflows.policies import AutoConfirm, InteractiveConfirm


def _config_error_message(exc: ValidationError) -> str:
    """Turn a settings ValidationError into a one-line user message."""
    for error in exc.errors():
        if error["loc"] and error["loc"][0] == "api_token":
            return "Error: PIPEDRIVE_API_TOKEN not found in environment or .env file"
    return f"Configuration error: {exc}"


def main(dry_run: bool = False, assume_yes: bool = False) -> int:
    """Run one archive pass. Returns the process exit code."""
    load_dotenv(Path.cwd() / ".env")

    try:
        settings = ArchiverSettings()
    except ValidationError as exc:
        print(color(_config_error_message(exc), RED, sys.stderr), file=sys.stderr)
        return 1

    configure_logging(settings.logging.level)
    log = get_logger(component="main")

    confirmation = AutoConfirm() if assume_yes else InteractiveConfirm()

    with PipedriveClient(api_token=settings.api_token, base_url=settings.base_url) as client:
        archiver = BatchArchiver(
            client,
            settings,
            confirmation=confirmation,
            dry_run=dry_run,
        )
        try:
            archiver.run()
        except FetchError as exc:
            log.error("fetch_failed", error=str(exc))
            print(color(f"\nFatal error: {exc}", RED, sys.stderr), file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    from pipedrive_archiver.cli import cli

    cli()

"""BatchArchiver: fetch every inbox thread, confirm, then archive one by one."""

from __future__ import annotations

from pipedrive_archiver.clients.pipedrive import ArchiveError, PipedriveClient
from pipedrive_archiver.core.config import ArchiverSettings
from pipedrive_archiver.core.logging import get_logger
from pipedrive_archiver.core.models import PageResult, RunStats, Thread
from pipedrive_archiver.output import reporting
from pipedrive_archiver.output.colors import GREEN
from pipedrive_archiver.workflows.policies import (
    ConfirmationStrategy,
    FixedDelayRateLimiter,
    InteractiveConfirm,
    RateLimiter,
)


class BatchArchiver:
    """Orchestrates one archive run against the Pipedrive mailbox.

    Contains the run logic only -- HTTP details live in PipedriveClient.

    The run() method walks the lifecycle:
    1. Fetch every page of inbox threads into memory
    2. Split them into unarchived / already archived and print a summary
    3. Ask the confirmation strategy
    4. Archive each unarchived thread sequentially, pausing between requests
       (dry-run mode only lists them)
    5. Print final statistics

    A FetchError at any page propagates out of run() before any archive
    request is sent. Per-thread ArchiveErrors are counted and skipped.
    """

    def __init__(
        self,
        client: PipedriveClient,
        settings: ArchiverSettings,
        confirmation: ConfirmationStrategy | None = None,
        rate_limiter: RateLimiter | None = None,
        dry_run: bool = False,
    ) -> None:
        self._client = client
        self._settings = settings
        self._confirmation = confirmation or InteractiveConfirm()
        self._rate_limiter = rate_limiter or FixedDelayRateLimiter(
            settings.request_delay_seconds
        )
        self._dry_run = dry_run
        self.stats = RunStats()
        self._log = get_logger(component="archiver")

    # -- Fetching ---------------------------------------------------------

    def fetch_page(self, offset: int, limit: int | None = None) -> PageResult:
        """Fetch one page of threads from the configured folder."""
        limit = limit or self._settings.fetch.page_size
        page = self._client.list_mail_threads(
            start=offset, limit=limit, folder=self._settings.fetch.folder
        )
        self._log.debug(
            "threads_fetched",
            offset=offset,
            count=len(page.items),
            has_more=page.has_more,
        )
        reporting.print_page_fetched(offset, len(page.items))
        return page

    def fetch_all(self) -> list[Thread]:
        """Fetch every page, advancing the offset by the page size.

        Stops when the server reports no more items or a page comes back
        empty.
        """
        limit = self._settings.fetch.page_size
        threads: list[Thread] = []
        offset = 0

        while True:
            page = self.fetch_page(offset, limit)
            if not page.items:
                break
            threads.extend(page.items)
            if not page.has_more:
                break
            offset += limit

        return threads

    # -- Classification and confirmation ----------------------------------

    @staticmethod
    def classify(threads: list[Thread]) -> tuple[list[Thread], list[Thread]]:
        """Partition threads into (unarchived, archived) by archived_flag."""
        unarchived: list[Thread] = []
        archived: list[Thread] = []
        for thread in threads:
            (archived if thread.is_archived else unarchived).append(thread)
        return unarchived, archived

    def report_summary(self, threads: list[Thread]) -> list[Thread]:
        """Classify, print the human-readable summary, return the unarchived."""
        unarchived, archived = self.classify(threads)
        reporting.print_summary(threads, unarchived, archived)
        return unarchived

    def confirm(self, count: int) -> bool:
        return self._confirmation.ask_confirmation(count)

    # -- Archiving --------------------------------------------------------

    def archive_one(self, thread_id: int | str) -> bool:
        """Archive a single thread. Returns False instead of raising."""
        try:
            self._client.archive_thread(thread_id)
        except ArchiveError as exc:
            self._log.warning(
                "thread_archive_failed", thread_id=thread_id, error=exc.message
            )
            reporting.print_archive_failure(str(exc))
            return False
        self._log.debug("thread_archived", thread_id=thread_id)
        return True

    def archive_all(self, threads: list[Thread]) -> RunStats:
        """Archive threads sequentially, or only list them in dry-run mode."""
        if self._dry_run:
            reporting.print_dry_run(threads)
            return self.stats

        self.stats.total = len(threads)
        for thread in threads:
            if self.archive_one(thread.id):
                self.stats.archived += 1
            else:
                self.stats.failed += 1
            self._rate_limiter.wait()

        self._log.info("archive_complete", **self.stats.as_dict())
        return self.stats

    # -- Lifecycle --------------------------------------------------------

    def run(self) -> RunStats:
        """Execute one full run. Raises FetchError if listing fails."""
        reporting.print_banner()
        reporting.print_fetch_start()
        threads = self.fetch_all()

        if not threads:
            reporting.print_notice("No email threads found in your inbox.")
            return self.stats

        unarchived = self.report_summary(threads)
        if not unarchived:
            reporting.print_notice("All email threads are already archived!", GREEN)
            return self.stats

        if not self.confirm(len(unarchived)):
            reporting.print_notice("Archive cancelled by user.")
            self._log.info("archive_cancelled", candidates=len(unarchived))
            return self.stats

        self.stats.already_archived = len(threads) - len(unarchived)
        self.archive_all(unarchived)
        reporting.print_stats(self.stats)
        return self.stats

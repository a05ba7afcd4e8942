"""Pipedrive REST client: mail thread listing and archiving."""

from __future__ import annotations

import httpx

from pipedrive_archiver.core.models import PageResult

DEFAULT_BASE_URL = "https://api.pipedrive.com/api/v1"
DEFAULT_TIMEOUT = 30.0


class ArchiverError(Exception):
    """Base class for errors talking to Pipedrive."""


class FetchError(ArchiverError):
    """Listing mail threads failed. Always fatal to the run."""


class ArchiveError(ArchiverError):
    """Archiving a single thread failed. Recovered by the caller."""

    def __init__(self, thread_id: int | str, message: str) -> None:
        super().__init__(f"Failed to archive thread {thread_id}: {message}")
        self.thread_id = thread_id
        self.message = message


def _upstream_message(exc: httpx.HTTPError) -> str:
    """Prefer the API's own ``error`` field over httpx's generic text."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    return str(exc)


class PipedriveClient:
    """Thin Pipedrive v1 client over httpx.

    The API token is sent as the ``api_token`` query parameter on every
    request.

    Usage:
        with PipedriveClient(api_token="abc123") as client:
            page = client.list_mail_threads(start=0, limit=100)
            client.archive_thread(page.items[0].id)
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            params={"api_token": api_token},
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    def list_mail_threads(
        self, start: int = 0, limit: int = 100, folder: str = "inbox"
    ) -> PageResult:
        """Fetch one page of mail threads.

        Args:
            start: Pagination offset (non-negative).
            limit: Page size (positive).
            folder: Mailbox folder to list.

        Returns:
            PageResult with the page's threads and the more-items indicator.

        Raises:
            FetchError: On network failure, HTTP error status, or a body
                that is not a JSON object.
        """
        try:
            resp = self._http.get(
                "/mailbox/mailThreads",
                params={"start": start, "limit": limit, "folder": folder},
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise FetchError(_upstream_message(exc)) from exc
        except ValueError as exc:
            raise FetchError(f"Invalid JSON in mail thread listing: {exc}") from exc
        if not isinstance(body, dict):
            raise FetchError(f"Unexpected mail thread listing body: {body!r}")
        return PageResult.from_api(body)

    def archive_thread(self, thread_id: int | str) -> None:
        """Set archived_flag=1 on a mail thread.

        Network errors, HTTP error statuses and ``success: false`` responses
        are all reported the same way.

        Raises:
            ArchiveError: If the update was not acknowledged.
        """
        try:
            resp = self._http.put(
                f"/mailbox/mailThreads/{thread_id}",
                json={"archived_flag": 1},
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise ArchiveError(thread_id, _upstream_message(exc)) from exc
        except ValueError as exc:
            raise ArchiveError(thread_id, f"invalid JSON response: {exc}") from exc

        if not (isinstance(body, dict) and body.get("success")):
            error = body.get("error") if isinstance(body, dict) else None
            raise ArchiveError(thread_id, error or "update not acknowledged")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PipedriveClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

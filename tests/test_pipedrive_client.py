"""Tests for the Pipedrive REST client: listing, archiving, error mapping."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from pipedrive_archiver.clients.pipedrive import ArchiveError, FetchError, PipedriveClient

BASE = "https://api.pipedrive.com/api/v1"
LIST_URL = f"{BASE}/mailbox/mailThreads?api_token=tok-123&start=0&limit=100&folder=inbox"

THREADS_PAGE = {
    "success": True,
    "data": [
        {"id": 11, "subject": "Quote", "archived_flag": 0, "parties": {"to": [{"name": "Ann"}]}},
        {"id": 12, "subject": "Invoice", "archived_flag": 1},
    ],
    "additional_data": {"pagination": {"start": 0, "limit": 100, "more_items_in_collection": True}},
}


@pytest.fixture
def client() -> PipedriveClient:
    return PipedriveClient(api_token="tok-123")


class TestListMailThreads:
    """Tests for PipedriveClient.list_mail_threads()."""

    def test_parses_page(self, client: PipedriveClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=LIST_URL, json=THREADS_PAGE)

        page = client.list_mail_threads(start=0, limit=100)

        assert [t.id for t in page.items] == [11, 12]
        assert page.items[0].display_party == "Ann"
        assert page.items[1].is_archived
        assert page.has_more is True

    def test_sends_token_and_pagination_params(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(json={"data": [], "additional_data": None})

        client.list_mail_threads(start=200, limit=50, folder="archive")

        request = httpx_mock.get_request()
        assert request is not None
        assert request.method == "GET"
        assert request.url.path == "/api/v1/mailbox/mailThreads"
        assert request.url.params["api_token"] == "tok-123"
        assert request.url.params["start"] == "200"
        assert request.url.params["limit"] == "50"
        assert request.url.params["folder"] == "archive"

    def test_custom_domain(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(json={"data": []})
        client = PipedriveClient(api_token="tok", base_url="https://acme.pipedrive.com/api/v1")

        client.list_mail_threads()

        request = httpx_mock.get_request()
        assert request is not None
        assert request.url.host == "acme.pipedrive.com"

    def test_http_error_carries_upstream_message(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            status_code=401,
            json={"success": False, "error": "You need to be authorized to make this request."},
        )

        with pytest.raises(FetchError, match="You need to be authorized"):
            client.list_mail_threads()

    def test_http_error_without_json_body(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(status_code=502, text="Bad Gateway")

        with pytest.raises(FetchError, match="502"):
            client.list_mail_threads()

    def test_network_error(self, client: PipedriveClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))

        with pytest.raises(FetchError, match="Connection refused"):
            client.list_mail_threads()

    def test_invalid_json(self, client: PipedriveClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(text="<html>maintenance</html>")

        with pytest.raises(FetchError, match="Invalid JSON"):
            client.list_mail_threads()

    @pytest.mark.parametrize("body", ["null", "[]", "\"ok\""])
    def test_non_object_body(
        self, client: PipedriveClient, httpx_mock: HTTPXMock, body: str
    ) -> None:
        """A 2xx listing that is valid JSON but not an object is still a FetchError."""
        httpx_mock.add_response(text=body, headers={"Content-Type": "application/json"})

        with pytest.raises(FetchError, match="Unexpected mail thread listing body"):
            client.list_mail_threads()


class TestArchiveThread:
    """Tests for PipedriveClient.archive_thread()."""

    def test_success(self, client: PipedriveClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="PUT",
            url=f"{BASE}/mailbox/mailThreads/42?api_token=tok-123",
            json={"success": True, "data": {"id": 42, "archived_flag": 1}},
        )

        client.archive_thread(42)

    def test_sends_archived_flag_body(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(method="PUT", json={"success": True})

        client.archive_thread(42)

        request = httpx_mock.get_request()
        assert request is not None
        assert request.method == "PUT"
        assert request.url.path == "/api/v1/mailbox/mailThreads/42"
        assert request.url.params["api_token"] == "tok-123"
        assert json.loads(request.content) == {"archived_flag": 1}

    def test_unacknowledged_response(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(method="PUT", json={"success": False})

        with pytest.raises(ArchiveError, match="not acknowledged") as exc_info:
            client.archive_thread(42)
        assert exc_info.value.thread_id == 42

    def test_api_rejection_message(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            method="PUT", status_code=404, json={"success": False, "error": "Mail thread not found"}
        )

        with pytest.raises(ArchiveError, match="Mail thread not found"):
            client.archive_thread(42)

    def test_network_error(self, client: PipedriveClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), method="PUT")

        with pytest.raises(ArchiveError, match="timed out"):
            client.archive_thread(42)

    def test_archive_error_is_not_fetch_error(
        self, client: PipedriveClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(method="PUT", status_code=500, json={})

        with pytest.raises(ArchiveError) as exc_info:
            client.archive_thread(1)
        assert not isinstance(exc_info.value, FetchError)


def test_context_manager_closes(httpx_mock: HTTPXMock) -> None:
    with PipedriveClient(api_token="tok") as client:
        pass
    with pytest.raises(RuntimeError):
        client.list_mail_threads()

"""Wire and run-accounting types: Thread, PageResult, RunStats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Thread:
    """A single email conversation in the Pipedrive mailbox."""

    id: int | str
    subject: str | None = None
    parties: dict[str, Any] | None = None
    archived_flag: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Thread:
        """Build a Thread from a mailThreads list item, ignoring unknown keys."""
        return cls(
            id=data["id"],
            subject=data.get("subject"),
            parties=data.get("parties"),
            archived_flag=data.get("archived_flag") or 0,
        )

    @property
    def is_archived(self) -> bool:
        return bool(self.archived_flag)

    @property
    def display_subject(self) -> str:
        return self.subject or "No subject"

    @property
    def display_party(self) -> str:
        """First recipient name, else first sender name, else 'Unknown'."""
        parties = self.parties or {}
        for role in ("to", "from"):
            people = parties.get(role) or []
            if people and people[0].get("name"):
                return people[0]["name"]
        return "Unknown"


@dataclass
class PageResult:
    """One page of mail threads plus the pagination indicator."""

    items: list[Thread]
    has_more: bool

    @classmethod
    def from_api(cls, body: dict[str, Any]) -> PageResult:
        """Parse a mailThreads list envelope.

        ``data`` may be null on an empty inbox; a missing pagination block
        means there are no further pages.
        """
        items = [Thread.from_api(item) for item in body.get("data") or []]
        pagination = (body.get("additional_data") or {}).get("pagination") or {}
        return cls(items=items, has_more=bool(pagination.get("more_items_in_collection")))


@dataclass
class RunStats:
    """Counters for one archive run. Never persisted."""

    total: int = 0
    archived: int = 0
    already_archived: int = 0
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "archived": self.archived,
            "already_archived": self.already_archived,
            "failed": self.failed,
        }

"""Pluggable confirmation and pacing policies for the batch archiver."""

from __future__ import annotations

import time
from typing import Callable, Protocol

import click


class ConfirmationStrategy(Protocol):
    """Decides whether a batch of archive requests may proceed."""

    def ask_confirmation(self, count: int) -> bool: ...


class RateLimiter(Protocol):
    """Called between consecutive archive requests."""

    def wait(self) -> None: ...


class AutoConfirm:
    """Non-interactive strategy used with --yes: always proceeds."""

    def ask_confirmation(self, count: int) -> bool:
        return True


class InteractiveConfirm:
    """Blocking yes/no prompt on the terminal, defaulting to no."""

    def __init__(self, prompt: Callable[..., bool] = click.confirm) -> None:
        self._prompt = prompt

    def ask_confirmation(self, count: int) -> bool:
        return bool(
            self._prompt(
                f"Are you sure you want to archive {count} email thread(s)?",
                default=False,
            )
        )


class FixedDelayRateLimiter:
    """Sleep a constant delay after every request. No adaptive backoff."""

    def __init__(
        self, delay_seconds: float, sleep: Callable[[float], None] | None = None
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.delay_seconds:
            (self._sleep or time.sleep)(self.delay_seconds)


class NoDelayRateLimiter:
    """Rate limiter that never waits."""

    def wait(self) -> None:
        return None

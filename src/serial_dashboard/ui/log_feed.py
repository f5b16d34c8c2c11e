"""Console tab feed: the most recent log lines, newest at the bottom."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

Severity = Literal["INFO", "WARN", "ERROR", "CRITICAL"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class FeedEntry:
    """One Console-tab row; `repeats` counts back-to-back duplicates."""

    first_seen: datetime
    severity: Severity
    message: str
    repeats: int = 1
    last_seen: datetime | None = None

    def __post_init__(self) -> None:
        if self.last_seen is None:
            self.last_seen = self.first_seen

    @property
    def label(self) -> str:
        if self.repeats == 1:
            return self.message
        return f"{self.message} (x{self.repeats}, last {self.last_seen:%H:%M:%SZ})"


class LogFeed:
    """Fixed-size feed of log lines.

    A line identical in severity and message to the newest row, arriving
    within `repeat_window` seconds of it, bumps that row's `repeats`
    instead of scrolling the feed.
    """

    def __init__(
        self,
        *,
        max_entries: int = 200,
        repeat_window: float = 30.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.repeat_window = repeat_window
        self._clock = clock
        self._entries: deque[FeedEntry] = deque(maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, severity: Severity, message: str) -> FeedEntry:
        now = self._clock()
        if self._entries:
            newest = self._entries[-1]
            if (newest.severity, newest.message) == (severity, message):
                assert newest.last_seen is not None
                if (now - newest.last_seen).total_seconds() <= self.repeat_window:
                    newest.repeats += 1
                    newest.last_seen = now
                    return newest
        entry = FeedEntry(first_seen=now, severity=severity, message=message)
        self._entries.append(entry)
        return entry

    def tail(self, rows: int) -> list[FeedEntry]:
        """Newest `rows` entries, oldest first, for a panel `rows` lines tall."""
        if rows <= 0:
            return []
        return list(self._entries)[-rows:]

    def snapshot(self) -> list[FeedEntry]:
        return list(self._entries)

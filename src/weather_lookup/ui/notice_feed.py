"""Bounded notice feed that collapses repeated failures."""

from __future__ import annotations

from datetime import UTC, datetime

from .models import Notice, Severity


class NoticeFeed:
    """Keep recent notices; a repeat within the window bumps the count.

    Typing quickly while offline would otherwise produce one identical
    "Error fetching location data!" line per keystroke. Repeats are matched
    by ``dedupe_key``, and notices stay indexed after they have been shown
    so later keystrokes still collapse into them.
    """

    def __init__(
        self,
        *,
        max_notices: int = 20,
        dedupe_window_seconds: int = 30,
    ) -> None:
        self.max_notices = max_notices
        self.dedupe_window_seconds = dedupe_window_seconds
        self._notices: list[Notice] = []
        self._dedupe_index: dict[str, Notice] = {}

    def notify(self, message: str) -> None:
        self.add(severity="ERROR", message=message, dedupe_key=f"ERROR:{message}")

    def add(
        self,
        *,
        severity: Severity,
        message: str,
        dedupe_key: str | None = None,
        ts: datetime | None = None,
    ) -> Notice:
        now = ts or datetime.now(UTC)
        now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)

        should_dedupe = severity != "INFO" and dedupe_key is not None
        if should_dedupe:
            existing = self._dedupe_index.get(dedupe_key)
            if existing and existing.last_seen is not None:
                age_seconds = (now - existing.last_seen).total_seconds()
                if age_seconds <= self.dedupe_window_seconds:
                    existing.count += 1
                    existing.last_seen = now
                    return existing

        notice = Notice(
            ts=now,
            severity=severity,
            message=message,
            dedupe_key=dedupe_key if should_dedupe else None,
        )
        self._notices.append(notice)
        if notice.dedupe_key is not None:
            self._dedupe_index[notice.dedupe_key] = notice

        while len(self._notices) > self.max_notices:
            dropped = self._notices.pop(0)
            if dropped.dedupe_key and self._dedupe_index.get(dropped.dedupe_key) is dropped:
                del self._dedupe_index[dropped.dedupe_key]
        return notice

    def snapshot(self, *, newest_first: bool = False) -> list[Notice]:
        """Return a copy of tracked notices in display order."""
        items = list(self._notices)
        if newest_first:
            items.reverse()
        return items

    def take_unseen(self) -> list[Notice]:
        """Return notices not handed out before and mark them seen.

        A repeat that collapsed into an already seen notice only raises its
        count; it is not handed out again.
        """
        fresh = [notice for notice in self._notices if not notice.seen]
        for notice in fresh:
            notice.seen = True
        return fresh

    def __len__(self) -> int:
        return len(self._notices)

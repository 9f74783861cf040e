"""
Grace period coordination for detected words.

A detected word is held as pending for a configurable duration so the
presentation layer can animate it. Until the timer elapses the word can be
reset (timer restarted) or removed (timer cancelled). Each entry's expiry
callback runs at most once and never after the entry was reset or removed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from ..board.models import WordMatch
from .scheduler import Scheduler, TimerHandle


log = logging.getLogger("letterdrop.grace")

DEFAULT_GRACE_PERIOD_MS = 1000

ExpiryCallback = Callable[[str], None]


class AnimationNotifier(Protocol):
    """Presentation hooks; fire-and-forget."""

    def start_pending_presentation(self, key: str, match: WordMatch) -> None: ...

    def reset_pending_presentation(self, key: str) -> None: ...

    def clear_pending_presentation(self, key: str) -> None: ...


class NullNotifier:
    """Notifier that ignores every call."""

    def start_pending_presentation(self, key: str, match: WordMatch) -> None:
        pass

    def reset_pending_presentation(self, key: str) -> None:
        pass

    def clear_pending_presentation(self, key: str) -> None:
        pass


@dataclass
class PendingMatchEntry:
    key: str
    match: WordMatch
    handle: TimerHandle
    on_expired: Optional[ExpiryCallback]
    started_at: float


@dataclass(frozen=True)
class PendingWordSnapshot:
    """Read-only view of a pending entry."""
    key: str
    match: WordMatch
    time_remaining_ms: float


class GracePeriodCoordinator:
    """
    Tracks pending words and their grace timers.

    All mutation of the pending set goes through add_pending_word,
    reset_grace_period, remove_pending_word and clear_all.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        notifier: Optional[AnimationNotifier] = None,
        grace_period_ms: float = DEFAULT_GRACE_PERIOD_MS,
    ):
        self.scheduler = scheduler
        self.notifier = notifier or NullNotifier()
        self.grace_period_ms = grace_period_ms
        self._pending: Dict[str, PendingMatchEntry] = {}

    def generate_key(self, match: WordMatch) -> str:
        """Key a match by word, direction and the row/col of its first cell."""
        return f"{match.word}|{match.direction}|{match.start_row}|{match.start_col}"

    def add_pending_word(self, match: WordMatch, on_expired: Optional[ExpiryCallback]) -> str:
        """
        Start the grace period for a match.

        If the key is already pending its timer is restarted instead.

        Returns:
            The match key
        """
        key = self.generate_key(match)
        if key in self._pending:
            self.reset_grace_period(key, on_expired)
            return key

        self._pending[key] = PendingMatchEntry(
            key=key,
            match=match,
            handle=self._schedule(key),
            on_expired=on_expired,
            started_at=self.scheduler.now(),
        )
        log.debug("Pending %s for %sms", key, self.grace_period_ms)
        self._notify("start_pending_presentation", key, match)
        return key

    def reset_grace_period(self, key: str, on_expired: Optional[ExpiryCallback] = None) -> None:
        """
        Restart a pending word's timer with a fresh full duration.

        The new callback replaces the old one; None means nothing runs on
        expiry. Unknown keys are ignored.
        """
        entry = self._pending.get(key)
        if entry is None:
            return

        entry.handle.cancel()
        entry.handle = self._schedule(key)
        entry.on_expired = on_expired
        entry.started_at = self.scheduler.now()
        log.debug("Reset %s", key)
        self._notify("reset_pending_presentation", key)

    def remove_pending_word(self, key: str) -> None:
        """Cancel and forget a pending word without running its callback."""
        entry = self._pending.pop(key, None)
        if entry is None:
            return
        entry.handle.cancel()
        log.debug("Removed %s", key)
        self._notify("clear_pending_presentation", key)

    def clear_all(self) -> None:
        """Cancel every timer and empty the pending set."""
        entries = list(self._pending.values())
        self._pending.clear()
        for entry in entries:
            entry.handle.cancel()
        for entry in entries:
            self._notify("clear_pending_presentation", entry.key)
        if entries:
            log.debug("Cleared %d pending words", len(entries))

    def get_all_pending_words(self) -> List[PendingWordSnapshot]:
        now = self.scheduler.now()
        return [
            PendingWordSnapshot(
                key=entry.key,
                match=entry.match,
                time_remaining_ms=max(0.0, self.grace_period_ms - (now - entry.started_at)),
            )
            for entry in self._pending.values()
        ]

    def has_pending(self, key: str) -> bool:
        return key in self._pending

    def get_intersecting_keys(self, positions: Iterable[int]) -> List[str]:
        """Keys of pending words sharing at least one cell with `positions`."""
        cells = set(positions)
        return [
            key for key, entry in self._pending.items()
            if cells.intersection(entry.match.positions)
        ]

    def __len__(self) -> int:
        return len(self._pending)

    def _schedule(self, key: str) -> TimerHandle:
        # fire() only acts while its handle is still the entry's live one
        handle_ref: List[TimerHandle] = []

        def fire() -> None:
            entry = self._pending.get(key)
            if entry is None or not handle_ref or entry.handle is not handle_ref[0]:
                return
            del self._pending[key]
            log.debug("Expired %s", key)
            if entry.on_expired is not None:
                entry.on_expired(key)

        handle = self.scheduler.schedule(self.grace_period_ms, fire)
        handle_ref.append(handle)
        return handle

    def _notify(self, method: str, *args) -> None:
        try:
            getattr(self.notifier, method)(*args)
        except Exception:
            log.warning("Animation notifier %s failed", method, exc_info=True)

# SPDX-License-Identifier: MIT

import logging
from collections.abc import Callable
from copy import deepcopy
from typing import Optional

import pendulum

from daybook.model.day_entry import DayEntry, Mood
from daybook.service.answer_window import is_answerable
from daybook.service.ledger import EntryLedger
from daybook.service.lifecycle import apply_response, find_entry_index, reconcile
from daybook.service.stats import EntryStats, compute_stats
from daybook.service.streak import current_streak
from daybook.time import local_day, now_utc

logger = logging.getLogger(__name__)


class JournalService:
    """Read paths over the entry collection and the user's daily response."""

    def __init__(
        self,
        ledger: EntryLedger,
        timezone: str = "local",
        clock: Callable[[], pendulum.DateTime] = now_utc,
    ) -> None:
        self.ledger = ledger
        self.timezone = timezone
        self.clock = clock

    def today(self) -> pendulum.Date:
        return local_day(self.clock(), self.timezone)

    def today_entry(self) -> Optional[DayEntry]:
        entries = self.ledger.read(self.clock())
        index = find_entry_index(entries, self.today())
        if index is None:
            return None
        return entries[index]

    def history(self) -> list[DayEntry]:
        """All entries, newest day first."""
        entries = self.ledger.read(self.clock())
        return sorted(entries, key=lambda entry: entry["day"], reverse=True)

    def remaining(self) -> pendulum.Duration:
        """Time left in today's answer window; zero when it is not open."""
        entry = self.today_entry()
        now = self.clock()
        if entry is None or entry["status"] != "pending" or not is_answerable(entry, now):
            return pendulum.duration()
        return entry["expires_at"] - now

    def submit_response(
        self,
        text: str,
        mood: Optional[Mood] = None,
        score: Optional[int] = None,
        emoji_variant: Optional[str] = None,
        emoji_title: Optional[str] = None,
    ) -> DayEntry:
        """
        Answer today's entry.

        Raises LookupError when today has no entry, PolicyViolation when the
        window is closed or the entry is no longer pending, and
        EntryValidationError on a bad payload. On any error nothing is saved.
        """
        with self.ledger.writing() as entries:
            now = self.clock()
            today = local_day(now, self.timezone)
            index = find_entry_index(entries, today)
            if index is None:
                raise LookupError(f"no entry for {today.to_date_string()}")

            entry = reconcile(entries[index], now)
            if entry["status"] != entries[index]["status"]:
                # Persist the lazy transition even though the response is rejected
                entries[index] = entry
                self.ledger.store.save(entries)
                self.ledger.notify_changed()

            answered = apply_response(
                entry, now, text, mood, score, emoji_variant, emoji_title
            )
            entries[index] = answered
            logger.info("answered entry for %s", today)
        return deepcopy(answered)

    def statistics(self) -> EntryStats:
        entries = self.ledger.read(self.clock())
        return compute_stats(entries, self.today())

    def streak(self) -> int:
        entries = self.ledger.read(self.clock())
        return current_streak(entries, self.today())

# SPDX-License-Identifier: MIT

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from copy import deepcopy

import pendulum

from daybook.model.day_entry import DayEntry
from daybook.repository.day_entry import EntryStore
from daybook.repository.storage import StorageError
from daybook.service.lifecycle import reconcile_all

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class EntryLedger:
    """
    The single serialization point for the entry collection.

    Every load -> mutate -> save sequence, and every read that may mark an
    entry missed, runs while holding `lock`. The lock is reentrant so a
    caller can hold it across several ledger calls, as a planning pass does.
    """

    def __init__(self, store: EntryStore) -> None:
        self.store = store
        self.lock = threading.RLock()
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._listeners.remove(listener)

    def notify_changed(self) -> None:
        """Call every listener; a failing listener is logged and skipped."""
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("data-changed listener %r failed", listener)

    def read(self, now: pendulum.DateTime) -> list[DayEntry]:
        """
        Load the collection with lazy missed detection applied.

        When reconciliation changed any entry the collection is saved before
        it is returned, so two consecutive reads always agree.
        """
        with self.lock:
            entries, changed = reconcile_all(self.store.load(), now)
            if changed:
                logger.info("marking expired pending entries as missed")
                self.store.save(entries)
                self.notify_changed()
            return deepcopy(entries)

    @contextmanager
    def writing(self, tolerate_load_failure: bool = False) -> Iterator[list[DayEntry]]:
        """
        Yield the mutable collection and save it when the block exits cleanly.

        With `tolerate_load_failure` a StorageError on load yields an empty
        collection instead of propagating. Save failures always propagate.
        """
        with self.lock:
            try:
                entries = self.store.load()
            except StorageError:
                if not tolerate_load_failure:
                    raise
                logger.warning(
                    "could not load entries, continuing with an empty collection",
                    exc_info=True,
                )
                entries = []
            yield entries
            entries.sort(key=lambda entry: entry["day"])
            self.store.save(entries)
            self.notify_changed()

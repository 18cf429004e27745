from __future__ import annotations

import random
from copy import deepcopy
from typing import Optional

import pendulum
import pytest

from daybook.model.alert import PendingAlert
from daybook.model.day_entry import DayEntry, EntryStatus
from daybook.model.schedule_settings import ScheduleSettings
from daybook.model.scheduler_state import SchedulerState
from daybook.repository.day_entry import EntryStore
from daybook.repository.storage import StorageError
from daybook.service.journal import JournalService
from daybook.service.ledger import EntryLedger
from daybook.service.notifier import Notifier, SchedulingError
from daybook.service.scheduling import SchedulingEngine
from daybook.template.day_entry import get_day_entry_template
from daybook.template.scheduler_state import get_scheduler_state_template

# A Monday
TODAY = pendulum.date(2025, 10, 6)


class InMemoryEntryStore(EntryStore):
    def __init__(self, entries: Optional[list[DayEntry]] = None) -> None:
        self.entries: list[DayEntry] = deepcopy(entries) if entries else []
        self.state: SchedulerState = get_scheduler_state_template()
        self.fail_load = False
        self.fail_save = False
        self.save_count = 0

    def load(self) -> list[DayEntry]:
        if self.fail_load:
            raise StorageError("load failed")
        return deepcopy(self.entries)

    def save(self, entries: list[DayEntry]) -> None:
        if self.fail_save:
            raise StorageError("save failed")
        self.save_count += 1
        self.entries = deepcopy(entries)

    def load_scheduler_state(self) -> SchedulerState:
        return deepcopy(self.state)

    def save_scheduler_state(self, state: SchedulerState) -> None:
        self.state = deepcopy(state)


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.pending: dict[str, pendulum.DateTime] = {}
        self.calls: list[tuple[str, pendulum.DateTime]] = []
        self.failing_ids: set[str] = set()

    def schedule(self, alert_id: str, fire_at: pendulum.DateTime) -> None:
        self.calls.append((alert_id, fire_at))
        if alert_id in self.failing_ids:
            raise SchedulingError(f"cannot arm {alert_id}")
        self.pending.pop(alert_id, None)
        self.pending[alert_id] = fire_at

    def cancel(self, alert_id: str) -> None:
        self.pending.pop(alert_id, None)

    def list_pending(self) -> list[PendingAlert]:
        return [
            {"id": alert_id, "fire_at": fire_at}
            for alert_id, fire_at in self.pending.items()
        ]


class Clock:
    def __init__(self, now: pendulum.DateTime) -> None:
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now


def make_entry(
    day: pendulum.Date,
    hour: int = 12,
    status: EntryStatus = "pending",
    score: Optional[int] = None,
    allow_early_answer: bool = False,
) -> DayEntry:
    scheduled_at = pendulum.datetime(day.year, day.month, day.day, hour, tz="UTC")
    entry = get_day_entry_template(
        day,
        scheduled_at,
        scheduled_at.add(minutes=10),
        status=status,
        allow_early_answer=allow_early_answer,
    )
    if status == "answered":
        entry["text"] = f"entry for {day.to_date_string()}"
        entry["score"] = score
    return entry


@pytest.fixture
def settings() -> ScheduleSettings:
    return {
        "start_hour": 10,
        "end_hour": 22,
        "window_duration": pendulum.duration(minutes=10),
        "horizon_days": 14,
        "one_shot_lead": pendulum.duration(seconds=60),
        "timezone": "UTC",
    }


@pytest.fixture
def clock() -> Clock:
    return Clock(pendulum.datetime(2025, 10, 6, 6, 0, tz="UTC"))


@pytest.fixture
def store() -> InMemoryEntryStore:
    return InMemoryEntryStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def ledger(store: InMemoryEntryStore) -> EntryLedger:
    return EntryLedger(store)


@pytest.fixture
def engine(
    ledger: EntryLedger,
    notifier: RecordingNotifier,
    settings: ScheduleSettings,
    clock: Clock,
) -> SchedulingEngine:
    return SchedulingEngine(
        ledger, notifier, settings, rng=random.Random(1234), clock=clock
    )


@pytest.fixture
def journal(ledger: EntryLedger, clock: Clock) -> JournalService:
    return JournalService(ledger, timezone="UTC", clock=clock)

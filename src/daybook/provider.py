# SPDX-License-Identifier: MIT

from functools import cache

from daybook.model.schedule_settings import ScheduleSettings
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.repository.day_entry import DAY_ENTRY_REPO
from daybook.service.journal import JournalService
from daybook.service.ledger import EntryLedger
from daybook.service.notifier import LocalNotifier
from daybook.service.scheduling import SchedulingEngine
from daybook.template.schedule_settings import schedule_settings_from_config


@cache
def get_schedule_settings() -> ScheduleSettings:
    return schedule_settings_from_config(CONFIGURATION_REPO.get_config())


@cache
def get_ledger() -> EntryLedger:
    return EntryLedger(DAY_ENTRY_REPO)


@cache
def get_notifier() -> LocalNotifier:
    return LocalNotifier()


@cache
def get_scheduling_engine() -> SchedulingEngine:
    return SchedulingEngine(get_ledger(), get_notifier(), get_schedule_settings())


@cache
def get_journal() -> JournalService:
    return JournalService(get_ledger(), timezone=get_schedule_settings()["timezone"])

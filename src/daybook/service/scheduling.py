# SPDX-License-Identifier: MIT

import logging
import random
from collections.abc import Callable
from copy import deepcopy
from typing import Optional

import pendulum

from daybook.model.day_entry import DayEntry
from daybook.model.schedule_settings import ScheduleSettings
from daybook.service.answer_window import expiry_for, is_answerable, random_fire_time
from daybook.service.ledger import EntryLedger
from daybook.service.lifecycle import find_entry_index, replan, synthesize_missed
from daybook.service.notifier import Notifier, SchedulingError, alert_id_for_day
from daybook.template.day_entry import get_day_entry_template
from daybook.time import day_key, local_day, now_utc

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    Plans one prompt window per calendar day and reconstructs missed history.

    The engine is the only writer of the scheduler anchor state and the only
    component that creates or re-plans entries. All of its work happens while
    holding the ledger lock.
    """

    def __init__(
        self,
        ledger: EntryLedger,
        notifier: Notifier,
        settings: ScheduleSettings,
        rng: Optional[random.Random] = None,
        clock: Callable[[], pendulum.DateTime] = now_utc,
    ) -> None:
        self.ledger = ledger
        self.notifier = notifier
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock

    def on_became_active(self) -> bool:
        """Host trigger, fired every time the application resumes."""
        return self.plan_for_next(self.settings["horizon_days"])

    def plan_for_next(self, horizon_days: Optional[int] = None) -> bool:
        """
        Backfill history and plan the next `horizon_days` days, once per day.

        Returns False when a pass already completed today. A StorageError
        while saving propagates and leaves the throttle unmarked so the next
        trigger retries the whole pass.
        """
        if horizon_days is None:
            horizon_days = self.settings["horizon_days"]

        with self.ledger.lock:
            now = self.clock()
            today = local_day(now, self.settings["timezone"])
            store = self.ledger.store

            state = store.load_scheduler_state()
            if state["last_plan_day_key"] == day_key(today):
                logger.debug("already planned for %s", today)
                return False

            with self.ledger.writing(tolerate_load_failure=True) as entries:
                if state["first_plan_date"] is None:
                    state["first_plan_date"] = today
                    store.save_scheduler_state(state)
                    logger.info("first planning pass, backfill starts at %s", today)

                backfilled = self.backfill(entries, state["first_plan_date"], today, now)
                if backfilled > 0:
                    logger.info("backfilled %d entries", backfilled)

                for offset in range(horizon_days):
                    self.__plan_day(entries, today.add(days=offset), today, now)

            state["last_plan_day_key"] = day_key(today)
            state["last_plan_timestamp"] = now
            store.save_scheduler_state(state)
            return True

    def backfill(
        self,
        entries: list[DayEntry],
        first_plan_date: pendulum.Date,
        today: pendulum.Date,
        now: pendulum.DateTime,
    ) -> int:
        """
        Close out every day in [first_plan_date, today).

        Expired pending entries become missed and days without any entry get
        a synthesized missed entry. Terminal entries are left alone. Mutates
        `entries` in place and returns how many entries changed or were
        created; running it again over the same range changes nothing.
        """
        changed = 0
        day = first_plan_date
        while day < today:
            index = find_entry_index(entries, day)
            if index is None:
                entries.append(synthesize_missed(day, self.settings))
                changed += 1
            elif entries[index]["status"] == "pending" and entries[index]["expires_at"] < now:
                entries[index]["status"] = "missed"
                changed += 1
            day = day.add(days=1)
        entries.sort(key=lambda entry: entry["day"])
        return changed

    def plan_one_shot_soon(
        self, lead_time: Optional[pendulum.Duration] = None
    ) -> DayEntry:
        """
        Give today an always-answerable entry whose window opens shortly.

        Replaces today's entry whatever its status. Bypasses the throttle,
        backfill and the planning horizon.
        """
        if lead_time is None:
            lead_time = self.settings["one_shot_lead"]

        with self.ledger.lock:
            now = self.clock()
            fire = now + lead_time
            return self.__replace_entry(
                local_day(now, self.settings["timezone"]), fire, allow_early_answer=True
            )

    def plan_at(self, moment: pendulum.DateTime) -> DayEntry:
        """Create or replace the entry of the day containing `moment`."""
        with self.ledger.lock:
            now = self.clock()
            day = local_day(moment, self.settings["timezone"])
            if day < local_day(now, self.settings["timezone"]):
                raise ValueError(f"cannot plan {day.to_date_string()}, it is in the past")
            return self.__replace_entry(day, moment.in_tz("UTC"), allow_early_answer=False)

    def __plan_day(
        self,
        entries: list[DayEntry],
        day: pendulum.Date,
        today: pendulum.Date,
        now: pendulum.DateTime,
    ) -> None:
        fire = random_fire_time(day, self.settings, self.rng)
        if fire is None:
            logger.warning("daily window cannot fit an answer window, skipping %s", day)
            return

        # A prompt drawn in the past would fire immediately
        if day == today and fire <= now:
            logger.debug("drawn time %s already passed, skipping today", fire)
            return

        expires = expiry_for(fire, self.settings)

        index = find_entry_index(entries, day)
        if index is None:
            entries.append(get_day_entry_template(day, fire, expires))
        else:
            entry = entries[index]
            if day < today or entry["status"] != "pending":
                return
            window_open = now <= entry["expires_at"] and is_answerable(entry, now)
            if day == today and window_open:
                # The user can still answer this window
                return
            replan(entry, fire, expires)

        try:
            self.notifier.schedule(alert_id_for_day(day), fire)
        except SchedulingError:
            logger.warning("could not arm alert for %s", day, exc_info=True)

    def __replace_entry(
        self, day: pendulum.Date, fire: pendulum.DateTime, allow_early_answer: bool
    ) -> DayEntry:
        expires = expiry_for(fire, self.settings)

        with self.ledger.writing() as entries:
            index = find_entry_index(entries, day)
            if index is None:
                entry = get_day_entry_template(
                    day, fire, expires, allow_early_answer=allow_early_answer
                )
                entries.append(entry)
            else:
                entry = entries[index]
                replan(entry, fire, expires, allow_early_answer=allow_early_answer)
            planned = deepcopy(entry)

        try:
            self.notifier.schedule(alert_id_for_day(day), fire)
        except SchedulingError:
            logger.warning("could not arm alert for %s", day, exc_info=True)

        return planned

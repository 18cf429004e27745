# SPDX-License-Identifier: MIT

import logging
from abc import ABC, abstractmethod
from typing import Optional

import pendulum

from daybook.model.alert import PendingAlert
from daybook.repository.alert import ALERT_REPO, AlertRepository
from daybook.repository.storage import StorageError
from daybook.time import day_key

logger = logging.getLogger(__name__)

DAILY_ALERT_PREFIX = "mood-"
TEST_ALERT_PREFIX = "test-"
ADMIN_ALERT_PREFIX = "admin-"
APP_ALERT_PREFIXES = (DAILY_ALERT_PREFIX, TEST_ALERT_PREFIX, ADMIN_ALERT_PREFIX)


class SchedulingError(Exception):
    """Raised when an alert cannot be armed."""

    pass


def alert_id_for_day(day: pendulum.Date) -> str:
    """Deterministic alert id of a day, e.g. 'mood-20251006'."""
    return f"{DAILY_ALERT_PREFIX}{day_key(day)}"


class Notifier(ABC):
    """One-shot, calendar-time alerts; at most one pending alert per id."""

    @abstractmethod
    def schedule(self, alert_id: str, fire_at: pendulum.DateTime) -> None:
        """Arm an alert, first cancelling any pending alert with the same id."""

    @abstractmethod
    def cancel(self, alert_id: str) -> None: ...

    @abstractmethod
    def list_pending(self) -> list[PendingAlert]: ...


class LocalNotifier(Notifier):
    """Keeps pending alerts in the local alert book."""

    def __init__(self, repository: Optional[AlertRepository] = None) -> None:
        self._repository = repository if repository is not None else ALERT_REPO

    def schedule(self, alert_id: str, fire_at: pendulum.DateTime) -> None:
        try:
            alerts = [
                alert for alert in self._repository.load() if alert["id"] != alert_id
            ]
            alerts.append({"id": alert_id, "fire_at": fire_at.in_tz("UTC")})
            alerts.sort(key=lambda alert: alert["fire_at"])
            self._repository.save(alerts)
        except StorageError as e:
            raise SchedulingError(f"could not arm alert {alert_id}: {e}") from e
        logger.debug("armed alert %s at %s", alert_id, fire_at)

    def cancel(self, alert_id: str) -> None:
        alerts = self._repository.load()
        remaining = [alert for alert in alerts if alert["id"] != alert_id]
        if len(remaining) != len(alerts):
            self._repository.save(remaining)

    def list_pending(self) -> list[PendingAlert]:
        return self._repository.load()

    def cancel_with_prefix(self, prefix: str) -> int:
        alerts = self._repository.load()
        remaining = [alert for alert in alerts if not alert["id"].startswith(prefix)]
        removed = len(alerts) - len(remaining)
        if removed > 0:
            self._repository.save(remaining)
        return removed

    def purge_app_pending(self) -> int:
        """Cancel every alert this application created."""
        return sum(self.cancel_with_prefix(prefix) for prefix in APP_ALERT_PREFIXES)

    def pop_due(self, now: pendulum.DateTime) -> list[PendingAlert]:
        """Remove and return the alerts whose fire time has come."""
        alerts = self._repository.load()
        due = [alert for alert in alerts if alert["fire_at"] <= now]
        if len(due) > 0:
            self._repository.save(
                [alert for alert in alerts if alert["fire_at"] > now]
            )
        return due

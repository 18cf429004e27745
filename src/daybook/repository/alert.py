# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from daybook import configuration, time
from daybook.model.alert import PendingAlert
from daybook.repository.storage import StorageError, read_yaml, write_yaml_atomic


class AlertRepository:
    """The local alert book: one record per pending one-shot alert."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return configuration.DATA_ALERTS_PATH

    def load(self) -> list[PendingAlert]:
        raw_data = read_yaml(self.path)
        if raw_data is None:
            return []
        if not isinstance(raw_data, dict) or not isinstance(
            raw_data.get("alerts"), list
        ):
            raise StorageError(f"malformed alerts file: {self.path}")
        try:
            return [
                self.__convert_alert_for_deserialization(raw_alert)
                for raw_alert in raw_data["alerts"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"malformed alert in {self.path}: {e}") from e

    def save(self, alerts: list[PendingAlert]) -> None:
        serializable_alerts = [
            self.__convert_alert_for_serialization(deepcopy(alert)) for alert in alerts
        ]
        write_yaml_atomic(self.path, {"alerts": serializable_alerts})

    def __convert_alert_for_serialization(self, alert: PendingAlert) -> dict[str, Any]:
        serializable_alert = cast(dict[str, Any], alert)
        serializable_alert["fire_at"] = time.datetime_to_iso_str(
            serializable_alert["fire_at"]
        )
        return serializable_alert

    def __convert_alert_for_deserialization(
        self, alert: dict[str, Any]
    ) -> PendingAlert:
        return {"id": alert["id"], "fire_at": time.datetime_from_str(alert["fire_at"])}


ALERT_REPO = AlertRepository()

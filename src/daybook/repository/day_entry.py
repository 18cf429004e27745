# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from daybook import configuration, time
from daybook.model.day_entry import DayEntry
from daybook.model.scheduler_state import SchedulerState
from daybook.repository.storage import StorageError, read_yaml, write_yaml_atomic
from daybook.template.scheduler_state import get_scheduler_state_template


class EntryStore(ABC):
    """
    Durable home of the entry collection and the scheduler anchor state.

    `save` replaces the whole collection: entries absent from the saved list
    are considered deleted. Every method raises StorageError on I/O failure.
    """

    @abstractmethod
    def load(self) -> list[DayEntry]: ...

    @abstractmethod
    def save(self, entries: list[DayEntry]) -> None: ...

    @abstractmethod
    def load_scheduler_state(self) -> SchedulerState: ...

    @abstractmethod
    def save_scheduler_state(self, state: SchedulerState) -> None: ...


class DayEntryRepository(EntryStore):
    def __init__(
        self,
        entries_path: Optional[Path] = None,
        scheduler_state_path: Optional[Path] = None,
    ) -> None:
        self._entries_path = entries_path
        self._scheduler_state_path = scheduler_state_path

    @property
    def entries_path(self) -> Path:
        if self._entries_path is not None:
            return self._entries_path
        return configuration.DATA_ENTRIES_PATH

    @property
    def scheduler_state_path(self) -> Path:
        if self._scheduler_state_path is not None:
            return self._scheduler_state_path
        return configuration.DATA_SCHEDULER_STATE_PATH

    def load(self) -> list[DayEntry]:
        raw_data = read_yaml(self.entries_path)
        if raw_data is None:
            return []
        if not isinstance(raw_data, dict) or not isinstance(
            raw_data.get("entries"), list
        ):
            raise StorageError(f"malformed entries file: {self.entries_path}")
        try:
            return [
                self.__convert_entry_for_deserialization(raw_entry)
                for raw_entry in raw_data["entries"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"malformed entry in {self.entries_path}: {e}") from e

    def save(self, entries: list[DayEntry]) -> None:
        serializable_entries = [
            self.__convert_entry_for_serialization(deepcopy(entry))
            for entry in entries
        ]
        write_yaml_atomic(self.entries_path, {"entries": serializable_entries})

    def load_scheduler_state(self) -> SchedulerState:
        raw_state = read_yaml(self.scheduler_state_path)
        if raw_state is None:
            return get_scheduler_state_template()
        if not isinstance(raw_state, dict):
            raise StorageError(
                f"malformed scheduler state file: {self.scheduler_state_path}"
            )
        try:
            return self.__convert_state_for_deserialization(raw_state)
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"malformed scheduler state in {self.scheduler_state_path}: {e}"
            ) from e

    def save_scheduler_state(self, state: SchedulerState) -> None:
        write_yaml_atomic(
            self.scheduler_state_path,
            self.__convert_state_for_serialization(deepcopy(state)),
        )

    def __convert_entry_for_serialization(self, entry: DayEntry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["day"] = time.date_to_str(serializable_entry["day"])
        serializable_entry["scheduled_at"] = time.datetime_to_iso_str(
            serializable_entry["scheduled_at"]
        )
        serializable_entry["expires_at"] = time.datetime_to_iso_str(
            serializable_entry["expires_at"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> DayEntry:
        deserializable_entry = entry
        deserializable_entry["day"] = time.date_from_str(deserializable_entry["day"])
        deserializable_entry["scheduled_at"] = time.datetime_from_str(
            deserializable_entry["scheduled_at"]
        )
        deserializable_entry["expires_at"] = time.datetime_from_str(
            deserializable_entry["expires_at"]
        )
        # Older files may lack the optional response fields
        deserializable_entry.setdefault("status", "pending")
        deserializable_entry.setdefault("allow_early_answer", False)
        for optional_field in ("text", "mood", "score", "emoji_variant", "emoji_title"):
            deserializable_entry.setdefault(optional_field, None)
        return cast(DayEntry, deserializable_entry)

    def __convert_state_for_serialization(
        self, state: SchedulerState
    ) -> dict[str, Any]:
        serializable_state = cast(dict[str, Any], state)
        serializable_state["last_plan_timestamp"] = time.datetime_to_iso_str_optional(
            serializable_state["last_plan_timestamp"]
        )
        serializable_state["first_plan_date"] = time.date_to_str_optional(
            serializable_state["first_plan_date"]
        )
        return serializable_state

    def __convert_state_for_deserialization(
        self, state: dict[str, Any]
    ) -> SchedulerState:
        deserializable_state = get_scheduler_state_template()
        deserializable_state["last_plan_day_key"] = state.get("last_plan_day_key")
        deserializable_state["last_plan_timestamp"] = time.datetime_from_str_optional(
            state.get("last_plan_timestamp")
        )
        deserializable_state["first_plan_date"] = time.date_from_str_optional(
            state.get("first_plan_date")
        )
        return deserializable_state


DAY_ENTRY_REPO = DayEntryRepository()

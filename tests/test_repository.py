from __future__ import annotations

import pendulum
import pytest

from conftest import TODAY, make_entry
from daybook.repository.day_entry import DayEntryRepository
from daybook.repository.storage import StorageError


@pytest.fixture
def repository(tmp_path) -> DayEntryRepository:
    return DayEntryRepository(
        entries_path=tmp_path / "entries.yaml",
        scheduler_state_path=tmp_path / "scheduler_state.yaml",
    )


def test_missing_files_load_as_empty(repository):
    assert repository.load() == []

    state = repository.load_scheduler_state()
    assert state["last_plan_day_key"] is None
    assert state["last_plan_timestamp"] is None
    assert state["first_plan_date"] is None


def test_entries_survive_a_round_trip(repository):
    answered = make_entry(TODAY.subtract(days=1), status="answered", score=9)
    answered["mood"] = "happy"
    answered["emoji_variant"] = "😊"
    answered["emoji_title"] = "Happy"
    entries = [answered, make_entry(TODAY, allow_early_answer=True)]

    repository.save(entries)
    loaded = repository.load()

    assert loaded == entries
    assert loaded[0]["day"] == TODAY.subtract(days=1)
    assert isinstance(loaded[1]["scheduled_at"], pendulum.DateTime)


def test_save_does_not_modify_its_argument(repository):
    entries = [make_entry(TODAY)]

    repository.save(entries)

    assert entries[0]["day"] == TODAY
    assert isinstance(entries[0]["expires_at"], pendulum.DateTime)


def test_save_replaces_the_whole_collection(repository):
    repository.save([make_entry(TODAY.subtract(days=1)), make_entry(TODAY)])
    repository.save([make_entry(TODAY)])

    assert [entry["day"] for entry in repository.load()] == [TODAY]


def test_save_leaves_no_temporary_files(repository, tmp_path):
    repository.save([make_entry(TODAY)])
    repository.save([make_entry(TODAY)])

    assert sorted(path.name for path in tmp_path.iterdir()) == ["entries.yaml"]


def test_scheduler_state_round_trip(repository):
    state = repository.load_scheduler_state()
    state["last_plan_day_key"] = "20251006"
    state["last_plan_timestamp"] = pendulum.datetime(2025, 10, 6, 6, 30, tz="UTC")
    state["first_plan_date"] = TODAY.subtract(days=10)

    repository.save_scheduler_state(state)

    assert repository.load_scheduler_state() == state


def test_missing_optional_fields_are_defaulted(repository):
    repository.entries_path.write_text(
        "entries:\n"
        "- id: abc\n"
        "  day: '2025-10-06'\n"
        "  scheduled_at: '2025-10-06T12:00:00+00:00'\n"
        "  expires_at: '2025-10-06T12:10:00+00:00'\n"
    )

    [entry] = repository.load()

    assert entry["status"] == "pending"
    assert entry["allow_early_answer"] is False
    assert entry["text"] is None
    assert entry["score"] is None


@pytest.mark.parametrize(
    "content",
    [
        "entries: [unclosed\n",
        "- just a list\n",
        "entries:\n- id: abc\n",
    ],
)
def test_corrupt_entries_file_raises(repository, content):
    repository.entries_path.write_text(content)

    with pytest.raises(StorageError):
        repository.load()


def test_corrupt_scheduler_state_raises(repository):
    repository.scheduler_state_path.write_text("first_plan_date: not-a-date\n")

    with pytest.raises(StorageError):
        repository.load_scheduler_state()


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    repository = DayEntryRepository(
        entries_path=blocker / "entries.yaml",
        scheduler_state_path=blocker / "scheduler_state.yaml",
    )

    with pytest.raises(StorageError):
        repository.save([make_entry(TODAY)])

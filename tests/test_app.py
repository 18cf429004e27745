from __future__ import annotations

import pytest
from typer.testing import CliRunner

from daybook.repository.alert import AlertRepository
from daybook.repository.storage import StorageError
from daybook.service.journal import JournalService
from daybook.service.notifier import LocalNotifier
from daybook.terminal import app as app_module

runner = CliRunner()


@pytest.fixture
def unreadable_journal(monkeypatch, tmp_path, ledger, engine, store, settings, clock):
    store.fail_load = True
    journal = JournalService(ledger, timezone="UTC", clock=clock)
    notifier = LocalNotifier(AlertRepository(tmp_path / "alerts.yaml"))

    monkeypatch.setattr(app_module, "get_journal", lambda: journal)
    monkeypatch.setattr(app_module, "get_scheduling_engine", lambda: engine)
    monkeypatch.setattr(app_module, "get_notifier", lambda: notifier)
    monkeypatch.setattr(app_module, "get_schedule_settings", lambda: settings)
    return journal


@pytest.mark.parametrize(
    "args",
    [["active"], ["today"], ["t"], ["history"], ["stats"], ["answer", "hello"]],
)
def test_storage_failure_exits_with_message(unreadable_journal, args):
    result = runner.invoke(app_module.app, ["--no-header", *args])

    assert result.exit_code == 1
    assert "Could not" in result.output
    assert not isinstance(result.exception, StorageError)


def test_unreadable_alert_book_exits_with_message(monkeypatch, tmp_path, settings):
    alerts_path = tmp_path / "alerts.yaml"
    alerts_path.write_text("alerts: [unclosed\n")
    notifier = LocalNotifier(AlertRepository(alerts_path))
    monkeypatch.setattr(app_module, "get_notifier", lambda: notifier)
    monkeypatch.setattr(app_module, "get_schedule_settings", lambda: settings)

    result = runner.invoke(app_module.app, ["--no-header", "alerts"])

    assert result.exit_code == 1
    assert "Could not read saved data" in result.output

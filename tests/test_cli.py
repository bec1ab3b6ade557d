# SPDX-License-Identifier: MIT

from pathlib import Path

import pendulum
from typer.testing import CliRunner

from gotrack.repository.configuration import CONFIGURATION_REPO
from gotrack.repository.entry import ENTRY_REPO
from gotrack.service import notify
from gotrack.terminal.app import app

runner = CliRunner()


class FakeResponse:
    status_code = 200
    text = "ok"
    ok = True


def test_log_and_last():
    result = runner.invoke(
        app, ["log", "-t", "2024-01-01 08:00", "-ty", "Hard sausage", "-n", "early"]
    )
    assert result.exit_code == 0, result.output
    assert "Hard sausage" in result.output

    result = runner.invoke(app, ["last"])
    assert result.exit_code == 0
    assert "early" in result.output


def test_log_alias_records_duration():
    runner.invoke(app, ["l", "-t", "2024-01-01 08:00"])
    result = runner.invoke(app, ["l", "-t", "2024-01-02 20:00"])
    assert result.exit_code == 0, result.output
    assert "36.00" in result.output


def test_log_rejects_unknown_location():
    result = runner.invoke(app, ["log", "-l", "Office"])
    assert result.exit_code == 1
    assert "Invalid location" in result.output
    assert ENTRY_REPO.get_all_entries() == []


def test_last_without_entries():
    result = runner.invoke(app, ["last"])
    assert result.exit_code == 0
    assert "No entries yet" in result.output


def test_list_show_and_delete():
    runner.invoke(app, ["log", "-t", "yesterday", "-sp", "Slow"])
    runner.invoke(app, ["log", "-t", "now"])

    result = runner.invoke(app, ["ls"])
    assert result.exit_code == 0, result.output
    assert "2 entries" in result.output

    result = runner.invoke(app, ["show", "2"])
    assert result.exit_code == 0, result.output
    assert "Slow" in result.output

    result = runner.invoke(app, ["delete", "1-2", "--yes"])
    assert result.exit_code == 0, result.output
    assert ENTRY_REPO.get_all_entries() == []


def test_show_unknown_id():
    result = runner.invoke(app, ["show", "42"])
    assert result.exit_code != 0


def test_stats():
    runner.invoke(app, ["log", "-t", "yesterday"])
    runner.invoke(app, ["log", "-t", "now", "-a", "Monstrous"])
    result = runner.invoke(app, ["st"])
    assert result.exit_code == 0, result.output
    assert "Monstrous" in result.output


def test_export(tmp_path: Path):
    runner.invoke(app, ["log", "-t", "now", "-n", "exported"])
    output = tmp_path / "out.csv"
    result = runner.invoke(app, ["export", "-o", str(output)])
    assert result.exit_code == 0, result.output
    lines = output.read_text().splitlines()
    assert lines[0] == '"timestamp","location","type","speed","amount","notes"'
    assert lines[1].endswith('"exported"')


def test_export_without_entries(tmp_path: Path):
    result = runner.invoke(app, ["x", "-o", str(tmp_path / "out.csv")])
    assert result.exit_code == 1
    assert "No data to export" in result.output


def test_reminder_check_with_override(monkeypatch):
    sent = []

    def fake_post(url, json=None, timeout=None):
        sent.append(json)
        return FakeResponse()

    monkeypatch.setattr(notify.requests, "post", fake_post)
    CONFIGURATION_REPO.update_config("webhook_url", "https://hooks.example.com/remind")

    result = runner.invoke(app, ["reminder", "check", "--hours", "96.5"])
    assert result.exit_code == 0, result.output
    assert "reminder sent" in result.output
    assert sent == [{"hours": 96}]


def test_reminder_check_dry_run():
    last = pendulum.now("UTC").subtract(hours=72, minutes=20)
    runner.invoke(app, ["log", "-t", last.in_tz("local").format("YYYY-MM-DD HH:mm:ss")])
    result = runner.invoke(app, ["r", "c", "-n"])
    assert result.exit_code == 0, result.output
    assert "threshold crossed" in result.output


def test_reminder_check_without_entries():
    result = runner.invoke(app, ["reminder", "check", "--dry-run"])
    assert result.exit_code == 0
    assert "no entries found" in result.output


def test_config_set_and_show():
    result = runner.invoke(app, ["config", "set", "reminder_thresholds", "[48, 72]"])
    assert result.exit_code == 0, result.output
    assert CONFIGURATION_REPO.get_config()["reminder_thresholds"] == [48, 72]

    runner.invoke(app, ["config", "set", "app_password", "hunter2"])
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "48, 72" in result.output
    assert "hunter2" not in result.output


def test_config_set_rejects_bad_values():
    result = runner.invoke(app, ["config", "set", "reminder_thresholds", "[]"])
    assert result.exit_code != 0
    result = runner.invoke(app, ["config", "set", "no_such_setting", "1"])
    assert result.exit_code != 0

"""End-to-end tests for the ``--updater`` command line flag."""

from __future__ import annotations

import json
import logging

import pytest

from armory import cli
from armory.config import Settings
from armory.repository import DocumentClient


@pytest.fixture
def settings(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    configured = Settings(
        _env_file=None,
        store_url=f"sqlite:///{tmp_path}/store/{{database}}.db",
        data_dir=data_dir,
        logfile_path=None,
    )
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    return configured


def _write(settings: Settings, name: str, payload) -> None:
    (settings.data_dir / name).write_text(json.dumps(payload), encoding="utf-8")


def test_updater_reloads_and_backs_up(settings):
    with DocumentClient(settings.store_url) as client:
        client.get_database("arma-api").get_collection("data.vanilla").insert_one(
            {"classname": "old", "type": "Maps", "mod": "vanilla"}
        )
    _write(settings, "items.json", [{"classname": "new", "type": "Maps", "mod": "vanilla"}])

    assert cli.main(["--updater"]) == 0

    with DocumentClient(settings.store_url) as client:
        production = client.get_database("arma-api").get_collection("data.vanilla")
        backup = client.get_database("arma-api-backup").get_collection("data.vanilla")
        assert [doc["classname"] for doc in production.find()] == ["new"]
        assert [doc["classname"] for doc in backup.find()] == ["old"]
        assert [doc["classname"] for doc in production.find_text("new")] == ["new"]


def test_failed_update_still_exits_cleanly(settings, caplog):
    _write(settings, "items.json", [{"classname": "bad", "type": "", "mod": "vanilla"}])

    with caplog.at_level(logging.INFO, logger="armory"):
        assert cli.main(["--updater"]) == 0

    errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert any("failed to backup" in record.getMessage() for record in errors)


def test_successful_update_logs_info(settings, caplog):
    _write(settings, "items.json", [{"classname": "ok", "type": "Maps", "mod": "ace"}])

    with caplog.at_level(logging.INFO, logger="armory"):
        assert cli.main(["--updater"]) == 0

    assert any("successfully backed up" in record.getMessage() for record in caplog.records)
    assert not [record for record in caplog.records if record.levelno >= logging.ERROR]


def test_missing_data_directory_is_logged(settings, caplog):
    settings.data_dir.rmdir()

    assert cli.main(["--updater"]) == 0
    assert any("could not start" in record.getMessage() for record in caplog.records)


def test_unreachable_store_aborts(settings, monkeypatch):
    broken = settings.model_copy(update={"store_url": "postgresql://localhost/{database}"})
    monkeypatch.setattr(cli, "get_settings", lambda: broken)

    assert cli.main(["--updater"]) == 1

# SPDX-License-Identifier: MIT
# tests/test_terminal.py

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from typer.testing import CliRunner

from bugbite import configuration
from bugbite.engine.context import EngineContext
from bugbite.repository.configuration import CONFIGURATION_REPO
from bugbite.repository.document import YamlDocumentRepository
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.terminal import session
from bugbite.terminal.app import app
from bugbite.view.header import set_show_header

from .fakes import ManualTimer

runner = CliRunner()


@pytest.fixture()
def engine(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[EngineContext]:
    """
    Point every path at a temporary directory and preload the session engine.
    """
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    configuration_data_path = configuration.DATA_PATH
    configuration.set_data_path(tmp_path / "data")
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(ID_MAP_REPO, "_id_map", None)
    set_show_header(False)
    monkeypatch.setattr(ID_MAP_REPO, "clear_on_view", True)

    engine = EngineContext(
        YamlDocumentRepository(configuration.DATA_DOCUMENT_PATH), timer=ManualTimer()
    )
    engine.load()
    monkeypatch.setattr(session, "_engine", engine)

    yield engine

    configuration.set_data_path(configuration_data_path)


def _invoke(*args: str):
    result = runner.invoke(app, list(args))
    assert result.exit_code == 0, result.output
    return result


def test_task_lifecycle(engine: EngineContext) -> None:
    _invoke("task", "add", "Write report", "-d", "hard")
    listed = _invoke("task", "list")
    assert "Write report" in listed.output

    _invoke("task", "unlock", "1")
    smashed = _invoke("t", "x", "1")

    assert "+3 coins" in smashed.output
    assert engine.document["coins"] == 3
    assert configuration.DATA_DOCUMENT_PATH.is_file()


def test_smash_locked_task_explains(engine: EngineContext) -> None:
    _invoke("task", "add", "Locked")
    _invoke("task", "list")

    result = _invoke("task", "smash", "1")

    assert "not unlocked" in result.output
    assert engine.document["coins"] == 0


def test_unknown_difficulty_is_rejected(engine: EngineContext) -> None:
    result = runner.invoke(app, ["task", "add", "Dishes", "-d", "legendary"])

    assert result.exit_code == 2
    assert engine.document["tasks"] == []


def test_unknown_id_is_rejected(engine: EngineContext) -> None:
    result = runner.invoke(app, ["task", "smash", "9"])

    assert result.exit_code == 2


def test_habit_lifecycle(engine: EngineContext) -> None:
    _invoke("habit", "add", "Floss", "--interval", "daily")
    listed = _invoke("habit", "list")
    assert "locked" in listed.output

    _invoke("habit", "done", "1")
    smashed = _invoke("h", "x", "1")

    assert "+1 coins" in smashed.output
    habit = engine.document["habits"][0]
    assert habit["active_bug_state"] is None
    assert habit["next_due_date"] == engine.today().add(days=1)


def test_undo_and_restore(engine: EngineContext) -> None:
    _invoke("task", "add", "Oops")
    _invoke("task", "list")
    _invoke("task", "unlock", "1")

    undone = _invoke("undo")
    assert "undid unlock" in undone.output
    assert engine.document["tasks"][0]["status"] == "locked"

    _invoke("task", "delete", "1")
    assert engine.document["tasks"] == []
    _invoke("restore")
    assert engine.document["tasks"][0]["title"] == "Oops"


def test_nothing_to_undo_exits_nonzero(engine: EngineContext) -> None:
    result = runner.invoke(app, ["undo"])

    assert result.exit_code == 1
    assert "nothing to undo" in result.output


def test_poison_without_coins(engine: EngineContext) -> None:
    result = runner.invoke(app, ["shop", "poison", "small"])

    assert result.exit_code == 1
    assert "costs 5 coins" in result.output


def test_status_and_stats(engine: EngineContext) -> None:
    _invoke("task", "add", "Report", "-d", "medium")
    _invoke("task", "list")
    _invoke("task", "unlock", "1")
    _invoke("task", "smash", "1")

    _invoke("status")
    _invoke("stats")
    _invoke("stats", "--all")
    logged = _invoke("log")

    assert "Report" in logged.output


def test_sound_toggle(engine: EngineContext) -> None:
    result = _invoke("sound")

    assert "sound off" in result.output
    assert engine.document["settings"]["sound_on"] is False


def test_reset_needs_confirmation(engine: EngineContext) -> None:
    _invoke("task", "add", "Keep me")

    declined = runner.invoke(app, ["reset"], input="n\n")
    assert declined.exit_code == 0
    assert len(engine.document["tasks"]) == 1

    _invoke("reset", "--yes")
    assert engine.document["tasks"] == []


def test_config_set(engine: EngineContext) -> None:
    result = _invoke("config", "set", "--undo-window-seconds", "30")

    assert "30" in result.output
    assert CONFIGURATION_REPO.get_config()["undo_window_seconds"] == 30
    assert configuration.APP_CONFIG_PATH.is_file()


def test_listing_renumbers_ids_by_default(engine: EngineContext) -> None:
    _invoke("task", "add", "Dishes")
    ID_MAP_REPO.associate_id("tasks", "forgotten-task")

    _invoke("task", "list")

    assert ID_MAP_REPO.get_real_id("tasks", 1) == engine.document["tasks"][0]["id"]
    assert ID_MAP_REPO.get_real_id("tasks", 2) is None


def test_listing_keeps_ids_when_clearing_is_off(
    engine: EngineContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(ID_MAP_REPO, "clear_on_view", False)
    _invoke("task", "add", "Dishes")
    ID_MAP_REPO.associate_id("tasks", "kept-task")

    _invoke("task", "list")

    assert ID_MAP_REPO.get_real_id("tasks", 2) == "kept-task"


def test_clear_ids_option_turns_clearing_back_on(
    engine: EngineContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(ID_MAP_REPO, "clear_on_view", False)
    _invoke("task", "add", "Dishes")
    ID_MAP_REPO.associate_id("tasks", "forgotten-task")

    _invoke("--clear-ids", "task", "list")

    assert ID_MAP_REPO.get_real_id("tasks", 2) is None

# SPDX-License-Identifier: MIT
# tests/test_document_repository.py

from __future__ import annotations

import json
from pathlib import Path

import pendulum

from bugbite.engine import entity_store, scheduler
from bugbite.engine.context import EngineContext
from bugbite.migrate import registry
from bugbite.repository.document import YamlDocumentRepository

from .fakes import FakeClock, ManualTimer


def test_missing_file_loads_nothing(tmp_path: Path) -> None:
    assert YamlDocumentRepository(tmp_path / "bugbite.yaml").load() is None


def test_save_then_load_keeps_the_document(
    tmp_path: Path, clock: FakeClock, timer: ManualTimer
) -> None:
    path = tmp_path / "data" / "bugbite.yaml"
    ctx = EngineContext(YamlDocumentRepository(path), clock=clock, timer=timer)
    ctx.load()

    entity_store.add_task(ctx, "Write report", "hard", note="due friday", checklist=["a"])
    task_id = ctx.document["tasks"][0]["id"]
    entity_store.unlock_task(ctx, task_id)
    entity_store.smash_task(ctx, task_id)
    habit_id = entity_store.add_habit(ctx, "Floss", "easy")["habits"][0]["id"]
    scheduler.spawn_due_habits(ctx)
    scheduler.complete_habit_occurrence(ctx, habit_id)
    entity_store.add_task(ctx, "Scratch", "easy")
    entity_store.delete_task(ctx, ctx.document["tasks"][0]["id"])
    scheduler.complete_habit_occurrence(ctx, habit_id)

    loaded = YamlDocumentRepository(path).load()

    assert loaded == ctx.document
    assert not path.with_name("bugbite.yaml.tmp").exists()


def test_dates_are_written_as_strings(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "bugbite.yaml"
    ctx = EngineContext(YamlDocumentRepository(path), clock=clock, timer=ManualTimer())
    ctx.load()
    entity_store.add_habit(ctx, "Floss", "easy")

    text = path.read_text()

    assert "next_due_date: '2024-01-31'" in text
    assert f"version: {registry.get_latest_version()}" in text


def test_corrupt_file_is_set_aside(tmp_path: Path) -> None:
    path = tmp_path / "bugbite.yaml"
    path.write_text("tasks: [unclosed\n")

    assert YamlDocumentRepository(path).load() is None
    assert not path.exists()
    assert path.with_name("bugbite.yaml.corrupt").read_text() == "tasks: [unclosed\n"


def test_non_mapping_file_is_set_aside(tmp_path: Path) -> None:
    path = tmp_path / "bugbite.yaml"
    path.write_text("- just\n- a list\n")

    assert YamlDocumentRepository(path).load() is None
    assert path.with_name("bugbite.yaml.corrupt").exists()


def test_context_starts_fresh_from_corrupt_file(
    tmp_path: Path, clock: FakeClock
) -> None:
    path = tmp_path / "bugbite.yaml"
    path.write_text("{{{")
    ctx = EngineContext(YamlDocumentRepository(path), clock=clock, timer=ManualTimer())

    document = ctx.load()

    assert document["tasks"] == []
    assert document["coins"] == 0


def test_legacy_json_blob_is_migrated(tmp_path: Path) -> None:
    path = tmp_path / "bugbite.yaml"
    legacy = {
        "todos": [
            {
                "id": "t1",
                "title": "Old chore",
                "difficulty": "medium",
                "status": "unlocked",
                "createdAtISO": "2023-05-01T10:00:00+00:00",
            }
        ],
        "recurrent": [
            {
                "id": "h1",
                "title": "Run",
                "difficulty": "hard",
                "cadence": "biweekly",
                "nextDueDate": "2023-05-02",
                "timesPerDay": 2,
                "remainingToday": 0,
                "lastSpawnDate": None,
                "activeBugState": None,
                "createdAtISO": "2023-04-20T08:30:00+00:00",
            }
        ],
        "coins": 7,
        "infestation": 12,
        "monthlyProgress": {"2023-04": 5},
        "settings": {"soundOn": False},
    }
    path.write_text(json.dumps(legacy))

    document = YamlDocumentRepository(path).load()

    assert document is not None
    assert document["version"] == registry.get_latest_version()
    task = document["tasks"][0]
    assert task["created_at"] == pendulum.datetime(2023, 5, 1, 10, 0, 0, tz="UTC")
    assert task["note"] is None
    assert task["entity_type"] == "task"
    habit = document["habits"][0]
    assert habit["interval_type"] == "weekly"
    assert habit["next_due_date"] == pendulum.date(2023, 5, 2)
    assert habit["times_per_day"] == 2
    assert document["infestation"] == 10
    assert document["monthly_stats"]["2023-04"] == {
        "smashed_count": 5,
        "missed_count": 0,
        "smashed_items": [],
        "missed_items": [],
    }
    assert document["settings"]["sound_on"] is False
    assert document["undo"] is None


def test_persisted_store_envelope_is_migrated(tmp_path: Path) -> None:
    path = tmp_path / "bugbite.yaml"
    envelope = {
        "state": {
            "todos": [
                {
                    "id": "t1",
                    "title": "Old chore",
                    "difficulty": "hard",
                    "status": "locked",
                    "createdAtISO": "2024-01-05T08:00:00+00:00",
                }
            ],
            "coins": 7,
            "infestation": 2,
            "monthlyProgress": {"2024-01": 3},
        },
        "version": 0,
    }
    path.write_text(json.dumps(envelope))

    document = YamlDocumentRepository(path).load()

    assert document is not None
    assert "state" not in document
    assert len(document["tasks"]) == 1
    assert document["tasks"][0]["title"] == "Old chore"
    assert document["coins"] == 7
    assert document["infestation"] == 2
    assert document["monthly_stats"]["2024-01"]["smashed_count"] == 3

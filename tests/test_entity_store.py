# SPDX-License-Identifier: MIT
# tests/test_entity_store.py

from __future__ import annotations

import pendulum

from bugbite.engine import entity_store, scheduler
from bugbite.engine.context import EngineContext
from bugbite.model.entity_type import EntityType


def _only_task(ctx: EngineContext):
    tasks = ctx.document["tasks"]
    assert len(tasks) == 1
    return tasks[0]


def test_add_task_creates_locked_task_at_head(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "first", "easy")
    document = entity_store.add_task(ctx, "  Write report  ", "hard")

    assert [task["title"] for task in document["tasks"]] == ["Write report", "first"]
    task = document["tasks"][0]
    assert task["status"] == "locked"
    assert task["difficulty"] == "hard"
    assert task["entity_type"] == EntityType.TASK
    assert task["created_at"] == ctx.now()


def test_add_task_rejects_blank_title_and_unknown_difficulty(ctx: EngineContext) -> None:
    before = ctx.document

    assert entity_store.add_task(ctx, "   ", "easy") == before
    assert entity_store.add_task(ctx, "Dishes", "legendary") == before


def test_add_task_with_count_numbers_copies(ctx: EngineContext) -> None:
    document = entity_store.add_task(
        ctx, "Pushups", "medium", count=3, checklist=["warm up", "", "stretch"]
    )

    assert [task["title"] for task in document["tasks"]] == [
        "Pushups (1/3)",
        "Pushups (2/3)",
        "Pushups (3/3)",
    ]
    item_ids = [
        item["id"] for task in document["tasks"] for item in task["checklist"] or []
    ]
    assert len(item_ids) == 6
    assert len(set(item_ids)) == 6
    assert [item["text"] for item in document["tasks"][0]["checklist"] or []] == [
        "warm up",
        "stretch",
    ]


def test_add_task_clamps_count(ctx: EngineContext) -> None:
    assert len(entity_store.add_task(ctx, "Laps", "easy", count=25)["tasks"]) == 10
    assert len(entity_store.add_task(ctx, "Once", "easy", count=0)["tasks"]) == 11
    assert ctx.document["tasks"][0]["title"] == "Once"


def test_unlock_then_smash_credits_reward(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Write report", "hard")
    task_id = _only_task(ctx)["id"]

    entity_store.unlock_task(ctx, task_id)
    document = entity_store.smash_task(ctx, task_id)

    assert document["tasks"][0]["status"] == "smashed"
    assert document["coins"] == 3
    assert document["monthly_stats"]["2024-01"]["smashed_count"] == 1
    assert document["smash_log"][-1]["id"] == task_id


def test_smash_requires_unlocked_task(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Locked", "easy")
    task_id = _only_task(ctx)["id"]
    before = ctx.document

    assert entity_store.smash_task(ctx, task_id) == before


def test_repeated_smash_is_idempotent(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Once", "medium")
    task_id = _only_task(ctx)["id"]
    entity_store.unlock_task(ctx, task_id)
    first = entity_store.smash_task(ctx, task_id)

    second = entity_store.smash_task(ctx, task_id)

    assert second == first
    assert second["coins"] == 2


def test_unlock_twice_is_a_noop(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Once", "easy")
    task_id = _only_task(ctx)["id"]
    first = entity_store.unlock_task(ctx, task_id)

    assert entity_store.unlock_task(ctx, task_id) == first


def test_fail_task_raises_infestation_and_keeps_task(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Taxes", "hard")
    task_id = _only_task(ctx)["id"]

    document = entity_store.fail_item(ctx, EntityType.TASK, task_id)

    assert document["infestation"] == 2
    assert document["tasks"][0]["status"] == "locked"
    stats = document["monthly_stats"]["2024-01"]
    assert stats["missed_count"] == 1
    assert stats["missed_items"][0]["title"] == "Taxes"


def test_fail_smashed_task_is_a_noop(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Done already", "easy")
    task_id = _only_task(ctx)["id"]
    entity_store.unlock_task(ctx, task_id)
    smashed = entity_store.smash_task(ctx, task_id)

    assert entity_store.fail_item(ctx, EntityType.TASK, task_id) == smashed


def test_unknown_ids_are_noops(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Real", "easy")
    before = ctx.document

    assert entity_store.unlock_task(ctx, "missing") == before
    assert entity_store.smash_task(ctx, "missing") == before
    assert entity_store.delete_task(ctx, "missing") == before
    assert entity_store.fail_item(ctx, EntityType.HABIT, "missing") == before
    assert entity_store.update_task(ctx, "missing", title="x") == before


def test_update_task_fields(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Draft", "easy", note="old", checklist=["a"])
    task_id = _only_task(ctx)["id"]

    document = entity_store.update_task(
        ctx, task_id, title=" Final ", difficulty="boss", checklist=["b", "c"]
    )
    task = document["tasks"][0]
    assert task["title"] == "Final"
    assert task["difficulty"] == "boss"
    assert task["note"] == "old"
    assert [item["text"] for item in task["checklist"] or []] == ["b", "c"]

    document = entity_store.update_task(
        ctx, task_id, difficulty="nope", remove_note=True, remove_checklist=True
    )
    task = document["tasks"][0]
    assert task["difficulty"] == "boss"
    assert task["note"] is None
    assert task["checklist"] is None


def test_delete_task_fills_recently_deleted(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Gone", "easy")
    task_id = _only_task(ctx)["id"]

    document = entity_store.delete_task(ctx, task_id)

    assert document["tasks"] == []
    assert document["recently_deleted"] is not None
    assert document["recently_deleted"]["entity"]["id"] == task_id
    assert document["recently_deleted"]["entity_type"] == EntityType.TASK


def test_toggle_checklist_item(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Shop", "easy", checklist=["milk", "eggs"])
    task = _only_task(ctx)
    item_id = (task["checklist"] or [])[1]["id"]

    document = entity_store.toggle_checklist_item(
        ctx, EntityType.TASK, task["id"], item_id
    )
    assert [item["done"] for item in document["tasks"][0]["checklist"] or []] == [
        False,
        True,
    ]

    document = entity_store.toggle_checklist_item(
        ctx, EntityType.TASK, task["id"], item_id
    )
    assert (document["tasks"][0]["checklist"] or [])[1]["done"] is False


def test_add_habit_defaults(ctx: EngineContext) -> None:
    document = entity_store.add_habit(ctx, "Floss", "easy")

    habit = document["habits"][0]
    assert habit["interval_type"] == "daily"
    assert habit["times_per_day"] == 1
    assert habit["next_due_date"] == ctx.today()
    assert habit["active_bug_state"] is None
    assert habit["remaining_today"] == 0


def test_add_habit_rejects_unknown_interval(ctx: EngineContext) -> None:
    before = ctx.document
    assert entity_store.add_habit(ctx, "Run", "easy", interval_type="biweekly") == before


def test_add_habit_clamps_times_per_day(ctx: EngineContext) -> None:
    document = entity_store.add_habit(ctx, "Water", "easy", times_per_day=40)
    assert document["habits"][0]["times_per_day"] == 10


def test_list_habits_orders_by_next_due_date(ctx: EngineContext) -> None:
    today = ctx.today()
    entity_store.add_habit(ctx, "Later", "easy", start_date=today.add(days=3))
    entity_store.add_habit(ctx, "Now", "easy", start_date=today)
    entity_store.add_habit(ctx, "Soon", "easy", start_date=today.add(days=1))

    assert [habit["title"] for habit in entity_store.list_habits(ctx)] == [
        "Now",
        "Soon",
        "Later",
    ]


def test_update_habit_caps_remaining_today(ctx: EngineContext) -> None:
    entity_store.add_habit(ctx, "Water", "easy", times_per_day=5)
    habit_id = ctx.document["habits"][0]["id"]
    scheduler.spawn_due_habits(ctx)

    document = entity_store.update_habit(
        ctx,
        habit_id,
        times_per_day=2,
        interval_type="weekly",
        next_due_date=pendulum.date(2024, 3, 1),
    )

    habit = document["habits"][0]
    assert habit["times_per_day"] == 2
    assert habit["remaining_today"] == 2
    assert habit["interval_type"] == "weekly"
    assert habit["next_due_date"] == pendulum.date(2024, 3, 1)


def test_document_copies_are_isolated(ctx: EngineContext) -> None:
    entity_store.add_task(ctx, "Mine", "easy")

    leaked = ctx.document
    leaked["tasks"][0]["title"] = "changed outside"
    leaked["coins"] = 999

    assert ctx.document["tasks"][0]["title"] == "Mine"
    assert ctx.document["coins"] == 0

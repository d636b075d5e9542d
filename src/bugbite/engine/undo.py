# SPDX-License-Identifier: MIT

"""
Single-slot compensation for accidental completions and deletions.

Two independent slots live in the document: `undo` holds the state from
before the last undoable action, `recently_deleted` holds the last deleted
entity. Both expire after the context's undo window. Expiry is checked on
use and a timer clears each slot proactively.
"""

import logging
from copy import deepcopy
from typing import Union

import pendulum

from bugbite.engine.context import EngineContext
from bugbite.model.document import Document
from bugbite.model.entity_type import EntityType
from bugbite.model.habit import Habit
from bugbite.model.task import Task
from bugbite.model.undo import RecentlyDeleted, UndoAction, UndoSnapshot

logger = logging.getLogger(__name__)

UNDO_SLOT = "undo"
DELETED_SLOT = "recently_deleted"


def is_expired(
    timestamp: pendulum.DateTime, now: pendulum.DateTime, window: pendulum.Duration
) -> bool:
    return (now - timestamp).total_seconds() > window.total_seconds()


def collection_key(entity_type: str) -> str:
    return "habits" if entity_type == EntityType.HABIT else "tasks"


def record_snapshot(
    ctx: EngineContext,
    draft: Document,
    entity_type: str,
    entity: Union[Task, Habit],
    action: UndoAction,
) -> None:
    """
    Capture the pre-action state into the undo slot of `draft`.

    Must be called before the action touches `entity`, coins, infestation or
    monthly stats. Overwrites whatever the slot held.
    """
    timestamp = ctx.now()
    snapshot: UndoSnapshot = {
        "entity_type": entity_type,
        "entity_id": entity["id"],
        "action": action,
        "prior_entity": deepcopy(entity),
        "prior_coins": draft["coins"],
        "prior_infestation": draft["infestation"],
        "prior_monthly_stats": deepcopy(draft["monthly_stats"]),
        "timestamp": timestamp,
    }
    draft["undo"] = snapshot
    ctx.schedule_expiry(UNDO_SLOT, lambda: expire_slot(ctx, UNDO_SLOT, timestamp))


def clear_undo(ctx: EngineContext, draft: Document) -> None:
    draft["undo"] = None
    ctx.cancel_expiry(UNDO_SLOT)


def undo_last_action(ctx: EngineContext) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        snapshot = draft["undo"]
        if snapshot is None:
            logger.debug("nothing to undo")
            return ctx.document

        if is_expired(snapshot["timestamp"], ctx.now(), ctx.undo_window):
            logger.debug("undo window elapsed for %s", snapshot["entity_id"])
            clear_undo(ctx, draft)
            ctx.commit(draft)
            return ctx.document

        collection = draft[collection_key(snapshot["entity_type"])]  # type: ignore[literal-required]
        for index, entity in enumerate(collection):
            if entity["id"] == snapshot["entity_id"]:
                collection[index] = deepcopy(snapshot["prior_entity"])
                break
        else:
            logger.warning(
                "entity %s vanished before undo, restoring totals only",
                snapshot["entity_id"],
            )

        draft["coins"] = snapshot["prior_coins"]
        draft["infestation"] = snapshot["prior_infestation"]
        draft["monthly_stats"] = deepcopy(snapshot["prior_monthly_stats"])

        smash_log = draft["smash_log"]
        if (
            snapshot["action"] == "smash"
            and len(smash_log) > 0
            and smash_log[-1]["id"] == snapshot["entity_id"]
        ):
            smash_log.pop()

        clear_undo(ctx, draft)
        logger.info("undid %s on %s", snapshot["action"], snapshot["entity_id"])
        return ctx.commit(draft)


def record_deleted(
    ctx: EngineContext,
    draft: Document,
    entity_type: str,
    entity: Union[Task, Habit],
) -> None:
    deleted_at = ctx.now()
    record: RecentlyDeleted = {
        "entity_type": entity_type,
        "entity": entity,
        "deleted_at": deleted_at,
    }
    draft["recently_deleted"] = record
    ctx.schedule_expiry(
        DELETED_SLOT, lambda: expire_slot(ctx, DELETED_SLOT, deleted_at)
    )


def undo_delete(ctx: EngineContext) -> Document:
    with ctx.lock:
        draft = ctx.draft()
        record = draft["recently_deleted"]
        if record is None:
            logger.debug("nothing to restore")
            return ctx.document

        draft["recently_deleted"] = None
        ctx.cancel_expiry(DELETED_SLOT)

        if is_expired(record["deleted_at"], ctx.now(), ctx.undo_window):
            logger.debug("restore window elapsed for %s", record["entity"]["id"])
            ctx.commit(draft)
            return ctx.document

        collection = draft[collection_key(record["entity_type"])]  # type: ignore[literal-required]
        if all(entity["id"] != record["entity"]["id"] for entity in collection):
            collection.insert(0, record["entity"])

        clear_undo(ctx, draft)
        logger.info("restored %s %s", record["entity_type"], record["entity"]["id"])
        return ctx.commit(draft)


def expire_slot(ctx: EngineContext, slot: str, timestamp: pendulum.DateTime) -> None:
    """Timer callback: clear `slot` if it still holds the record it was armed for."""
    with ctx.lock:
        draft = ctx.draft()
        if slot == UNDO_SLOT:
            snapshot = draft["undo"]
            if snapshot is None or snapshot["timestamp"] != timestamp:
                return
            draft["undo"] = None
        else:
            record = draft["recently_deleted"]
            if record is None or record["deleted_at"] != timestamp:
                return
            draft["recently_deleted"] = None
        ctx.commit(draft)
    logger.debug("%s slot expired", slot)

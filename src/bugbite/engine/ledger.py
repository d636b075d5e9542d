# SPDX-License-Identifier: MIT

"""
Economic effects of smashing and missing items.

Rewards follow the difficulty table, scaled down as infestation rises
(see `reward_for`). Misses push infestation up by the difficulty weight.
Every event lands in the month's stats; rewards also land in the smash log.
"""

import logging
import math
from typing import Optional, Union

import pendulum

from bugbite import time
from bugbite.engine import undo
from bugbite.engine.context import EngineContext
from bugbite.engine.infestation import clamp_infestation, reward_multiplier
from bugbite.model.difficulty import COIN_REWARDS, FAIL_WEIGHTS
from bugbite.model.document import Document
from bugbite.model.habit import Habit
from bugbite.model.monthly_stats import HISTORY_LIMIT, MonthlyStats, StatItem
from bugbite.model.poison import POISON_CATALOG
from bugbite.model.smash_log import SmashLogEntry
from bugbite.model.task import Task
from bugbite.template.monthly_stats import get_monthly_stats_template

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def reward_for(difficulty: str, infestation: int) -> int:
    base = COIN_REWARDS.get(difficulty, COIN_REWARDS["easy"])
    return round_half_up(base * reward_multiplier(infestation))


def fail_weight_for(difficulty: str) -> int:
    return FAIL_WEIGHTS.get(difficulty, FAIL_WEIGHTS["easy"])


def get_monthly_stats(document: Document, month: str) -> MonthlyStats:
    stats = document["monthly_stats"].get(month)
    if stats is None:
        return get_monthly_stats_template()
    return stats


def __month_bucket(document: Document, month: str) -> MonthlyStats:
    if month not in document["monthly_stats"]:
        document["monthly_stats"][month] = get_monthly_stats_template()
    return document["monthly_stats"][month]


def __stat_item(entity: Union[Task, Habit], at: pendulum.DateTime) -> StatItem:
    return {
        "entity_type": entity["entity_type"],
        "id": entity["id"],
        "title": entity["title"],
        "difficulty": entity["difficulty"],
        "at": at,
    }


def __append_bounded(items: list, item: object) -> None:
    items.append(item)
    if len(items) > HISTORY_LIMIT:
        del items[: len(items) - HISTORY_LIMIT]


def credit_smash(
    document: Document, entity: Union[Task, Habit], now: pendulum.DateTime
) -> int:
    """
    Credit the reward for a smashed entity into `document`.

    Returns the number of coins credited.
    """
    coins = reward_for(entity["difficulty"], document["infestation"])
    document["coins"] += coins

    entry: SmashLogEntry = {
        "entity_type": entity["entity_type"],
        "id": entity["id"],
        "title": entity["title"],
        "difficulty": entity["difficulty"],
        "coins": coins,
        "at": now,
    }
    __append_bounded(document["smash_log"], entry)

    bucket = __month_bucket(document, time.month_key(now))
    bucket["smashed_count"] += 1
    __append_bounded(bucket["smashed_items"], __stat_item(entity, now))

    logger.info(
        "credited %d coins for %s %s", coins, entity["entity_type"], entity["id"]
    )
    return coins


def penalize_fail(
    document: Document, entity: Union[Task, Habit], now: pendulum.DateTime
) -> int:
    """
    Raise infestation for a missed entity and record the miss.

    Returns the infestation actually added after clamping.
    """
    before = document["infestation"]
    document["infestation"] = clamp_infestation(
        before + fail_weight_for(entity["difficulty"])
    )

    bucket = __month_bucket(document, time.month_key(now))
    bucket["missed_count"] += 1
    __append_bounded(bucket["missed_items"], __stat_item(entity, now))

    logger.info(
        "infestation %d -> %d after missing %s %s",
        before,
        document["infestation"],
        entity["entity_type"],
        entity["id"],
    )
    return document["infestation"] - before


def buy_poison(ctx: EngineContext, size: str) -> Document:
    poison = POISON_CATALOG.get(size)
    if poison is None:
        logger.debug("unknown poison size %r", size)
        return ctx.document

    with ctx.lock:
        draft = ctx.draft()
        if draft["coins"] < poison["cost"]:
            logger.debug(
                "cannot afford %s poison: %d < %d", size, draft["coins"], poison["cost"]
            )
            return ctx.document

        draft["coins"] -= poison["cost"]
        draft["infestation"] = max(0, draft["infestation"] - poison["clears"])
        undo.clear_undo(ctx, draft)
        document = ctx.commit(draft)

    logger.info("bought %s poison, infestation now %d", size, document["infestation"])
    notify_poisoned(ctx, size)
    return document


def last_smash(document: Document) -> Optional[SmashLogEntry]:
    if len(document["smash_log"]) == 0:
        return None
    return document["smash_log"][-1]


def notify_smashed(ctx: EngineContext, entry: Optional[SmashLogEntry]) -> None:
    if entry is None:
        return
    try:
        ctx.feedback.smashed(entry["entity_type"], entry["difficulty"], entry["coins"])
    except Exception:
        logger.warning("smash feedback failed", exc_info=True)


def notify_poisoned(ctx: EngineContext, size: str) -> None:
    try:
        ctx.feedback.poisoned(size)
    except Exception:
        logger.warning("poison feedback failed", exc_info=True)

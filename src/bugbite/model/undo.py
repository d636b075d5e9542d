# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict, Union

import pendulum

from bugbite.model.entity_id import EntityId
from bugbite.model.habit import Habit
from bugbite.model.monthly_stats import MonthlyStatsMap
from bugbite.model.task import Task

UndoAction = Literal["unlock", "smash", "complete", "fail"]


class UndoSnapshot(TypedDict):
    entity_type: str
    entity_id: EntityId
    action: UndoAction
    prior_entity: Union[Task, Habit]
    prior_coins: int
    prior_infestation: int
    prior_monthly_stats: MonthlyStatsMap
    timestamp: pendulum.DateTime


class RecentlyDeleted(TypedDict):
    entity_type: str  # tag for which collection `entity` belongs to
    entity: Union[Task, Habit]
    deleted_at: pendulum.DateTime

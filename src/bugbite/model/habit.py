# SPDX-License-Identifier: MIT

from typing import Final, Literal, Optional, TypedDict, get_args

import pendulum

from bugbite.model.checklist import ChecklistItem
from bugbite.model.entity_id import EntityId

IntervalType = Literal["daily", "weekly", "monthly"]
ActiveBugState = Literal["locked", "unlocked"]

INTERVAL_TYPES: Final[tuple[str, ...]] = get_args(IntervalType)

MIN_TIMES_PER_DAY: Final[int] = 1
MAX_TIMES_PER_DAY: Final[int] = 10


class Habit(TypedDict):
    id: EntityId
    entity_type: str  # "habit"
    title: str
    difficulty: str
    interval_type: IntervalType
    next_due_date: pendulum.Date
    times_per_day: int
    remaining_today: int  # occurrences still needed before the bug unlocks
    last_spawn_date: Optional[pendulum.Date]
    active_bug_state: Optional[ActiveBugState]  # None = not currently due
    created_at: pendulum.DateTime
    note: Optional[str]
    checklist: Optional[list[ChecklistItem]]

# SPDX-License-Identifier: MIT

from typing import Final, Literal, Optional, TypedDict

from bugbite.model.habit import Habit
from bugbite.model.monthly_stats import MonthlyStatsMap
from bugbite.model.smash_log import SmashLogEntry
from bugbite.model.task import Task
from bugbite.model.undo import RecentlyDeleted, UndoSnapshot

MAX_INFESTATION: Final[int] = 10
SWARM_INFESTATION: Final[int] = 8

InfestationWarning = Literal["swarm", "overrun"]


class Settings(TypedDict):
    sound_on: bool


class Document(TypedDict):
    version: int
    tasks: list[Task]
    habits: list[Habit]
    coins: int
    infestation: int
    overrun: bool
    warning: Optional[InfestationWarning]
    monthly_stats: MonthlyStatsMap
    smash_log: list[SmashLogEntry]
    settings: Settings
    undo: Optional[UndoSnapshot]
    recently_deleted: Optional[RecentlyDeleted]

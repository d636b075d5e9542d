# SPDX-License-Identifier: MIT

from typing import Final, TypedDict

import pendulum

from bugbite.model.entity_id import EntityId

# Upper bound for every history list kept in the document
HISTORY_LIMIT: Final[int] = 200


class StatItem(TypedDict):
    entity_type: str
    id: EntityId
    title: str
    difficulty: str
    at: pendulum.DateTime


class MonthlyStats(TypedDict):
    smashed_count: int
    missed_count: int
    smashed_items: list[StatItem]
    missed_items: list[StatItem]


# Keyed by "YYYY-MM"
type MonthlyStatsMap = dict[str, MonthlyStats]

# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from bugbite.model.entity_id import EntityId

IdMapEntityType = Literal["tasks", "habits"]


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]


class IdMap(TypedDict):
    """
    Short numeric ids shown in lists, mapped to the real uuid entity ids.

    real_task_id = id_map["tasks"]["synthetic_to_real"][7]
    """

    tasks: IdMapMapping
    habits: IdMapMapping

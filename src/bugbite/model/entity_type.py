# SPDX-License-Identifier: MIT


class EntityType:
    TASK = "task"
    HABIT = "habit"

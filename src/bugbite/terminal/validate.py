# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import typer

from bugbite.model.difficulty import DIFFICULTIES
from bugbite.model.habit import INTERVAL_TYPES, MAX_TIMES_PER_DAY, MIN_TIMES_PER_DAY
from bugbite.model.poison import POISON_SIZES


def validate_difficulty(difficulty: Optional[str]) -> Optional[str]:
    if difficulty is None:
        return None
    difficulty = difficulty.lower()
    if difficulty not in DIFFICULTIES:
        raise typer.BadParameter(
            f"Difficulty must be one of: {', '.join(DIFFICULTIES)}"
        )
    return difficulty


def validate_interval(interval_type: Optional[str]) -> Optional[str]:
    if interval_type is None:
        return None
    interval_type = interval_type.lower()
    if interval_type not in INTERVAL_TYPES:
        raise typer.BadParameter(
            f"Interval must be one of: {', '.join(INTERVAL_TYPES)}"
        )
    return interval_type


def validate_poison_size(size: str) -> str:
    size = size.lower()
    if size not in POISON_SIZES:
        raise typer.BadParameter(f"Poison size must be one of: {', '.join(POISON_SIZES)}")
    return size


def validate_times_per_day(times_per_day: Optional[int]) -> Optional[int]:
    if times_per_day is None:
        return None
    if not (MIN_TIMES_PER_DAY <= times_per_day <= MAX_TIMES_PER_DAY):
        raise typer.BadParameter(
            f"Times per day must be between {MIN_TIMES_PER_DAY} and {MAX_TIMES_PER_DAY} (inclusive)"
        )
    return times_per_day


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    log_level = log_level.upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise typer.BadParameter("Log level must be DEBUG, INFO, WARNING or ERROR")
    return log_level

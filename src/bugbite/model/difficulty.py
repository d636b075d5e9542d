# SPDX-License-Identifier: MIT

from typing import Final, Literal, get_args

Difficulty = Literal["easy", "medium", "hard", "boss"]

DIFFICULTIES: Final[tuple[str, ...]] = get_args(Difficulty)

COIN_REWARDS: Final[dict[str, int]] = {
    "easy": 1,
    "medium": 2,
    "hard": 3,
    "boss": 5,
}

# Infestation added when an item of this difficulty is missed
FAIL_WEIGHTS: Final[dict[str, int]] = {
    "easy": 1,
    "medium": 1,
    "hard": 2,
    "boss": 3,
}


def is_difficulty(value: str) -> bool:
    return value in DIFFICULTIES

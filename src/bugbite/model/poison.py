# SPDX-License-Identifier: MIT

from typing import Final, Literal, TypedDict, get_args

PoisonSize = Literal["small", "medium", "large"]

POISON_SIZES: Final[tuple[str, ...]] = get_args(PoisonSize)


class Poison(TypedDict):
    cost: int
    clears: int


POISON_CATALOG: Final[dict[str, Poison]] = {
    "small": {"cost": 5, "clears": 1},
    "medium": {"cost": 12, "clears": 3},
    "large": {"cost": 18, "clears": 5},
}

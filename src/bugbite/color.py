# SPDX-License-Identifier: MIT

# Color for tasks that are already smashed
SMASHED_COLOR = "bright_black"

COIN_COLOR = "gold1"
OVERRUN_COLOR = "bold red"
SWARM_COLOR = "dark_orange"

DIFFICULTY_COLORS = {
    "easy": "#34C759",
    "medium": "#2DD4BF",
    "hard": "#8B5CF6",
    "boss": "#FBBF24",
}


def get_difficulty_color(difficulty: str) -> str:
    return DIFFICULTY_COLORS.get(difficulty, DIFFICULTY_COLORS["easy"])

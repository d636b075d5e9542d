# SPDX-License-Identifier: MIT

from typing import Callable

from rich.console import Console


class TerminalFeedback:
    """Rings the terminal bell for smashes and poison purchases while sound is on."""

    def __init__(self, is_sound_on: Callable[[], bool]) -> None:
        self._is_sound_on = is_sound_on
        self._console = Console(stderr=True)

    def smashed(self, entity_type: str, difficulty: str, coins: int) -> None:
        if not self._is_sound_on():
            return
        # one ring per difficulty step
        rings = {"easy": 1, "medium": 1, "hard": 2, "boss": 3}.get(difficulty, 1)
        for _ in range(rings):
            self._console.bell()

    def poisoned(self, size: str) -> None:
        if self._is_sound_on():
            self._console.bell()

# SPDX-License-Identifier: MIT
# tests/fakes.py

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Callable, Optional

import pendulum

from bugbite.model.document import Document


@dataclass
class FakeClock:
    """
    Clock that only moves when told to.
    """

    current: pendulum.DateTime = field(
        default_factory=lambda: pendulum.datetime(2024, 1, 31, 9, 0, 0, tz="UTC")
    )

    def now(self) -> pendulum.DateTime:
        return self.current

    def today(self) -> pendulum.Date:
        return self.current.date()

    def advance(self, **kwargs: int) -> None:
        self.current = self.current.add(**kwargs)


@dataclass
class ScheduledCall:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualTimer:
    """
    Timer whose callbacks run only when a test fires them.
    """

    calls: list[ScheduledCall] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(delay=delay, callback=callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> list[ScheduledCall]:
        return [call for call in self.calls if not call.cancelled]

    def fire_all(self) -> None:
        for call in self.pending:
            call.callback()


class MemoryDocumentStore:
    """
    In-memory DocumentStore. Copies on the way in and out like a real file would.
    """

    def __init__(
        self, document: Optional[Document] = None, fail_saves: bool = False
    ) -> None:
        self.document = deepcopy(document)
        self.fail_saves = fail_saves
        self.saves = 0

    def load(self) -> Optional[Document]:
        return deepcopy(self.document)

    def save(self, document: Document) -> None:
        if self.fail_saves:
            raise OSError("disk full")
        self.document = deepcopy(document)
        self.saves += 1


@dataclass
class RecordingFeedback:
    """
    Feedback collaborator that remembers what it was asked to play.
    """

    smashes: list[tuple[str, str, int]] = field(default_factory=list)
    poisons: list[str] = field(default_factory=list)
    broken: bool = False

    def smashed(self, entity_type: str, difficulty: str, coins: int) -> None:
        if self.broken:
            raise RuntimeError("speaker unplugged")
        self.smashes.append((entity_type, difficulty, coins))

    def poisoned(self, size: str) -> None:
        if self.broken:
            raise RuntimeError("speaker unplugged")
        self.poisons.append(size)

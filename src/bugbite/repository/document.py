# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from bugbite import time
from bugbite.migrate.migrate import run_required_migrations
from bugbite.model.document import Document
from bugbite.model.entity_type import EntityType
from bugbite.model.habit import Habit
from bugbite.model.monthly_stats import MonthlyStatsMap
from bugbite.model.task import Task

logger = logging.getLogger(__name__)


class YamlDocumentRepository:
    """
    Stores the whole document as one YAML blob.

    Legacy JSON blobs load as well since JSON is a subset of YAML.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[Document]:
        if not self.path.is_file():
            return None

        try:
            raw = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        except YAMLError:
            logger.exception("document at %s is not valid yaml", self.path)
            self.__set_aside_corrupt_file()
            return None

        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.error("document at %s is not a mapping", self.path)
            self.__set_aside_corrupt_file()
            return None

        run_required_migrations(raw)
        try:
            return self.__convert_document_for_deserialization(raw)
        except (KeyError, TypeError, ValueError):
            logger.exception("document at %s could not be read", self.path)
            self.__set_aside_corrupt_file()
            return None

    def save(self, document: Document) -> None:
        serializable_document = self.__convert_document_for_serialization(
            deepcopy(document)
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write next to the target then swap, so a crash never leaves half a blob
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        temp_path.write_text(
            dump(serializable_document, Dumper=Dumper, sort_keys=False),
            encoding="utf-8",
        )
        temp_path.replace(self.path)

    def __set_aside_corrupt_file(self) -> None:
        corrupt_path = self.path.with_name(f"{self.path.name}.corrupt")
        try:
            self.path.replace(corrupt_path)
        except OSError:
            logger.exception("could not move %s aside", self.path)
        else:
            logger.warning("moved unreadable document to %s", corrupt_path)

    def __convert_document_for_serialization(
        self, document: Document
    ) -> dict[str, Any]:
        serializable_document = cast(dict[str, Any], document)
        serializable_document["tasks"] = [
            self.__convert_task_for_serialization(task) for task in document["tasks"]
        ]
        serializable_document["habits"] = [
            self.__convert_habit_for_serialization(habit)
            for habit in document["habits"]
        ]
        serializable_document["monthly_stats"] = (
            self.__convert_monthly_stats_for_serialization(document["monthly_stats"])
        )
        for entry in serializable_document["smash_log"]:
            entry["at"] = time.datetime_to_iso_str(entry["at"])

        undo = serializable_document["undo"]
        if undo is not None:
            undo["timestamp"] = time.datetime_to_iso_str(undo["timestamp"])
            undo["prior_entity"] = self.__convert_entity_for_serialization(
                undo["entity_type"], undo["prior_entity"]
            )
            undo["prior_monthly_stats"] = (
                self.__convert_monthly_stats_for_serialization(
                    undo["prior_monthly_stats"]
                )
            )

        recently_deleted = serializable_document["recently_deleted"]
        if recently_deleted is not None:
            recently_deleted["deleted_at"] = time.datetime_to_iso_str(
                recently_deleted["deleted_at"]
            )
            recently_deleted["entity"] = self.__convert_entity_for_serialization(
                recently_deleted["entity_type"], recently_deleted["entity"]
            )
        return serializable_document

    def __convert_document_for_deserialization(self, raw: dict[str, Any]) -> Document:
        deserializable_document = raw
        deserializable_document["tasks"] = [
            self.__convert_task_for_deserialization(task) for task in raw["tasks"]
        ]
        deserializable_document["habits"] = [
            self.__convert_habit_for_deserialization(habit) for habit in raw["habits"]
        ]
        deserializable_document["monthly_stats"] = (
            self.__convert_monthly_stats_for_deserialization(raw["monthly_stats"])
        )
        for entry in deserializable_document["smash_log"]:
            entry["at"] = time.datetime_from_str(entry["at"])

        undo = deserializable_document["undo"]
        if undo is not None:
            undo["timestamp"] = time.datetime_from_str(undo["timestamp"])
            undo["prior_entity"] = self.__convert_entity_for_deserialization(
                undo["entity_type"], undo["prior_entity"]
            )
            undo["prior_monthly_stats"] = (
                self.__convert_monthly_stats_for_deserialization(
                    undo["prior_monthly_stats"]
                )
            )

        recently_deleted = deserializable_document["recently_deleted"]
        if recently_deleted is not None:
            recently_deleted["deleted_at"] = time.datetime_from_str(
                recently_deleted["deleted_at"]
            )
            recently_deleted["entity"] = self.__convert_entity_for_deserialization(
                recently_deleted["entity_type"], recently_deleted["entity"]
            )
        return cast(Document, deserializable_document)

    def __convert_entity_for_serialization(
        self, entity_type: str, entity: Any
    ) -> dict[str, Any]:
        if entity_type == EntityType.HABIT:
            return self.__convert_habit_for_serialization(entity)
        return self.__convert_task_for_serialization(entity)

    def __convert_entity_for_deserialization(
        self, entity_type: str, entity: dict[str, Any]
    ) -> Task | Habit:
        if entity_type == EntityType.HABIT:
            return self.__convert_habit_for_deserialization(entity)
        return self.__convert_task_for_deserialization(entity)

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["created_at"] = time.datetime_to_iso_str(
            serializable_task["created_at"]
        )
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["created_at"] = time.datetime_from_str(
            deserializable_task["created_at"]
        )
        return cast(Task, deserializable_task)

    def __convert_habit_for_serialization(self, habit: Habit) -> dict[str, Any]:
        serializable_habit = cast(dict[str, Any], habit)
        serializable_habit["created_at"] = time.datetime_to_iso_str(
            serializable_habit["created_at"]
        )
        serializable_habit["next_due_date"] = time.date_to_str(
            serializable_habit["next_due_date"]
        )
        serializable_habit["last_spawn_date"] = time.date_to_str_optional(
            serializable_habit["last_spawn_date"]
        )
        return serializable_habit

    def __convert_habit_for_deserialization(self, habit: dict[str, Any]) -> Habit:
        deserializable_habit = habit
        deserializable_habit["created_at"] = time.datetime_from_str(
            deserializable_habit["created_at"]
        )
        deserializable_habit["next_due_date"] = time.date_from_str(
            str(deserializable_habit["next_due_date"])
        )
        last_spawn_date = deserializable_habit["last_spawn_date"]
        deserializable_habit["last_spawn_date"] = time.date_from_str_optional(
            None if last_spawn_date is None else str(last_spawn_date)
        )
        return cast(Habit, deserializable_habit)

    def __convert_monthly_stats_for_serialization(
        self, monthly_stats: MonthlyStatsMap
    ) -> dict[str, Any]:
        serializable_stats = cast(dict[str, Any], monthly_stats)
        for stats in serializable_stats.values():
            for item in stats["smashed_items"] + stats["missed_items"]:
                item["at"] = time.datetime_to_iso_str(item["at"])
        return serializable_stats

    def __convert_monthly_stats_for_deserialization(
        self, monthly_stats: dict[str, Any]
    ) -> MonthlyStatsMap:
        deserializable_stats = {str(month): stats for month, stats in monthly_stats.items()}
        for stats in deserializable_stats.values():
            for item in stats["smashed_items"] + stats["missed_items"]:
                item["at"] = time.datetime_from_str(item["at"])
        return cast(MonthlyStatsMap, deserializable_stats)

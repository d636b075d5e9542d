# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from bugbite.model.entity_id import EntityId
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.time import date_from_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param)

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Relative days (e.g., "1", "-1", "7")
    if re.match(r"^-?\d+$", date):
        return today_local().add(days=int(date))

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse a single ID, comma-separated list of IDs, or ranges of IDs.

    Args:
        id_param: A single ID (e.g., "1"), comma-separated list (e.g., "1,2,3"),
                  range (e.g., "1-5"), or mixed (e.g., "1,3-5,8")

    Returns:
        List of integer IDs (sorted and deduplicated)

    Raises:
        typer.BadParameter: If any ID is not a valid integer or range format is invalid
    """
    id_strings = [s.strip() for s in id_param.split(",")]

    ids: list[int] = []
    for id_str in id_strings:
        if not id_str:
            continue

        if "-" in id_str:
            range_parts = id_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{id_str}' (expected format: 'start-end')"
                )

            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' contains non-integer values"
                )

            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' (start must be <= end)"
                )

            ids.extend(range(start, end + 1))
        else:
            try:
                ids.append(int(id_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid ID: '{id_str}' is not a valid integer"
                )

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")

    return sorted(set(ids))


def resolve_ids(entity_type: str, id_param: str) -> list[EntityId]:
    """Map the short ids shown in lists back to entity ids."""
    real_ids: list[EntityId] = []
    for synthetic_id in parse_id_list(id_param):
        real_id = ID_MAP_REPO.get_real_id(entity_type, synthetic_id)
        if real_id is None:
            raise typer.BadParameter(
                f"Unknown id {synthetic_id}, list {entity_type} to refresh ids"
            )
        real_ids.append(real_id)
    return real_ids


def resolve_id(entity_type: str, id_param: str) -> EntityId:
    real_ids = resolve_ids(entity_type, id_param)
    if len(real_ids) != 1:
        raise typer.BadParameter("Expected a single id")
    return real_ids[0]

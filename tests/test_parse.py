# SPDX-License-Identifier: MIT
# tests/test_parse.py

from __future__ import annotations

import pendulum
import pytest
import typer

from bugbite.terminal.parse import parse_date, parse_id_list
from bugbite.time import today_local


def test_parse_id_list_accepts_ranges_and_lists() -> None:
    assert parse_id_list("3") == [3]
    assert parse_id_list("4,1,2") == [1, 2, 4]
    assert parse_id_list("1,3-5,3") == [1, 3, 4, 5]


@pytest.mark.parametrize("bad", ["", "a", "5-2", "1-2-3"])
def test_parse_id_list_rejects_garbage(bad: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_id_list(bad)


def test_parse_date_keywords_and_offsets() -> None:
    today = today_local()

    assert parse_date(None) is None
    assert parse_date("2024-02-29") == pendulum.date(2024, 2, 29)
    assert parse_date("t") == today
    assert parse_date("tomorrow") == today.add(days=1)
    assert parse_date("y") == today.subtract(days=1)
    assert parse_date("7") == today.add(days=7)
    assert parse_date("-2") == today.subtract(days=2)


@pytest.mark.parametrize("bad", ["next week", "2023-02-30"])
def test_parse_date_rejects_garbage(bad: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_date(bad)

# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from bugbite.model.document import Document
from bugbite.model.monthly_stats import MonthlyStats
from bugbite.time import datetime_to_display_str
from bugbite.view.header import header
from bugbite.view.util import format_difficulty


def monthly_stats_view(
    document: Document, month: str, stats: MonthlyStats, limit: int = 10
) -> None:
    header(document, f"stats {month}")

    console = Console()
    totals = Table(box=box.SIMPLE)
    totals.add_column("smashed")
    totals.add_column("missed")
    totals.add_row(str(stats["smashed_count"]), str(stats["missed_count"]))
    console.print(totals)

    for title, items in (
        ("recently smashed", stats["smashed_items"]),
        ("recently missed", stats["missed_items"]),
    ):
        if not items:
            continue
        items_table = Table(box=box.SIMPLE, title=title)
        items_table.add_column("when")
        items_table.add_column("type")
        items_table.add_column("difficulty")
        items_table.add_column("title")
        for item in reversed(items[-limit:]):
            items_table.add_row(
                datetime_to_display_str(item["at"]),
                item["entity_type"],
                format_difficulty(item["difficulty"]),
                item["title"],
            )
        console.print(items_table)


def all_months_view(document: Document) -> None:
    header(document, "stats")

    months_table = Table(box=box.SIMPLE)
    months_table.add_column("month")
    months_table.add_column("smashed")
    months_table.add_column("missed")
    for month in sorted(document["monthly_stats"].keys(), reverse=True):
        stats = document["monthly_stats"][month]
        months_table.add_row(
            month, str(stats["smashed_count"]), str(stats["missed_count"])
        )

    console = Console()
    console.print(months_table)


def smash_log_view(document: Document, limit: int = 20) -> None:
    header(document, "smash log")

    log_table = Table(box=box.SIMPLE)
    log_table.add_column("when")
    log_table.add_column("type")
    log_table.add_column("difficulty")
    log_table.add_column("coins")
    log_table.add_column("title")
    for entry in reversed(document["smash_log"][-limit:]):
        log_table.add_row(
            datetime_to_display_str(entry["at"]),
            entry["entity_type"],
            format_difficulty(entry["difficulty"]),
            f"+{entry['coins']}",
            entry["title"],
        )

    console = Console()
    console.print(log_table)

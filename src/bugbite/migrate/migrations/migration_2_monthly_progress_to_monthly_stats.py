# SPDX-License-Identifier: MIT

from bugbite.migrate.registry import RawDocument, migration


@migration(2)
def migrate(raw: RawDocument) -> None:
    """
    Upconvert the legacy `monthlyProgress: {month: count}` counter.

    Each count becomes the month's smashed_count with no item history and no
    misses. Months already present in monthly_stats are left untouched.
    """
    monthly_progress = raw.pop("monthlyProgress", None)
    if monthly_progress is None:
        monthly_progress = raw.pop("monthly_progress", None)
    if not isinstance(monthly_progress, dict):
        return

    monthly_stats = raw.get("monthly_stats")
    if not isinstance(monthly_stats, dict):
        monthly_stats = {}
        raw["monthly_stats"] = monthly_stats

    for month, count in monthly_progress.items():
        if month in monthly_stats:
            continue
        monthly_stats[month] = {
            "smashed_count": max(0, int(count or 0)),
            "missed_count": 0,
            "smashed_items": [],
            "missed_items": [],
        }

# SPDX-License-Identifier: MIT

from bugbite.model.monthly_stats import MonthlyStats


def get_monthly_stats_template() -> MonthlyStats:
    return {
        "smashed_count": 0,
        "missed_count": 0,
        "smashed_items": [],
        "missed_items": [],
    }

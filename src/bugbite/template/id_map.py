# SPDX-License-Identifier: MIT

from bugbite.model.id_map import IdMap


def get_id_map_template() -> IdMap:
    return {
        "tasks": {"synthetic_to_real": {}, "real_to_synthetic": {}},
        "habits": {"synthetic_to_real": {}, "real_to_synthetic": {}},
    }

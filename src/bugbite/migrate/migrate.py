# SPDX-License-Identifier: MIT

import logging

from bugbite.migrate import registry
from bugbite.migrate.registry import RawDocument

logger = logging.getLogger(__name__)


def run_required_migrations(raw: RawDocument) -> RawDocument:
    """
    Upgrade a raw persisted blob in place to the latest document version.

    Blobs written before versioning existed carry no "version" key and are
    treated as version 0. So are blobs still wrapped in the mobile app's
    `state` envelope, whose "version" belongs to the app and not to bugbite.
    """
    migrations = registry.get_migrations()
    current_version = raw.get("version", 0)
    if not isinstance(current_version, int) or isinstance(raw.get("state"), dict):
        current_version = 0

    migrations_to_run = sorted(
        [(key, value) for key, value in migrations.items() if key > current_version],
        key=lambda kvp: kvp[0],
    )

    for migration_id, migration_callable in migrations_to_run:
        logger.info("running document migration %s", migration_id)
        migration_callable(raw)
        raw["version"] = migration_id

    return raw

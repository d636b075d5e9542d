# SPDX-License-Identifier: MIT

import importlib
import pkgutil
from copy import deepcopy
from typing import Any, Callable

type RawDocument = dict[str, Any]
type Migration = Callable[[RawDocument], None]

MIGRATIONS: dict[int, Migration] = {}
_registered = False


def migration(version: int) -> Callable[[Migration], Migration]:
    def wrapper(func: Migration) -> Migration:
        global MIGRATIONS
        MIGRATIONS[version] = func
        return func

    return wrapper


def __import_all_modules(package_name: str) -> None:
    package = importlib.import_module(package_name)

    for importer, modname, ispkg in pkgutil.iter_modules(package.__path__):
        full_module_name = f"{package_name}.{modname}"
        importlib.import_module(full_module_name)


def register_migrations() -> None:
    global _registered
    if _registered:
        return
    __import_all_modules("bugbite.migrate.migrations")
    _registered = True


def get_migrations() -> dict[int, Migration]:
    register_migrations()
    return deepcopy(MIGRATIONS)


def get_latest_version() -> int:
    migrations = get_migrations()
    if len(migrations) == 0:
        return 0
    return max(migrations.keys())

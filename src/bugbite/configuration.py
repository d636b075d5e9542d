# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "bugbite"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"
LOG_PATH = platformdirs.user_log_path(APP_NAME)

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_DOCUMENT_PATH: Path = DATA_PATH / "bugbite.yaml"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    clear_ids_on_view: bool
    undo_window_seconds: int
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "clear_ids_on_view": True,
        "undo_window_seconds": 10,
        "log_level": "WARNING",
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_DOCUMENT_PATH, DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_DOCUMENT_PATH = DATA_PATH / "bugbite.yaml"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))

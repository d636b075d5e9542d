# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from bugbite import configuration
from bugbite.logging_setup import setup_logging
from bugbite.model.id_map import IdMap
from bugbite.repository.configuration import CONFIGURATION_REPO
from bugbite.repository.id_map import ID_MAP_REPO
from bugbite.template.id_map import get_id_map_template
from bugbite.view.header import set_show_header


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    setup_logging(log_dir=configuration.LOG_PATH, console_level=config["log_level"])
    set_show_header(config["show_header"])
    ID_MAP_REPO.clear_on_view = config["clear_ids_on_view"]


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    # The document itself is created on the first commit
    if not configuration.DATA_ID_MAP_PATH.is_file():
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

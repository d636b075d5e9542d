# SPDX-License-Identifier: MIT

from typing import Optional, TypeIs, get_args

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from bugbite import configuration
from bugbite.model.entity_id import EntityId
from bugbite.model.id_map import IdMap, IdMapEntityType
from bugbite.template.id_map import get_id_map_template

ENTITY_TYPES = get_args(IdMapEntityType)


class IdMapRepository:
    def __init__(self) -> None:
        self._id_map: Optional[IdMap] = None
        self.is_dirty = False
        self.clear_on_view = True

    @property
    def id_map(self) -> IdMap:
        if self._id_map is None:
            self.__load_data()
        if self._id_map is None:
            raise ValueError()
        return self._id_map

    def __load_data(self) -> None:
        if configuration.DATA_ID_MAP_PATH.is_file():
            self._id_map = load(
                configuration.DATA_ID_MAP_PATH.read_text(), Loader=Loader
            )
        if self._id_map is None:
            self._id_map = get_id_map_template()

    def __save_data(self, id_map: IdMap) -> None:
        configuration.DATA_ID_MAP_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    def flush(self) -> None:
        if self._id_map is not None and self.is_dirty:
            self.__save_data(self._id_map)
            self.is_dirty = False

    def clear_ids(self, entity_type: Optional[str] = None) -> None:
        self.is_dirty = True
        if entity_type is None:
            self._id_map = get_id_map_template()
            return
        if self.__narrow_to_entity_type(entity_type):
            self.id_map[entity_type] = get_id_map_template()[entity_type]

    def clear_ids_on_view(self) -> None:
        """
        Renumber from 1 before a list command, unless ids are kept stable
        (`clear_ids_on_view: false`)
        """
        if self.clear_on_view:
            self.clear_ids()

    def associate_id(self, entity_type: str, entity_id: EntityId) -> int:
        """
        Create a new synthetic id to associate with an entity id
        """
        if not self.__narrow_to_entity_type(entity_type):
            raise TypeError(
                f"{IdMapRepository.associate_id.__name__}: expected {IdMapEntityType} literals"
            )

        mapping = self.id_map[entity_type]
        if entity_id in mapping["real_to_synthetic"]:
            return mapping["real_to_synthetic"][entity_id]

        self.is_dirty = True
        next_id = len(mapping["real_to_synthetic"]) + 1
        mapping["real_to_synthetic"][entity_id] = next_id
        mapping["synthetic_to_real"][next_id] = entity_id
        return next_id

    def get_real_id(self, entity_type: str, synthetic_id: int) -> Optional[EntityId]:
        """
        Get the entity id associated with a synthetic id, None when unknown
        """
        if not self.__narrow_to_entity_type(entity_type):
            raise TypeError(
                f"{IdMapRepository.get_real_id.__name__}: expected {IdMapEntityType} literals"
            )
        return self.id_map[entity_type]["synthetic_to_real"].get(synthetic_id)

    def __narrow_to_entity_type(self, entity_type: str) -> TypeIs[IdMapEntityType]:
        return entity_type in ENTITY_TYPES


ID_MAP_REPO = IdMapRepository()

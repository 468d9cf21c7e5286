from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from ..domain.errors import NotFoundError

T = TypeVar("T")
ID = TypeVar("ID")


class CrudRepo(ABC, Generic[T, ID]):
    """Generic create/read/update/delete contract over one entity type."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert the entity when it has no id, otherwise update it.

        The given instance is returned with its id and timestamps populated.
        """

    @abstractmethod
    def find_by_id(self, entity_id: ID) -> Optional[T]:
        """Return the entity for ``entity_id`` if present."""

    @abstractmethod
    def find_all(self) -> Iterator[T]:
        """Lazily yield every stored entity."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    def delete_by_id(self, entity_id: ID) -> None:
        """Remove the entity, raising :class:`NotFoundError` if absent."""

    def get_by_id(self, entity_id: ID) -> T:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"No {self._entity_name()} with id {entity_id}")
        return entity

    def exists_by_id(self, entity_id: ID) -> bool:
        return self.find_by_id(entity_id) is not None

    def save_all(self, entities: Iterable[T]) -> list[T]:
        return [self.save(entity) for entity in entities]

    def _entity_name(self) -> str:
        return "entity"

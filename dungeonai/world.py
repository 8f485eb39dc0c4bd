"""A small entity-component store."""

from __future__ import annotations

import itertools
from typing import Any, Iterator, Optional, TypeVar

T = TypeVar("T")


class Entity:
    """A handle to a set of components owned by a world."""

    def __init__(self, world: World, entity_id: int, name: Optional[str] = None) -> None:
        self.world = world
        self.id = entity_id
        self.name = name
        self._components: dict[type, Any] = {}

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Entity {self.id}{label}>"

    def get(self, component_type: type[T]) -> Optional[T]:
        """Return the component of the given type, or None."""
        return self._components.get(component_type)

    def set(self, *args: Any) -> Entity:
        """Attach components, replacing any of the same type."""
        for component in args:
            self._components[type(component)] = component
        return self

    def has(self, *args: type) -> bool:
        """Tell whether every given component type is attached."""
        return all(t in self._components for t in args)

    def remove(self, component_type: type[T]) -> Optional[T]:
        """Detach and return the component of the given type, if any."""
        return self._components.pop(component_type, None)

    def alive(self) -> bool:
        """Tell whether the entity still exists in its world."""
        return self.world.is_alive(self)


class World:
    """Holds entities in creation order and answers component queries."""

    def __init__(self) -> None:
        self._entities: dict[int, Entity] = {}
        self._names: dict[str, Entity] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def spawn(self, *args: Any, name: Optional[str] = None) -> Entity:
        """Create an entity with the given components.

        A name that already belongs to a live entity returns that entity,
        with the components set on it.
        """
        if name is not None and name in self._names:
            return self._names[name].set(*args)
        entity = Entity(self, next(self._ids), name)
        self._entities[entity.id] = entity
        if name is not None:
            self._names[name] = entity
        return entity.set(*args)

    def entity(self, name: str) -> Entity:
        """Return the entity with this name, creating it if needed."""
        return self.spawn(name=name)

    def lookup(self, name: str) -> Optional[Entity]:
        """Return the entity with this name, or None."""
        return self._names.get(name)

    def destroy(self, entity: Entity) -> None:
        """Remove an entity from the world; destroying twice is harmless."""
        if self._entities.get(entity.id) is not entity:
            return
        del self._entities[entity.id]
        if entity.name is not None and self._names.get(entity.name) is entity:
            del self._names[entity.name]

    def query(self, *args: type) -> Iterator[tuple]:
        """Yield ``(entity, component, ...)`` for entities holding every type.

        Entities destroyed while iterating are skipped.
        """
        for entity in list(self._entities.values()):
            if not self.is_alive(entity) or not entity.has(*args):
                continue
            yield (entity, *(entity.get(t) for t in args))

    def single(self, component_type: type[T]) -> Optional[T]:
        """Return the first component of the given type in the world, or None."""
        for _, component in self.query(component_type):
            return component
        return None

    def is_alive(self, entity: Optional[Entity]) -> bool:
        """Tell whether ``entity`` belongs to this world and has not been destroyed."""
        return entity is not None and self._entities.get(entity.id) is entity
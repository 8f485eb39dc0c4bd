"""Named values shared between the nodes of one actor's behaviour."""

from __future__ import annotations

from typing import Any, Iterator


class Blackboard:
    """A store of named values that nodes register and then read or write."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def register(self, name: str, default: Any = None) -> Any:
        """Make sure ``name`` exists, storing ``default`` if it is new.

        Returns the value held under the name.
        """
        return self._values.setdefault(name, default)

    def set(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``."""
        self._values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value under ``name``, registering ``default`` if absent."""
        return self.register(name, default)
"""Finite state machines that drive an actor's choice of action."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dungeonai.world import Entity, World


class State(ABC):
    """One behaviour an actor can be in."""

    def enter(self) -> None:
        """Called when the machine switches into this state."""

    def exit(self) -> None:
        """Called when the machine switches away from this state."""

    @abstractmethod
    def act(self, dt: float, world: World, entity: Entity) -> None:
        """Plan the entity's action for this turn."""


class StateTransition(ABC):
    """A condition that moves the machine from one state to another."""

    @abstractmethod
    def is_available(self, world: World, entity: Entity) -> bool:
        """Tell whether the transition may fire now."""


class StateMachine:
    """States joined by transitions; the first available transition wins."""

    def __init__(self) -> None:
        self.current = 0
        self._states: list[State] = []
        self._transitions: list[list[tuple[StateTransition, int]]] = []

    def __len__(self) -> int:
        return len(self._states)

    @property
    def states(self) -> tuple[State, ...]:
        """The states in the order they were added."""
        return tuple(self._states)

    def act(self, dt: float, world: World, entity: Entity) -> None:
        """Follow the first available transition, then act in the current state.

        A machine whose current index is out of range is reset to the
        first state and does nothing this turn.
        """
        if self.current >= len(self._states):
            self.current = 0
            return
        for transition, target in self._transitions[self.current]:
            if transition.is_available(world, entity):
                self._states[self.current].exit()
                self.current = target
                self._states[target].enter()
                break
        self._states[self.current].act(dt, world, entity)

    def add_state(self, state: State) -> int:
        """Add a state and return its index."""
        self._states.append(state)
        self._transitions.append([])
        return len(self._states) - 1

    def add_transition(self, transition: StateTransition, source: int, target: int) -> None:
        """Let ``transition`` move the machine from ``source`` to ``target``."""
        for index in (source, target):
            if not 0 <= index < len(self._states):
                raise IndexError(f"no state with index {index}")
        self._transitions[source].append((transition, target))
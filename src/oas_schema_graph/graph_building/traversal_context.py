"""Traversal context stacks shared by the graph builder's create/back calls."""

from __future__ import annotations

from dataclasses import dataclass

from .graph_models import SchemaClass, SchemaProperty


@dataclass(frozen=True)
class UndoAction:
    """How many entries one create call pushed onto each context stack."""

    containers: int = 0
    properties: int = 0
    combiners: int = 0

    def combine(self, other: UndoAction) -> UndoAction:
        return UndoAction(
            containers=self.containers + other.containers,
            properties=self.properties + other.properties,
            combiners=self.combiners + other.combiners,
        )


NO_UNDO = UndoAction()


class TraversalContext:
    """Classes, properties and combiners currently open, innermost last."""

    def __init__(self) -> None:
        self.containers: list[SchemaClass] = []
        self.properties: list[SchemaProperty] = []
        self.combiners: list[str] = []
        self._undo_actions: list[UndoAction] = []

    @property
    def top_container(self) -> SchemaClass | None:
        return self.containers[-1] if self.containers else None

    @property
    def top_property(self) -> SchemaProperty | None:
        return self.properties[-1] if self.properties else None

    @property
    def top_combiner(self) -> str | None:
        return self.combiners[-1] if self.combiners else None

    @property
    def last_available_class(self) -> SchemaClass | None:
        for container in reversed(self.containers):
            if isinstance(container, SchemaClass):
                return container
        return None

    @property
    def depth(self) -> int:
        return len(self._undo_actions)

    def record(self, action: UndoAction) -> None:
        self._undo_actions.append(action)

    def take_last_action(self) -> UndoAction:
        """Remove the most recent undo action without applying it."""
        return self._undo_actions.pop() if self._undo_actions else NO_UNDO

    def undo(self) -> None:
        """Pop every stack entry recorded by the most recent undo action."""
        if not self._undo_actions:
            return
        action = self._undo_actions.pop()
        _pop(self.properties, action.properties)
        _pop(self.containers, action.containers)
        _pop(self.combiners, action.combiners)


def _pop(stack: list, count: int) -> None:
    for _ in range(min(count, len(stack))):
        stack.pop()

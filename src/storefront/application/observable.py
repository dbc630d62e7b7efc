"""Change subscription for the state containers.

Presentation layers subscribe a callable and are called synchronously,
on the event-loop thread, after every state change.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

E = TypeVar("E")

Listener = Callable[[E], None]


class Observable(Generic[E]):

    def __init__(self) -> None:
        self._listeners: list[Listener[E]] = []

    def subscribe(self, listener: Listener[E]) -> Callable[[], None]:
        """Register *listener*; return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: E) -> None:
        # Copy so a listener may unsubscribe itself while being notified.
        for listener in list(self._listeners):
            listener(event)

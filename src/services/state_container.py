"""Single-writer holder for the task store state."""

import logging
from collections.abc import Callable

from src.domain.state import StoreState, initial_state
from src.services.task_reducer import Action, reduce


logger = logging.getLogger(__name__)

Listener = Callable[[StoreState], None]


class StateContainer:
    """Owns the current StoreState; every write goes through `dispatch`.

    Dispatches are applied synchronously in the order they are issued.
    Listeners are notified only when a dispatch actually changes the state.
    """

    def __init__(self, state: StoreState | None = None) -> None:
        self._state = state or initial_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> StoreState:
        return self._state

    def dispatch(self, action: Action) -> StoreState:
        """Apply `action` through the reducer and notify listeners on change."""
        new_state = reduce(self._state, action)
        if new_state is self._state:
            logger.debug("dispatch_noop", extra={"action": type(action).__name__})
            return new_state

        self._state = new_state
        logger.debug("dispatch_applied", extra={"action": type(action).__name__, "tasks": len(new_state.tasks)})
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

"""
Schedule Store.

Holds the one current ScheduleState of a host session and funnels commands
through reducer.apply(). It is the serialization point for a session:
commands are applied one after another, in the caller's thread.

No history is kept; a caller that wants one can record the states passed
to its listener.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from schedule_store.commands import Command
from schedule_store.model import ScheduleState
from schedule_store.reducer import apply, normalize_state

logger = logging.getLogger(__name__)

Listener = Callable[[ScheduleState, ScheduleState], None]


class ScheduleStore:
    def __init__(self, state: ScheduleState | Mapping[str, Any] | None = None) -> None:
        self._state = normalize_state(state)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ScheduleState:
        return self._state

    def dispatch(self, command: Command | Mapping[str, Any]) -> ScheduleState:
        """
        Apply `command` to the current state and make the result current.

        Listeners are called with (previous, new) only when the state object
        actually changed; no-ops are silent.
        """
        previous = self._state
        new_state = apply(previous, command)
        if new_state is previous:
            logger.debug("dispatch: no change")
            return new_state

        self._state = new_state
        # copy: a listener may unsubscribe itself while we iterate
        for listener in list(self._listeners):
            listener(previous, new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener. Returns a function that removes it again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

"""Flat event-driven state machine with entry and exit actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum


class Signal(IntEnum):
    """Reserved signals; application signals start at APP_EVENT_TIMEOUT."""

    EMPTY = 0
    ENTRY = 1
    EXIT = 2
    INIT = 3
    APP_EVENT_TIMEOUT = 4


class EventResult(IntEnum):
    """What a state handler did with an event."""

    HANDLED = 0
    IGNORED = 1
    TRAN = 2


@dataclass(frozen=True)
class Event:
    """An event carrying a signal number."""

    sig: int


StateHandler = Callable[["Fsm", Event], EventResult]

_ENTRY_EVENT = Event(Signal.ENTRY)
_EXIT_EVENT = Event(Signal.EXIT)


class Fsm:
    """A state machine whose current state is a handler ``(fsm, event) -> EventResult``."""

    def __init__(self, initial: StateHandler, event: Event) -> None:
        self.state: StateHandler = initial
        self.state(self, event)
        self.state(self, _ENTRY_EVENT)

    def dispatch(self, event: Event) -> EventResult:
        """Hand ``event`` to the current state, running exit and entry on a transition."""
        source = self.state
        result = source(self, event)
        if result == EventResult.TRAN:
            source(self, _EXIT_EVENT)
            self.state(self, _ENTRY_EVENT)
        return result

    def transition(self, target: StateHandler) -> EventResult:
        """Make ``target`` the current state; return EventResult.TRAN for the handler."""
        self.state = target
        return EventResult.TRAN
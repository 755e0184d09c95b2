"""Debounced push-button with click, multi-click and long-press detection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class ButtonEvent(IntEnum):
    """Events produced by a button; NONE and POPUP are never reported to users."""

    NONE = 0
    POPUP = 1
    SINGLE_CLICK = 2
    DOUBLE_CLICK = 3
    MORE_CLICK = 4
    LONG_CLICK = 5


class ButtonLevel(IntEnum):
    """The electrical level that means the button is pressed."""

    LOW = 0
    HIGH = 1


@dataclass
class ButtonConfig:
    """How to read a button and how long presses and gaps last, in scan periods."""

    io_read: Callable[[], int]
    long_min_cnt: int
    up_max_cnt: int
    active_level: ButtonLevel = ButtonLevel.LOW


@dataclass(frozen=True)
class ButtonEventData:
    """A reported button event and the number of presses that led to it."""

    ev_type: ButtonEvent
    clicks: int


class _Io(Enum):
    UP = 0
    DOWN = 1


_CLICK_TYPES = (ButtonEvent.NONE, ButtonEvent.SINGLE_CLICK, ButtonEvent.DOUBLE_CLICK)


def _click_type(clicks: int) -> ButtonEvent:
    if clicks < len(_CLICK_TYPES):
        return _CLICK_TYPES[clicks]
    return ButtonEvent.MORE_CLICK


class Button:
    """A button state machine driven by periodic calls to :meth:`scan`."""

    def __init__(
        self,
        config: ButtonConfig,
        callback: Optional[Callable[[ButtonEventData], object]] = None,
    ) -> None:
        if config is None or config.io_read is None:
            raise ValueError("button configuration needs an io_read function")
        self.config = config
        self.callback = callback
        self._previous = 0 if config.active_level == ButtonLevel.HIGH else 1
        self._asserted = self._previous
        self._state: Callable[[_Io], ButtonEvent] = self._on_idle
        self.click_count = 0
        self._counter = 0

    def _on_idle(self, io: _Io) -> ButtonEvent:
        if io is _Io.DOWN:
            self._counter = 0
            self.click_count = 1
            self._state = self._on_down
        return ButtonEvent.NONE

    def _on_down(self, io: _Io) -> ButtonEvent:
        if io is _Io.UP:
            self._counter = 0
            self._state = self._on_up_suspense
            return ButtonEvent.POPUP
        self._counter += 1
        if self._counter >= self.config.long_min_cnt:
            self._counter = 0
            self._state = self._on_down_long
            return ButtonEvent.LONG_CLICK
        return ButtonEvent.NONE

    def _on_up_suspense(self, io: _Io) -> ButtonEvent:
        if io is _Io.UP:
            self._counter += 1
            if self._counter >= self.config.up_max_cnt:
                self._counter = 0
                self._state = self._on_up
                return _click_type(self.click_count)
            return ButtonEvent.NONE
        self._counter = 0
        self.click_count += 1
        self._state = self._on_down_short
        return ButtonEvent.NONE

    def _on_up(self, io: _Io) -> ButtonEvent:
        if io is _Io.DOWN:
            self._counter = 0
            self.click_count = 1
            self._state = self._on_down
        return ButtonEvent.NONE

    def _on_down_short(self, io: _Io) -> ButtonEvent:
        if io is _Io.UP:
            self._counter = 0
            self._state = self._on_up_suspense
            return ButtonEvent.POPUP
        return ButtonEvent.NONE

    def _on_down_long(self, io: _Io) -> ButtonEvent:
        if io is _Io.UP:
            self._state = self._on_up
            return ButtonEvent.POPUP
        return ButtonEvent.NONE

    def _debounce(self) -> int:
        current = int(self.config.io_read()) & 0xFF
        self._asserted |= self._previous & current
        self._asserted &= self._previous | current
        self._previous = current
        return self._asserted

    def scan(self) -> Optional[ButtonEventData]:
        """Sample the input once; report and return any user-visible event."""
        level = self._debounce()
        pressed = 1 if self.config.active_level == ButtonLevel.HIGH else 0
        event = self._state(_Io.DOWN if level == pressed else _Io.UP)
        if event in (ButtonEvent.NONE, ButtonEvent.POPUP):
            return None
        data = ButtonEventData(event, self.click_count)
        if self.callback is not None:
            self.callback(data)
        return data
"""Turns raw key presses into semantic driver input with tap/hold detection."""

from __future__ import annotations

import time
from typing import Callable, Protocol

from manualdrive.types import InputState

Clock = Callable[[], float]


class KeySource(Protocol):
    def read_key(self) -> int: ...


class KeyState:
    """Tracks whether a key is tapped or held, from terminal auto-repeat events."""

    HOLD_GAP = 0.1  # seconds between events that count as holding
    HOLD_TIMEOUT = 0.1
    TAP_TIMEOUT = 0.45

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._last_press = float("-inf")
        self.is_holding = False

    def press(self) -> None:
        """Record a key event."""
        now = self._clock()
        if now - self._last_press < self.HOLD_GAP:
            self.is_holding = True
        self._last_press = now

    def is_active(self) -> bool:
        """Whether the key still counts as pressed."""
        timeout = self.HOLD_TIMEOUT if self.is_holding else self.TAP_TIMEOUT
        return self._clock() - self._last_press < timeout

    def reset(self) -> None:
        """Deactivate the key."""
        self.is_holding = False
        self._last_press = self._clock() - 10.0

    def check_and_maintain(self) -> bool:
        """Report activity, clearing the hold state once the key goes idle."""
        active = self.is_active()
        if not active:
            if self.is_holding:
                self.reset()
            self.is_holding = False
        return active


_TRIGGERS = {
    " ": "emergency_stop",
    "m": "switch_mode",
    "z": "toggle_auto",
    "r": "reset_pose",
    "x": "shift_drive",
    "c": "shift_reverse",
    "v": "shift_park",
    "q": "quit",
}

_HELD_KEYS = "wsad"


class InputSystem:
    """Reads all pending keys each cycle and produces an InputState."""

    def __init__(self, reader: KeySource, clock: Clock = time.monotonic) -> None:
        self._reader = reader
        self._keys = {key: KeyState(clock) for key in _HELD_KEYS}

    def update(self) -> InputState:
        """Consume pending key events and return this cycle's input."""
        triggers: dict[str, bool] = {}
        while (code := self._reader.read_key()) > 0:
            key = chr(code).lower()
            if key in self._keys:
                self._keys[key].press()
            elif key in _TRIGGERS:
                triggers[_TRIGGERS[key]] = True

        w, s, a, d = (self._keys[k].check_and_maintain() for k in "wsad")

        return InputState(
            throttle=1.0 if w else 0.0,
            throttle_hold=self._keys["w"].is_holding,
            brake=1.0 if s else 0.0,
            brake_hold=self._keys["s"].is_holding,
            steer_dir=(1 if a else 0) + (-1 if d else 0),
            **triggers,
        )

    def reset(self) -> None:
        """Deactivate all continuous keys."""
        for state in self._keys.values():
            state.reset()

    def _key(self, key: str) -> KeyState:
        try:
            return self._keys[key.lower()]
        except KeyError:
            raise KeyError(f"not a continuous key: {key!r}") from None

    def is_holding(self, key: str) -> bool:
        """Whether one of W, A, S, D is being held."""
        return self._key(key).is_holding

    def is_active(self, key: str) -> bool:
        """Whether one of W, A, S, D is currently pressed."""
        return self._key(key).is_active()
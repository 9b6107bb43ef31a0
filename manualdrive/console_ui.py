"""Terminal rendering of the key help and the live status line."""

from __future__ import annotations

import sys
from typing import TextIO

from manualdrive.factory import DriveModeFactory, default_factory
from manualdrive.input_system import InputSystem
from manualdrive.mode_manager import ModeManager
from manualdrive.types import ControlCommand, Gear, ShiftState, VehicleState

CLEAR_SCREEN = "\033[2J\033[1;1H"
SAVE_CURSOR = "\033[s"
RESTORE_CURSOR = "\033[u"
CLEAR_BELOW = "\033[J"

_GEAR_LETTERS = {Gear.PARK: "P", Gear.REVERSE: "R", Gear.DRIVE: "D", Gear.LOW: "L"}
_RULE = "=" * 40
_THIN_RULE = "-" * 40


def gear_letter(gear: Gear) -> str:
    """One-letter display for a gear; anything unmapped shows as N."""
    return _GEAR_LETTERS.get(gear, "N")


def key_char(active: bool, holding: bool, letter: str) -> str:
    """Uppercase when held, lowercase when tapped, '.' when idle."""
    if holding:
        return letter.upper()
    if active:
        return letter.lower()
    return "."


def render_header(factory: DriveModeFactory) -> str:
    """The key help block, ending with a save-cursor sequence."""
    names = []
    for mode_type in factory.available_modes():
        mode = factory.create(mode_type)
        names.append(mode.name if mode is not None else "NONE")
    lines = [
        _RULE,
        "   Manual Teleop".ljust(40),
        _RULE,
        "  [W] Throttle  [S] Brake               ",
        "  [A] Left      [D] Right               ",
        _THIN_RULE,
        "  [Z] Auto/Local (Toggle)               ",
        "  [X] Drive  [C] Reverse  [V] Park      ",
        "  [SPACE] Emergency Stop / Resume       ",
        "  [R] Reset Initial Pose                ",
        f"  [M] Switch Mode ({'/'.join(names)})      ",
        "  [Q] Quit                              ",
        _RULE,
    ]
    return "".join(line + "\n" for line in lines) + SAVE_CURSOR


def render_status(
    input_system: InputSystem,
    manager: ModeManager,
    state: VehicleState,
    cmd: ControlCommand,
    shift_state: ShiftState,
    pending_gear: Gear,
    info_msg: str = "",
) -> str:
    """The status block: optional info line, then one status line."""
    parts = []
    if info_msg:
        parts.append(info_msg + "\n")

    gear_display = gear_letter(state.gear)
    if shift_state != ShiftState.IDLE:
        gear_display += "->" + gear_letter(pending_gear)

    line = (
        f"[{manager.current_mode_name()}] Gear: {gear_display} | "
        f"Real: {abs(state.velocity * 3.6):.1f} km/hr | "
        f"Set: {cmd.velocity * 3.6:.1f} km/hr | "
        f"Steer: {cmd.steer_angle:.2f} rad"
    )
    status = manager.status_string()
    if status:
        line += " | " + status
    keys = "".join(
        key_char(input_system.is_active(k), input_system.is_holding(k), k)
        for k in "WASD"
    )
    parts.append(f"{line} | [{keys}]")
    return "".join(parts)


class ConsoleUI:
    """Draws the header once and redraws the status roughly every sixth call."""

    REFRESH_EVERY = 6

    def __init__(
        self, stream: TextIO | None = None, factory: DriveModeFactory | None = None
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._factory = factory if factory is not None else default_factory()
        self._frame = 0

    def init(self) -> None:
        """Clear the screen and print the key help."""
        self._stream.write(CLEAR_SCREEN + render_header(self._factory))
        self._stream.flush()

    def refresh(
        self,
        input_system: InputSystem,
        manager: ModeManager,
        state: VehicleState,
        cmd: ControlCommand,
        shift_state: ShiftState,
        pending_gear: Gear,
        info_msg: str = "",
    ) -> bool:
        """Redraw the status below the header; returns whether it drew."""
        frame = self._frame
        self._frame += 1
        if frame % self.REFRESH_EVERY != 0:
            return False
        self._stream.write(
            RESTORE_CURSOR
            + CLEAR_BELOW
            + render_status(
                input_system, manager, state, cmd, shift_state, pending_gear, info_msg
            )
        )
        self._stream.flush()
        return True
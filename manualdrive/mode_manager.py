"""Owns the active drive mode and switches between modes."""

from __future__ import annotations

from manualdrive.drive_mode import DriveMode
from manualdrive.factory import DriveModeFactory, default_factory
from manualdrive.types import ControlCommand, InputState, ModeType, VehicleState


class ModeManager:
    """Keeps one active drive mode and handles emergency stop and mode cycling."""

    def __init__(self, factory: DriveModeFactory | None = None) -> None:
        self._factory = factory if factory is not None else default_factory()
        self._active: DriveMode | None = None
        self._current_type = ModeType.STOP
        self._previous_type = ModeType.STOP
        self._last_cmd = ControlCommand()
        self._switch(ModeType.STOP, VehicleState())

    @property
    def command(self) -> ControlCommand:
        """The command computed by the most recent update."""
        return self._last_cmd

    @property
    def current_type(self) -> ModeType:
        """Type of the mode currently selected."""
        return self._current_type

    def reinit(self, state: VehicleState) -> None:
        """Restart the current mode from the given vehicle state."""
        self._switch(self._current_type, state)

    def update(
        self, dt: float, input_state: InputState, vehicle_state: VehicleState
    ) -> None:
        """Apply mode-switching input, then run the active mode for one cycle."""
        if input_state.emergency_stop:
            if self._current_type == ModeType.STOP:
                self._switch(self._previous_type, vehicle_state)
            else:
                self._switch(ModeType.STOP, vehicle_state)

        if input_state.switch_mode:
            modes = self._factory.available_modes()
            if modes:
                try:
                    index = modes.index(self._current_type)
                except ValueError:
                    index = 0
                self._switch(modes[(index + 1) % len(modes)], vehicle_state)

        if self._active is None:
            return

        self._last_cmd = self._active.update(dt, input_state, vehicle_state)

    def current_mode_name(self) -> str:
        """Display name of the active mode, or NONE without one."""
        return self._active.name if self._active is not None else "NONE"

    def status_string(self) -> str:
        """Mode-specific status text of the active mode."""
        return self._active.status_string() if self._active is not None else ""

    def _switch(self, mode_type: ModeType, state: VehicleState) -> None:
        if self._active is not None:
            self._active.on_exit()

        self._previous_type = self._current_type
        self._current_type = mode_type

        self._active = self._factory.create(mode_type)
        if self._active is not None:
            self._active.on_enter(state)
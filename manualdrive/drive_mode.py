"""Base class for driving strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from manualdrive.types import ControlCommand, InputState, VehicleState


class DriveMode(ABC):
    """A strategy turning driver input into a control command."""

    name: ClassVar[str] = "NONE"

    def on_enter(self, current_state: VehicleState) -> None:
        """Called when the mode becomes active."""

    def on_exit(self) -> None:
        """Called when the mode is deactivated."""

    @abstractmethod
    def update(
        self, dt: float, input_state: InputState, vehicle_state: VehicleState
    ) -> ControlCommand:
        """Compute the command for one control cycle."""

    def status_string(self) -> str:
        """Mode-specific text for the status line."""
        return ""
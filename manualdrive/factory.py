"""Registry creating drive modes by type."""

from __future__ import annotations

from typing import Callable

from manualdrive.drive_mode import DriveMode
from manualdrive.types import ModeType

Creator = Callable[[], DriveMode]


class DriveModeFactory:
    """Maps mode types to callables that build fresh mode instances."""

    def __init__(self) -> None:
        self._creators: dict[ModeType, Creator] = {}

    def register(self, mode_type: ModeType, creator: Creator) -> None:
        """Register or replace the creator for a mode type."""
        self._creators[mode_type] = creator

    def create(self, mode_type: ModeType) -> DriveMode | None:
        """Build a new mode, or return None if the type is not registered."""
        creator = self._creators.get(mode_type)
        return creator() if creator is not None else None

    def available_modes(self) -> list[ModeType]:
        """Registered mode types in ascending order."""
        return sorted(self._creators)


_DEFAULT = DriveModeFactory()


def default_factory() -> DriveModeFactory:
    """The process-wide shared factory."""
    return _DEFAULT
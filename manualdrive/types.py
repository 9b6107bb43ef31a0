"""Plain data shared by the input, mode and output layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Gear(IntEnum):
    """Gear positions, numbered as the vehicle interface numbers them."""

    NONE = 0
    PARK = 1
    REVERSE = 2
    NEUTRAL = 3
    DRIVE = 4
    LOW = 5


class ModeType(IntEnum):
    """Available driving strategies, in cycling order."""

    STOP = 0
    PHYSICS = 1
    CRUISE = 2


class ShiftState(Enum):
    """Phases of the stop-wait-shift safety sequence."""

    IDLE = "idle"
    STOPPING = "stopping"
    SHIFTING = "shifting"


@dataclass
class VehicleState:
    """Feedback received from the vehicle."""

    velocity: float = 0.0  # m/s
    gear: Gear = Gear.PARK
    is_engaged: bool = False
    steer_angle: float = 0.0  # rad


@dataclass
class InputState:
    """Semantic driver input for one control cycle."""

    throttle: float = 0.0  # 0.0 to 1.0
    throttle_hold: bool = False
    brake: float = 0.0  # 0.0 to 1.0
    brake_hold: bool = False
    steer_dir: int = 0  # -1 right, 0 none, 1 left

    shift_drive: bool = False
    shift_reverse: bool = False
    shift_park: bool = False

    toggle_auto: bool = False
    emergency_stop: bool = False
    reset_pose: bool = False
    switch_mode: bool = False

    quit: bool = False


@dataclass
class ControlCommand:
    """Command sent to the vehicle."""

    velocity: float = 0.0  # m/s
    acceleration: float = 0.0  # m/s^2
    steer_angle: float = 0.0  # rad
    gear_cmd: Gear = Gear.NONE
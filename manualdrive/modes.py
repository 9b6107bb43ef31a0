"""The concrete driving strategies: stop, physics and cruise."""

from __future__ import annotations

import math
from dataclasses import dataclass

from manualdrive.drive_mode import DriveMode
from manualdrive.factory import DriveModeFactory
from manualdrive.types import (
    ControlCommand,
    Gear,
    InputState,
    ModeType,
    VehicleState,
)

_KPH_PER_MPS = 3.6


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class StopDriveMode(DriveMode):
    """Brakes hard and centres the steering."""

    name = "STOP"

    def update(
        self, dt: float, input_state: InputState, vehicle_state: VehicleState
    ) -> ControlCommand:
        return ControlCommand(velocity=0.0, acceleration=-10.0, steer_angle=0.0)


@dataclass(frozen=True)
class PhysicsParams:
    """Tuning of the inertia-based mode."""

    max_speed: float = 27.78
    max_steer: float = 0.6
    steer_attack: float = 0.8
    steer_decay: float = 1.0
    steer_deadzone: float = 0.01
    brake_rate: float = 10.0
    friction_rate: float = 3.0


class PhysicsDriveMode(DriveMode):
    """Inertia-based control with ramped throttle, friction and auto-centring."""

    name = "PHYSICS"
    PARK_FRICTION = 10.0
    MAX_ACCEL_RATE = 9.0

    def __init__(self, params: PhysicsParams | None = None) -> None:
        self.params = params or PhysicsParams()
        self._speed = 0.0
        self._steer = 0.0
        self._accel = 0.0
        self._accel_rate = 0.0
        self._last_gear = Gear.PARK

    def on_enter(self, current_state: VehicleState) -> None:
        self._speed = abs(current_state.velocity)
        self._steer = current_state.steer_angle
        self._accel = 0.0
        self._accel_rate = 0.0
        self._last_gear = current_state.gear

    def _update_steer(self, dt: float, steer_dir: int) -> None:
        p = self.params
        if steer_dir != 0:
            self._steer += steer_dir * p.steer_attack * dt
        elif self._steer > p.steer_deadzone:
            self._steer = max(self._steer - p.steer_decay * dt, 0.0)
        elif self._steer < -p.steer_deadzone:
            self._steer = min(self._steer + p.steer_decay * dt, 0.0)
        else:
            self._steer = 0.0
        self._steer = _clamp(self._steer, -p.max_steer, p.max_steer)

    def update(
        self, dt: float, input_state: InputState, vehicle_state: VehicleState
    ) -> ControlCommand:
        p = self.params
        if vehicle_state.gear != self._last_gear:
            self._speed = 0.0
            self._accel = 0.0
            self._accel_rate = 0.0
            self._last_gear = vehicle_state.gear

        self._update_steer(dt, input_state.steer_dir)

        real_speed = abs(vehicle_state.velocity)
        throttle = input_state.throttle > 0

        if throttle:
            self._accel_rate = min(self._accel_rate + 1.0, self.MAX_ACCEL_RATE)
        else:
            self._accel_rate = 0.0
            # Snap back when the command runs far ahead of the real vehicle.
            if self._speed > real_speed + 2.0:
                self._speed = real_speed + 0.5

        if throttle:
            self._speed += self._accel_rate * dt

        if input_state.brake > 0 and self._speed > 0:
            self._speed = max(self._speed - p.brake_rate * dt, 0.0)

        friction = (
            self.PARK_FRICTION if vehicle_state.gear == Gear.PARK else p.friction_rate
        )
        if self._speed > 0:
            self._speed = max(self._speed - friction * dt, 0.0)

        self._speed = _clamp(self._speed, 0.0, p.max_speed)

        accel_cmd = (self._speed - real_speed) / dt if dt > 1e-4 else 0.0

        return ControlCommand(
            velocity=self._speed, acceleration=accel_cmd, steer_angle=self._steer
        )

    def status_string(self) -> str:
        return f"Acc: {self._accel:.2f} m/s2"


class CruiseDriveMode(DriveMode):
    """Speed setpoint control with tap/hold adjustment and steering lock."""

    name = "CRUISE"

    MAX_SPEED = 27.78  # 100 km/h
    STEER_RATE = 0.3  # rad/s
    STEER_LIMIT = 0.6  # rad
    VEL_INC_HOLD = 5.0 / _KPH_PER_MPS  # +5 km/h per second
    VEL_DEC_HOLD = 10.0 / _KPH_PER_MPS  # -10 km/h per second
    ACCEL_P_GAIN = 3.0
    MAX_ACCEL = 5.0
    MIN_ACCEL = -10.0

    def __init__(self) -> None:
        self.target_speed = 0.0
        self._steer = 0.0
        self._last_gear = Gear.PARK
        self._last_throttle = False
        self._last_brake = False

    def on_enter(self, current_state: VehicleState) -> None:
        self.target_speed = abs(current_state.velocity)
        if self.target_speed > self.MAX_SPEED:
            self.target_speed = 0.0
        if current_state.gear == Gear.REVERSE:
            self.target_speed = 0.0
        self._steer = current_state.steer_angle
        self._last_throttle = False
        self._last_brake = False
        self._last_gear = current_state.gear

    def _adjust_setpoint(self, dt: float, input_state: InputState) -> None:
        throttle = input_state.throttle > 0
        if throttle:
            if input_state.throttle_hold:
                self.target_speed += self.VEL_INC_HOLD * dt
            elif not self._last_throttle:
                kph = self.target_speed * _KPH_PER_MPS
                self.target_speed = (math.floor(kph) + 1.0) / _KPH_PER_MPS
        self._last_throttle = throttle

        brake = input_state.brake > 0
        if brake:
            if input_state.brake_hold:
                self.target_speed -= self.VEL_DEC_HOLD * dt
            elif not self._last_brake:
                kph = self.target_speed * _KPH_PER_MPS
                self.target_speed = (math.ceil(kph) - 1.0) / _KPH_PER_MPS
        self._last_brake = brake

    def update(
        self, dt: float, input_state: InputState, vehicle_state: VehicleState
    ) -> ControlCommand:
        if vehicle_state.gear != self._last_gear:
            self.target_speed = 0.0
            self._last_gear = vehicle_state.gear

        if input_state.steer_dir != 0:
            self._steer += input_state.steer_dir * self.STEER_RATE * dt
        self._steer = _clamp(self._steer, -self.STEER_LIMIT, self.STEER_LIMIT)

        if vehicle_state.gear == Gear.PARK:
            self.target_speed = 0.0
        else:
            self._adjust_setpoint(dt, input_state)

        self.target_speed = _clamp(self.target_speed, 0.0, self.MAX_SPEED)

        error = self.target_speed - abs(vehicle_state.velocity)
        accel_cmd = _clamp(error * self.ACCEL_P_GAIN, self.MIN_ACCEL, self.MAX_ACCEL)

        return ControlCommand(
            velocity=self.target_speed, acceleration=accel_cmd, steer_angle=self._steer
        )


def register_default_modes(factory: DriveModeFactory) -> None:
    """Register the stop, physics and cruise modes with a factory."""
    factory.register(ModeType.PHYSICS, PhysicsDriveMode)
    factory.register(ModeType.CRUISE, CruiseDriveMode)
    factory.register(ModeType.STOP, StopDriveMode)
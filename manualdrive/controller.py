"""One control cycle: input handling, stop-wait-shift safety, mode update, output."""

from __future__ import annotations

from typing import Protocol

from manualdrive.console_ui import ConsoleUI
from manualdrive.input_system import InputSystem
from manualdrive.mode_manager import ModeManager
from manualdrive.types import ControlCommand, Gear, InputState, ShiftState, VehicleState

MAX_DT = 0.1  # seconds
STOP_TOLERANCE = 0.05  # m/s
HOLD_BRAKE = -10.0  # m/s^2


def clamp_dt(dt: float) -> float:
    """Cap the cycle time so a stalled loop does not produce a huge step."""
    return min(dt, MAX_DT)


class VehicleInterface(Protocol):
    """What the control loop needs from the vehicle connection."""

    def vehicle_state(self) -> VehicleState: ...

    def publish_command(self, cmd: ControlCommand) -> None: ...

    def set_target_gear(self, gear: Gear) -> None: ...

    def toggle_manual_control(self) -> bool: ...

    def reset_initial_pose(self) -> None: ...

    def info_message(self) -> str: ...


class ShiftSupervisor:
    """Stops the vehicle before a gear change and holds the brake until it lands."""

    def __init__(self) -> None:
        self.state = ShiftState.IDLE
        self.pending_gear = Gear.PARK

    def request(self, input_state: InputState, vehicle_state: VehicleState) -> None:
        """Start a shift for any requested gear the vehicle is not already in."""
        requests = (
            (input_state.shift_drive, Gear.DRIVE),
            (input_state.shift_reverse, Gear.REVERSE),
            (input_state.shift_park, Gear.PARK),
        )
        for wanted, gear in requests:
            if wanted and vehicle_state.gear != gear:
                self.pending_gear = gear
                self.state = ShiftState.STOPPING

    def _hold(self, vehicle_state: VehicleState) -> ControlCommand:
        return ControlCommand(
            velocity=0.0,
            acceleration=HOLD_BRAKE,
            steer_angle=vehicle_state.steer_angle,
        )

    def step(
        self, vehicle_state: VehicleState, vehicle: VehicleInterface
    ) -> ControlCommand | None:
        """Advance the sequence; return the overriding command, or None."""
        if self.state is ShiftState.STOPPING:
            override = self._hold(vehicle_state)
            if abs(vehicle_state.velocity) < STOP_TOLERANCE:
                vehicle.set_target_gear(self.pending_gear)
                self.state = ShiftState.SHIFTING
            return override
        if self.state is ShiftState.SHIFTING:
            if vehicle_state.gear == self.pending_gear:
                self.state = ShiftState.IDLE
                return None
            return self._hold(vehicle_state)
        return None


class TeleopLoop:
    """Ties input, modes, shift safety, vehicle output and display together."""

    def __init__(
        self,
        vehicle: VehicleInterface,
        input_system: InputSystem,
        manager: ModeManager,
        ui: ConsoleUI | None = None,
    ) -> None:
        self.vehicle = vehicle
        self.input_system = input_system
        self.manager = manager
        self.ui = ui
        self.shift = ShiftSupervisor()
        self.running = True

    def step(self, dt: float, input_state: InputState) -> ControlCommand:
        """Run one control cycle and return the command that was published."""
        dt = clamp_dt(dt)

        if input_state.quit:
            self.running = False

        if input_state.toggle_auto:
            self.vehicle.toggle_manual_control()
            self.input_system.reset()

        if input_state.reset_pose:
            self.vehicle.reset_initial_pose()

        vehicle_state = self.vehicle.vehicle_state()

        self.shift.request(input_state, vehicle_state)
        was_shifting = self.shift.state is ShiftState.SHIFTING
        override = self.shift.step(vehicle_state, self.vehicle)
        if was_shifting and self.shift.state is ShiftState.IDLE:
            self.manager.reinit(vehicle_state)

        self.manager.update(dt, input_state, vehicle_state)
        cmd = override if override is not None else self.manager.command

        self.vehicle.publish_command(cmd)

        if self.ui is not None:
            self.ui.refresh(
                self.input_system,
                self.manager,
                vehicle_state,
                cmd,
                self.shift.state,
                self.shift.pending_gear,
                self.vehicle.info_message(),
            )
        return cmd
# manualdrive

Control logic for driving a vehicle from the keyboard. The package turns raw
key presses into throttle, brake and steering intent, runs that intent through
a selectable drive mode, and produces a control command made of a target
velocity, an acceleration and a steering angle. It also handles gear changes
safely and draws a status line in the terminal.

The package has no dependencies beyond the standard library. Keyboard reading
uses `termios` and `fcntl`, so it needs a POSIX system.

## What the package does not do

- It does not connect to a vehicle. Whatever carries commands to the vehicle
  and reports its state back is supplied by you, as an object that meets
  `manualdrive.controller.VehicleInterface`: `vehicle_state()`,
  `publish_command(cmd)`, `set_target_gear(gear)`, `toggle_manual_control()`,
  `reset_initial_pose()` and `info_message()`. Switching between automatic and
  manual control and resetting the initial pose are left entirely to that
  object.
- It installs no command. You write the loop that reads input, times each
  cycle and calls `TeleopLoop.step` (see the example below).

## Data types

`manualdrive.types` holds the shared data: the enums `Gear` (`NONE`, `PARK`,
`REVERSE`, `NEUTRAL`, `DRIVE`, `LOW`), `ModeType` (`STOP`, `PHYSICS`,
`CRUISE`) and `ShiftState` (`IDLE`, `STOPPING`, `SHIFTING`), and the
dataclasses `VehicleState`, `InputState` and `ControlCommand`.

## Drive modes

All modes derive from `manualdrive.drive_mode.DriveMode`, which has
`on_enter(state)`, `on_exit()`, `update(dt, input_state, vehicle_state)`, a
`name` and `status_string()`. The concrete modes live in `manualdrive.modes`:

- **STOP** (`StopDriveMode`): commands zero velocity, -10 m/s² and centred
  steering.
- **PHYSICS** (`PhysicsDriveMode`): inertia-based driving. Holding throttle
  ramps the acceleration rate up to 9 m/s², braking and friction slow the
  commanded speed down (friction is stronger in park), and the steering
  returns to centre on its own when no steering key is pressed. Tuning is in
  `PhysicsParams`.
- **CRUISE** (`CruiseDriveMode`): a speed setpoint. A tap on throttle or brake
  moves the setpoint to the next or previous whole km/h; holding them changes
  it continuously (+5 km/h per second, -10 km/h per second). Steering stays
  where it was left. The acceleration comes from a proportional controller,
  limited to -10 … 5 m/s², and the setpoint is limited to 100 km/h.

PHYSICS and CRUISE both reset their targets whenever the reported gear
changes. CRUISE holds a zero setpoint in park and starts at zero when entered
in reverse.

## Factory and mode manager

`manualdrive.factory.DriveModeFactory` maps a `ModeType` to a callable that
builds a fresh mode; `available_modes()` lists registered types in ascending
order. `default_factory()` returns a shared instance, which starts empty:
`manualdrive.modes.register_default_modes(factory)` fills a factory with the
three modes above.

`manualdrive.mode_manager.ModeManager` (on the shared factory unless given
another) starts in STOP. On each `update`:

- an emergency stop switches to STOP, or, if already in STOP, back to the
  previous mode;
- a mode switch request cycles to the next registered mode;
- the active mode then computes the command, available as `manager.command`.

`reinit(state)` restarts the current mode; `current_mode_name()` and
`status_string()` serve the display.

## Keys

| Key     | Action                          |
|---------|---------------------------------|
| W / S   | Throttle / Brake                |
| A / D   | Steer left / right              |
| Z       | Toggle automatic / manual       |
| X C V   | Shift to Drive / Reverse / Park |
| SPACE   | Emergency stop / resume         |
| R       | Reset initial pose              |
| M       | Switch drive mode               |
| Q       | Quit                            |

Keys are case-insensitive. `manualdrive.keyboard_reader.KeyboardReader` is a
context manager that switches the terminal to non-canonical, non-echoing,
non-blocking input and restores it on exit; `read_key()` returns the next byte
or 0 when nothing is waiting.

`manualdrive.input_system.InputSystem` takes any object with `read_key()` and
an optional clock, drains all pending keys on `update()` and returns an
`InputState`. A terminal only delivers key-repeat events, so `KeyState` counts
a key as pressed for 450 ms after a single event, treats it as held once
events arrive less than 100 ms apart, and lets a held key go 100 ms after the
last event. `is_active(key)` and `is_holding(key)` report on W, A, S and D.

## Gear changes and the control cycle

`manualdrive.controller.ShiftSupervisor` never shifts a moving vehicle. On a
shift request for a gear the vehicle is not in, it brakes to a stop (below
0.05 m/s), asks for the new gear through `set_target_gear`, and keeps braking
until the vehicle reports that gear.

`TeleopLoop.step(dt, input_state)` runs one cycle: it caps `dt` at 0.1 s
(`clamp_dt`), clears `running` on quit, forwards the auto/manual toggle
(resetting the held keys) and pose reset to the vehicle, applies the shift
sequence, restarts the drive mode once a shift completes, updates the mode
manager, publishes the command (the shift override while shifting) and
refreshes the display if one was given. It returns the published command.

```python
import time

from manualdrive.console_ui import ConsoleUI
from manualdrive.controller import TeleopLoop
from manualdrive.factory import default_factory
from manualdrive.input_system import InputSystem
from manualdrive.keyboard_reader import KeyboardReader
from manualdrive.mode_manager import ModeManager
from manualdrive.modes import register_default_modes

register_default_modes(default_factory())

vehicle = MyVehicle()  # your VehicleInterface implementation

with KeyboardReader() as reader:
    inputs = InputSystem(reader)
    ui = ConsoleUI()
    ui.init()
    loop = TeleopLoop(vehicle, inputs, ModeManager(), ui)
    last = time.monotonic()
    while loop.running:
        now = time.monotonic()
        loop.step(now - last, inputs.update())
        last = now
        time.sleep(1 / 60)
```

## Using a mode directly

```python
from manualdrive.modes import CruiseDriveMode
from manualdrive.types import Gear, InputState, VehicleState

mode = CruiseDriveMode()
state = VehicleState(velocity=0.0, gear=Gear.DRIVE)
mode.on_enter(state)

command = mode.update(0.1, InputState(throttle=1.0), state)
print(command.velocity, command.acceleration, command.steer_angle)
```

## Console display

`manualdrive.console_ui.ConsoleUI` writes to standard output or a given
stream. `init()` clears the screen and prints the key help, naming the modes
registered in its factory. `refresh(...)` redraws the status below the help on
every sixth call and returns whether it drew: an optional info line from the
vehicle, then the mode, the gear (with `->` and the pending gear while
shifting), real and set speed in km/h, the steering angle, any mode status and
the W/A/S/D states, where an upper-case letter means held, lower-case means
pressed and `.` means released. The pieces are also available as
`render_header`, `render_status`, `gear_letter` and `key_char`.
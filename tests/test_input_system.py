import pytest

from manualdrive.input_system import InputSystem, KeyState


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class FakeReader:
    def __init__(self):
        self.pending = []

    def feed(self, text):
        self.pending.extend(ord(c) for c in text)

    def read_key(self):
        return self.pending.pop(0) if self.pending else 0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def reader():
    return FakeReader()


@pytest.fixture
def system(reader, clock):
    return InputSystem(reader, clock)


def test_fresh_key_inactive(clock):
    key = KeyState(clock)
    assert not key.is_active()
    assert not key.is_holding


def test_tap_then_timeout(clock):
    key = KeyState(clock)
    key.press()
    assert key.is_active()
    assert not key.is_holding
    clock.now += 0.3
    assert key.is_active()
    clock.now += 0.2
    assert not key.check_and_maintain()


def test_rapid_presses_become_hold(clock):
    key = KeyState(clock)
    key.press()
    clock.now += 0.03
    key.press()
    assert key.is_holding
    clock.now += 0.15
    assert not key.check_and_maintain()
    assert not key.is_holding


def test_reset_deactivates(clock):
    key = KeyState(clock)
    key.press()
    key.reset()
    assert not key.is_active()


def test_throttle_tap(system, reader):
    reader.feed("w")
    state = system.update()
    assert state.throttle == 1.0
    assert not state.throttle_hold
    assert state.brake == 0.0


def test_throttle_released_after_timeout(system, reader, clock):
    reader.feed("W")
    system.update()
    clock.now += 1.0
    assert system.update().throttle == 0.0


def test_brake_hold(system, reader, clock):
    reader.feed("s")
    system.update()
    clock.now += 0.02
    reader.feed("s")
    state = system.update()
    assert state.brake == 1.0
    assert state.brake_hold
    assert system.is_holding("S")


@pytest.mark.parametrize("keys, expected", [("a", 1), ("d", -1), ("ad", 0), ("", 0)])
def test_steering_direction(system, reader, keys, expected):
    reader.feed(keys)
    assert system.update().steer_dir == expected


@pytest.mark.parametrize(
    "key, field",
    [
        (" ", "emergency_stop"),
        ("m", "switch_mode"),
        ("Z", "toggle_auto"),
        ("r", "reset_pose"),
        ("x", "shift_drive"),
        ("C", "shift_reverse"),
        ("v", "shift_park"),
        ("q", "quit"),
    ],
)
def test_triggers(system, reader, key, field):
    reader.feed(key)
    assert getattr(system.update(), field) is True
    assert getattr(system.update(), field) is False


def test_unknown_keys_ignored(system, reader):
    reader.feed("k7")
    state = system.update()
    assert state.throttle == 0.0
    assert not state.quit
    assert reader.pending == []


def test_reset_clears_keys(system, reader):
    reader.feed("wa")
    system.update()
    system.reset()
    assert not system.is_active("w")
    assert not system.is_active("a")
    assert system.update().steer_dir == 0


def test_unknown_query_key_raises(system):
    with pytest.raises(KeyError):
        system.is_active("x")
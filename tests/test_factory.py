from manualdrive.drive_mode import DriveMode
from manualdrive.factory import DriveModeFactory, default_factory
from manualdrive.types import ControlCommand, ModeType


class _Fixed(DriveMode):
    name = "FIXED"

    def update(self, dt, input_state, vehicle_state):
        return ControlCommand()


class _Other(DriveMode):
    name = "OTHER"

    def update(self, dt, input_state, vehicle_state):
        return ControlCommand()


def test_empty_factory():
    factory = DriveModeFactory()
    assert factory.available_modes() == []
    assert factory.create(ModeType.STOP) is None


def test_create_returns_fresh_instances():
    factory = DriveModeFactory()
    factory.register(ModeType.STOP, _Fixed)
    first = factory.create(ModeType.STOP)
    second = factory.create(ModeType.STOP)
    assert isinstance(first, _Fixed)
    assert first is not second


def test_unregistered_type_gives_none():
    factory = DriveModeFactory()
    factory.register(ModeType.STOP, _Fixed)
    assert factory.create(ModeType.CRUISE) is None


def test_available_modes_sorted_by_type():
    factory = DriveModeFactory()
    factory.register(ModeType.CRUISE, _Fixed)
    factory.register(ModeType.STOP, _Fixed)
    factory.register(ModeType.PHYSICS, _Fixed)
    assert factory.available_modes() == [
        ModeType.STOP,
        ModeType.PHYSICS,
        ModeType.CRUISE,
    ]


def test_register_replaces_creator():
    factory = DriveModeFactory()
    factory.register(ModeType.PHYSICS, _Fixed)
    factory.register(ModeType.PHYSICS, _Other)
    assert factory.create(ModeType.PHYSICS).name == "OTHER"
    assert factory.available_modes() == [ModeType.PHYSICS]


def test_default_factory_is_shared():
    first = default_factory()
    second = default_factory()
    assert first is second
    assert second.available_modes() == first.available_modes()
    assert all(isinstance(mode, ModeType) for mode in first.available_modes())
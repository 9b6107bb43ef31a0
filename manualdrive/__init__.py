"""Keyboard teleoperation logic: drive modes, key input, safe shifting and a console display."""

__version__ = "0.1.0"
"""Interactive commands driven by keyboard and mouse events.

A single command is active at a time; a :class:`CommandDispatcher` receives
window events and forwards them to it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import Any

from .objects import SceneObject

KEY_ESCAPE = 256


class KeyAction(IntEnum):
    """What happened to a key or mouse button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class EventType(IntEnum):
    """Kinds of interactive command."""

    EVENT_NONE = 0
    DRAW_2D_POINT = 1
    DRAW_2D_STROKE = 2
    DRAW_2D_SEED_FILL = 3
    DRAW_2D_LINE_SEG = 10
    DRAW_2D_LINE_LEN = 11
    DRAW_2D_LINE_X = 12
    DRAW_2D_LINE_RAY = 13
    DRAW_2D_LINE_STRIP = 14
    DRAW_2D_LINE_LOOP = 15
    DRAW_2D_POLYGON = 20
    DRAW_2D_POLYGON_NC = 21
    DRAW_2D_POLYGON_NR = 22
    DRAW_2D_RECTANGLE = 23
    DRAW_2D_SQUARE = 24
    DRAW_2D_DIAMOND = 25
    DRAW_2D_TRIANGLE = 26
    MODEL_2D_TRANSFORM = 120
    EVENT_UNKNOWN = 2000


class UIEventHandler:
    """Base interactive command; subclasses override the events they handle.

    Every handler returns 0 when the event was handled and a negative value
    when it was ignored. The base handlers accept every event and remember
    the most recent one in ``last_event`` as ``(name, args)``.
    """

    def __init__(self, window: Any = None) -> None:
        self.window = window
        self.step = 0
        self.owner: SceneObject | None = None
        self.data: SceneObject | None = None
        self.last_event: tuple[str, tuple[Any, ...]] | None = None

    @property
    def event_type(self) -> EventType:
        return EventType.EVENT_NONE

    def _accept(self, name: str, *args: Any) -> int:
        self.last_event = (name, args)
        return 0

    def cancel(self, window: Any) -> int:
        """Abort the command, e.g. when Escape is pressed, and reset its progress."""
        self.step = 0
        return self._accept("cancel", window)

    def on_key(self, window: Any, key: int, scancode: int, action: int, mods: int) -> int:
        return self._accept("key", window, key, scancode, action, mods)

    def on_char(self, window: Any, codepoint: int) -> int:
        return self._accept("char", window, codepoint)

    def on_char_mods(self, window: Any, codepoint: int, mods: int) -> int:
        return self._accept("char_mods", window, codepoint, mods)

    def on_mouse_button(self, window: Any, button: int, action: int, mods: int) -> int:
        return self._accept("mouse_button", window, button, action, mods)

    def on_cursor_pos(self, window: Any, xpos: float, ypos: float) -> int:
        return self._accept("cursor_pos", window, xpos, ypos)

    def on_cursor_enter(self, window: Any, entered: int) -> int:
        return self._accept("cursor_enter", window, entered)

    def on_mouse_scroll(self, window: Any, xoffset: float, yoffset: float) -> int:
        return self._accept("mouse_scroll", window, xoffset, yoffset)

    def set_owner_data(self, owner: SceneObject | None, data: SceneObject | None) -> None:
        """Attach the object that owns the event and extra data; neither is managed."""
        self.owner = owner
        self.data = data


class CommandDispatcher:
    """Routes window events to the current command.

    ``show_coord``, if given, is called with every cursor position.
    ``on_drop``, if given, is called with the paths of dropped files.
    """

    def __init__(
        self,
        show_coord: Callable[[float, float], Any] | None = None,
        on_drop: Callable[[tuple[str, ...]], Any] | None = None,
    ) -> None:
        self.command: UIEventHandler | None = None
        self.show_coord = show_coord
        self.on_drop = on_drop
        self.dropped_paths: tuple[str, ...] = ()

    def set_command(self, cmd: UIEventHandler | None) -> None:
        self.command = cmd

    def delete_command(self) -> None:
        """Drop the current command, cancelling it first if it is bound to a window."""
        cmd, self.command = self.command, None
        if cmd is not None and cmd.window is not None:
            cmd.cancel(cmd.window)

    def key_callback(self, window: Any, key: int, scancode: int, action: int, mods: int) -> None:
        """Escape cancels and drops the command; other keys go to the command."""
        if action == KeyAction.PRESS and key == KEY_ESCAPE and self.command is not None:
            self.command.cancel(window)
            self.delete_command()
        if self.command is not None:
            self.command.on_key(window, key, scancode, action, mods)

    def char_callback(self, window: Any, codepoint: int) -> None:
        """Forward character input to the current command."""
        if self.command is not None:
            self.command.on_char(window, codepoint)

    def char_mods_callback(self, window: Any, codepoint: int, mods: int) -> None:
        """Forward character input with modifiers to the current command."""
        if self.command is not None:
            self.command.on_char_mods(window, codepoint, mods)

    def mouse_button_callback(self, window: Any, button: int, action: int, mods: int) -> None:
        if self.command is not None:
            self.command.on_mouse_button(window, button, action, mods)

    def cursor_pos_callback(self, window: Any, xpos: float, ypos: float) -> None:
        if self.show_coord is not None:
            self.show_coord(xpos, ypos)
        if self.command is not None:
            self.command.on_cursor_pos(window, xpos, ypos)

    def cursor_enter_callback(self, window: Any, entered: int) -> None:
        """Forward cursor enter and leave events to the current command."""
        if self.command is not None:
            self.command.on_cursor_enter(window, entered)

    def scroll_callback(self, window: Any, xoffset: float, yoffset: float) -> None:
        if self.command is not None:
            self.command.on_mouse_scroll(window, xoffset, yoffset)

    def drop_callback(self, window: Any, paths: Sequence[str]) -> None:
        """Record the paths of dropped files and pass them to ``on_drop``."""
        self.dropped_paths = tuple(paths)
        if self.on_drop is not None:
            self.on_drop(self.dropped_paths)
"""Per-frame data exchanged between the platform layer and the engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

DEFAULT_FRAMEBUFFER_WIDTH = 860
DEFAULT_FRAMEBUFFER_HEIGHT = 420
DEFAULT_WINDOW_WIDTH = 1920
DEFAULT_WINDOW_HEIGHT = 1080
DEFAULT_TARGET_FRAME_RATE = 60
CAMERA_STEP = 2.0

_VK_LEFT = 0x25
_VK_UP = 0x26
_VK_RIGHT = 0x27
_VK_DOWN = 0x28


class Key(enum.IntEnum):
    """Keyboard keys the engine distinguishes; NONE stands for any other key."""

    NONE = 0
    LEFT = enum.auto()
    UP = enum.auto()
    RIGHT = enum.auto()
    DOWN = enum.auto()
    W = enum.auto()
    S = enum.auto()
    A = enum.auto()
    D = enum.auto()
    Q = enum.auto()
    E = enum.auto()
    I = enum.auto()  # noqa: E741
    K = enum.auto()
    J = enum.auto()
    L = enum.auto()
    U = enum.auto()
    O = enum.auto()  # noqa: E741


class MouseButton(enum.Flag):
    """Mouse buttons, combinable as flags."""

    M1 = enum.auto()
    M2 = enum.auto()


class DisplayMode(enum.Enum):
    """How the window is presented."""

    WINDOWED = "windowed"
    BORDERLESS_FULLSCREEN = "borderless_fullscreen"
    EXCLUSIVE_FULLSCREEN = "exclusive_fullscreen"


_KEYMAP: dict[int, Key] = {
    _VK_LEFT: Key.LEFT,
    _VK_UP: Key.UP,
    _VK_RIGHT: Key.RIGHT,
    _VK_DOWN: Key.DOWN,
    **{ord(letter): Key[letter] for letter in "WSADQEIKJLUO"},
}


def map_virtual_key(code: int) -> Key:
    """Map a virtual-key code (low byte only) to a :class:`Key`."""
    return _KEYMAP.get(code & 0xFF, Key.NONE)


@dataclass
class FramePass:
    """What the platform hands the engine each frame."""

    running: bool = True


@dataclass
class FrameResult:
    """What the engine hands back to the platform after a frame.

    ``exclusive_fullscreen`` only matters when ``fullscreen`` is set.
    """

    cap_frame_rate: bool = False
    target_frame_rate: int = DEFAULT_TARGET_FRAME_RATE
    show_cursor: bool = False
    window_buffer: bytes | None = None
    window_buffer_width: int = 0
    window_buffer_height: int = 0
    resize: bool = False
    change_display: bool = False
    fullscreen: bool = False
    exclusive_fullscreen: bool = False
    window_offs_x: int = 0
    window_offs_y: int = 0
    window_width: int = 0
    window_height: int = 0
    cursor_x: int = 0
    cursor_y: int = 0


def default_frame_result() -> FrameResult:
    """The frame result the engine produces before any input changes it."""
    return FrameResult(
        cap_frame_rate=True,
        target_frame_rate=DEFAULT_TARGET_FRAME_RATE,
        show_cursor=False,
        window_buffer=None,
        window_buffer_width=DEFAULT_FRAMEBUFFER_WIDTH,
        window_buffer_height=DEFAULT_FRAMEBUFFER_HEIGHT,
        resize=True,
        change_display=True,
        fullscreen=True,
        exclusive_fullscreen=False,
        window_offs_x=0,
        window_offs_y=0,
        window_width=DEFAULT_WINDOW_WIDTH,
        window_height=DEFAULT_WINDOW_HEIGHT,
        cursor_x=DEFAULT_FRAMEBUFFER_WIDTH // 2,
        cursor_y=DEFAULT_FRAMEBUFFER_HEIGHT // 2,
    )


def display_mode(result: FrameResult) -> DisplayMode | None:
    """The display mode a result asks for, or None if it asks for no change."""
    if not result.change_display:
        return None
    if not result.fullscreen:
        return DisplayMode.WINDOWED
    if result.exclusive_fullscreen:
        return DisplayMode.EXCLUSIVE_FULLSCREEN
    return DisplayMode.BORDERLESS_FULLSCREEN


def sleep_time_ms(target_frame_rate: int, ms_per_frame: float) -> int:
    """Whole milliseconds to sleep to hold the target frame rate.

    Returns 0 unless more than one millisecond remains in the frame.
    """
    if target_frame_rate <= 0:
        raise ValueError("target_frame_rate must be positive")
    remaining = 1000.0 / target_frame_rate - ms_per_frame
    if remaining > 1:
        return int(remaining)
    return 0


@dataclass
class KeyState:
    """Keyboard and mouse state, with per-frame pressed and released edges."""

    keys: set[Key] = field(default_factory=set)
    keys_pressed: set[Key] = field(default_factory=set)
    keys_released: set[Key] = field(default_factory=set)
    mouse: MouseButton = MouseButton(0)
    mouse_pressed: MouseButton = MouseButton(0)
    mouse_released: MouseButton = MouseButton(0)
    moved_mouse: bool = False
    cursor_x: float = 0.0
    cursor_y: float = 0.0

    def key_down_event(self, key: Key) -> None:
        """Record a key going down; a repeat does not count as a new press."""
        if key not in self.keys:
            self.keys_pressed.add(key)
        self.keys.add(key)

    def key_up_event(self, key: Key) -> None:
        """Record a key going up; only a held key counts as released."""
        if key in self.keys:
            self.keys_released.add(key)
        self.keys.discard(key)

    def mouse_down_event(self, button: MouseButton) -> None:
        """Record a mouse button going down."""
        if not self.mouse & button:
            self.mouse_pressed |= button
        self.mouse |= button

    def mouse_up_event(self, button: MouseButton) -> None:
        """Record a mouse button going up."""
        if self.mouse & button:
            self.mouse_released |= button
        self.mouse &= ~button

    def is_down(self, key: Key | MouseButton) -> bool:
        """True while the key or button is held."""
        if isinstance(key, MouseButton):
            return bool(self.mouse & key)
        return key in self.keys

    def was_pressed(self, key: Key | MouseButton) -> bool:
        """True if the key or button went down this frame."""
        if isinstance(key, MouseButton):
            return bool(self.mouse_pressed & key)
        return key in self.keys_pressed

    def was_released(self, key: Key | MouseButton) -> bool:
        """True if the key or button went up this frame."""
        if isinstance(key, MouseButton):
            return bool(self.mouse_released & key)
        return key in self.keys_released

    def end_frame(self) -> None:
        """Forget this frame's edges and mouse movement; held state remains."""
        self.keys_pressed.clear()
        self.keys_released.clear()
        self.mouse_pressed = MouseButton(0)
        self.mouse_released = MouseButton(0)
        self.moved_mouse = False


def camera_movement(keys: KeyState) -> tuple[float, float, float]:
    """Camera-local movement (x, y, z) requested by the held keys."""
    x = y = z = 0.0
    if keys.is_down(Key.W):
        z -= CAMERA_STEP
    if keys.is_down(Key.S):
        z += CAMERA_STEP
    if keys.is_down(Key.A):
        x -= CAMERA_STEP
    if keys.is_down(Key.D):
        x += CAMERA_STEP
    if keys.is_down(Key.Q):
        y -= CAMERA_STEP
    if keys.is_down(Key.E):
        y += CAMERA_STEP
    return (x, y, z)
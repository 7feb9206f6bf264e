"""Data models for livetop."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(slots=True, frozen=True)
class ProcessSample:
    """Immutable sample of a single process."""

    pid: int
    name: str
    cpu_percent: float  # psutil semantics: 0.0 - 100.0 * core_count
    memory_kb: int  # Resident set size in KiB


@dataclass(slots=True)
class SystemSnapshot:
    """One atomic read of system and process metrics."""

    global_cpu_percent: float
    used_memory_kb: int
    total_memory_kb: int
    processes: list[ProcessSample] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class DisplayRow:
    """Pre-formatted cells for one row of the process table."""

    pid_text: str
    name_text: str
    cpu_text: str
    memory_text: str

    def cells(self) -> tuple[str, str, str, str]:
        """Return the cells in column order."""
        return (self.pid_text, self.name_text, self.cpu_text, self.memory_text)


@dataclass(slots=True, frozen=True)
class DashboardModel:
    """Everything the renderer needs to draw one frame."""

    cpu_line: str
    memory_line: str
    rows: tuple[DisplayRow, ...]


class AppState:
    """Lifecycle flag shared by the run loop and the input governor.

    Starts running; `request_quit` moves it to stopped, and there is no
    way back.
    """

    __slots__ = ("_running",)

    def __init__(self) -> None:
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    def request_quit(self) -> None:
        self._running = False

    def __repr__(self) -> str:
        return f"AppState(running={self._running})"


class KeyEventKind(Enum):
    """Whether a key went down, came up, or is auto-repeating."""

    PRESS = "press"
    RELEASE = "release"
    REPEAT = "repeat"


class Modifier(Enum):
    """Keyboard modifiers attached to a key event."""

    CONTROL = "ctrl"
    SHIFT = "shift"
    ALT = "alt"
    META = "meta"


@dataclass(slots=True, frozen=True)
class KeyEvent:
    """A keyboard event.

    `code` is either the typed character ("q", "Q") or a named key
    ("escape", "up", "f1").
    """

    code: str
    modifiers: frozenset[Modifier] = frozenset()
    kind: KeyEventKind = KeyEventKind.PRESS


@dataclass(slots=True, frozen=True)
class MouseEvent:
    """A mouse event; only the position is kept."""

    x: int
    y: int


@dataclass(slots=True, frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    width: int
    height: int


InputEvent = KeyEvent | MouseEvent | ResizeEvent

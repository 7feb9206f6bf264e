"""Input governor: bounded polling of terminal events."""

import asyncio
import logging

from textual import events

from livetop.config import POLL_TIMEOUT
from livetop.errors import InputError
from livetop.models import (
    AppState,
    InputEvent,
    KeyEvent,
    KeyEventKind,
    Modifier,
    MouseEvent,
    ResizeEvent,
)

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"escape", "q", "Q"})
CTRL_QUIT_KEYS = frozenset({"c", "C"})

_MODIFIERS = {modifier.value: modifier for modifier in Modifier}


def is_quit_key(key: KeyEvent) -> bool:
    """Esc, q and Q quit with any modifiers; c and C only with Ctrl."""
    if key.code in QUIT_KEYS:
        return True
    return Modifier.CONTROL in key.modifiers and key.code in CTRL_QUIT_KEYS


def from_textual(event: events.Event) -> InputEvent | None:
    """
    Translate a Textual event into an InputEvent.

    Returns None for events that are not input (focus, mount, ...).
    Textual only reports key presses, so every translated key is a PRESS.
    """
    if isinstance(event, events.Key):
        *prefix, name = event.key.split("+")
        modifiers = frozenset(_MODIFIERS[part] for part in prefix if part in _MODIFIERS)
        code = event.character if event.is_printable and event.character else name
        return KeyEvent(code=code, modifiers=modifiers, kind=KeyEventKind.PRESS)
    if isinstance(event, events.MouseEvent):
        return MouseEvent(x=event.x, y=event.y)
    if isinstance(event, events.Resize):
        return ResizeEvent(width=event.size.width, height=event.size.height)
    return None


class InputGovernor:
    """
    Polls the event queue once per cycle and turns quit keys into the quit
    signal on `AppState`.

    The terminal side feeds events through `push()`. `poll_and_handle()`
    waits at most `timeout` seconds for the first event, then handles any
    others already queued without waiting again.
    """

    def __init__(
        self,
        state: AppState,
        timeout: float = POLL_TIMEOUT,
    ) -> None:
        self._state = state
        self._timeout = timeout
        self._events: asyncio.Queue[InputEvent] = asyncio.Queue()

    @property
    def pending(self) -> int:
        """Number of events waiting to be handled."""
        return self._events.qsize()

    def push(self, event: InputEvent) -> None:
        """Queue an event for the next poll."""
        self._events.put_nowait(event)

    async def poll_and_handle(self) -> None:
        """
        Wait up to the poll timeout for input and handle what arrived.

        Raises:
            InputError: the event queue could not be read.
        """
        try:
            event = await asyncio.wait_for(self._events.get(), timeout=self._timeout)
        except asyncio.TimeoutError:
            return
        except Exception as error:
            raise InputError(f"failed to read input event: {error}") from error

        self.handle(event)
        while True:
            try:
                event = self._events.get_nowait()
            except asyncio.QueueEmpty:
                break
            self.handle(event)

    def handle(self, event: InputEvent) -> None:
        """Apply a single event; only key presses can change state."""
        if isinstance(event, KeyEvent):
            if event.kind is KeyEventKind.PRESS and is_quit_key(event):
                if self._state.running:
                    logger.info("Quit requested (%s)", event.code)
                self._state.request_quit()
        elif isinstance(event, (MouseEvent, ResizeEvent)):
            # Resize needs no action; the next draw uses the new size
            pass

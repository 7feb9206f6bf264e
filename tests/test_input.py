"""Tests for the input governor."""

import asyncio
import time

import pytest
from textual import events

from livetop.errors import InputError
from livetop.input import InputGovernor, from_textual, is_quit_key
from livetop.models import (
    AppState,
    KeyEvent,
    KeyEventKind,
    Modifier,
    MouseEvent,
    ResizeEvent,
)

CTRL = frozenset({Modifier.CONTROL})


class TestQuitKeys:
    """Tests for the quit key table."""

    @pytest.mark.parametrize("code", ["escape", "q", "Q"])
    def test_plain_quit_keys(self, code):
        assert is_quit_key(KeyEvent(code))

    @pytest.mark.parametrize("code", ["c", "C"])
    def test_ctrl_c(self, code):
        assert is_quit_key(KeyEvent(code, CTRL))

    def test_plain_c_does_not_quit(self):
        assert not is_quit_key(KeyEvent("c"))

    @pytest.mark.parametrize("code", ["x", "up", "enter", "f1", "space"])
    def test_other_keys(self, code):
        assert not is_quit_key(KeyEvent(code))


class TestHandle:
    """Tests for InputGovernor.handle."""

    def test_press_q_quits(self):
        state = AppState()
        InputGovernor(state).handle(KeyEvent("q", kind=KeyEventKind.PRESS))
        assert state.running is False

    def test_release_q_does_not_quit(self):
        state = AppState()
        InputGovernor(state).handle(KeyEvent("q", kind=KeyEventKind.RELEASE))
        assert state.running is True

    def test_repeat_q_does_not_quit(self):
        state = AppState()
        InputGovernor(state).handle(KeyEvent("q", kind=KeyEventKind.REPEAT))
        assert state.running is True

    def test_mouse_and_resize_ignored(self):
        state = AppState()
        governor = InputGovernor(state)

        governor.handle(MouseEvent(x=3, y=4))
        governor.handle(ResizeEvent(width=120, height=40))

        assert state.running is True


class TestPollAndHandle:
    """Tests for the bounded poll."""

    @pytest.mark.asyncio
    async def test_returns_within_timeout_when_idle(self):
        state = AppState()
        governor = InputGovernor(state, timeout=0.1)

        start = time.monotonic()
        await governor.poll_and_handle()
        elapsed = time.monotonic() - start

        assert elapsed < 0.5
        assert state.running is True

    @pytest.mark.asyncio
    async def test_queued_quit_is_handled(self):
        state = AppState()
        governor = InputGovernor(state)

        governor.push(KeyEvent("escape"))
        await governor.poll_and_handle()

        assert state.running is False
        assert governor.pending == 0

    @pytest.mark.asyncio
    async def test_quit_behind_mouse_burst_is_handled(self):
        state = AppState()
        governor = InputGovernor(state)

        for x in range(50):
            governor.push(MouseEvent(x=x, y=0))
        governor.push(KeyEvent("c", CTRL))
        await governor.poll_and_handle()

        assert state.running is False

    @pytest.mark.asyncio
    async def test_event_arriving_during_wait(self):
        state = AppState()
        governor = InputGovernor(state, timeout=1.0)

        asyncio.get_running_loop().call_later(0.05, governor.push, KeyEvent("Q"))
        await governor.poll_and_handle()

        assert state.running is False

    @pytest.mark.asyncio
    async def test_read_failure_raises_input_error(self, monkeypatch):
        governor = InputGovernor(AppState())

        async def broken_get():
            raise RuntimeError("backend gone")

        monkeypatch.setattr(governor._events, "get", broken_get)

        with pytest.raises(InputError):
            await governor.poll_and_handle()


class TestFromTextual:
    """Tests for translating Textual events."""

    def test_printable_key(self):
        assert from_textual(events.Key("q", "q")) == KeyEvent("q")

    def test_escape(self):
        assert from_textual(events.Key("escape", "\x1b")) == KeyEvent("escape")

    def test_ctrl_c(self):
        key = from_textual(events.Key("ctrl+c", "\x03"))
        assert key == KeyEvent("c", CTRL)
        assert is_quit_key(key)

    def test_non_input_event(self):
        assert from_textual(events.Mount()) is None

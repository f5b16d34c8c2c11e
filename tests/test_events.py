"""Key decoding and event source tests."""

from __future__ import annotations

import os

import pytest

from serial_dashboard.events import (
    InputEvent,
    TerminalEventSource,
    TickEvent,
    decode_key,
    read_keys,
    split_keys,
)
from serial_dashboard.exceptions import TerminalError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\x1b[A", "up"),
        ("\x1b[B", "down"),
        ("\x1b[C", "right"),
        ("\x1b[D", "left"),
        ("\x1bOC", "right"),
        ("\x1b", "esc"),
        ("\x1b[Z", "unknown"),
        ("\x1b[3~", "delete"),
        ("\x1b[1;5C", "unknown"),
        ("\x1b[15~", "unknown"),
        ("\r", "enter"),
        ("\x7f", "backspace"),
        ("q", "q"),
    ],
)
def test_decode_key(raw: str, expected: str) -> None:
    assert decode_key(raw) == expected


def test_split_keys_separates_sequences_and_characters() -> None:
    assert split_keys("\x1b[Cq\x1b[Dx") == ["\x1b[C", "q", "\x1b[D", "x"]
    assert split_keys("\x1b") == ["\x1b"]
    assert split_keys("\x1b[3~q") == ["\x1b[3~", "q"]
    assert split_keys("\x1b[1;5C\x1bOA") == ["\x1b[1;5C", "\x1bOA"]
    assert split_keys("\x1bx") == ["\x1b", "x"]
    assert split_keys("") == []


def test_read_keys_timeout_data_and_eof() -> None:
    read_fd, write_fd = os.pipe()
    try:
        assert read_keys(read_fd, 0.01) == []
        os.write(write_fd, b"\x1b[Ba")
        assert read_keys(read_fd, 0.5) == ["\x1b[B", "a"]
        os.close(write_fd)
        write_fd = -1
        assert read_keys(read_fd, 0.5) is None
    finally:
        os.close(read_fd)
        if write_fd != -1:
            os.close(write_fd)


def test_terminal_event_source_merges_keys_and_ticks() -> None:
    read_fd, write_fd = os.pipe()
    source = TerminalEventSource(tick_rate=0.02, fd=read_fd, cbreak=False, poll_timeout=0.02)
    try:
        with source:
            os.write(write_fd, b"\x1b[Cq")
            keys: list[str] = []
            ticks = 0
            for _ in range(500):
                event = source.next()
                if isinstance(event, InputEvent):
                    keys.append(event.key)
                elif isinstance(event, TickEvent):
                    ticks += 1
                if len(keys) == 2 and ticks >= 1:
                    break
        assert keys == ["right", "q"]
        assert ticks >= 1
    finally:
        os.close(write_fd)
        os.close(read_fd)


def test_cbreak_on_non_tty_raises_terminal_error() -> None:
    read_fd, write_fd = os.pipe()
    try:
        source = TerminalEventSource(tick_rate=0.1, fd=read_fd)
        with pytest.raises(TerminalError):
            source.start()
    finally:
        os.close(read_fd)
        os.close(write_fd)

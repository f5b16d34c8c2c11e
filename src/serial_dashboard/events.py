"""Input and tick events for the dashboard loop.

`TerminalEventSource` merges two producers onto one queue:
- a reader thread that polls the stdin descriptor (cbreak mode) with
  `select()` so it can notice shutdown quickly;
- a ticker thread that emits a `TickEvent` every `tick_rate` seconds.

The controller only ever calls `next()`, which blocks until an event is
available.
"""

from __future__ import annotations

import logging
import os
import queue
import select
import sys
import termios
import threading
import tty
from dataclasses import dataclass
from typing import Protocol

from .exceptions import TerminalError

_logger = logging.getLogger("serial_dashboard.events")

_ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageup",
    "\x1b[6~": "pagedown",
}
_SINGLE_KEYS = {
    "\x1b": "esc",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
}
UNKNOWN_KEY = "unknown"
_READ_CHUNK = 64


@dataclass(slots=True, frozen=True)
class InputEvent:
    """One key press, normalized by `decode_key`."""

    key: str


@dataclass(slots=True, frozen=True)
class TickEvent:
    """Periodic timer notification."""


Event = InputEvent | TickEvent


class EventSource(Protocol):
    def next(self) -> Event: ...


def decode_key(raw: str) -> str:
    """Map a raw terminal sequence to a key name.

    Arrow keys become up/down/left/right; a lone escape byte is "esc";
    any other escape sequence (F-keys, modified arrows) is "unknown";
    printable characters are returned unchanged.
    """
    if raw in _ESCAPE_SEQUENCES:
        return _ESCAPE_SEQUENCES[raw]
    if raw in _SINGLE_KEYS:
        return _SINGLE_KEYS[raw]
    if raw.startswith("\x1b"):
        return UNKNOWN_KEY
    return raw


def _sequence_end(data: str, start: int) -> int:
    """Index just past the escape sequence beginning at `data[start]`.

    CSI (`ESC [`) runs through its final byte in 0x40-0x7E; SS3 (`ESC O`)
    is always three bytes. A truncated sequence ends at the end of `data`.
    """
    introducer = data[start + 1 : start + 2]
    if introducer == "O":
        return min(start + 3, len(data))
    if introducer == "[":
        position = start + 2
        while position < len(data):
            if 0x40 <= ord(data[position]) <= 0x7E:
                return position + 1
            position += 1
        return len(data)
    return start + 1


def split_keys(data: str) -> list[str]:
    """Split one read of terminal input into raw key sequences."""
    keys: list[str] = []
    position = 0
    while position < len(data):
        end = _sequence_end(data, position) if data[position] == "\x1b" else position + 1
        keys.append(data[position:end])
        position = end
    return keys


def read_keys(fd: int, timeout: float) -> list[str] | None:
    """Wait up to `timeout` for input on `fd`.

    Returns the raw key sequences read, an empty list on timeout, or None
    once the descriptor reports end of file.
    """
    if not select.select([fd], [], [], timeout)[0]:
        return []
    data = os.read(fd, _READ_CHUNK)
    if not data:
        return None
    return split_keys(data.decode("utf-8", errors="replace"))


class TerminalEventSource:
    """Keyboard plus timer events from the controlling terminal."""

    def __init__(
        self,
        *,
        tick_rate: float,
        fd: int | None = None,
        poll_timeout: float = 0.1,
        cbreak: bool = True,
    ) -> None:
        self.tick_rate = tick_rate
        self.poll_timeout = poll_timeout
        self.cbreak = cbreak
        self._fd = fd
        self._queue: queue.Queue[Event] = queue.Queue()
        self._shutdown = threading.Event()
        self._threads: list[threading.Thread] = []
        self._old_settings: list | None = None

    def __enter__(self) -> TerminalEventSource:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Enter cbreak mode and start reader and ticker threads."""
        try:
            if self._fd is None:
                self._fd = sys.stdin.fileno()
            if self.cbreak:
                self._old_settings = termios.tcgetattr(self._fd)
                tty.setcbreak(self._fd)
        except (OSError, ValueError, termios.error) as exc:
            raise TerminalError(f"Cannot put terminal into cbreak mode: {exc}") from exc

        self._shutdown.clear()
        self._threads = [
            threading.Thread(target=self._read_input, name="dashboard-input", daemon=True),
            threading.Thread(target=self._tick, name="dashboard-tick", daemon=True),
        ]
        for thread in self._threads:
            thread.start()
        _logger.debug("Event source started (tick_rate=%.3fs).", self.tick_rate)

    def stop(self) -> None:
        """Stop producer threads and restore terminal attributes."""
        self._shutdown.set()
        for thread in self._threads:
            thread.join(timeout=max(self.poll_timeout, self.tick_rate) + 0.5)
        self._threads = []
        if self._old_settings is not None and self._fd is not None:
            try:
                termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
            except (OSError, termios.error) as exc:
                raise TerminalError(f"Cannot restore terminal settings: {exc}") from exc
            finally:
                self._old_settings = None

    def next(self) -> Event:
        return self._queue.get()

    def _read_input(self) -> None:
        assert self._fd is not None
        while not self._shutdown.is_set():
            keys = read_keys(self._fd, self.poll_timeout)
            if keys is None:
                _logger.warning("Input stream closed; keyboard events stopped.")
                break
            for raw in keys:
                self._queue.put(InputEvent(decode_key(raw)))

    def _tick(self) -> None:
        while not self._shutdown.wait(self.tick_rate):
            self._queue.put(TickEvent())

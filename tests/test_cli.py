"""CLI startup paths and exit codes."""

from __future__ import annotations

import io
import logging
from typing import Any

from rich.console import Console

from serial_dashboard import cli
from serial_dashboard.events import Event, InputEvent, TickEvent
from serial_dashboard.exceptions import PortEnumerationError, TerminalError
from serial_dashboard.models import SerialPortSummary


class _TtyInput(io.StringIO):
    def isatty(self) -> bool:
        return True


class _ScriptedEventSource:
    def __init__(self, *, tick_rate: float) -> None:
        self.tick_rate = tick_rate
        self.events: list[Event] = [TickEvent(), InputEvent("right"), InputEvent("q")]
        self.stopped = False

    def __enter__(self) -> _ScriptedEventSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stopped = True

    def next(self) -> Event:
        return self.events.pop(0)


def _fake_ports(**kwargs: Any) -> list[SerialPortSummary]:
    del kwargs
    return [
        SerialPortSummary(
            device="/dev/ttyUSB0",
            description="FT232R USB UART",
            vid=0x0403,
            pid=0x6001,
        ),
        SerialPortSummary(device="/dev/ttyS0"),
    ]


def test_invalid_config_exits_2(monkeypatch: Any, tmp_path: Any) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TICK_RATE_MS", "0")
    assert cli.main([]) == 2


def test_port_enumeration_failure_exits_3(monkeypatch: Any, tmp_path: Any) -> None:
    monkeypatch.chdir(tmp_path)

    def _broken(**kwargs: Any) -> list[SerialPortSummary]:
        raise PortEnumerationError("Failed to enumerate serial ports: boom")

    monkeypatch.setattr(cli, "list_serial_ports", _broken)
    assert cli.main([]) == 3


def test_list_ports_prints_table(monkeypatch: Any, tmp_path: Any, capsys: Any) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "list_serial_ports", _fake_ports)
    monkeypatch.setattr(cli, "Console", lambda: Console(width=140))
    assert cli.main(["--list-ports"]) == 0
    output = capsys.readouterr().out
    assert "/dev/ttyUSB0" in output
    assert "FT232R USB UART" in output
    assert "0403:6001" in output


def test_non_interactive_terminal_exits_4(monkeypatch: Any, tmp_path: Any) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "list_serial_ports", _fake_ports)
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO())
    assert cli.main([]) == 4


def test_interactive_run_quits_cleanly(monkeypatch: Any, tmp_path: Any) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "list_serial_ports", _fake_ports)
    monkeypatch.setattr(cli.sys, "stdin", _TtyInput())
    sources: list[_ScriptedEventSource] = []

    def _make_source(*, tick_rate: float) -> _ScriptedEventSource:
        source = _ScriptedEventSource(tick_rate=tick_rate)
        sources.append(source)
        return source

    monkeypatch.setattr(cli, "TerminalEventSource", _make_source)
    screen = io.StringIO()
    monkeypatch.setattr(
        cli,
        "Console",
        lambda: Console(file=screen, force_terminal=True, width=100, height=30),
    )

    assert cli.main(["--tick-rate-ms", "50", "--default-tab", "Monitor"]) == 0

    assert sources and sources[0].stopped
    assert sources[0].tick_rate == 0.05
    assert "Monitor" in screen.getvalue()
    logger = logging.getLogger("serial_dashboard")
    assert not any(type(handler).__name__ == "_FeedLogHandler" for handler in logger.handlers)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _interactive(monkeypatch: Any, tmp_path: Any) -> _ListHandler:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "list_serial_ports", _fake_ports)
    monkeypatch.setattr(cli.sys, "stdin", _TtyInput())
    monkeypatch.setattr(cli, "TerminalEventSource", _ScriptedEventSource)
    monkeypatch.setattr(
        cli,
        "Console",
        lambda: Console(file=io.StringIO(), force_terminal=True, width=100, height=30),
    )
    logger = logging.getLogger("test.serial_dashboard.cli")
    logger.propagate = False
    handler = _ListHandler()
    logger.handlers = [handler]
    monkeypatch.setattr(cli, "setup_logger", lambda: logger)
    return handler


def test_unexpected_loop_failure_exits_99_and_reports_to_stream(
    monkeypatch: Any, tmp_path: Any
) -> None:
    handler = _interactive(monkeypatch, tmp_path)

    def _explode(*args: Any, **kwargs: Any) -> int:
        raise RuntimeError("port exploded")

    monkeypatch.setattr(cli, "run_app", _explode)

    assert cli.main([]) == 99

    logger = logging.getLogger("test.serial_dashboard.cli")
    assert logger.handlers == [handler]
    failures = [r for r in handler.records if r.levelno == logging.ERROR]
    assert [r.getMessage() for r in failures] == ["Unexpected failure: port exploded"]
    assert failures[0].exc_info is not None


def test_terminal_failure_exits_4_after_detaching(monkeypatch: Any, tmp_path: Any) -> None:
    handler = _interactive(monkeypatch, tmp_path)

    def _no_tty(*args: Any, **kwargs: Any) -> int:
        raise TerminalError("Cannot restore terminal settings: gone")

    monkeypatch.setattr(cli, "run_app", _no_tty)

    assert cli.main([]) == 4
    messages = [r.getMessage() for r in handler.records if r.levelno == logging.ERROR]
    assert messages == ["Terminal failure: Cannot restore terminal settings: gone"]


def test_rescan_key_re_enumerates_ports(monkeypatch: Any, tmp_path: Any) -> None:
    _interactive(monkeypatch, tmp_path)
    scans: list[dict[str, Any]] = []

    def _counting_ports(**kwargs: Any) -> list[SerialPortSummary]:
        scans.append(kwargs)
        return _fake_ports()

    monkeypatch.setattr(cli, "list_serial_ports", _counting_ports)

    class _RescanSource(_ScriptedEventSource):
        def __init__(self, *, tick_rate: float) -> None:
            super().__init__(tick_rate=tick_rate)
            self.events = [InputEvent("r"), InputEvent("q")]

    monkeypatch.setattr(cli, "TerminalEventSource", _RescanSource)

    assert cli.main([]) == 0
    assert len(scans) == 2

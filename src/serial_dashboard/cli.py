"""Dashboard CLI: load config, enumerate ports, run the interactive loop."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.live import Live
from rich.table import Table

from .app import App, run_app
from .config import load_settings
from .events import TerminalEventSource
from .exceptions import ConfigError, PortEnumerationError, TerminalError
from .log_setup import setup_logger
from .models import SerialPortSummary
from .ports import list_serial_ports
from .ui import DashboardView, LiveRenderTarget, LogFeed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Interactive serial port dashboard.")
    parser.add_argument(
        "--tick-rate-ms",
        type=int,
        default=None,
        help="Override timer tick interval from config.",
    )
    parser.add_argument(
        "--default-tab",
        choices=["Welcome", "Monitor", "Console", "Settings"],
        default=None,
        help="Tab shown at startup.",
    )
    parser.add_argument(
        "--exit-key",
        type=str,
        default=None,
        help="Single key that quits the dashboard.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    parser.add_argument(
        "--list-ports",
        action="store_true",
        help="Print detected serial ports and exit.",
    )
    return parser.parse_args(argv)


def _print_ports(console: Console, ports: list[SerialPortSummary]) -> None:
    if not ports:
        console.print("No serial ports found.")
        return

    table = Table(title=f"Serial Ports ({len(ports)})")
    table.add_column("Device", overflow="fold")
    table.add_column("Description", overflow="fold")
    table.add_column("USB VID:PID")
    table.add_column("Manufacturer", overflow="fold")
    table.add_column("HWID", overflow="fold")
    for port in ports:
        table.add_row(
            port.device,
            port.description or "-",
            port.usb_id or "-",
            port.manufacturer or "-",
            port.hwid or "-",
        )
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Run the dashboard until the exit key is pressed."""
    args = parse_args(argv)
    logger = setup_logger()

    try:
        settings = load_settings(
            tick_rate_ms=args.tick_rate_ms,
            default_tab=args.default_tab,
            exit_key=args.exit_key,
            log_level=args.log_level,
        )
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    try:
        ports = list_serial_ports(require_ports=settings.require_ports)
    except PortEnumerationError as exc:
        logger.error("Startup failure: %s", exc)
        return 3
    logger.info("Found %d serial port(s).", len(ports))

    console = Console()
    if args.list_ports:
        _print_ports(console, ports)
        return 0

    if not (sys.stdin.isatty() and console.is_terminal):
        logger.error("Startup failure: the dashboard needs an interactive terminal.")
        return 4

    app = App(ports, settings, port_source=list_serial_ports)
    view = DashboardView(
        margin=settings.layout_margin,
        tab_bar_height=settings.tab_bar_height,
        settings_summary=settings.safe_summary(),
        feed=LogFeed(max_entries=settings.feed_max_events),
    )
    failure: Exception | None = None
    view.attach_logger(logger)
    try:
        with (
            TerminalEventSource(tick_rate=settings.tick_rate_seconds) as events,
            Live(console=console, screen=True, auto_refresh=False) as live,
        ):
            logger.info("Dashboard started; press '%s' to quit.", settings.exit_key)
            run_app(app, events=events, target=LiveRenderTarget(live), view=view)
    except KeyboardInterrupt:
        return 130
    except Exception as exc:
        failure = exc
    finally:
        view.detach_logger()

    # Report only after the feed handler is gone so the message reaches stderr.
    if isinstance(failure, TerminalError):
        logger.error("Terminal failure: %s", failure)
        return 4
    if failure is not None:
        logger.error("Unexpected failure: %s", failure, exc_info=failure)
        return 99
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Rich-rendered dashboard frames: tab bar plus per-tab body."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from rich.console import ConsoleDimensions, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..state import Tab
from .log_feed import LogFeed, Severity

if TYPE_CHECKING:
    from ..app import App, SignalChannel

SPARK = " ▁▂▃▄▅▆▇█"

_SEVERITY_STYLES: dict[Severity, str] = {
    "INFO": "black",
    "WARN": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


def _severity_from_level(level_no: int) -> Severity:
    if level_no >= logging.CRITICAL:
        return "CRITICAL"
    if level_no >= logging.ERROR:
        return "ERROR"
    if level_no >= logging.WARNING:
        return "WARN"
    return "INFO"


def render_sparkline(values: Sequence[float], lower: float, upper: float, width: int) -> str:
    """Scale the newest `width` values onto block characters."""
    if width <= 0:
        return ""
    span = upper - lower
    chars: list[str] = []
    for value in list(values)[-width:]:
        ratio = 0.0 if span <= 0 else (value - lower) / span
        ratio = min(max(ratio, 0.0), 1.0)
        chars.append(SPARK[round(ratio * (len(SPARK) - 1))])
    return "".join(chars)


def visible_range(total: int, selected: int | None, rows: int) -> tuple[int, int]:
    """Return the `[start, end)` slice that keeps `selected` on screen."""
    if rows <= 0 or total == 0:
        return 0, 0
    start = 0
    if selected is not None and selected >= rows:
        start = selected - rows + 1
    return start, min(total, start + rows)


class _FeedLogHandler(logging.Handler):
    """Route logger output into the Console tab instead of over the frame."""

    def __init__(self, feed: LogFeed) -> None:
        super().__init__()
        self.feed = feed

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.feed.record(_severity_from_level(record.levelno), record.getMessage())
        except Exception:
            self.handleError(record)


class DashboardView:
    """Build one frame from the controller's current state."""

    def __init__(
        self,
        *,
        margin: int = 5,
        tab_bar_height: int = 3,
        settings_summary: dict[str, Any] | None = None,
        feed: LogFeed | None = None,
    ) -> None:
        self.margin = margin
        self.tab_bar_height = tab_bar_height
        self.settings_summary = settings_summary or {}
        self.feed = feed or LogFeed()
        self._logger: logging.Logger | None = None
        self._original_handlers: list[logging.Handler] = []
        self._bodies: dict[Tab, Callable[[App, int, int], RenderableType]] = {
            Tab.WELCOME: self._build_port_list,
            Tab.MONITOR: self._build_monitor,
            Tab.CONSOLE: self._build_console,
            Tab.SETTINGS: self._build_settings,
        }

    def attach_logger(self, logger: logging.Logger) -> None:
        """Replace the logger's stream handlers with the Console-tab feed."""
        self._logger = logger
        self._original_handlers = list(logger.handlers)
        logger.handlers = [_FeedLogHandler(self.feed)]

    def detach_logger(self) -> None:
        """Restore original logger handlers."""
        if self._logger is None:
            return
        self._logger.handlers = self._original_handlers
        self._logger = None
        self._original_handlers = []

    def render(self, app: App, size: ConsoleDimensions) -> Layout:
        layout = self.build_layout()
        body_width = max(size.width - 2 * self.margin, 0)
        body_height = max(size.height - 2 * self.margin - self.tab_bar_height, 0)
        layout["tabs"].update(self._build_tab_bar(app))
        builder = self._bodies.get(app.tabs.current)
        if builder is None:
            layout["body"].update(self._build_placeholder(app.tabs.current))
        else:
            layout["body"].update(builder(app, body_width, body_height))
        return layout

    def build_layout(self) -> Layout:
        """Fixed margins around a tab bar and a flexible body region."""
        root = Layout(name="root")
        root.split_column(
            Layout(Text(""), name="top", size=self.margin),
            Layout(name="middle"),
            Layout(Text(""), name="bottom", size=self.margin),
        )
        root["middle"].split_row(
            Layout(Text(""), name="left", size=self.margin),
            Layout(name="main"),
            Layout(Text(""), name="right", size=self.margin),
        )
        root["main"].split_column(
            Layout(name="tabs", size=self.tab_bar_height),
            Layout(name="body"),
        )
        return root

    def _build_tab_bar(self, app: App) -> Panel:
        text = Text(style="cyan")
        for position, title in enumerate(app.tabs.titles):
            if position:
                text.append(" │ ", style="dim")
            if position == app.tabs.index:
                text.append(str(title), style="bold yellow on black")
            else:
                text.append(str(title), style="yellow")
        return Panel(text, title="Tabs", border_style="cyan")

    def _build_port_list(self, app: App, width: int, height: int) -> Panel:
        del width
        ports = app.ports
        if not ports.items:
            return Panel(Text("No serial ports found.", style="dim"), title="Welcome")

        rows = max(height - 2, 1)
        start, end = visible_range(len(ports.items), ports.selected, rows)
        text = Text()
        for position in range(start, end):
            label = ports.items[position].label
            if position == ports.selected:
                text.append(f">> {label}", style="bold black on bright_green")
            else:
                text.append(f"   {label}", style="black on white")
            if position < end - 1:
                text.append("\n")
        return Panel(text, title="Welcome")

    def _build_monitor(self, app: App, width: int, height: int) -> Panel:
        del height
        spark_width = max(width - 4 - 22, 1)
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bold", width=6)
        table.add_column()
        table.add_column(justify="right", width=14)
        for channel in app.monitor.channels:
            values = _channel_values(channel)
            latest = values[-1] if values else 0
            table.add_row(
                channel.name,
                Text(
                    render_sparkline(values, channel.lower, channel.upper, spark_width),
                    style="green",
                ),
                f"{latest:.2f}" if isinstance(latest, float) else str(latest),
            )
        table.add_row("ticks", "", str(app.ticks))
        return Panel(table, title="Monitor")

    def _build_console(self, app: App, width: int, height: int) -> Panel:
        del app, width
        table = Table(show_header=True, header_style="bold", expand=True)
        table.add_column("UTC", width=9)
        table.add_column("Severity", width=9)
        table.add_column("Message", overflow="fold")
        entries = self.feed.tail(max(height - 4, 1))
        for entry in entries:
            table.add_row(
                entry.first_seen.strftime("%H:%M:%S"),
                Text(entry.severity, style=_SEVERITY_STYLES[entry.severity]),
                entry.label,
            )
        if not entries:
            table.add_row("-", "INFO", "No log events yet")
        return Panel(table, title="Console")

    def _build_settings(self, app: App, width: int, height: int) -> Panel:
        del width, height
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        for key, value in self.settings_summary.items():
            table.add_row(key, str(value))
        table.add_row("ports_found", str(len(app.ports)))
        return Panel(table, title="Settings")

    @staticmethod
    def _build_placeholder(tab: Any) -> Panel:
        return Panel(Text(f"{tab} content pending.", style="dim"), title=str(tab))


def _channel_values(channel: SignalChannel) -> list[float]:
    samples = channel.window.snapshot()
    if samples and isinstance(samples[0], tuple):
        return [y for _, y in samples]
    return samples

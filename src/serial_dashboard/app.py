"""Application controller: owns navigation state and runs the event loop."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .config import Settings
from .events import Event, EventSource, InputEvent, TickEvent
from .exceptions import PortEnumerationError
from .models import SerialPortSummary
from .signal import RandomSignal, SignalWindow, SinSignal
from .state import StatefulList, Tab, TabSelector

_logger = logging.getLogger("serial_dashboard.app")

# Tab whose content is the port list; up/down/esc/rescan only apply here.
LIST_TAB = Tab.WELCOME
RESCAN_KEY = "r"


class RenderTarget(Protocol):
    @property
    def size(self) -> Any: ...

    def draw(self, renderable: Any) -> None: ...


class View(Protocol):
    def render(self, app: App, size: Any) -> Any: ...


@dataclass(slots=True)
class SignalChannel:
    """One signal source and the window it fills."""

    name: str
    source: RandomSignal | SinSignal
    window: SignalWindow[Any]
    samples_per_tick: int
    lower: float
    upper: float

    def advance(self) -> None:
        self.window.advance(self.source, self.samples_per_tick)


class MonitorState:
    """Signal windows drawn on the Monitor tab."""

    def __init__(self, channels: Sequence[SignalChannel]) -> None:
        self.channels = list(channels)
        for channel in self.channels:
            channel.window.fill(channel.source)

    @classmethod
    def from_settings(cls, settings: Settings, rng: random.Random | None = None) -> MonitorState:
        width = settings.chart_window
        return cls(
            [
                SignalChannel(
                    name="random",
                    source=RandomSignal(settings.random_lower, settings.random_upper, rng),
                    window=SignalWindow(width),
                    samples_per_tick=settings.random_samples_per_tick,
                    lower=settings.random_lower,
                    upper=settings.random_upper,
                ),
                SignalChannel(
                    name="sin1",
                    source=SinSignal(
                        settings.sin1_interval, settings.sin1_period, settings.sin1_scale
                    ),
                    window=SignalWindow(width),
                    samples_per_tick=settings.sin_samples_per_tick,
                    lower=-settings.sin1_scale,
                    upper=settings.sin1_scale,
                ),
                SignalChannel(
                    name="sin2",
                    source=SinSignal(
                        settings.sin2_interval, settings.sin2_period, settings.sin2_scale
                    ),
                    window=SignalWindow(width),
                    samples_per_tick=settings.sin_samples_per_tick,
                    lower=-settings.sin2_scale,
                    upper=settings.sin2_scale,
                ),
            ]
        )

    def advance(self) -> None:
        for channel in self.channels:
            channel.advance()


class App:
    """Single owner of the tab selector, port list and monitor signals."""

    def __init__(
        self,
        ports: Iterable[SerialPortSummary],
        settings: Settings,
        *,
        rng: random.Random | None = None,
        tab_titles: Sequence[Tab] | None = None,
        port_source: Callable[[], Iterable[SerialPortSummary]] | None = None,
    ) -> None:
        self.settings = settings
        self.tabs: TabSelector[Tab] = TabSelector(
            tab_titles if tab_titles is not None else list(Tab),
            Tab(settings.default_tab),
        )
        self.ports: StatefulList[SerialPortSummary] = StatefulList.with_items(ports)
        self.port_source = port_source
        self.monitor = MonitorState.from_settings(settings, rng)
        self.exit_key = settings.exit_key
        self.ticks = 0

    def handle_event(self, event: Event) -> bool:
        """Apply one event; return False once the quit key was pressed."""
        if isinstance(event, InputEvent):
            return self.on_key(event.key)
        if isinstance(event, TickEvent):
            self.on_tick()
        return True

    def on_key(self, key: str) -> bool:
        if key == self.exit_key:
            _logger.info("Quit requested.")
            return False
        if key == "right":
            self.tabs.next()
            _logger.debug("Tab -> %s", self.tabs.current)
        elif key == "left":
            self.tabs.previous()
            _logger.debug("Tab -> %s", self.tabs.current)
        elif self.tabs.current == LIST_TAB:
            if key == "down":
                self.ports.next()
            elif key == "up":
                self.ports.previous()
            elif key == "esc":
                self.ports.unselect()
            elif key == RESCAN_KEY:
                self.rescan_ports()
        return True

    def rescan_ports(self) -> None:
        """Re-enumerate ports; a failed scan keeps the current list."""
        if self.port_source is None:
            return
        try:
            ports = list(self.port_source())
        except PortEnumerationError as exc:
            _logger.warning("Port rescan failed: %s", exc)
            return
        self.ports.replace_items(ports)
        _logger.info("Rescan found %d serial port(s).", len(ports))

    def on_tick(self) -> None:
        self.ticks += 1
        self.monitor.advance()


def run_app(app: App, *, events: EventSource, target: RenderTarget, view: View) -> int:
    """Render, block for one event, dispatch; repeat until quit.

    Returns the number of frames drawn.
    """
    frames = 0
    while True:
        target.draw(view.render(app, target.size))
        frames += 1
        if not app.handle_event(events.next()):
            break
    _logger.info("Event loop finished after %d frame(s).", frames)
    return frames

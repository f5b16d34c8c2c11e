"""Terminal UI: frame construction, log feed and render targets."""

from .log_feed import FeedEntry, LogFeed
from .targets import ConsoleRenderTarget, LiveRenderTarget
from .terminal_dashboard import DashboardView

__all__ = [
    "ConsoleRenderTarget",
    "DashboardView",
    "FeedEntry",
    "LiveRenderTarget",
    "LogFeed",
]

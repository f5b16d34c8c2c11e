"""Signal sources and sliding sample windows for chart tabs."""

from .generators import RandomSignal, SinSignal
from .window import SignalWindow

__all__ = ["RandomSignal", "SignalWindow", "SinSignal"]

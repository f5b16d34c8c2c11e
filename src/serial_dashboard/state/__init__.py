"""Navigation state: tab selection and cyclic list selection."""

from .stateful_list import StatefulList
from .tabs import Tab, TabSelector

__all__ = ["StatefulList", "Tab", "TabSelector"]

"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class PortEnumerationError(Exception):
    """Raised when serial ports cannot be listed at startup."""


class TerminalError(Exception):
    """Raised when the controlling terminal cannot be acquired or restored."""

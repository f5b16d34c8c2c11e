"""Serial port enumeration backed by pyserial."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from serial.tools.list_ports import comports as _pyserial_comports

from .exceptions import PortEnumerationError
from .models import SerialPortSummary

_logger = logging.getLogger("serial_dashboard.ports")


def normalize_port(info: Any) -> SerialPortSummary:
    """Map a pyserial `ListPortInfo` (or lookalike) onto the summary model."""
    return SerialPortSummary(
        device=str(info.device),
        name=getattr(info, "name", None),
        description=getattr(info, "description", None),
        hwid=getattr(info, "hwid", None),
        vid=getattr(info, "vid", None),
        pid=getattr(info, "pid", None),
        serial_number=getattr(info, "serial_number", None),
        manufacturer=getattr(info, "manufacturer", None),
        product=getattr(info, "product", None),
    )


def list_serial_ports(
    comports: Callable[[], Iterable[Any]] | None = None,
    *,
    require_ports: bool = False,
) -> list[SerialPortSummary]:
    """Enumerate serial ports in the order the platform reports them.

    Raises PortEnumerationError when the platform query fails, or when
    `require_ports` is set and nothing was found.
    """
    source = comports or _pyserial_comports
    try:
        raw = list(source())
    except (OSError, RuntimeError, ValueError) as exc:
        raise PortEnumerationError(f"Failed to enumerate serial ports: {exc}") from exc

    ports = [normalize_port(info) for info in raw]
    _logger.debug("Enumerated %d serial port(s).", len(ports))
    if require_ports and not ports:
        raise PortEnumerationError("No serial ports found.")
    return ports

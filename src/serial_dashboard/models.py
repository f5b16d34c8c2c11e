"""Shared typed models for serial port discovery."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SerialPortSummary(BaseModel):
    """Normalized serial port representation used by the port list."""

    device: str = Field(description="Device path or COM name used to open the port")
    name: str | None = Field(default=None, description="Short device name if available")
    description: str | None = Field(default=None, description="Human-readable description")
    hwid: str | None = Field(default=None, description="Hardware identifier string")
    vid: int | None = Field(default=None, description="USB vendor id if the port is USB")
    pid: int | None = Field(default=None, description="USB product id if the port is USB")
    serial_number: str | None = Field(default=None, description="USB serial number")
    manufacturer: str | None = Field(default=None, description="USB manufacturer string")
    product: str | None = Field(default=None, description="USB product string")

    @property
    def label(self) -> str:
        """One-line label for list rendering."""
        if self.description and self.description != "n/a" and self.description != self.device:
            return f"{self.device} - {self.description}"
        return self.device

    @property
    def usb_id(self) -> str | None:
        if self.vid is None or self.pid is None:
            return None
        return f"{self.vid:04X}:{self.pid:04X}"

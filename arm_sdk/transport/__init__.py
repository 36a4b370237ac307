"""Transport layer for robot arm communication."""

from .base import Transport
from .usb import UsbTransport
from .loopback import LoopbackTransport

__all__ = ["Transport", "UsbTransport", "LoopbackTransport"]

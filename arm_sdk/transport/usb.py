"""USB transport implementation for the robot arm.

The arm takes each command word as the data stage of a vendor control
transfer on endpoint 0. Device handles are pyusb ``usb.core.Device``
objects, normally supplied by the finder or the hotplug monitor.
"""
from __future__ import annotations

import logging
from typing import Optional

import usb.core

from ..errors import NoDeviceError, TransportError
from ..models import CommandWord
from .base import Transport

logger = logging.getLogger(__name__)

# Host-to-device, vendor, recipient device
REQUEST_TYPE = 0x40
REQUEST = 6
VALUE = 0x100
INDEX = 0
TRANSFER_TIMEOUT_MS = 1000


class UsbTransport(Transport):
    """Transport layer using pyusb control transfers.

    Responsibilities:
    - Hold the attached ``usb.core.Device``
    - Issue one control transfer per command word
    - Track connection state and link health from transfer results
    """

    def __init__(self,
                 device: Optional[usb.core.Device] = None,
                 timeout_ms: int = TRANSFER_TIMEOUT_MS):
        """Initialize USB transport.

        Args:
            device: Already attached device, or None to wait for attach()
            timeout_ms: Control transfer timeout in milliseconds
        """
        super().__init__()
        self._device: Optional[usb.core.Device] = None
        self._timeout_ms = timeout_ms

        if device is not None:
            self.attach(device)

    def attach(self, device: usb.core.Device) -> None:
        self._device = device
        self._mark_connected()
        logger.info(
            f"USB device attached: Vendor: 0x{device.idVendor:04x}, "
            f"Product ID: 0x{device.idProduct:04x}"
        )

    def detach(self) -> None:
        if self._device is not None:
            logger.info("USB device removed")
        self._device = None
        self._mark_disconnected()

    def is_attached(self) -> bool:
        return self._device is not None

    def send(self, word: CommandWord) -> int:
        """Send a command word as a vendor control transfer."""
        device = self._device
        if device is None:
            logger.error("No active USB device")
            self._mark_disconnected()
            raise NoDeviceError("No active USB device")

        data = word.to_bytes()
        try:
            transferred = device.ctrl_transfer(
                REQUEST_TYPE,
                REQUEST,
                VALUE,
                INDEX,
                data,
                self._timeout_ms,
            )
        except usb.core.USBError as e:
            logger.warning(f"USB control message failed with code: {e.errno}")
            self._mark_disconnected()
            raise TransportError(f"USB control message failed: {e}", code=e.errno) from e

        logger.info(f"Sent command to USB device: {list(data)} Return: {transferred}")
        self._record_transfer(transferred)
        return transferred

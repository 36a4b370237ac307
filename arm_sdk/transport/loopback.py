"""Simulated transport that stands in for the arm.

Accepts every command word without hardware, records it, and reports the
three bytes as transferred. Failures can be scripted for testing the
error paths of the controller.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..errors import NoDeviceError, TransportError
from ..models import CommandWord
from .base import Transport

logger = logging.getLogger(__name__)

SIMULATED_DEVICE = "loopback"
# errno reported for scripted failures (EPIPE, a stalled control pipe)
DEFAULT_FAILURE_CODE = 32


class LoopbackTransport(Transport):
    """In-memory transport.

    Attributes:
        sent: Every command word delivered so far, oldest first
    """

    def __init__(self, attached: bool = True):
        """Initialize loopback transport.

        Args:
            attached: Start with the simulated device attached
        """
        super().__init__()
        self._device: Optional[Any] = None
        self._failures_left = 0
        self._failure_code = DEFAULT_FAILURE_CODE
        self.sent: List[CommandWord] = []

        if attached:
            self.attach(SIMULATED_DEVICE)

    def attach(self, device: Any) -> None:
        self._device = device
        self._mark_connected()
        logger.info(f"Simulated device attached: {device}")

    def detach(self) -> None:
        self._device = None
        self._mark_disconnected()

    def is_attached(self) -> bool:
        return self._device is not None

    def fail_next(self, count: int = 1, code: int = DEFAULT_FAILURE_CODE) -> None:
        """Make the next ``count`` transfers fail with ``code``."""
        self._failures_left = count
        self._failure_code = code

    def send(self, word: CommandWord) -> int:
        if self._device is None:
            self._mark_disconnected()
            raise NoDeviceError("No active simulated device")

        if self._failures_left > 0:
            self._failures_left -= 1
            self._mark_disconnected()
            raise TransportError("Simulated transfer failure", code=self._failure_code)

        self.sent.append(word)
        transferred = len(word.to_bytes())
        logger.debug(f"Loopback delivered {word}")
        self._record_transfer(transferred)
        return transferred

    @property
    def last_sent(self) -> Optional[CommandWord]:
        """Most recently delivered word, or None."""
        return self.sent[-1] if self.sent else None

"""Abstract base class for the arm transport layer.

The Transport interface ships finished command words to the arm and tracks
the health of the link. Implementations can talk to real USB hardware or
simulate a device for tests.

Key principles:
- One synchronous transfer per send, bounded by a timeout
- No retries: a failure is reported once and reflected in link state
- Link state (connection, last byte count) is owned here, not by callers
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..models import CommandWord, ConnectionState


class Transport(ABC):
    """Abstract transport interface for arm communication.

    Transports are responsible for:
    1. Holding the handle of the attached device
    2. Sending command words to it
    3. Tracking connection state and link health

    Transports should NOT contain command logic like parsing or joint
    tracking. They are pure communication channels.
    """

    def __init__(self):
        self._connection_state = ConnectionState.DISCONNECTED
        self._link_health = 0

    @property
    def connection_state(self) -> ConnectionState:
        """Current link state."""
        return self._connection_state

    @property
    def link_health(self) -> int:
        """Byte count of the last successful transfer; 0 after a failure."""
        return self._link_health

    @abstractmethod
    def attach(self, device: Any) -> None:
        """Record a newly attached device handle and mark the link connected.

        Args:
            device: Backend specific device handle
        """
        pass

    @abstractmethod
    def detach(self) -> None:
        """Forget the device handle and mark the link disconnected.

        Should be safe to call multiple times.
        """
        pass

    @abstractmethod
    def is_attached(self) -> bool:
        """Check if a device handle is currently held.

        Returns:
            True if attached, False otherwise
        """
        pass

    @abstractmethod
    def send(self, word: CommandWord) -> int:
        """Send a command word to the arm.

        Blocks until the transfer completes or times out.

        Args:
            word: Command word to deliver

        Returns:
            Number of bytes transferred

        Raises:
            NoDeviceError: If no device is attached
            TransportError: If the transfer fails
        """
        pass

    def _mark_connected(self) -> None:
        self._connection_state = ConnectionState.CONNECTED

    def _record_transfer(self, transferred: int) -> None:
        self._connection_state = ConnectionState.CONNECTED
        self._link_health = transferred

    def _mark_disconnected(self) -> None:
        self._connection_state = ConnectionState.DISCONNECTED
        self._link_health = 0

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager support - detach on exit."""
        self.detach()

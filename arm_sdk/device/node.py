"""File-like control surface for the arm.

A ControlNode stands in for the device node: any number of callers can
open() it, and each gets a ControlHandle with its own read offset. All
handles drive the same ArmController.

Channels:
- write: newline separated text commands, one transfer per call
- read: a single status line per open (or per seek(0)), then EOF
- ioctl: direct control of the command word
- DiagnosticView: joint state codes plus the status line
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from ..errors import CommandOverflowError, FaultCopyError, InvalidArgumentError, UnsupportedRequestError
from .controller import ArmController

logger = logging.getLogger(__name__)

BUF_SIZE = 512  # 511 data bytes + terminator

IOCTL_MAGIC = 0x80
_IOC_WRITE = 1
_IOC_READ = 2
_INT_SIZE = 4


def _ioc(direction: int, number: int, size: int = _INT_SIZE) -> int:
    """Linux style request code: direction, size, magic and number packed in 32 bits."""
    return (direction << 30) | (size << 16) | (IOCTL_MAGIC << 8) | number


IOCTL_SET_VALUE = _ioc(_IOC_WRITE, 1)  # 0x40048001
IOCTL_GET_VALUE = _ioc(_IOC_READ, 2)   # 0x80048002


class ControlHandle:
    """One open handle on the control node.

    Supports the context manager protocol; closing twice is harmless.
    """

    def __init__(self, controller: ArmController):
        self._controller = controller
        self._offset = 0
        self._closed = False
        logger.info("Device opened")

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, size: int = -1) -> bytes:
        """Read the status line.

        The line is built fresh on each call. Once the offset has passed its
        end, reads return b"" until seek(0).

        Args:
            size: Maximum bytes to return, -1 for the rest of the line
        """
        self._check_open()
        line = self._controller.status().status_line.encode("ascii")
        if self._offset >= len(line):
            return b""

        end = len(line) if size < 0 else self._offset + size
        data = line[self._offset:end]
        self._offset += len(data)
        return data

    def seek(self, offset: int) -> int:
        """Move the read offset. seek(0) makes the status line readable again."""
        self._check_open()
        if offset < 0:
            raise InvalidArgumentError(f"Negative seek offset: {offset}")
        self._offset = offset
        return self._offset

    def tell(self) -> int:
        return self._offset

    def write(self, data: Any) -> int:
        """Submit a batch of text commands.

        Command text ends at the first NUL byte. Rejected lines only affect
        the reported command status; the write still succeeds.

        Args:
            data: bytes-like object of at most BUF_SIZE - 1 bytes

        Returns:
            Number of bytes consumed (always len(data))

        Raises:
            CommandOverflowError: If data does not fit in the buffer
            FaultCopyError: If data is not bytes-like
        """
        self._check_open()
        try:
            raw = memoryview(data).tobytes()
        except TypeError as e:
            raise FaultCopyError(f"Cannot copy {type(data).__name__} as command data") from e

        if len(raw) > BUF_SIZE - 1:
            logger.warning(f"Command buffer overflow! ({len(raw)} bytes)")
            raise CommandOverflowError(f"Command of {len(raw)} bytes exceeds {BUF_SIZE - 1} byte buffer")

        text = raw.split(b"\x00", 1)[0].decode("ascii", errors="replace")
        logger.debug(f"Wrote {len(raw)} bytes String: {text!r}")

        self._controller.submit_text(text)
        return len(raw)

    def ioctl(self, request: int, arg: Sequence[int] = ()) -> int:
        """Binary control request.

        Args:
            request: IOCTL_SET_VALUE or IOCTL_GET_VALUE
            arg: (payload, rotation, aux) for IOCTL_SET_VALUE

        Returns:
            0 on success

        Raises:
            UnsupportedRequestError: For IOCTL_GET_VALUE, which has no readback
            InvalidArgumentError: For unknown requests or rejected values
        """
        self._check_open()
        if request == IOCTL_SET_VALUE:
            self._controller.direct_control(arg)
            return 0
        if request == IOCTL_GET_VALUE:
            raise UnsupportedRequestError("IOCTL_GET_VALUE has no readback")
        raise InvalidArgumentError(f"Invalid ioctl request: 0x{request:08x}")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("Device closed")

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed handle")

    def __enter__(self) -> ControlHandle:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ControlNode:
    """Device node for one arm. Hands out independent handles."""

    def __init__(self, controller: ArmController):
        self._controller = controller

    @property
    def controller(self) -> ArmController:
        return self._controller

    def open(self) -> ControlHandle:
        return ControlHandle(self._controller)


class DiagnosticView:
    """Read-only diagnostic dump of the arm."""

    def __init__(self, controller: ArmController):
        self._controller = controller

    def render(self) -> str:
        """Joint state codes, one per line, followed by the status line."""
        return self._controller.status().diagnostic_text()

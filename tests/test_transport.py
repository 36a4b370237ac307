"""Unit tests for the transport layer.

Tests verify:
- Transport is properly abstract
- UsbTransport issues the vendor control transfer and tracks link state
- LoopbackTransport records words and scripts failures
"""
import unittest
from abc import ABC
from unittest.mock import MagicMock

import usb.core

from arm_sdk.errors import NoDeviceError, TransportError
from arm_sdk.models import CommandWord, ConnectionState
from arm_sdk.transport import LoopbackTransport, Transport, UsbTransport
from arm_sdk.transport.usb import TRANSFER_TIMEOUT_MS


def make_device(pid=0x0000):
    device = MagicMock()
    device.idVendor = 0x1267
    device.idProduct = pid
    device.ctrl_transfer.return_value = 3
    return device


class TestTransportABC(unittest.TestCase):
    """Tests for Transport abstract base class."""

    def test_is_abstract(self):
        with self.assertRaises(TypeError):
            Transport()

    def test_is_abc_subclass(self):
        self.assertTrue(issubclass(Transport, ABC))

    def test_abstract_methods(self):
        self.assertEqual(
            Transport.__abstractmethods__,
            frozenset({"attach", "detach", "is_attached", "send"}),
        )


class TestUsbTransport(unittest.TestCase):
    """Tests for UsbTransport."""

    def test_initial_state(self):
        transport = UsbTransport()
        self.assertFalse(transport.is_attached())
        self.assertIs(transport.connection_state, ConnectionState.DISCONNECTED)
        self.assertEqual(transport.link_health, 0)

    def test_attach(self):
        transport = UsbTransport()
        transport.attach(make_device())
        self.assertTrue(transport.is_attached())
        self.assertIs(transport.connection_state, ConnectionState.CONNECTED)

    def test_attach_in_constructor(self):
        transport = UsbTransport(device=make_device(pid=0x0001))
        self.assertTrue(transport.is_attached())

    def test_send_control_transfer(self):
        """The word goes out as a host-to-device vendor request."""
        device = make_device()
        transport = UsbTransport(device=device)

        result = transport.send(CommandWord(64, 2, 1))

        self.assertEqual(result, 3)
        device.ctrl_transfer.assert_called_once_with(
            0x40, 6, 0x100, 0, b"\x40\x02\x01", TRANSFER_TIMEOUT_MS
        )
        self.assertEqual(TRANSFER_TIMEOUT_MS, 1000)
        self.assertIs(transport.connection_state, ConnectionState.CONNECTED)
        self.assertEqual(transport.link_health, 3)

    def test_custom_timeout(self):
        device = make_device()
        transport = UsbTransport(device=device, timeout_ms=250)
        transport.send(CommandWord())
        self.assertEqual(device.ctrl_transfer.call_args[0][5], 250)

    def test_send_without_device(self):
        transport = UsbTransport()
        with self.assertRaises(NoDeviceError):
            transport.send(CommandWord())
        self.assertIs(transport.connection_state, ConnectionState.DISCONNECTED)
        self.assertEqual(transport.link_health, 0)

    def test_send_failure_keeps_error_code(self):
        device = make_device()
        transport = UsbTransport(device=device)
        transport.send(CommandWord())
        self.assertEqual(transport.link_health, 3)

        device.ctrl_transfer.side_effect = usb.core.USBError("Pipe error", errno=32)
        with self.assertRaises(TransportError) as ctx:
            transport.send(CommandWord())

        self.assertEqual(ctx.exception.code, 32)
        self.assertIs(transport.connection_state, ConnectionState.DISCONNECTED)
        self.assertEqual(transport.link_health, 0)
        # Handle is kept; the next send tries again
        self.assertTrue(transport.is_attached())

    def test_recovers_after_failure(self):
        device = make_device()
        transport = UsbTransport(device=device)
        device.ctrl_transfer.side_effect = [usb.core.USBError("Timeout", errno=110), 3]

        with self.assertRaises(TransportError):
            transport.send(CommandWord())
        self.assertEqual(transport.send(CommandWord()), 3)
        self.assertIs(transport.connection_state, ConnectionState.CONNECTED)

    def test_detach(self):
        transport = UsbTransport(device=make_device())
        transport.detach()
        self.assertFalse(transport.is_attached())
        self.assertIs(transport.connection_state, ConnectionState.DISCONNECTED)
        # Safe to call twice
        transport.detach()

    def test_context_manager_detaches(self):
        with UsbTransport(device=make_device()) as transport:
            self.assertTrue(transport.is_attached())
        self.assertFalse(transport.is_attached())


class TestLoopbackTransport(unittest.TestCase):
    """Tests for LoopbackTransport."""

    def test_records_words(self):
        transport = LoopbackTransport()
        self.assertEqual(transport.send(CommandWord(4, 0, 0)), 3)
        transport.send(CommandWord(8, 1, 0))
        self.assertEqual(transport.sent, [CommandWord(4, 0, 0), CommandWord(8, 1, 0)])
        self.assertEqual(transport.last_sent, CommandWord(8, 1, 0))
        self.assertEqual(transport.link_health, 3)

    def test_starts_detached(self):
        transport = LoopbackTransport(attached=False)
        self.assertIsNone(transport.last_sent)
        with self.assertRaises(NoDeviceError):
            transport.send(CommandWord())

    def test_scripted_failures(self):
        transport = LoopbackTransport()
        transport.fail_next(2, code=19)

        for _ in range(2):
            with self.assertRaises(TransportError) as ctx:
                transport.send(CommandWord())
            self.assertEqual(ctx.exception.code, 19)
            self.assertIs(transport.connection_state, ConnectionState.DISCONNECTED)

        transport.send(CommandWord())
        self.assertEqual(len(transport.sent), 1)
        self.assertIs(transport.connection_state, ConnectionState.CONNECTED)


if __name__ == '__main__':
    unittest.main()

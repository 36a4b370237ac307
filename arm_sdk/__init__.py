"""Robot Arm SDK - USB control of a four-joint arm with a text command language."""

from .models import (
    JointId,
    JointState,
    JOINT_WEIGHTS,
    ConnectionState,
    CommandOutcome,
    CommandWord,
    ArmCommand,
)
from .errors import (
    ArmError,
    NoDeviceError,
    TransportError,
    CommandOverflowError,
    FaultCopyError,
    InvalidArgumentError,
    UnsupportedRequestError,
    ArmNotFoundError,
    MultipleArmsError,
)
from .transport import Transport, UsbTransport, LoopbackTransport
from .device import ArmController, ArmStatus, ControlNode, DiagnosticView, HotplugMonitor

__all__ = [
    "JointId",
    "JointState",
    "JOINT_WEIGHTS",
    "ConnectionState",
    "CommandOutcome",
    "CommandWord",
    "ArmCommand",
    "ArmError",
    "NoDeviceError",
    "TransportError",
    "CommandOverflowError",
    "FaultCopyError",
    "InvalidArgumentError",
    "UnsupportedRequestError",
    "ArmNotFoundError",
    "MultipleArmsError",
    "Transport",
    "UsbTransport",
    "LoopbackTransport",
    "ArmController",
    "ArmStatus",
    "ControlNode",
    "DiagnosticView",
    "HotplugMonitor",
]

"""Arm status snapshots.

Combines the connection state and link health owned by the transport with
the last command outcome and joint states owned by the controller into one
read-only snapshot, and renders it in the line formats read by clients.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..models import JOINT_ORDER, CommandOutcome, ConnectionState, JointId, JointState

STATUS_LINE_FORMAT = "connected:{connected} status:{status} battery:{battery}\n"


@dataclass(frozen=True)
class ArmStatus:
    """Status information for the arm.

    Attributes:
        timestamp: Local timestamp when the snapshot was taken
        connected: Whether the arm link is up
        command_status: Outcome of the last command (NONE while disconnected)
        battery: Byte count of the last transfer, a coarse liveness proxy
        joints: Raw joint states, for the diagnostic view
    """
    timestamp: float
    connected: bool
    command_status: CommandOutcome
    battery: int
    joints: Dict[JointId, JointState] = field(default_factory=dict)

    @property
    def status_line(self) -> str:
        """Line returned by reads of the control channel."""
        return STATUS_LINE_FORMAT.format(
            connected="yes" if self.connected else "no",
            status=self.command_status.label,
            battery=self.battery,
        )

    def diagnostic_text(self) -> str:
        """Multi-line dump of each joint's raw state code plus the status line."""
        lines = [
            f"{joint.value.capitalize()} Status: {self.joints.get(joint, JointState.IDLE).value}\n"
            for joint in JOINT_ORDER
        ]
        lines.append(self.status_line)
        return "".join(lines)

    @classmethod
    def disconnected(cls, timestamp: Optional[float] = None) -> ArmStatus:
        """Create a status representing a detached arm."""
        if timestamp is None:
            timestamp = time.time()

        return cls(
            timestamp=timestamp,
            connected=False,
            command_status=CommandOutcome.NONE,
            battery=0,
            joints={joint: JointState.IDLE for joint in JOINT_ORDER},
        )


class StatusAggregator:
    """Derives ArmStatus snapshots from raw controller and transport state."""

    @staticmethod
    def aggregate(
        connection_state: ConnectionState,
        outcome: CommandOutcome,
        link_health: int,
        joints: Dict[JointId, JointState],
        timestamp: Optional[float] = None,
    ) -> ArmStatus:
        """Build a snapshot.

        While disconnected the command status reads NONE and battery reads 0,
        whatever the stored values are. Stored values are not modified.
        """
        if timestamp is None:
            timestamp = time.time()

        connected = connection_state is ConnectionState.CONNECTED
        return ArmStatus(
            timestamp=timestamp,
            connected=connected,
            command_status=outcome if connected else CommandOutcome.NONE,
            battery=link_health if connected else 0,
            joints=dict(joints),
        )

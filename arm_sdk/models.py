"""Immutable data models for robot arm state and commands.

Command words and parsed commands are frozen dataclasses so they can be handed
between the parser, the controller and the transport without copying.
Joint and outcome identifiers are enums; their values are the raw codes used
on the wire and in the diagnostic view.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class JointId(Enum):
    """Controllable arm segments, in payload bit order (high to low)."""
    SHOULDER = "shoulder"
    ELBOW = "elbow"
    WRIST = "wrist"
    CLAW = "claw"


class JointState(Enum):
    """Tri-state actuator direction of a single joint.

    The value is the raw status code reported by the diagnostic view.
    """
    IDLE = 0
    POSITIVE = 1
    NEGATIVE = 2


# Weight of each joint's POSITIVE contribution to the payload byte.
# NEGATIVE contributes twice the weight.
JOINT_WEIGHTS: Dict[JointId, int] = {
    JointId.SHOULDER: 64,
    JointId.ELBOW: 16,
    JointId.WRIST: 4,
    JointId.CLAW: 1,
}

JOINT_ORDER = (JointId.SHOULDER, JointId.ELBOW, JointId.WRIST, JointId.CLAW)

MAX_PAYLOAD = sum(2 * weight for weight in JOINT_WEIGHTS.values())  # 170

# Rotation byte
ROTATION_STOP = 0
ROTATION_RIGHT = 1
ROTATION_LEFT = 2

# Aux byte
AUX_OFF = 0
AUX_ON = 1


def contribution(joint: JointId, state: JointState) -> int:
    """Payload contribution of ``joint`` when it is in ``state``."""
    if state is JointState.POSITIVE:
        return JOINT_WEIGHTS[joint]
    if state is JointState.NEGATIVE:
        return 2 * JOINT_WEIGHTS[joint]
    return 0


class ConnectionState(Enum):
    """Link state owned by the transport."""
    DISCONNECTED = 0
    CONNECTED = 1


class CommandOutcome(Enum):
    """Result of the last parse/validate attempt. Overwritten, never accumulated."""
    NONE = 0
    ACCEPTED = 1
    REJECTED = 2

    @property
    def label(self) -> str:
        """Text used in the status line."""
        return _OUTCOME_LABELS[self]


_OUTCOME_LABELS = {
    CommandOutcome.NONE: "none",
    CommandOutcome.ACCEPTED: "good",
    CommandOutcome.REJECTED: "bad",
}


@dataclass(frozen=True)
class CommandWord:
    """The 3-byte unit physically sent to the arm.

    Attributes:
        payload: Sum of all joint contributions
        rotation: Base rotation (0=stop, 1=right, 2=left)
        aux: Auxiliary output, e.g. the LED (0/1)
    """
    payload: int = 0
    rotation: int = ROTATION_STOP
    aux: int = AUX_OFF

    def to_bytes(self) -> bytes:
        """Encode as the wire data stage. Each field is narrowed to one byte."""
        return bytes((self.payload & 0xFF, self.rotation & 0xFF, self.aux & 0xFF))


# Parsed text commands

class StopScope(Enum):
    """What a ``stop:`` command halts."""
    MOVE = "move"
    ALL = "all"


@dataclass(frozen=True)
class RotateBaseCommand:
    """Set the base rotation byte directly.

    Attributes:
        rotation: ROTATION_STOP, ROTATION_RIGHT or ROTATION_LEFT
    """
    rotation: int


@dataclass(frozen=True)
class AuxCommand:
    """Set the auxiliary output byte directly.

    Attributes:
        aux: AUX_OFF or AUX_ON
    """
    aux: int


@dataclass(frozen=True)
class StopCommand:
    """Stop movement (joints + base) or everything (also aux).

    Attributes:
        scope: MOVE or ALL
    """
    scope: StopScope


@dataclass(frozen=True)
class JointCommand:
    """Drive a single joint into a new direction state.

    Attributes:
        joint: Target joint
        state: New direction
    """
    joint: JointId
    state: JointState


# Union type for all text commands
ArmCommand = Union[
    RotateBaseCommand,
    AuxCommand,
    StopCommand,
    JointCommand,
]

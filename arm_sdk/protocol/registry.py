"""Joint state registry and command word accumulator.

The registry owns one JointState per joint. The accumulator owns the
3-byte command word. The payload byte is only ever moved by the delta of a
registry transition, so at all times::

    payload == sum(contribution(j, state[j]) for j in joints)

Neither class is thread-safe on its own; ArmController serialises access.
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping

from ..models import (
    AUX_OFF,
    ROTATION_STOP,
    JOINT_ORDER,
    CommandWord,
    JointId,
    JointState,
    contribution,
)

logger = logging.getLogger(__name__)


class CommandAccumulator:
    """Holds the command word sent to the arm.

    ``payload`` moves only through ``adjust`` (registry deltas) or
    ``overwrite`` (direct control). ``rotation`` and ``aux`` are plain
    fields with no accumulation.
    """

    def __init__(self):
        self._payload = 0
        self._rotation = ROTATION_STOP
        self._aux = AUX_OFF

    @property
    def payload(self) -> int:
        return self._payload

    @property
    def rotation(self) -> int:
        return self._rotation

    @property
    def aux(self) -> int:
        return self._aux

    def adjust(self, delta: int) -> None:
        """Move the payload by a registry delta."""
        self._payload += delta

    def set_rotation(self, value: int) -> None:
        self._rotation = value

    def set_aux(self, value: int) -> None:
        self._aux = value

    def overwrite(self, payload: int, rotation: int, aux: int) -> None:
        """Replace the whole word at once (direct control path)."""
        self._payload = payload
        self._rotation = rotation
        self._aux = aux

    def clear_payload(self) -> None:
        self._payload = 0

    def clear(self) -> None:
        """Zero all three bytes."""
        self.overwrite(0, ROTATION_STOP, AUX_OFF)

    def snapshot(self) -> CommandWord:
        """Create an immutable copy of the current word."""
        return CommandWord(
            payload=self._payload,
            rotation=self._rotation,
            aux=self._aux,
        )


class JointRegistry:
    """Tri-state direction of each joint, kept in step with the payload byte."""

    def __init__(self, accumulator: CommandAccumulator):
        """Initialize with every joint idle.

        Args:
            accumulator: Accumulator whose payload this registry drives
        """
        self._accumulator = accumulator
        self._states: Dict[JointId, JointState] = {
            joint: JointState.IDLE for joint in JOINT_ORDER
        }

    def get(self, joint: JointId) -> JointState:
        return self._states[joint]

    def set(self, joint: JointId, new_state: JointState) -> int:
        """Move ``joint`` into ``new_state`` and apply the payload delta.

        Re-issuing the current state is a no-op and returns 0.

        Returns:
            The delta applied to the payload
        """
        old_state = self._states[joint]
        if new_state is old_state:
            return 0

        delta = contribution(joint, new_state) - contribution(joint, old_state)
        self._states[joint] = new_state
        self._accumulator.adjust(delta)
        logger.debug(f"{joint.value}: {old_state.name} -> {new_state.name} (delta {delta:+d})")
        return delta

    def reset_all(self) -> None:
        """Set every joint idle and clear the payload."""
        for joint in JOINT_ORDER:
            self._states[joint] = JointState.IDLE
        self._accumulator.clear_payload()

    def overwrite(self, states: Mapping[JointId, JointState]) -> None:
        """Replace joint states without touching the payload.

        Used by the direct control path, which writes the payload itself.
        """
        for joint, state in states.items():
            self._states[joint] = state

    def states(self) -> Dict[JointId, JointState]:
        """Copy of all joint states, in payload order."""
        return dict(self._states)

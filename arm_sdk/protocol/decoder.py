"""Decoder for pre-encoded direct control words.

The binary control path hands over (payload, rotation, aux) as already
encoded integers. The payload is decoded back into joint states so the
registry stays in step with what will be sent.
"""
from __future__ import annotations

from typing import Dict, Sequence

from ..errors import InvalidArgumentError
from ..models import JOINT_ORDER, JOINT_WEIGHTS, CommandWord, JointId, JointState

# Direct control values must be strictly above these bounds.
MAX_PAYLOAD = 170
MAX_ROTATION = 2
MAX_AUX = 2


def validate_direct(payload: int, rotation: int, aux: int) -> None:
    """Check a direct control triple.

    All values must be non-negative and even, and each must lie strictly
    above its bound (payload > 170, rotation > 2, aux > 2).

    Raises:
        InvalidArgumentError: If any check fails
    """
    values = (payload, rotation, aux)
    if any(value < 0 for value in values):
        raise InvalidArgumentError(f"Negative direct control value: {values}")
    if any(value % 2 != 0 for value in values):
        raise InvalidArgumentError(f"Odd direct control value: {values}")
    if payload <= MAX_PAYLOAD or rotation <= MAX_ROTATION or aux <= MAX_AUX:
        raise InvalidArgumentError(f"Direct control value out of range: {values}")


def decode_payload(payload: int) -> Dict[JointId, JointState]:
    """Reconstruct joint states from a payload byte.

    Joints are tested from the heaviest down. For each joint the NEGATIVE
    threshold (2 * weight) is tested before the POSITIVE one (weight), and
    the matched amount is subtracted before moving on.

    Args:
        payload: Encoded payload value

    Returns:
        Dict mapping every joint to its decoded state

    Examples:
        >>> decode_payload(64 + 32 + 1)[JointId.ELBOW]
        <JointState.NEGATIVE: 2>
    """
    remaining = payload
    states: Dict[JointId, JointState] = {}

    for joint in JOINT_ORDER:
        weight = JOINT_WEIGHTS[joint]
        if remaining >= 2 * weight:
            states[joint] = JointState.NEGATIVE
            remaining -= 2 * weight
        elif remaining >= weight:
            states[joint] = JointState.POSITIVE
            remaining -= weight
        else:
            states[joint] = JointState.IDLE

    return states


class DirectControlDecoder:
    """Validates and decodes direct control triples."""

    @staticmethod
    def decode(values: Sequence[int]) -> tuple[CommandWord, Dict[JointId, JointState]]:
        """Validate a (payload, rotation, aux) triple and decode it.

        Args:
            values: Sequence of exactly three integers

        Returns:
            (command word to write, joint states to record)

        Raises:
            InvalidArgumentError: On malformed or out-of-range input
        """
        try:
            payload, rotation, aux = values
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Expected three integers, got {values!r}") from e

        for value in (payload, rotation, aux):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"Expected three integers, got {values!r}")

        validate_direct(payload, rotation, aux)

        word = CommandWord(payload=payload, rotation=rotation, aux=aux)
        return word, decode_payload(payload)

"""Applies parsed text commands to the registry and accumulator.

Keeps the parser pure: CommandParser turns text into commands, the applier
turns commands into state transitions and reports the outcome.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..models import (
    ROTATION_LEFT,
    ROTATION_RIGHT,
    ROTATION_STOP,
    ArmCommand,
    AuxCommand,
    CommandOutcome,
    JointCommand,
    JointState,
    RotateBaseCommand,
    StopCommand,
    StopScope,
)
from .parser import CommandParser
from .registry import CommandAccumulator, JointRegistry

logger = logging.getLogger(__name__)

_ROTATION_TEXT = {ROTATION_LEFT: "Turning base left", ROTATION_RIGHT: "Turning base right"}
_JOINT_VERBS = {
    "claw": {JointState.POSITIVE: "Closing claw", JointState.NEGATIVE: "Opening claw"},
}


class CommandApplier:
    """Drives a JointRegistry/CommandAccumulator pair from parsed commands."""

    def __init__(self, registry: JointRegistry, accumulator: CommandAccumulator):
        self._registry = registry
        self._accumulator = accumulator

    def apply(self, command: Optional[ArmCommand]) -> CommandOutcome:
        """Apply one parsed command.

        Args:
            command: Parsed command, or None for a rejected line

        Returns:
            ACCEPTED if the command was applied, REJECTED otherwise
        """
        if command is None:
            return CommandOutcome.REJECTED

        if isinstance(command, RotateBaseCommand):
            self._accumulator.set_rotation(command.rotation)
            logger.info(_ROTATION_TEXT.get(command.rotation, "Stopped base"))
        elif isinstance(command, AuxCommand):
            self._accumulator.set_aux(command.aux)
            logger.info("Turning led on" if command.aux else "Turning led off")
        elif isinstance(command, StopCommand):
            self._apply_stop(command)
        elif isinstance(command, JointCommand):
            self._registry.set(command.joint, command.state)
            logger.info(self._describe_joint(command))
        else:
            raise ValueError(f"Unknown command type: {type(command)}")

        return CommandOutcome.ACCEPTED

    def apply_line(self, line: str) -> CommandOutcome:
        """Parse and apply a single line."""
        outcome = self.apply(CommandParser.parse_line(line))
        if outcome is CommandOutcome.REJECTED:
            logger.warning(f"Invalid command: {line!r}")
        return outcome

    def apply_batch(self, text: str) -> Optional[CommandOutcome]:
        """Apply every line of a submission in order.

        Returns:
            Outcome of the last line processed, or None if there were no lines
        """
        outcome = None
        for line in CommandParser.split_batch(text):
            outcome = self.apply_line(line)
        return outcome

    def _apply_stop(self, command: StopCommand) -> None:
        if command.scope is StopScope.ALL:
            self._registry.reset_all()
            self._accumulator.clear()
            logger.info("Stopping all")
        else:
            self._registry.reset_all()
            self._accumulator.set_rotation(ROTATION_STOP)
            logger.info("Stopping movement")

    @staticmethod
    def _describe_joint(command: JointCommand) -> str:
        name = command.joint.value
        if command.state is JointState.IDLE:
            return f"Stopped {name}"
        verbs = _JOINT_VERBS.get(name)
        if verbs:
            return verbs[command.state]
        direction = "up" if command.state is JointState.POSITIVE else "down"
        return f"Turning {name} {direction}"

"""Parser for the arm's text command language.

Each line has the form ``<target>:<action>``. Tokens are matched exactly and
case-sensitively; nothing is trimmed. Pure functions with no side effects.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..models import (
    AUX_OFF,
    AUX_ON,
    ROTATION_LEFT,
    ROTATION_RIGHT,
    ROTATION_STOP,
    ArmCommand,
    AuxCommand,
    JointCommand,
    JointId,
    JointState,
    RotateBaseCommand,
    StopCommand,
    StopScope,
)

MIN_ACTION_LENGTH = 2

# target -> action -> command
COMMAND_TABLE: Dict[str, Dict[str, ArmCommand]] = {
    "base": {
        "left": RotateBaseCommand(ROTATION_LEFT),
        "right": RotateBaseCommand(ROTATION_RIGHT),
        "stop": RotateBaseCommand(ROTATION_STOP),
    },
    "led": {
        "on": AuxCommand(AUX_ON),
        "off": AuxCommand(AUX_OFF),
    },
    "stop": {
        "move": StopCommand(StopScope.MOVE),
        "all": StopCommand(StopScope.ALL),
    },
    "shoulder": {
        "up": JointCommand(JointId.SHOULDER, JointState.POSITIVE),
        "down": JointCommand(JointId.SHOULDER, JointState.NEGATIVE),
        "stop": JointCommand(JointId.SHOULDER, JointState.IDLE),
    },
    "elbow": {
        "up": JointCommand(JointId.ELBOW, JointState.POSITIVE),
        "down": JointCommand(JointId.ELBOW, JointState.NEGATIVE),
        "stop": JointCommand(JointId.ELBOW, JointState.IDLE),
    },
    "wrist": {
        "up": JointCommand(JointId.WRIST, JointState.POSITIVE),
        "down": JointCommand(JointId.WRIST, JointState.NEGATIVE),
        "stop": JointCommand(JointId.WRIST, JointState.IDLE),
    },
    "claw": {
        "close": JointCommand(JointId.CLAW, JointState.POSITIVE),
        "open": JointCommand(JointId.CLAW, JointState.NEGATIVE),
        "stop": JointCommand(JointId.CLAW, JointState.IDLE),
    },
}


class CommandParser:
    """Parser for ``target:action`` command lines.

    Examples:
        >>> CommandParser.parse_line("shoulder:up")
        JointCommand(joint=<JointId.SHOULDER: 'shoulder'>, state=<JointState.POSITIVE: 1>)
        >>> CommandParser.parse_line("shoulder:sideways") is None
        True
    """

    @staticmethod
    def parse_line(line: str) -> Optional[ArmCommand]:
        """Parse a single command line.

        Args:
            line: One command, without its newline

        Returns:
            The parsed command, or None if the line is rejected
        """
        target, sep, action = line.partition(":")
        if not sep:
            return None

        if len(action) < MIN_ACTION_LENGTH:
            return None

        actions = COMMAND_TABLE.get(target)
        if actions is None:
            return None

        return actions.get(action)

    @staticmethod
    def split_batch(text: str) -> List[str]:
        """Split a write submission into command lines.

        Every newline-terminated line is returned, empty ones included.
        A trailing piece with no terminator is returned only if non-empty.
        """
        *lines, tail = text.split("\n")
        if tail:
            lines.append(tail)
        return lines

    @staticmethod
    def parse_batch(text: str) -> List[Tuple[str, Optional[ArmCommand]]]:
        """Parse every line of a submission, in order.

        Returns:
            List of (line, command or None) pairs
        """
        return [
            (line, CommandParser.parse_line(line))
            for line in CommandParser.split_batch(text)
        ]

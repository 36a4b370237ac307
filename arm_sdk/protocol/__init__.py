"""Command protocol: joint state tracking, text parsing and direct control decoding."""

from .registry import CommandAccumulator, JointRegistry
from .parser import CommandParser, COMMAND_TABLE
from .applier import CommandApplier
from .decoder import DirectControlDecoder, decode_payload, validate_direct

__all__ = [
    "CommandAccumulator",
    "JointRegistry",
    "CommandParser",
    "COMMAND_TABLE",
    "CommandApplier",
    "DirectControlDecoder",
    "decode_payload",
    "validate_direct",
]

"""Shared arm controller.

One ArmController owns all mutable arm state: the joint registry, the
command accumulator, the last command outcome and the transport. Every
control handle, the hotplug monitor and the diagnostic view operate on the
same instance.

Locking:
    ``_lock`` serialises every mutating operation including the blocking
    transfer, so "apply a batch, then send once" is atomic for writers.
    ``_state_lock`` guards the in-memory state only and is never held across
    a transfer, so status reads do not wait on the USB link.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List, Optional, Sequence

from ..errors import NoDeviceError, TransportError
from ..models import CommandOutcome, CommandWord, JointId, JointState
from ..protocol import CommandAccumulator, CommandApplier, DirectControlDecoder, JointRegistry
from ..transport import Transport, UsbTransport
from .status import ArmStatus, StatusAggregator

logger = logging.getLogger(__name__)


class ArmController:
    """Context object for one robot arm.

    Example:
        >>> from arm_sdk.transport import LoopbackTransport
        >>> arm = ArmController(transport=LoopbackTransport())
        >>> arm.submit_text("shoulder:up\\nled:on\\n")
        <CommandOutcome.ACCEPTED: 1>
        >>> arm.status().status_line
        'connected:yes status:good battery:3\\n'
    """

    def __init__(self, transport: Optional[Transport] = None):
        """Initialize controller with every joint idle and a zero word.

        Args:
            transport: Transport to the arm (default: UsbTransport with no device)
        """
        self._transport = transport or UsbTransport()

        self._accumulator = CommandAccumulator()
        self._registry = JointRegistry(self._accumulator)
        self._applier = CommandApplier(self._registry, self._accumulator)
        self._outcome = CommandOutcome.NONE

        self._lock = threading.RLock()
        self._state_lock = threading.Lock()

        self._status_callbacks: List[Callable[[ArmStatus], None]] = []
        self._callback_lock = threading.Lock()

    @property
    def transport(self) -> Transport:
        return self._transport

    # --- Command Interface ---

    def submit_text(self, text: str) -> Optional[CommandOutcome]:
        """Apply a batch of text commands, then send the result once.

        The stored outcome becomes that of the last line. Transport failures
        are logged and show up in status(); they are not raised.

        Args:
            text: Newline separated ``target:action`` lines

        Returns:
            Outcome of the last line, or None if the batch had no lines
        """
        with self._lock:
            with self._state_lock:
                outcome = self._applier.apply_batch(text)
                if outcome is not None:
                    self._outcome = outcome
                word = self._accumulator.snapshot()

            try:
                self._transport.send(word)
            except (NoDeviceError, TransportError) as e:
                logger.warning(f"Command not delivered: {e}")

        self._notify_status()
        return outcome

    def direct_control(self, values: Sequence[int]) -> CommandWord:
        """Overwrite the command word with a pre-encoded triple.

        The registry is overwritten with the decoded joint states. Nothing
        is sent; use send_current() to deliver the word.

        Args:
            values: (payload, rotation, aux)

        Returns:
            The word now held by the controller

        Raises:
            InvalidArgumentError: If validation fails; no state is changed
        """
        word, states = DirectControlDecoder.decode(values)
        logger.info(f"Direct control values: {word.payload},{word.rotation},{word.aux}")

        with self._lock:
            with self._state_lock:
                self._accumulator.overwrite(word.payload, word.rotation, word.aux)
                self._registry.overwrite(states)
                self._outcome = CommandOutcome.ACCEPTED

        self._notify_status()
        return word

    def send_current(self) -> int:
        """Send the current command word as is.

        Returns:
            Number of bytes transferred

        Raises:
            NoDeviceError: If no arm is attached
            TransportError: If the transfer fails
        """
        with self._lock:
            with self._state_lock:
                word = self._accumulator.snapshot()
            try:
                return self._transport.send(word)
            finally:
                self._notify_status()

    # --- Attach/Detach ---

    def attach(self, device: Any) -> None:
        """Hand a newly found arm to the transport."""
        with self._lock:
            self._transport.attach(device)
        self._notify_status()

    def detach(self) -> None:
        """Drop the arm and reset all command state.

        Every joint goes idle and the whole word is zeroed, since the arm
        itself stops when unplugged.
        """
        with self._lock:
            self._transport.detach()
            with self._state_lock:
                self._registry.reset_all()
                self._accumulator.clear()
        logger.info("Arm detached, command state reset")
        self._notify_status()

    @property
    def is_attached(self) -> bool:
        return self._transport.is_attached()

    # --- Status Interface ---

    def status(self) -> ArmStatus:
        """Get a snapshot of connection, command and joint status."""
        with self._state_lock:
            joints = self._registry.states()
            outcome = self._outcome

        return StatusAggregator.aggregate(
            connection_state=self._transport.connection_state,
            outcome=outcome,
            link_health=self._transport.link_health,
            joints=joints,
        )

    def command_word(self) -> CommandWord:
        """Get the command word that the next send would deliver."""
        with self._state_lock:
            return self._accumulator.snapshot()

    def joint_state(self, joint: JointId) -> JointState:
        with self._state_lock:
            return self._registry.get(joint)

    @property
    def last_outcome(self) -> CommandOutcome:
        """Stored outcome of the last command, unmasked."""
        with self._state_lock:
            return self._outcome

    def subscribe_status(self, callback: Callable[[ArmStatus], None]) -> Callable[[], None]:
        """Subscribe to status snapshots taken after every state change.

        Args:
            callback: Function to call with ArmStatus

        Returns:
            Unsubscribe function
        """
        with self._callback_lock:
            self._status_callbacks.append(callback)

        def unsubscribe():
            with self._callback_lock:
                if callback in self._status_callbacks:
                    self._status_callbacks.remove(callback)

        return unsubscribe

    def _notify_status(self) -> None:
        with self._callback_lock:
            callbacks = list(self._status_callbacks)
        if not callbacks:
            return

        status = self.status()
        for callback in callbacks:
            try:
                callback(status)
            except Exception as e:
                logger.error(f"Error in status callback: {e}")

"""Attach/detach detection for the robot arm.

pyusb offers no hotplug callbacks, so the monitor polls the finder on a
background thread and turns appearances and disappearances of the arm
into ArmController.attach() / detach() calls.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from .controller import ArmController
from .finder import ArmInfo, find_arms

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.5  # seconds


class HotplugMonitor:
    """Polls for the arm and keeps the controller's device handle current.

    Only one arm is driven at a time; if several are present the first one
    found is attached.
    """

    def __init__(self,
                 controller: ArmController,
                 finder: Callable[[], List[ArmInfo]] = find_arms):
        """Initialize hotplug monitor.

        Args:
            controller: Controller to attach/detach
            finder: Callable returning the arms currently plugged in
        """
        self._controller = controller
        self._finder = finder
        self._current: Optional[ArmInfo] = None

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._poll_interval = DEFAULT_POLL_INTERVAL

    @property
    def current(self) -> Optional[ArmInfo]:
        """The arm currently attached by this monitor, if any."""
        return self._current

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, interval: float = DEFAULT_POLL_INTERVAL) -> None:
        """Start background polling.

        Args:
            interval: Seconds between polls.
        """
        self._poll_interval = interval
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._monitor_loop,
            daemon=True,
            name="ArmHotplug"
        )
        self._thread.start()
        logger.debug(f"Hotplug monitor started (interval={interval}s)")

    def stop(self) -> None:
        """Stop background polling."""
        if not self.running:
            self._thread = None
            return

        self._stop_event.set()
        self._thread.join(timeout=max(1.0, 2 * self._poll_interval))
        self._thread = None
        logger.debug("Hotplug monitor stopped")

    def poll_once(self) -> None:
        """Run a single detection pass."""
        arms = self._finder()

        if self._current is not None and not self._controller.is_attached:
            # Detached by someone else
            self._current = None

        if self._current is None:
            if not arms:
                return
            if len(arms) > 1:
                logger.warning(f"{len(arms)} arms found, attaching {arms[0].device_id}")
            info = arms[0]
            logger.info(f"Arm found: Vendor: 0x{info.vid:04x}, Product ID: 0x{info.pid:04x}")
            self._controller.attach(info.device)
            self._current = info
            return

        if not any(arm.device_id == self._current.device_id for arm in arms):
            logger.info(f"Arm {self._current.device_id} removed")
            self._current = None
            self._controller.detach()

    def _monitor_loop(self) -> None:
        """Background loop for polling."""
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error(f"Error in hotplug monitor loop: {e}")
            self._stop_event.wait(self._poll_interval)

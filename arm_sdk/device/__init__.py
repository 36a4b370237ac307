"""Device layer for the USB robot arm.

This module provides:
- The shared arm controller (ArmController)
- File-like control handles and the diagnostic view (ControlNode, DiagnosticView)
- Status snapshots (ArmStatus, StatusAggregator)
- Device discovery and attach/detach polling (find_single_arm, HotplugMonitor)
"""

from .status import ArmStatus, StatusAggregator
from .controller import ArmController
from .node import (
    BUF_SIZE,
    IOCTL_GET_VALUE,
    IOCTL_SET_VALUE,
    ControlHandle,
    ControlNode,
    DiagnosticView,
)
from .finder import (
    ARM_PRODUCT_IDS,
    ARM_VENDOR_ID,
    ArmInfo,
    find_arms,
    find_single_arm,
    is_arm_available,
    is_matching_arm,
)
from .hotplug import HotplugMonitor

__all__ = [
    # Controller
    'ArmController',

    # Control surface
    'ControlNode',
    'ControlHandle',
    'DiagnosticView',
    'BUF_SIZE',
    'IOCTL_SET_VALUE',
    'IOCTL_GET_VALUE',

    # Status
    'ArmStatus',
    'StatusAggregator',

    # Finder
    'ARM_VENDOR_ID',
    'ARM_PRODUCT_IDS',
    'ArmInfo',
    'find_arms',
    'find_single_arm',
    'is_arm_available',
    'is_matching_arm',
    'HotplugMonitor',
]

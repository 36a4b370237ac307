from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

import usb.core

from ..errors import ArmNotFoundError, MultipleArmsError

logger = logging.getLogger(__name__)

ARM_VENDOR_ID = 0x1267
# Two hardware revisions ship with different product IDs
ARM_PRODUCT_IDS = (0x0000, 0x0001)


@dataclass(frozen=True)
class ArmInfo:
    """
    Representation of one robot arm as seen by pyusb.

    Attributes:
        vid: USB Vendor ID.
        pid: USB Product ID.
        bus: USB bus number, or None if unknown.
        address: Device address on the bus, or None if unknown.
        revision: Index of the product ID in ARM_PRODUCT_IDS, or None.
        device: The pyusb device handle to attach.
    """
    vid: int
    pid: int
    bus: Optional[int]
    address: Optional[int]
    revision: Optional[int]
    device: Any = field(compare=False, repr=False)

    @property
    def device_id(self) -> str:
        """
        Identifier that stays stable while the arm stays plugged in.
        """
        return f"{self.bus}:{self.address}"


def _device_to_info(device, product_ids: Sequence[int] = ARM_PRODUCT_IDS) -> ArmInfo:
    """Convert a pyusb Device to ArmInfo."""
    pid = device.idProduct
    return ArmInfo(
        vid=device.idVendor,
        pid=pid,
        bus=getattr(device, "bus", None),
        address=getattr(device, "address", None),
        revision=product_ids.index(pid) if pid in product_ids else None,
        device=device,
    )


def is_matching_arm(
    info: ArmInfo,
    *,
    vendor_id: Optional[int] = ARM_VENDOR_ID,
    product_ids: Optional[Sequence[int]] = ARM_PRODUCT_IDS,
) -> bool:
    """
    Decide whether a given ArmInfo describes one of our arms.

    Checks are AND-combined; if a criterion is None, it is ignored.
    """
    if vendor_id is not None and info.vid != vendor_id:
        return False

    if product_ids is not None and info.pid not in product_ids:
        return False

    return True


def find_arms(
    *,
    matcher: Optional[Callable[[ArmInfo], bool]] = None,
    vendor_id: Optional[int] = ARM_VENDOR_ID,
    product_ids: Optional[Sequence[int]] = ARM_PRODUCT_IDS,
) -> List[ArmInfo]:
    """
    Find all arms connected to this machine.

    You can either pass a custom `matcher(info) -> bool` or use the
    built-in vendor/product criteria.

    Returns:
        List of ArmInfo objects.
    """
    results: List[ArmInfo] = []

    for device in usb.core.find(find_all=True):
        info = _device_to_info(device, product_ids or ARM_PRODUCT_IDS)
        if matcher is not None:
            if matcher(info):
                results.append(info)
        elif is_matching_arm(info, vendor_id=vendor_id, product_ids=product_ids):
            results.append(info)

    return results


def find_single_arm(
    *,
    matcher: Optional[Callable[[ArmInfo], bool]] = None,
    vendor_id: Optional[int] = ARM_VENDOR_ID,
    product_ids: Optional[Sequence[int]] = ARM_PRODUCT_IDS,
) -> ArmInfo:
    """
    Find exactly one arm.

    Behaviour:
        - 0 matches  -> ArmNotFoundError
        - 1 match    -> return it
        - >1 matches -> log error and raise MultipleArmsError
    """
    matches = find_arms(matcher=matcher, vendor_id=vendor_id, product_ids=product_ids)

    if not matches:
        raise ArmNotFoundError("No matching arm found")

    if len(matches) > 1:
        logger.error(
            "Multiple matching arms found; refusing to choose automatically. "
            "Devices: %s",
            matches,
        )
        raise MultipleArmsError(
            f"Multiple matching arms found ({len(matches)} devices)",
            devices=matches,
        )

    return matches[0]


def is_arm_available(
    vendor_id: Optional[int] = ARM_VENDOR_ID,
    product_ids: Optional[Sequence[int]] = ARM_PRODUCT_IDS,
) -> bool:
    """Check if at least one arm is plugged in. Never raises."""
    try:
        return bool(find_arms(vendor_id=vendor_id, product_ids=product_ids))
    except Exception as e:
        logger.debug(f"Arm availability check failed: {e}")
        return False

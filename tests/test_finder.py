"""Unit tests for arm discovery."""

import unittest
from unittest.mock import MagicMock, patch

from arm_sdk.device.finder import (
    ARM_PRODUCT_IDS,
    ARM_VENDOR_ID,
    ArmInfo,
    find_arms,
    find_single_arm,
    is_arm_available,
    is_matching_arm,
)
from arm_sdk.errors import ArmNotFoundError, MultipleArmsError


def make_usb_device(vid, pid, bus=1, address=5):
    device = MagicMock()
    device.idVendor = vid
    device.idProduct = pid
    device.bus = bus
    device.address = address
    return device


ARM_REV_A = make_usb_device(0x1267, 0x0000, address=5)
ARM_REV_B = make_usb_device(0x1267, 0x0001, address=6)
KEYBOARD = make_usb_device(0x046D, 0xC31C, address=2)
SAME_VENDOR_OTHER = make_usb_device(0x1267, 0x0002, address=7)


class TestIsMatchingArm(unittest.TestCase):
    """Tests for the matching predicate."""

    def info(self, vid, pid):
        return ArmInfo(vid=vid, pid=pid, bus=1, address=1, revision=None, device=None)

    def test_defaults(self):
        self.assertEqual(ARM_VENDOR_ID, 0x1267)
        self.assertEqual(ARM_PRODUCT_IDS, (0x0000, 0x0001))

    def test_both_revisions_match(self):
        self.assertTrue(is_matching_arm(self.info(0x1267, 0x0000)))
        self.assertTrue(is_matching_arm(self.info(0x1267, 0x0001)))

    def test_other_devices_do_not_match(self):
        self.assertFalse(is_matching_arm(self.info(0x1267, 0x0002)))
        self.assertFalse(is_matching_arm(self.info(0x046D, 0x0000)))

    def test_none_criteria_ignored(self):
        self.assertTrue(is_matching_arm(self.info(0x046D, 0xC31C), vendor_id=None, product_ids=None))


@patch('usb.core.find')
class TestFindArms(unittest.TestCase):
    """Tests for find_arms / find_single_arm."""

    def test_find_arms_filters(self, mock_find):
        mock_find.return_value = iter([KEYBOARD, ARM_REV_A, SAME_VENDOR_OTHER, ARM_REV_B])

        arms = find_arms()

        mock_find.assert_called_once_with(find_all=True)
        self.assertEqual([(a.vid, a.pid) for a in arms], [(0x1267, 0x0000), (0x1267, 0x0001)])
        self.assertEqual([a.revision for a in arms], [0, 1])
        self.assertIs(arms[0].device, ARM_REV_A)
        self.assertEqual(arms[0].device_id, "1:5")

    def test_custom_matcher(self, mock_find):
        mock_find.return_value = iter([KEYBOARD, ARM_REV_A])
        arms = find_arms(matcher=lambda info: info.vid == 0x046D)
        self.assertEqual(len(arms), 1)
        self.assertIsNone(arms[0].revision)

    def test_find_single_arm(self, mock_find):
        mock_find.return_value = iter([KEYBOARD, ARM_REV_B])
        info = find_single_arm()
        self.assertEqual(info.pid, 0x0001)

    def test_find_single_arm_none(self, mock_find):
        mock_find.return_value = iter([KEYBOARD])
        with self.assertRaises(ArmNotFoundError):
            find_single_arm()

    def test_find_single_arm_multiple(self, mock_find):
        mock_find.return_value = iter([ARM_REV_A, ARM_REV_B])
        with self.assertRaises(MultipleArmsError) as ctx:
            find_single_arm()
        self.assertEqual(len(ctx.exception.devices), 2)

    def test_is_arm_available(self, mock_find):
        mock_find.return_value = iter([ARM_REV_A])
        self.assertTrue(is_arm_available())

        mock_find.return_value = iter([])
        self.assertFalse(is_arm_available())

    def test_is_arm_available_never_raises(self, mock_find):
        mock_find.side_effect = Exception("No backend available")
        self.assertFalse(is_arm_available())


if __name__ == '__main__':
    unittest.main()

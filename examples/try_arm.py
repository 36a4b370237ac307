#!/usr/bin/env python3
"""
Arm Smoke Test Script.

Finds exactly one arm, attaches it, raises the shoulder for one second
and then stops everything.
"""

import sys
import time
import logging
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arm_sdk import ArmController, ArmNotFoundError, MultipleArmsError
from arm_sdk.device import find_single_arm

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def main():
    print("Looking for arm...")
    try:
        info = find_single_arm()
    except ArmNotFoundError:
        print("No arm found! Is it plugged in and switched on?")
        return
    except MultipleArmsError as e:
        print(f"Found {len(e.devices)} arms, unplug all but one.")
        return

    print(f"Found arm revision {info.revision} at {info.device_id}")

    controller = ArmController()
    controller.attach(info.device)

    try:
        controller.submit_text("led:on\nshoulder:up\n")
        print(controller.status().status_line, end="")
        time.sleep(1.0)
    finally:
        controller.submit_text("stop:all\n")
        print(controller.status().status_line, end="")
        controller.detach()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Interactive Arm Console.

Type text commands (e.g. ``shoulder:up``, ``claw:open``, ``stop:all``) and
they are sent to the arm; the status line is printed after each one.
``diag`` prints the diagnostic view, ``quit`` exits.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arm_sdk import ArmController, ArmError, LoopbackTransport
from arm_sdk.device import ControlNode, DiagnosticView, HotplugMonitor


def parse_args():
    parser = argparse.ArgumentParser(description="Interactive robot arm console")
    parser.add_argument("--simulate", action="store_true",
                        help="use a simulated arm instead of USB hardware")
    parser.add_argument("--no-led", action="store_true",
                        help="skip switching the LED on at start-up")
    parser.add_argument("--verbose", action="store_true",
                        help="log every command and transfer")
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    monitor = None
    if args.simulate:
        controller = ArmController(transport=LoopbackTransport())
    else:
        controller = ArmController()
        monitor = HotplugMonitor(controller)
        # Pick up an arm that is already plugged in before starting
        monitor.poll_once()
        monitor.start()

    node = ControlNode(controller)
    diagnostics = DiagnosticView(controller)

    if not args.no_led:
        with node.open() as handle:
            handle.write(b"led:on\n")

    print("Arm console ready. Type 'diag' for joint states, 'quit' to exit.")

    try:
        with node.open() as handle:
            for line in sys.stdin:
                line = line.rstrip("\n")
                if line == "quit":
                    break
                if line == "diag":
                    print(diagnostics.render(), end="")
                    continue
                if not line:
                    continue

                try:
                    handle.write(line.encode("ascii", errors="replace"))
                except ArmError as e:
                    print(f"Error: {e}")
                    continue

                handle.seek(0)
                print(handle.read().decode("ascii"), end="")

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        with node.open() as handle:
            handle.write(b"stop:all\n")
        if monitor:
            monitor.stop()
        print("Done.")


if __name__ == "__main__":
    main()

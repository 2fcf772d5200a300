#!/usr/bin/env python3
"""Quick status viewer for the PiWatcher board."""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.exceptions import WatchdogError
from core.piwatcher import I2C_ADDRESS, I2C_BUS, PiWatcher, PiWatcherConfig


def main(argv=None, piwatcher: PiWatcher = None) -> int:
    parser = argparse.ArgumentParser(description="Show PiWatcher registers")
    parser.add_argument('--bus', type=int, default=I2C_BUS, help='I2C bus number')
    parser.add_argument('--address', type=lambda v: int(v, 0), default=I2C_ADDRESS,
                        help='I2C address (default: 0x62)')
    parser.add_argument('--reset', action='store_true',
                        help='Clear the latched boot flags after reading them')
    args = parser.parse_args(argv)

    if piwatcher is None:
        piwatcher = PiWatcher(PiWatcherConfig(bus=args.bus, address=args.address))

    try:
        piwatcher.open()
        status = piwatcher.status()
        watch = piwatcher.get_watch()
        wake = piwatcher.get_wake()

        print("\n" + "=" * 50)
        print("  PIWATCHER STATUS")
        print("=" * 50)
        print(f"  Status: {status} (raw {status.raw:#04x})")
        print(f"  Watch:  {watch}s" + ("  (disabled)" if watch == 0 else ""))
        print(f"  Wake:   {wake}s")

        if args.reset:
            piwatcher.reset()
            print(f"  Status after reset: {piwatcher.status()}")
        print("=" * 50 + "\n")
    except WatchdogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        piwatcher.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())

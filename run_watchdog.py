#!/usr/bin/env python3
"""
Run Watchdog - Liveness supervisor launcher.

Feeds the configured watchdog while every configured watcher is healthy.
If any watcher stays unhealthy past the watchdog timeout the board resets
the host.

Usage:
    python run_watchdog.py                        # uses ./config.py
    python run_watchdog.py -c config/piwatchdog.py
    python run_watchdog.py -c config/piwatchdog.py --debug
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from core import NOTICE, PiWatchdogError, configure_logging
from core.config import build_watchdog, build_watchers, load_config
from monitoring.health import Supervisor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="piwatchdog",
        description="Feed a hardware watchdog while health checks pass",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    piwatchdog -c config/piwatchdog.py
    piwatchdog -c config/piwatchdog.py --debug
        """
    )
    parser.add_argument(
        '-c', '--config',
        default='config.py',
        help='set config file (default: config.py)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def run(config_path: str, debug: bool = False) -> None:
    """Load configuration and supervise until a fatal error or a signal."""
    config = load_config(config_path)
    configure_logging('DEBUG' if debug else config['LOG_LEVEL'], config['LOG_FILE'])

    logger.log(NOTICE, "Starting up...")
    logger.debug(f"config loaded: {config}")

    supervisor = Supervisor(build_watchdog(config), build_watchers(config))
    supervisor.initialize()

    def _signal_handler(signum, frame):
        logger.info(f"Received signal {signum}, shutting down...")
        supervisor.stop()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    supervisor.run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        run(args.config, debug=args.debug)
    except PiWatchdogError as e:
        if not logging.getLogger().handlers:
            logging.basicConfig(level=logging.INFO)
        logger.critical(f"Fatal: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

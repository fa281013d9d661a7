"""Entry point for the projectile trajectory playback application.

Parameters are sent to the remote computation service; the returned
trajectory is replayed as an animation.
"""

import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

import config
from app_window import AppWindow
from projectile.view import abandoned_request_count
from service_client import SimulationClient


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Replay projectile trajectories computed by a remote service",
    )
    parser.add_argument(
        "--service-url", default=config.SERVICE_URL,
        help="Simulation endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout", type=config.read_timeout, default=config.REQUEST_TIMEOUT,
        help="Request timeout in seconds; 0 or less waits indefinitely",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main():
    args = parse_args(sys.argv[1:])

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    client = SimulationClient(url=args.service_url, timeout=args.timeout)
    window = AppWindow(client=client)
    window.show()

    code = app.exec()

    pending = abandoned_request_count()
    if pending:
        # Interpreter teardown would destroy the still-running QThreads
        logging.getLogger(__name__).warning(
            "Exiting with %d request(s) still pending", pending,
        )
        logging.shutdown()
        os._exit(code)
    sys.exit(code)


if __name__ == "__main__":
    main()

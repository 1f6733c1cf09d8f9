from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication

from call_overlay.overlay_controller import (
    DEFAULT_CHAT_NAME,
    DEFAULT_DURATION,
    format_call_duration,
    parse_call_duration,
    start_overlay_command,
    update_overlay_command,
)
from call_overlay.overlay_service import CallOverlayService
from chat_api.logging_utils import configure_logging
from version import is_dev_build

LOGGER = logging.getLogger("CYCB.Chat.Overlay")
TICK_INTERVAL_MS = 1000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CYCB Chat call overlay")
    parser.add_argument("--chat-name", default=DEFAULT_CHAT_NAME, help="Conversation shown on the overlay")
    parser.add_argument("--duration", default=DEFAULT_DURATION, help="Elapsed call time to start from (MM:SS)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug_enabled=args.debug or is_dev_build())

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setQuitOnLastWindowClosed(False)
    service = CallOverlayService()
    elapsed = parse_call_duration(args.duration)

    def _tick() -> None:
        nonlocal elapsed
        elapsed += 1
        service.submit(update_overlay_command(format_call_duration(elapsed)))

    timer = QTimer()
    timer.setInterval(TICK_INTERVAL_MS)
    timer.timeout.connect(_tick)

    service.broadcast.connect(lambda action: LOGGER.info("Broadcast %s", action))
    service.launch_requested.connect(lambda: LOGGER.info("Return to app requested"))
    service.stopped.connect(timer.stop)
    service.stopped.connect(app.quit)

    LOGGER.info("Starting call overlay for %s", args.chat_name)
    service.submit(start_overlay_command(args.chat_name, format_call_duration(elapsed)))
    timer.start()
    try:
        return app.exec()
    finally:
        service.shutdown()


if __name__ == "__main__":
    sys.exit(main())

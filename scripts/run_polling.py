#!/usr/bin/env python3
"""
Run the bot with Telegram long polling instead of the webhook.

Usage:
  python3 scripts/run_polling.py

Removes any registered webhook first (Telegram refuses getUpdates while one is set).
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roombot.core.config import settings
from roombot.main import configure_logging
from roombot.infrastructure.telegram.polling import TelegramPoller
from roombot.wiring.dependencies import get_handle_update_use_case, get_telegram_client


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    poller = TelegramPoller(
        client=get_telegram_client(),
        use_case=get_handle_update_use_case(),
        poll_timeout_seconds=settings.TELEGRAM_POLL_TIMEOUT_SECONDS,
    )
    try:
        poller.run_forever()
    except KeyboardInterrupt:
        poller.stop()
        print("\nBye!")


if __name__ == "__main__":
    main()

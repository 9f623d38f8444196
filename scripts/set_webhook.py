#!/usr/bin/env python3
"""
Register (or remove) the Telegram webhook.

Usage:
  python3 scripts/set_webhook.py https://example.com/webhooks/telegram
  python3 scripts/set_webhook.py --delete
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roombot.core.config import settings
from roombot.wiring.dependencies import get_telegram_client


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage the Telegram webhook")
    parser.add_argument("url", nargs="?", help="public HTTPS URL of /webhooks/telegram")
    parser.add_argument("--delete", action="store_true", help="remove the webhook")
    args = parser.parse_args()

    client = get_telegram_client()
    if args.delete:
        client.delete_webhook()
        print("Webhook removed.")
        return
    if not args.url:
        parser.error("url is required unless --delete is given")

    client.set_webhook(args.url, secret_token=settings.TELEGRAM_WEBHOOK_SECRET)
    print(f"Webhook set to {args.url}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Uniswap V2 Buy Alert Bot

Watches a single V2 pair for buys of the tracked token and posts each one,
with live price / market cap / liquidity, to a Telegram chat.

Usage:
  python3 main.py              # Wait for /start in Telegram, then watch
  python3 main.py --dry-run    # Log alerts instead of sending them (needs TELEGRAM_CHAT_ID)
"""

import argparse
import asyncio
import logging
import signal
import sys

from buywatch.config import LOG_LEVEL, Settings
from buywatch.errors import ConfigurationError
from buywatch.monitor.poller import IDLE
from buywatch.monitor.service import BuyBotService

logger = logging.getLogger("buywatch")


async def run_bot(settings: Settings):
    service = BuyBotService(settings)
    task = asyncio.create_task(service.run())

    def _shutdown():
        service.stop()
        # Startup may be blocked on /start or RPC retries
        if service.poller.session.state == IDLE:
            task.cancel()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _shutdown)
        except NotImplementedError:
            pass

    try:
        await task
    except asyncio.CancelledError:
        logger.info("Startup cancelled")
    finally:
        await service.close()


def main():
    parser = argparse.ArgumentParser(description='Telegram buy alerts for a Uniswap V2 pair')
    parser.add_argument('--dry-run', action='store_true', help='Log alerts instead of sending them to Telegram')
    parser.add_argument('--log-level', default=LOG_LEVEL, help='Logging level (default from LOG_LEVEL)')

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.WARNING)

    try:
        settings = Settings.from_env(dry_run=True if args.dry_run else None)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run_bot(settings))
    except Exception as e:
        logger.error(f"Bot launch failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

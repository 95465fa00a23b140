"""
Buy Bot Service

Wires configuration, chain client, pricing and Telegram together and owns the
process lifecycle: establish the alert chat, start the poller, tick until
stopped.
"""

import asyncio
import logging
from typing import Optional, Union

from ..alerts.formatter import FAILED_START_MESSAGE, format_start_message
from ..alerts.telegram import AlertConfig, TelegramNotifier
from ..client.web3_client import Web3Client
from ..config import Settings, check_decimals
from ..pricing.pool_stats import PoolStatsAggregator
from ..pricing.usd_oracle import USDOracle
from .poller import BlockPoller

logger = logging.getLogger(__name__)


class BuyBotService:
    def __init__(self, settings: Settings, web3_client=None, notifier: Optional[TelegramNotifier] = None):
        self.settings = settings
        self.web3_client = web3_client or Web3Client(settings.rpc_url)
        self.notifier = notifier or TelegramNotifier(
            AlertConfig(bot_token=settings.bot_token, dry_run=settings.dry_run)
        )

        oracle = USDOracle(
            self.web3_client,
            router_address=settings.router_address,
            base_address=settings.base_address,
            intermediate_address=settings.intermediate_address,
            stable_address=settings.stable_address,
            decimals=settings.decimals,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
        )
        aggregator = PoolStatsAggregator(
            self.web3_client,
            oracle,
            pair_address=settings.pair_address,
            token_address=settings.token_address,
            base_address=settings.base_address,
            decimals=settings.decimals,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
        )
        self.poller = BlockPoller(self.web3_client, aggregator, self.notifier, settings)
        self._stop_event = asyncio.Event()

    async def start(self) -> Union[int, str]:
        """
        Establish the alert chat and activate the poller.

        Returns:
            Chat id alerts will be sent to

        Raises:
            Whatever prevented startup, after telling the chat
        """
        chat_id = self.settings.chat_id
        if chat_id is None:
            chat_id = await self.notifier.wait_for_start()

        try:
            await check_decimals(self.web3_client, self.settings)
            await self.notifier.send_message(
                chat_id, format_start_message(self.settings.base_symbol, self.settings.target_symbol)
            )
            await self.poller.start(chat_id)
        except Exception as e:
            logger.error(f"Bot start error: {e}")
            await self.notifier.send_message(chat_id, FAILED_START_MESSAGE)
            raise

        return chat_id

    async def run(self):
        await self.start()
        logger.info("Buy bot is live and watching")
        await self.poller.run(self.settings.poll_interval, self._stop_event)

    def stop(self):
        logger.info("Shutting down bot...")
        self._stop_event.set()

    async def close(self):
        await self.notifier.close()
        logger.info("Bot stopped")

"""
Block Poller

Scans the pair for new Swap logs every tick and alerts on buys.

The session starts Idle (no cursor). start() moves it to Active by setting the
cursor to the current chain head, so swaps from before startup are never
replayed. Each tick scans [cursor + 1, head] and only then moves the cursor to
head; a failed log fetch leaves the cursor in place so the same range is
scanned again on the next tick.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..alerts.formatter import format_buy_alert
from ..client.retry import with_retry
from ..config import Settings
from ..pricing.event_decoder import EventDecoder
from ..pricing.units import to_decimal_units
from ..uniswap.v2.swap_classifier import SwapClassifier

logger = logging.getLogger(__name__)

IDLE = "idle"
ACTIVE = "active"


@dataclass
class PollerSession:
    """Mutable state shared by every tick: scan cursor and alert recipient."""
    cursor: Optional[int] = None
    chat_id: Optional[Union[int, str]] = None

    @property
    def state(self) -> str:
        return IDLE if self.cursor is None else ACTIVE

    def advance(self, block_number: int):
        # Never move backwards
        if self.cursor is None or block_number > self.cursor:
            self.cursor = block_number


class BlockPoller:
    """Drives decode -> classify -> snapshot -> notify for each new swap log."""

    def __init__(self, web3_client, aggregator, notifier, settings: Settings,
                 session: Optional[PollerSession] = None,
                 decoder: Optional[EventDecoder] = None,
                 classifier: Optional[SwapClassifier] = None):
        self.web3_client = web3_client
        self.aggregator = aggregator
        self.notifier = notifier
        self.settings = settings
        self.session = session or PollerSession()
        self.decoder = decoder or EventDecoder()
        self.classifier = classifier or SwapClassifier()
        self._tick_lock = asyncio.Lock()

    def _retry(self, operation):
        return with_retry(operation, self.settings.max_retries, self.settings.retry_delay)

    async def start(self, chat_id: Union[int, str]) -> int:
        """
        Activate the session at the current chain head.

        Returns:
            The starting block number

        Raises:
            RetryExhausted: if the chain head cannot be read
        """
        start_block = await self._retry(self.web3_client.get_block_number)
        self.session.chat_id = chat_id
        self.session.advance(start_block)
        logger.info(f"Started at block {start_block}")
        return start_block

    async def tick(self):
        """Run one scan. Never raises; overlapping calls are skipped."""
        if self.session.state == IDLE:
            logger.debug("Poller idle, skipping tick")
            return

        if self._tick_lock.locked():
            logger.warning("Previous tick still running, skipping this one")
            return

        async with self._tick_lock:
            try:
                await self._scan()
            except Exception as e:
                logger.error(f"Polling error: {e}")

    async def _scan(self):
        current_block = await self._retry(self.web3_client.get_block_number)
        last_block = self.session.cursor
        if current_block <= last_block:
            return

        logger.info(f"Polling blocks {last_block + 1} to {current_block}")
        logs = await self._retry(
            lambda: self.web3_client.get_swap_logs(self.settings.pair_address, last_block + 1, current_block)
        )
        if logs:
            logger.info(f"Found {len(logs)} swap logs")

        # Sequential on purpose: alerts go out in log order
        for log in logs:
            try:
                await self.handle_swap_log(log)
            except Exception as e:
                logger.error(f"Error handling swap log: {e}")

        self.session.advance(current_block)

    async def handle_swap_log(self, log: Dict) -> bool:
        """
        Alert on a single swap log if it is a buy.

        Returns:
            True if an alert was delivered
        """
        decoded = self.decoder.decode_swap_log(log)
        if decoded is None:
            return False

        swap = self.classifier.classify(decoded)
        if swap is None:
            return False

        paid = to_decimal_units(swap.amount_in, self.settings.decimals.base)
        token_decimals = await self._retry(
            lambda: self.web3_client.get_token_decimals(self.settings.token_address)
        )
        received = to_decimal_units(swap.amount_out, token_decimals)
        logger.info(
            f"Buy in tx {decoded.get('transactionHash')}: paid {paid:.4f} {self.settings.base_symbol} "
            f"(amount{swap.in_slot}In), received {received:.4f} {self.settings.target_symbol} "
            f"(amount{swap.out_slot}Out)"
        )

        stats = await self.aggregator.fetch_stats()
        if stats is None:
            logger.error("Skipping swap alert due to failed stats fetch")
            return False

        if self.session.chat_id is None:
            logger.warning("No chat id set, cannot send message")
            return False

        message = format_buy_alert(
            buyer=swap.counterparty,
            paid=paid,
            received=received,
            snapshot=stats,
            base_symbol=self.settings.base_symbol,
            target_symbol=self.settings.target_symbol,
        )
        sent = await self.notifier.send_message(self.session.chat_id, message)
        if sent:
            logger.info(f"Sent buy alert for {received:.4f} {self.settings.target_symbol}")
        else:
            logger.error(f"Buy alert for tx {decoded.get('transactionHash')} was not delivered")
        return sent

    async def run(self, interval: float, stop_event: asyncio.Event):
        """Tick every ``interval`` seconds until ``stop_event`` is set."""
        while not stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass

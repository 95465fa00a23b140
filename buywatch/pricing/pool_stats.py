"""
Pool Stats Module

Combines pair reserves, token supply and the USD oracle into a snapshot of
price, market cap and liquidity for the tracked token.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..client.retry import with_retry
from ..config import MAX_RETRIES, RETRY_DELAY_SECONDS, TokenDecimals
from ..errors import OraclePriceUnavailable, ZeroReserve
from .units import to_decimal_units


@dataclass(frozen=True)
class PoolSnapshot:
    price_usd: float
    market_cap_usd: float
    liquidity_usd: float
    supply: float


class PoolStatsAggregator:
    """Builds a PoolSnapshot for the target token from live on-chain reads."""

    def __init__(self, web3_client, oracle, pair_address: str, token_address: str,
                 base_address: str, decimals: TokenDecimals,
                 max_retries: int = MAX_RETRIES,
                 retry_delay: float = RETRY_DELAY_SECONDS):
        self.web3_client = web3_client
        self.oracle = oracle
        self.pair_address = pair_address
        self.token_address = token_address
        self.base_address = base_address
        self.decimals = decimals
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.logger = logging.getLogger(__name__)

    def _retry(self, operation):
        return with_retry(operation, self.max_retries, self.retry_delay)

    async def fetch_stats(self) -> Optional[PoolSnapshot]:
        """
        Compute a fresh snapshot.

        Returns:
            PoolSnapshot, or None if any read or derivation step fails
        """
        try:
            return await self._build_snapshot()
        except Exception as e:
            self.logger.error(f"Failed to fetch stats: {e}")
            return None

    async def _build_snapshot(self) -> PoolSnapshot:
        (reserve0, reserve1), (token0, _) = await asyncio.gather(
            self._retry(lambda: self.web3_client.get_reserves(self.pair_address)),
            self._retry(lambda: self.web3_client.get_pair_tokens(self.pair_address)),
        )

        # Pools may hold the pair in either order
        is_base_first = token0.lower() == self.base_address.lower()
        reserve_base_raw = reserve0 if is_base_first else reserve1
        reserve_target_raw = reserve1 if is_base_first else reserve0

        reserve_base = to_decimal_units(reserve_base_raw, self.decimals.base)
        reserve_target = to_decimal_units(reserve_target_raw, self.decimals.target)
        self.logger.info(f"Reserves - base: {reserve_base}, target: {reserve_target}")

        if reserve_target == 0:
            raise ZeroReserve("Zero target token reserve")

        price_in_base = reserve_base / reserve_target
        self.logger.info(f"Price of 1 target token: {price_in_base} base")

        base_usd = await self.oracle.get_base_usd_price()
        if base_usd is None:
            raise OraclePriceUnavailable("Failed to fetch base USD price")

        price_usd = price_in_base * base_usd

        token_decimals, total_supply = await asyncio.gather(
            self._retry(lambda: self.web3_client.get_token_decimals(self.token_address)),
            self._retry(lambda: self.web3_client.get_total_supply(self.token_address)),
        )
        supply = to_decimal_units(total_supply, token_decimals)

        market_cap = price_usd * supply
        # Two-sided pool value, assuming both sides are worth the same
        liquidity_usd = reserve_base * base_usd * 2

        self.logger.info(
            f"Price: ${price_usd}, Market Cap: ${market_cap / 1e6:.2f}M, "
            f"Liquidity: ${liquidity_usd / 1e6:.2f}M, Supply: {supply}"
        )

        return PoolSnapshot(
            price_usd=price_usd,
            market_cap_usd=market_cap,
            liquidity_usd=liquidity_usd,
            supply=supply,
        )

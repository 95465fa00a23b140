"""
USD Oracle Module

Prices the base bridge asset in USD by chaining two router quotes:
base -> intermediate -> stable. Nothing is cached; every call hits the router.
"""

import logging
from typing import List, Optional

from ..client.retry import with_retry
from ..config import MAX_RETRIES, RETRY_DELAY_SECONDS, TokenDecimals
from ..errors import InvalidQuoteResponse
from .units import one_unit, to_decimal_units


class USDOracle:
    """Two-hop router oracle for the base asset USD price"""

    def __init__(self, web3_client, router_address: str, base_address: str,
                 intermediate_address: str, stable_address: str,
                 decimals: TokenDecimals,
                 max_retries: int = MAX_RETRIES,
                 retry_delay: float = RETRY_DELAY_SECONDS):
        self.web3_client = web3_client
        self.router_address = router_address
        self.base_address = base_address
        self.intermediate_address = intermediate_address
        self.stable_address = stable_address
        self.decimals = decimals
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.logger = logging.getLogger(__name__)

    async def get_base_usd_price(self) -> Optional[float]:
        """
        Get the USD price of one base token.

        Returns:
            base->intermediate rate times intermediate->stable rate,
            or None if either quote fails
        """
        try:
            base_to_intermediate = await self._quote_rate(
                [self.base_address, self.intermediate_address],
                self.decimals.base,
                self.decimals.intermediate,
            )
            self.logger.info(f"1 base = {base_to_intermediate} intermediate")

            intermediate_to_stable = await self._quote_rate(
                [self.intermediate_address, self.stable_address],
                self.decimals.intermediate,
                self.decimals.stable,
            )
            self.logger.info(f"1 intermediate = ${intermediate_to_stable}")

            base_usd = base_to_intermediate * intermediate_to_stable
            self.logger.info(f"Base USD price: ${base_usd}")
            return base_usd

        except Exception as e:
            self.logger.error(f"Failed to fetch base USD price: {e}")
            return None

    async def _quote_rate(self, path: List[str], source_decimals: int, dest_decimals: int) -> float:
        """Quote one whole source token along ``path`` and normalize the output."""
        amounts = await with_retry(
            lambda: self.web3_client.get_amounts_out(self.router_address, one_unit(source_decimals), path),
            self.max_retries,
            self.retry_delay,
        )
        if not amounts or len(amounts) < 2 or not amounts[1]:
            raise InvalidQuoteResponse(f"Invalid amountsOut response for {path[0]} -> {path[1]}")

        return to_decimal_units(amounts[1], dest_decimals)

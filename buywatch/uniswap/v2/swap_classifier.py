"""
Uniswap V2 Swap Classifier

Decides whether a decoded V2 Swap event is a buy and which amounts were paid
and received.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapEvent:
    amount_in: int
    amount_out: int
    counterparty: str
    is_buy: bool
    in_slot: int
    out_slot: int


class SwapClassifier:
    """
    Classifies V2 swaps.

    A swap is a buy when one side goes in and the other side comes out:
    (amount0In > 0 and amount1Out > 0) or (amount1In > 0 and amount0Out > 0).
    """

    def classify(self, decoded_event: Dict) -> Optional[SwapEvent]:
        """
        Classify a decoded swap event.

        Args:
            decoded_event: Dict with amount0In, amount1In, amount0Out, amount1Out, to

        Returns:
            SwapEvent for buys, None for every other shape
        """
        a0in = decoded_event['amount0In']
        a1in = decoded_event['amount1In']
        a0out = decoded_event['amount0Out']
        a1out = decoded_event['amount1Out']

        if a0in > 0 and a1out > 0:
            amount_in, amount_out, in_slot, out_slot = a0in, a1out, 0, 1
        elif a1in > 0 and a0out > 0:
            amount_in, amount_out, in_slot, out_slot = a1in, a0out, 1, 0
        else:
            logger.debug(f"Skipping non-buy swap: in=({a0in}, {a1in}) out=({a0out}, {a1out})")
            return None

        return SwapEvent(
            amount_in=amount_in,
            amount_out=amount_out,
            counterparty=decoded_event['to'],
            is_buy=True,
            in_slot=in_slot,
            out_slot=out_slot,
        )

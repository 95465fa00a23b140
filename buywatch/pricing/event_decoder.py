"""
Event Decoder Module

Handles decoding of Uniswap V2 swap events from raw log data.
"""

import logging
from typing import Dict, Optional
from hexbytes import HexBytes
from web3 import Web3

SWAP_EVENT_SIGNATURE = "Swap(address,uint256,uint256,uint256,uint256,address)"
SWAP_TOPIC = Web3.to_hex(Web3.keccak(text=SWAP_EVENT_SIGNATURE))


def to_hex(value) -> str:
    """Render HexBytes/bytes log fields as 0x-prefixed strings."""
    if isinstance(value, (HexBytes, bytes)):
        return Web3.to_hex(value)
    return str(value)


class EventDecoder:
    """Decodes Uniswap V2 swap events from raw log data."""

    # Uniswap V2 Pair ABI (minimal for swap events)
    PAIR_ABI = [
        {
            "anonymous": False,
            "inputs": [
                {"indexed": True, "name": "sender", "type": "address"},
                {"indexed": False, "name": "amount0In", "type": "uint256"},
                {"indexed": False, "name": "amount1In", "type": "uint256"},
                {"indexed": False, "name": "amount0Out", "type": "uint256"},
                {"indexed": False, "name": "amount1Out", "type": "uint256"},
                {"indexed": True, "name": "to", "type": "address"}
            ],
            "name": "Swap",
            "type": "event"
        }
    ]

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.w3 = Web3()
        self.contract = self.w3.eth.contract(abi=self.PAIR_ABI)

    def decode_swap_log(self, log: Dict) -> Optional[Dict]:
        """
        Decode a swap event from a log returned by eth_getLogs.

        Args:
            log: Raw log entry (topics, data, block and tx metadata)

        Returns:
            Decoded swap data or None if invalid
        """
        try:
            decoded_log = self.contract.events.Swap().process_log(log)
            args = decoded_log['args']

            return {
                'sender': args['sender'],
                'amount0In': args['amount0In'],
                'amount1In': args['amount1In'],
                'amount0Out': args['amount0Out'],
                'amount1Out': args['amount1Out'],
                'to': args['to'],
                'transactionHash': to_hex(log.get('transactionHash', '')),
                'blockNumber': log.get('blockNumber'),
            }

        except Exception as e:
            self.logger.warning(f"Failed to decode swap event: {e}")
            return None

"""
Price Derivation Package

Swap log decoding, unit conversion, the USD oracle and pool snapshots.
"""

from .event_decoder import EventDecoder, SWAP_TOPIC
from .units import to_decimal_units, to_raw_units
from .usd_oracle import USDOracle
from .pool_stats import PoolSnapshot, PoolStatsAggregator

__all__ = [
    'EventDecoder',
    'SWAP_TOPIC',
    'to_decimal_units',
    'to_raw_units',
    'USDOracle',
    'PoolSnapshot',
    'PoolStatsAggregator'
]

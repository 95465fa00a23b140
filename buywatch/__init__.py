"""
buywatch

Telegram buy alerts for a single Uniswap V2 pair, priced in USD through a
two-hop router oracle.
"""

__version__ = "0.1.0"

"""
Chain Client Package

Async web3 access to the pair, router and token contracts, plus the retry
wrapper every RPC read goes through.
"""

from .retry import with_retry
from .web3_client import Web3Client

__all__ = ['with_retry', 'Web3Client']

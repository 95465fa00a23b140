"""
Uniswap Package

Uniswap version specific swap handling.
"""

from .v2.swap_classifier import SwapClassifier, SwapEvent

__all__ = ['SwapClassifier', 'SwapEvent']

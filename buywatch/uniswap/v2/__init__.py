"""
Uniswap V2 Package

This package contains Uniswap V2 specific implementations.
"""

from .swap_classifier import SwapClassifier, SwapEvent

__all__ = ['SwapClassifier', 'SwapEvent']

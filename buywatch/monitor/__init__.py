"""
Monitor Package

Block polling loop and the bot lifecycle around it.
"""

from .poller import BlockPoller, PollerSession
from .service import BuyBotService

__all__ = ['BlockPoller', 'PollerSession', 'BuyBotService']

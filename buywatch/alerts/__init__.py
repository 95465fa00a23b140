"""
Alerts Package

Telegram delivery and Markdown formatting of buy alerts.
"""

from .telegram import AlertConfig, TelegramNotifier
from .formatter import format_buy_alert

__all__ = ['AlertConfig', 'TelegramNotifier', 'format_buy_alert']

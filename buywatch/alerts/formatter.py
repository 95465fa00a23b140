"""
Alert message rendering (Telegram Markdown: *bold* and `code`).
"""

from ..pricing.pool_stats import PoolSnapshot

FAILED_START_MESSAGE = "❌ Failed to start bot. Check server logs."


def millions(x: float) -> str:
    return f"{x / 1e6:.2f}M"


def grouped(x: float) -> str:
    """Thousands-grouped number with up to three decimals, e.g. 1,234.5"""
    text = f"{x:,.3f}".rstrip("0").rstrip(".")
    return text or "0"


def format_buy_alert(buyer: str, paid: float, received: float, snapshot: PoolSnapshot,
                     base_symbol: str, target_symbol: str) -> str:
    return (
        f"💰 *New {target_symbol} Buy!*  \n"
        f"👤 Buyer: `{buyer}`  \n"
        f"💸 Paid: *{paid:.4f} {base_symbol}*  \n"
        f"🎟️ Received: *{received:.4f} {target_symbol}*\n\n"
        f"📊 *Live Stats*  \n"
        f"• Price: *${snapshot.price_usd:.4f}*  \n"
        f"• Market Cap: *${millions(snapshot.market_cap_usd)}*  \n"
        f"• Liquidity: *${millions(snapshot.liquidity_usd)}*  \n"
        f"• Supply: *{grouped(snapshot.supply)} {target_symbol}*"
    )


def format_start_message(base_symbol: str, target_symbol: str) -> str:
    return f"🚀 *Buy bot started!* Listening for {base_symbol} → {target_symbol} buys..."

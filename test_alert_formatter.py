"""
Tests for alert message rendering
"""

from buywatch.alerts.formatter import format_buy_alert, format_start_message, grouped, millions
from buywatch.pricing.pool_stats import PoolSnapshot
from conftest import BUYER


def test_buy_alert_layout():
    snapshot = PoolSnapshot(price_usd=1.23456, market_cap_usd=12_345_678, liquidity_usd=2_500_000, supply=10_000_000)

    message = format_buy_alert(BUYER, 1.5, 1234.56789, snapshot, "BESC", "MONEY")

    assert message.splitlines() == [
        "💰 *New MONEY Buy!*  ",
        f"👤 Buyer: `{BUYER}`  ",
        "💸 Paid: *1.5000 BESC*  ",
        "🎟️ Received: *1234.5679 MONEY*",
        "",
        "📊 *Live Stats*  ",
        "• Price: *$1.2346*  ",
        "• Market Cap: *$12.35M*  ",
        "• Liquidity: *$2.50M*  ",
        "• Supply: *10,000,000 MONEY*",
    ]


def test_millions():
    assert millions(2_000) == "0.00M"
    assert millions(1_234_567) == "1.23M"


def test_grouped_keeps_up_to_three_decimals():
    assert grouped(10_000.0) == "10,000"
    assert grouped(1_000.5) == "1,000.5"
    assert grouped(0.123456) == "0.123"
    assert grouped(0) == "0"


def test_start_message_names_pair():
    assert format_start_message("BESC", "MONEY") == "🚀 *Buy bot started!* Listening for BESC → MONEY buys..."
